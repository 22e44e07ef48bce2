# This file is part of discord-ipc.
#
# discord-ipc is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# discord-ipc is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with discord-ipc.  If not, see <http://www.gnu.org/licenses/>.

"""
An async wrapper around :class:`.IPCClient`, for use inside curio.

.. currentmodule:: discord_ipc.aio
"""
import enum
from typing import Any, Iterable, Union

import curio

from discord_ipc.client import IPCClient
from discord_ipc.dataclasses.presence import RichPresence
from discord_ipc.dataclasses.voice_settings import VoiceSettings
from discord_ipc.oauth import OAuth2Scope


class AsyncIPCClient(object):
    """
    Wraps an :class:`.IPCClient` so it can be used from curio tasks without blocking the kernel.

    Every operation runs in a worker thread. Operations are serialized with a lock, so many tasks
    may share one client.

    .. code-block:: python3

        async with AsyncIPCClient(323578534763298816) as ipc:
            await ipc.set_activity(RichPresence(state="Idle"))

    A task cancelled while its operation is in progress still waits for the worker thread to
    finish before the cancellation is delivered, so the next operation never overlaps it.
    """

    def __init__(self, client_id: Union[int, str], **kwargs):
        """
        :param client_id: The client ID to authenticate with.
        :param kwargs: Passed through to :class:`.IPCClient`.
        """
        #: The wrapped blocking client.
        self.client = IPCClient(client_id, **kwargs)

        self._lock = curio.Lock()

    def __repr__(self) -> str:
        return "<AsyncIPCClient client={!r}>".format(self.client)

    async def __aenter__(self):
        if not self.client.is_connected:
            await self.open()

        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    async def _run(self, func, *args) -> Any:
        async with self._lock:
            # the lock is held until the thread is done with the channel
            async with curio.disable_cancellation():
                result = await curio.run_in_thread(func, *args)

            await curio.check_cancellation()
            return result

    @property
    def is_connected(self) -> bool:
        """
        :return: If the wrapped client holds an open channel.
        """
        return self.client.is_connected

    async def open(self) -> 'AsyncIPCClient':
        """
        Opens this IPC connection.
        """
        await self._run(self.client.connect)
        return self

    connect = open

    async def close(self) -> None:
        """
        Closes this IPC connection.
        """
        await self._run(self.client.close)

    async def reconnect(self) -> 'AsyncIPCClient':
        """
        Closes and re-opens this IPC connection.
        """
        await self._run(self.client.reconnect)
        return self

    async def connected(self) -> bool:
        """
        Pings Discord. See :meth:`.IPCSession.connected`.
        """
        return await self._run(self.client.connected)

    async def call(self, command: Union[str, enum.Enum], args: Any = None) -> Any:
        """
        Calls a command. See :meth:`.IPCSession.call`.
        """
        return await self._run(self.client.call, command, args)

    async def set_activity(self, activity: Union[RichPresence, dict, None]) -> dict:
        """
        Sets the Rich Presence. See :meth:`.IPCClient.set_activity`.
        """
        return await self._run(self.client.set_activity, activity)

    async def clear_activity(self) -> dict:
        """
        Clears the Rich Presence.
        """
        return await self._run(self.client.clear_activity)

    async def authorize(self, scopes: Iterable[Union[OAuth2Scope, str]]) -> str:
        """
        Asks the user to authorize this application. See :meth:`.IPCClient.authorize`.
        """
        return await self._run(self.client.authorize, list(scopes))

    async def authenticate(self, access_token: str) -> dict:
        """
        Authenticates this connection. See :meth:`.IPCClient.authenticate`.
        """
        return await self._run(self.client.authenticate, access_token)

    async def get_voice_settings(self) -> VoiceSettings:
        return await self._run(self.client.get_voice_settings)

    async def set_voice_settings(self, settings: Union[VoiceSettings, dict]) -> VoiceSettings:
        return await self._run(self.client.set_voice_settings, settings)
