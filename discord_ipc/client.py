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
The client for an IPC connection.

.. currentmodule:: discord_ipc.client
"""
import enum
import os
from typing import Iterable, Union

from discord_ipc.dataclasses.presence import RichPresence
from discord_ipc.dataclasses.voice_settings import VoiceSettings
from discord_ipc.exc import AuthenticationFailed, MissingAuthorizationCode
from discord_ipc.oauth import OAuth2Scope, scope_names
from discord_ipc.session import IPCSession


class RPCCommand(enum.Enum):
    """
    Represents the name of an RPC command.
    """
    DISPATCH = "DISPATCH"
    AUTHORIZE = "AUTHORIZE"
    AUTHENTICATE = "AUTHENTICATE"
    SET_ACTIVITY = "SET_ACTIVITY"
    GET_VOICE_SETTINGS = "GET_VOICE_SETTINGS"
    SET_VOICE_SETTINGS = "SET_VOICE_SETTINGS"


class IPCClient(IPCSession):
    """
    Represents an IPC (interprocess communication) client. This connects to the Discord client on
    the IPC socket.

    To use, create a new instance with your app's client ID:

    .. code-block:: python3

        ipc = IPCClient(323578534763298816)

    Make sure to connect the client before doing anything with it:

    .. code-block:: python3

        ipc.connect()
        ipc.set_activity(RichPresence(state="Exploring", details="Level 3"))

    It can also be used as a context manager, which connects on entry and closes on exit.
    """

    def set_activity(self, activity: Union[RichPresence, dict, None]) -> dict:
        """
        Sets the Rich Presence shown for this process.

        :param activity: The :class:`.RichPresence` to show, a dict in the same shape, or None to
            clear the presence.
        :return: The activity, as echoed back by Discord.
        """
        if isinstance(activity, RichPresence):
            activity = activity.to_dict()

        args = {
            "pid": os.getpid(),
            "activity": activity
        }
        return self.call(RPCCommand.SET_ACTIVITY, args)

    def clear_activity(self) -> dict:
        """
        Clears the Rich Presence shown for this process.
        """
        return self.set_activity(None)

    def authorize(self, scopes: Iterable[Union[OAuth2Scope, str]]) -> str:
        """
        Asks the user to authorize this application. This blocks until the user answers the
        prompt in their client.

        :param scopes: The :class:`.OAuth2Scope` to ask for.
        :return: The OAuth2 authorization code, to be exchanged for an access token.
        """
        args = {
            "client_id": self.client_id,
            "scopes": scope_names(scopes)
        }
        data = self.call(RPCCommand.AUTHORIZE, args)

        code = data.get("code") if isinstance(data, dict) else None
        if code is None:
            raise MissingAuthorizationCode()

        return str(code)

    def authenticate(self, access_token: str) -> dict:
        """
        Authenticates this connection with an OAuth2 access token.

        :param access_token: The access token for the user.
        :return: The authentication data, including the ``user`` and granted ``scopes``.
        """
        data = self.call(RPCCommand.AUTHENTICATE, {"access_token": access_token})

        if isinstance(data, dict) and "code" in data:
            raise AuthenticationFailed(data["code"], data.get("message"))

        return data

    def get_voice_settings(self) -> VoiceSettings:
        """
        :return: The current :class:`.VoiceSettings` of the user.
        """
        data = self.call(RPCCommand.GET_VOICE_SETTINGS)
        return VoiceSettings.from_dict(data or {})

    def set_voice_settings(self, settings: Union[VoiceSettings, dict]) -> VoiceSettings:
        """
        Changes the voice settings of the user. Only fields that are set are changed.

        :param settings: The :class:`.VoiceSettings` to apply.
        :return: The new :class:`.VoiceSettings`, as returned by Discord.
        """
        if isinstance(settings, VoiceSettings):
            settings = settings.to_dict()

        data = self.call(RPCCommand.SET_VOICE_SETTINGS, settings)
        return VoiceSettings.from_dict(data or {})
