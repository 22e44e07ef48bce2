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
discord-ipc - A Python library for the local Discord RPC socket, for Rich Presence.

.. currentmodule:: discord_ipc

.. autosummary::
    :toctree:

    client
    session
    aio
    packet
    channel
    locator
    dataclasses
    oauth

    exc
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("discord-ipc-client")
except PackageNotFoundError:
    __version__ = "0.0.0"

from discord_ipc.client import IPCClient, RPCCommand
from discord_ipc.dataclasses.presence import ActivityType, Assets, Button, Party, RichPresence, \
    Secrets, Timestamps
from discord_ipc.dataclasses.voice_settings import ShortcutKeyCombo, ShortcutKeyType, \
    VoiceAvailableDevice, VoiceIOSettings, VoiceMode, VoiceModeSettings, VoiceSettings
from discord_ipc.exc import AuthenticationFailed, CloseCode, CommandError, ConnectionFailed, \
    DecodeHeader, EndpointNotFound, FlushError, InvalidUtf8, IPCError, JsonParse, \
    MissingAuthorizationCode, NonceMismatch, NotConnected, ProtocolError, ReadError, \
    RPCErrorCode, WriteError
from discord_ipc.oauth import OAuth2Scope
from discord_ipc.packet import IPCOpcode, IPCPacket
from discord_ipc.session import IPCSession
