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
Exceptions raised from within the library.

.. currentmodule:: discord_ipc.exc
"""
import enum
import warnings
from typing import Union


class IPCError(Exception):
    """
    The base class for all discord-ipc exceptions.
    """


# RPC error codes, sent inside ERROR events.
class RPCErrorCode(enum.IntEnum):
    UNKNOWN_ERROR = 1000
    INVALID_PAYLOAD = 4000
    INVALID_COMMAND = 4002
    INVALID_GUILD = 4003
    INVALID_EVENT = 4004
    INVALID_CHANNEL = 4005
    INVALID_PERMISSIONS = 4006
    INVALID_CLIENT_ID = 4007
    INVALID_ORIGIN = 4008
    INVALID_TOKEN = 4009
    INVALID_USER = 4010
    OAUTH2_ERROR = 5000
    SELECT_CHANNEL_TIMED_OUT = 5001
    GET_GUILD_TIMED_OUT = 5002
    SELECT_VOICE_FORCE_REQUIRED = 5003
    CAPTURE_SHORTCUT_ALREADY_LISTENING = 5004

    UNKNOWN = 0


# Close codes, sent in the body of a CLOSE frame. These are a separate namespace.
class CloseCode(enum.IntEnum):
    INVALID_CLIENT_ID = 4000
    INVALID_ORIGIN = 4001
    RATE_LIMITED = 4002
    TOKEN_REVOKED = 4003
    INVALID_VERSION = 4004
    INVALID_ENCODING = 4005

    UNKNOWN = 0


class EndpointNotFound(IPCError):
    """
    Raised when no Discord IPC socket or pipe could be found.
    """

    def __str__(self) -> str:
        return "Could not find a Discord IPC endpoint. Is Discord running?"


class ConnectionFailed(IPCError):
    """
    Raised when an IPC endpoint was found, but could not be opened.

    :ivar path: The last endpoint that was tried.
    :ivar error: The :class:`OSError` that the last attempt failed with.
    """

    def __init__(self, path: str, error: OSError = None):
        self.path = path
        self.error = error

    def __str__(self) -> str:
        return "Could not connect to Discord IPC at {}: {}".format(self.path, self.error)


class NotConnected(IPCError):
    """
    Raised when an operation needs an open connection, but the client is not connected.
    """

    def __str__(self) -> str:
        return "The IPC client is not connected"


class _IOFailure(IPCError):
    _verb = "use"

    def __init__(self, error: OSError):
        #: The underlying OS error.
        self.error = error

    def __str__(self) -> str:
        return "Failed to {} the IPC channel: {}".format(self._verb, self.error)


class ReadError(_IOFailure):
    """
    Raised when reading from the IPC channel fails, including when the other end closes the
    channel before a full frame could be read.
    """
    _verb = "read from"


class WriteError(_IOFailure):
    """
    Raised when writing to the IPC channel fails.
    """
    _verb = "write to"


class FlushError(_IOFailure):
    """
    Raised when flushing the IPC channel fails.
    """
    _verb = "flush"


class DecodeHeader(IPCError):
    """
    Raised when a frame header could not be split into an opcode and a length.
    """

    def __init__(self, received: int, expected: int = 8):
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        return "Could not unpack frame header, expected {} bytes but found {} bytes"\
            .format(self.expected, self.received)


class InvalidUtf8(IPCError):
    """
    Raised when a frame body is not valid UTF-8.
    """


class JsonParse(IPCError):
    """
    Raised when a frame body is valid UTF-8, but not valid JSON.
    """


class ProtocolError(IPCError):
    """
    Raised when Discord sends a frame that is well-formed JSON but does not have the shape the
    protocol requires.
    """


class NonceMismatch(IPCError):
    """
    Raised when a response does not echo the nonce of the request it answers.
    """

    def __init__(self, expected: str, received):
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        return "Expected nonce {!r}, got {!r}".format(self.expected, self.received)


class CommandError(IPCError):
    """
    Raised when Discord answers a command with an ERROR event or a CLOSE frame.

    :ivar code: The raw integer error code.
    :ivar message: The human-readable message sent with the error.
    :ivar close: If this error came from a CLOSE frame, rather than an ERROR event.
    """

    def __init__(self, code: int, message: str, *, close: bool = False):
        self.code = code
        self.message = message
        self.close = close

        enum_type = CloseCode if close else RPCErrorCode
        try:
            #: The :class:`.RPCErrorCode` or :class:`.CloseCode` for this error.
            self.error_code = enum_type(code)  # type: Union[RPCErrorCode, CloseCode]
        except ValueError:
            warnings.warn("Received unknown error code {}".format(code))
            self.error_code = enum_type.UNKNOWN

    def __str__(self) -> str:
        if self.error_code.name == "UNKNOWN":
            return "{}: {}".format(self.code, self.message)

        return "{} ({}): {}".format(self.code, self.error_code.name, self.message)

    __repr__ = __str__


class MissingAuthorizationCode(IPCError):
    """
    Raised when an AUTHORIZE response does not contain an authorization code.
    """

    def __str__(self) -> str:
        return "AUTHORIZE response did not contain an authorization code"


class AuthenticationFailed(IPCError):
    """
    Raised when an AUTHENTICATE response carries an error code.
    """

    def __init__(self, code, message: str = None):
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return "Authentication failed ({}): {}".format(self.code, self.message)
