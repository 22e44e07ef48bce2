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
The session layer of an IPC connection.

.. currentmodule:: discord_ipc.session
"""
import enum
import logging
import uuid
from typing import Any, Callable, Union

from discord_ipc.channel import IPCChannel
from discord_ipc.exc import CommandError, NotConnected, NonceMismatch, ProtocolError, WriteError
from discord_ipc.locator import open_ipc_channel
from discord_ipc.packet import HEADER_SIZE, IPCOpcode, IPCPacket, unpack_header

logger = logging.getLogger("discord_ipc.session")


def get_nonce() -> str:
    """
    Gets a random nonce.
    """
    return str(uuid.uuid4())


def _is_code(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class IPCSession(object):
    """
    Represents a session on the Discord IPC socket.

    The session is strictly request/response: every frame written is immediately followed by
    reading exactly one frame back. It is not safe to share one session between threads.

    .. code-block:: python3

        session = IPCSession(323578534763298816)
        session.connect()
        data = session.call("GET_VOICE_SETTINGS")

    If any call fails with an I/O error, the connection is in an unknown state and the session
    should be closed before anything else is done with it.
    """
    VERSION = 1

    def __init__(self, client_id: Union[int, str], *,
                 nonce_factory: Callable[[], str] = get_nonce,
                 channel_opener: Callable[[], IPCChannel] = open_ipc_channel):
        """
        :param client_id: The client ID of the application to authenticate as.
        :param nonce_factory: A callable returning a fresh nonce string for every command.
        :param channel_opener: A callable that opens the :class:`.IPCChannel` to use.
        """
        #: The client ID of the application, as a decimal string.
        self.client_id = str(client_id)

        self._nonce_factory = nonce_factory
        self._open_channel = channel_opener
        self._channel = None  # type: IPCChannel

    def __repr__(self) -> str:
        return "<{} client_id={!r} connected={}>".format(type(self).__name__, self.client_id,
                                                         self.is_connected)

    def __enter__(self):
        if not self.is_connected:
            self.connect()

        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def is_connected(self) -> bool:
        """
        :return: If this session currently holds an open channel.
        """
        return self._channel is not None

    def _get_channel(self) -> IPCChannel:
        if self._channel is None:
            raise NotConnected()

        return self._channel

    def _drop_channel(self) -> None:
        channel, self._channel = self._channel, None
        if channel is not None:
            channel.close()

    # Frame I/O
    def _write_packet(self, packet: IPCPacket) -> None:
        """
        Writes an IPC packet.

        :param packet: The :class:`.IPCPacket` to write.
        """
        data = packet.serialize()
        logger.debug("Sending {!r} frame ({} bytes)".format(packet.opcode, len(data) - HEADER_SIZE))
        self._get_channel().write(data)

    def _read_packet(self) -> IPCPacket:
        """
        Reads a packet from the connection.
        """
        channel = self._get_channel()

        # unpack header so we can get the length, then read body based on header
        opcode, length = unpack_header(channel.read(HEADER_SIZE))
        body = channel.read(length)

        packet = IPCPacket.from_body(opcode, body)
        logger.debug("Received {!r} frame ({} bytes)".format(packet.opcode, length))
        return packet

    def _exchange(self, opcode: IPCOpcode, data: Any) -> IPCPacket:
        """
        Writes one frame, and reads the frame sent in response.
        """
        self._write_packet(IPCPacket(opcode, data))
        return self._read_packet()

    def _handshake_data(self) -> dict:
        return {
            "v": self.VERSION,
            "client_id": self.client_id
        }

    @staticmethod
    def _raise_for_error(packet: IPCPacket) -> None:
        """
        Raises the appropriate error if a packet is a CLOSE frame or an ERROR event.
        """
        if packet.opcode == IPCOpcode.CLOSE:
            body = packet.json if isinstance(packet.json, dict) else {}
            code, message = body.get("code"), body.get("message")
            if not _is_code(code) or not isinstance(message, str):
                raise ProtocolError("Received a CLOSE frame without a code and message: {!r}"
                                    .format(packet.json))

            raise CommandError(code, message, close=True)

        if packet.event == "ERROR":
            data = packet.data if isinstance(packet.data, dict) else {}
            code, message = data.get("code"), data.get("message")
            if not _is_code(code) or not isinstance(message, str):
                raise ProtocolError("Received an ERROR event without a code and message: {!r}"
                                    .format(packet.json))

            raise CommandError(code, message)

    # Lifecycle
    def connect(self) -> 'IPCSession':
        """
        Opens the IPC channel, and performs the handshake.

        Does nothing if this session is already connected.

        :raises EndpointNotFound: If Discord doesn't seem to be running.
        :raises ConnectionFailed: If the IPC endpoint could not be opened.
        :raises CommandError: If Discord rejected the handshake.
        """
        if self._channel is not None:
            return self

        self._channel = self._open_channel()
        try:
            response = self._exchange(IPCOpcode.HANDSHAKE, self._handshake_data())
            self._raise_for_error(response)
        except Exception:
            self._drop_channel()
            raise

        logger.info("Connected to Discord IPC as client {} (event {})".format(self.client_id,
                                                                              response.event))
        return self

    def close(self) -> None:
        """
        Closes the IPC channel. This is best-effort, and does nothing if the session is not
        connected.
        """
        channel, self._channel = self._channel, None
        if channel is None:
            return

        try:
            channel.write(IPCPacket(IPCOpcode.CLOSE, {}).serialize())
        except WriteError as e:
            logger.warning("Failed to send CLOSE frame: {}".format(e))

        channel.close()
        logger.info("Closed IPC channel")

    disconnect = close

    def reconnect(self) -> 'IPCSession':
        """
        Closes the current connection (if any), and opens a new one.
        """
        logger.info("Reconnecting to Discord IPC")
        self.close()
        return self.connect()

    def connected(self) -> bool:
        """
        Pings Discord over the IPC channel.

        :return: True if Discord answered with a PONG, False otherwise or if not connected.
        """
        if self._channel is None:
            return False

        response = self._exchange(IPCOpcode.PING, self._handshake_data())
        return response.opcode == IPCOpcode.PONG

    # Commands
    def call(self, command: Union[str, enum.Enum], args: Any = None) -> Any:
        """
        Calls a command over the IPC channel.

        :param command: The name of the command, or an :class:`.RPCCommand`.
        :param args: The arguments for the command. Defaults to an empty object.
        :return: The ``data`` of the response.
        :raises CommandError: If Discord returned an error for this command.
        :raises NonceMismatch: If the response did not belong to this command.
        """
        if isinstance(command, enum.Enum):
            command = command.value

        nonce = self._nonce_factory()
        payload = {
            "cmd": command,
            "args": {} if args is None else args,
            "nonce": nonce
        }

        logger.debug("Calling {} with nonce {}".format(command, nonce))
        response = self._exchange(IPCOpcode.FRAME, payload)
        self._raise_for_error(response)

        if not isinstance(response.json, dict):
            raise ProtocolError("Expected a JSON object, got {!r}".format(response.json))

        if response.nonce != nonce:
            raise NonceMismatch(nonce, response.nonce)

        return response.data
