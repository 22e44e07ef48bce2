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
Represents a Discord IPC packet.

Every packet, in either direction, is an 8-byte header (opcode, then body length, both unsigned
32-bit little endian) followed by exactly that many bytes of UTF-8 JSON.

.. currentmodule:: discord_ipc.packet
"""
import enum
import json
import logging
import struct
from typing import Any, Tuple

from discord_ipc.exc import DecodeHeader, InvalidUtf8, JsonParse, ProtocolError

logger = logging.getLogger("discord_ipc.packet")

#: The header struct - opcode and length, little endian (why not network order?)
HEADER = struct.Struct("<II")
HEADER_SIZE = HEADER.size


class IPCOpcode(enum.IntEnum):
    """
    Represents an IPC opcode.
    """
    HANDSHAKE = 0
    FRAME = 1
    CLOSE = 2
    PING = 3
    PONG = 4

    @classmethod
    def from_value(cls, value: int) -> 'IPCOpcode':
        """
        Converts a raw opcode into an :class:`.IPCOpcode`.

        Anything that isn't a known opcode is treated as :attr:`.CLOSE`.
        """
        try:
            return cls(value)
        except ValueError:
            logger.warning("Received unknown opcode {}, treating it as CLOSE".format(value))
            return cls.CLOSE


def pack_header(opcode: int, length: int) -> bytes:
    """
    Packs a frame header.

    :param opcode: The opcode of the frame.
    :param length: The length of the body, in bytes.
    """
    return HEADER.pack(int(opcode), length)


def unpack_header(data: bytes) -> Tuple[int, int]:
    """
    Unpacks a frame header into a raw (opcode, length) pair.

    The opcode is returned as-is; use :meth:`.IPCOpcode.from_value` to convert it.
    """
    if len(data) != HEADER_SIZE:
        raise DecodeHeader(len(data), HEADER_SIZE)

    return HEADER.unpack(data)


class IPCPacket(object):
    """
    Represents an IPC packet.
    """

    __slots__ = "opcode", "_json_data"

    def __init__(self, opcode: IPCOpcode, data: Any):
        """
        :param opcode: The :class:`.IPCOpcode` for this packet.
        :param data: The JSON data enclosed in this packet. Normally a dict.
        """
        self.opcode = opcode
        self._json_data = data

    def __repr__(self) -> str:
        return "<IPCPacket opcode={!r} data={!r}>".format(self.opcode, self._json_data)

    @staticmethod
    def _pack_json(data: Any) -> str:
        """
        Packs JSON in a compact representation.

        :param data: The data to pack.
        """
        return json.dumps(data, indent=None, separators=(',', ':'))

    def _get(self, key: str) -> Any:
        if not isinstance(self._json_data, dict):
            return None

        return self._json_data.get(key)

    # properties
    @property
    def json(self) -> Any:
        """
        Gets the full decoded JSON body of this packet.
        """
        return self._json_data

    @property
    def event(self) -> str:
        """
        Gets the event for this packet, or None. Received packets only.
        """
        return self._get("evt")

    @property
    def cmd(self) -> str:
        """
        Gets the command for this packet, or None.
        """
        return self._get("cmd")

    @property
    def nonce(self) -> str:
        """
        Gets the nonce for this packet, or None.
        """
        return self._get("nonce")

    @property
    def data(self) -> Any:
        """
        Gets the inner data for this packet, or None.
        """
        return self._get("data")

    def serialize(self) -> bytes:
        """
        Serializes this packet into a series of bytes.
        """
        body = self._pack_json(self._json_data).encode("utf-8")
        return pack_header(self.opcode, len(body)) + body

    @classmethod
    def from_body(cls, opcode: int, body: bytes) -> 'IPCPacket':
        """
        Decodes a received body into a packet.

        :param opcode: The raw opcode from the header.
        :param body: The body bytes that followed the header.
        """
        try:
            raw_data = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidUtf8(str(e)) from e

        try:
            json_data = json.loads(raw_data)
        except ValueError as e:
            raise JsonParse(str(e)) from e

        return cls(IPCOpcode.from_value(opcode), json_data)

    @classmethod
    def deserialize(cls, data: bytes) -> 'IPCPacket':
        """
        Deserializes a full packet.

        This method is not usually what you want.

        :raises ProtocolError: If the body length does not match the header.
        """
        opcode, length = unpack_header(data[:HEADER_SIZE])
        body = data[HEADER_SIZE:]

        if len(body) != length:
            raise ProtocolError("Header says {} bytes, got {}".format(length, len(body)))

        return cls.from_body(opcode, body)
