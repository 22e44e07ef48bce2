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
Blocking byte channels to the Discord client.

On POSIX systems Discord listens on a Unix stream socket, on Windows on a named pipe. Both are
wrapped in an :class:`.IPCChannel`, so the session code never has to care which one it has.

.. currentmodule:: discord_ipc.channel
"""
import abc
import errno
import logging
import socket
from typing import BinaryIO

from discord_ipc.exc import FlushError, ReadError, WriteError

logger = logging.getLogger("discord_ipc.channel")


def _closed_error() -> OSError:
    return ConnectionResetError(errno.ECONNRESET, "Discord closed the IPC channel")


class IPCChannel(abc.ABC):
    """
    A blocking, single-owner byte stream to the Discord client.

    Reads and writes never return early; a short read is an error.
    """

    #: The path this channel was opened on.
    path = None  # type: str

    @abc.abstractmethod
    def write(self, data: bytes) -> None:
        """
        Writes all of ``data`` to the channel.
        """

    @abc.abstractmethod
    def read(self, size: int) -> bytes:
        """
        Reads exactly ``size`` bytes from the channel.
        """

    @abc.abstractmethod
    def flush(self) -> None:
        """
        Flushes any buffered writes.
        """

    @abc.abstractmethod
    def _shutdown(self) -> None:
        """
        Releases the underlying handle. Must not raise.
        """

    def close(self) -> None:
        """
        Closes this channel. This is best-effort, and never raises.
        """
        try:
            self.flush()
        except FlushError as e:
            logger.warning("Ignoring flush failure on close: {}".format(e))

        self._shutdown()


class UnixSocketChannel(IPCChannel):
    """
    A channel over a Unix stream socket.
    """

    def __init__(self, sock: socket.socket, path: str = None):
        self._sock = sock
        self.path = path

    @classmethod
    def open(cls, path: str) -> 'UnixSocketChannel':
        """
        Connects to the socket at ``path``.

        :raises OSError: If the socket could not be connected to.
        """
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(path)
        except OSError:
            sock.close()
            raise

        return cls(sock, path)

    def write(self, data: bytes) -> None:
        try:
            self._sock.sendall(data)
        except OSError as e:
            raise WriteError(e) from e

    def read(self, size: int) -> bytes:
        buf = bytearray(size)
        view = memoryview(buf)
        pos = 0

        while pos < size:
            try:
                count = self._sock.recv_into(view[pos:])
            except OSError as e:
                raise ReadError(e) from e

            if count == 0:
                raise ReadError(_closed_error())

            pos += count

        return bytes(buf)

    def flush(self) -> None:
        # sendall() leaves nothing buffered on our side
        pass

    def _shutdown(self) -> None:
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            logger.warning("Ignoring shutdown failure on close: {}".format(e))

        self._sock.close()


class NamedPipeChannel(IPCChannel):
    """
    A channel over a Windows named pipe.
    """

    def __init__(self, pipe: BinaryIO, path: str = None):
        self._pipe = pipe
        self.path = path

    @classmethod
    def open(cls, path: str) -> 'NamedPipeChannel':
        """
        Opens the pipe at ``path`` for reading and writing.

        :raises OSError: If the pipe could not be opened.
        """
        return cls(open(path, "r+b", buffering=0), path)

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        pos = 0

        while pos < len(view):
            try:
                count = self._pipe.write(view[pos:])
            except OSError as e:
                raise WriteError(e) from e

            # raw writes may be partial, or report nothing at all when non-blocking
            if count is None:
                continue

            pos += count

    def read(self, size: int) -> bytes:
        buf = bytearray(size)
        view = memoryview(buf)
        pos = 0

        while pos < size:
            try:
                count = self._pipe.readinto(view[pos:])
            except OSError as e:
                raise ReadError(e) from e

            if not count:
                raise ReadError(_closed_error())

            pos += count

        return bytes(buf)

    def flush(self) -> None:
        try:
            self._pipe.flush()
        except OSError as e:
            raise FlushError(e) from e

    def _shutdown(self) -> None:
        try:
            self._pipe.close()
        except OSError as e:
            logger.warning("Ignoring close failure: {}".format(e))
