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
Finds the IPC endpoint of the running Discord client.

On POSIX systems, Discord creates a socket named ``discord-ipc-N`` inside its runtime directory.
Sandboxed installs (Flatpak, Snap, and Vesktop) put it one or two directories deeper, so each of
the known subdirectories is probed as well. On Windows, Discord listens on the named pipe
``\\\\?\\pipe\\discord-ipc-N``.

.. currentmodule:: discord_ipc.locator
"""
import logging
import os
import sys
from typing import Iterator, Mapping, Optional

from discord_ipc.channel import IPCChannel, NamedPipeChannel, UnixSocketChannel
from discord_ipc.exc import ConnectionFailed, EndpointNotFound

logger = logging.getLogger("discord_ipc.locator")

#: Environment variables that may point to the runtime directory, in order of preference.
ENV_KEYS = ("XDG_RUNTIME_DIR", "TMPDIR", "TMP", "TEMP")

#: Subdirectories of the runtime directory that may contain the socket.
IPC_SUBPATHS = (
    "",
    "app/com.discordapp.Discord",
    "app/dev.vencord.Vesktop",
    ".flatpak/com.discordapp.Discord/xdg-run",
    ".flatpak/dev.vencord.Vesktop/xdg-run",
    "snap.discord-canary",
    "snap.discord",
)

#: The number of IPC slots Discord may use.
MAX_IPC_SLOTS = 10

PIPE_PATTERN = r"\\?\pipe\discord-ipc-{}"


def _is_windows(platform: str = None) -> bool:
    return (platform or sys.platform) == "win32"


def get_ipc_base(environ: Mapping[str, str] = None) -> Optional[str]:
    """
    Gets the directory to search for the IPC socket in.

    :param environ: The environment to use. Defaults to :data:`os.environ`.
    :return: The first of :data:`.ENV_KEYS` that names an existing directory, or None.
    """
    if environ is None:
        environ = os.environ

    for key in ENV_KEYS:
        value = environ.get(key)
        if not value:
            continue

        # snaps get a per-app runtime directory, so step out of it
        if key == "XDG_RUNTIME_DIR" and "SNAP" in environ:
            value = os.path.dirname(value.rstrip("/"))

        if os.path.isdir(value):
            return value

    return None


def iter_ipc_paths(environ: Mapping[str, str] = None, platform: str = None) -> Iterator[str]:
    """
    Yields every IPC path that Discord might be listening on, in the order they should be tried.
    """
    if _is_windows(platform):
        for slot in range(MAX_IPC_SLOTS):
            yield PIPE_PATTERN.format(slot)

        return

    base = get_ipc_base(environ)
    if base is None:
        return

    for slot in range(MAX_IPC_SLOTS):
        for subpath in IPC_SUBPATHS:
            yield os.path.join(base, subpath, "discord-ipc-{}".format(slot))


def find_ipc_path(environ: Mapping[str, str] = None, platform: str = None) -> str:
    """
    Finds the first IPC path that exists.

    :raises EndpointNotFound: If no IPC path exists.
    """
    for path in iter_ipc_paths(environ, platform):
        if os.path.exists(path):
            return path

    raise EndpointNotFound()


def open_ipc_channel(environ: Mapping[str, str] = None, platform: str = None) -> IPCChannel:
    """
    Opens a channel to the first IPC endpoint that exists and accepts a connection.

    :raises EndpointNotFound: If no IPC endpoint exists.
    :raises ConnectionFailed: If endpoints exist, but none of them could be opened.
    """
    windows = _is_windows(platform)
    opener = NamedPipeChannel.open if windows else UnixSocketChannel.open
    last_path, last_error = None, None

    for path in iter_ipc_paths(environ, platform):
        # pipes can't be reliably stat'd, so they are just opened
        if not windows and not os.path.exists(path):
            continue

        logger.debug("Trying IPC endpoint {}".format(path))
        try:
            channel = opener(path)
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.debug("Could not open {}: {}".format(path, e))
            last_path, last_error = path, e
            continue

        logger.info("Opened IPC channel at {}".format(path))
        return channel

    if last_error is not None:
        raise ConnectionFailed(last_path, last_error) from last_error

    raise EndpointNotFound()
