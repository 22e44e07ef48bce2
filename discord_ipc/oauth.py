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
OAuth2 scopes, for use with :meth:`.IPCClient.authorize`.

.. currentmodule:: discord_ipc.oauth
"""
import enum
from typing import Iterable, List, Union


class OAuth2Scope(enum.Enum):
    """
    OAuth2 scopes.
    """
    #: Authorizes a bot into a guild.
    BOT = 'bot'
    #: Allows access to the connections of a user.
    CONNECTIONS = 'connections'
    #: Allows access to basic user info.
    IDENTIFY = 'identify'
    #: Allows access to basic user info + their email.
    EMAIL = 'email'
    #: Allows access to user guild objects for this user.
    GUILDS = 'guilds'
    #: Allows forcibly joining a guild on the behalf of a user.
    GUILDS_JOIN = 'guilds.join'
    #: Allows forcibly adding users to group DMs.
    GDM_JOIN = 'gdm.join'

    #: Allows reading messages via RPC.
    MESSAGES_READ = 'messages.read'
    #: Allows RPC client control.
    RPC = 'rpc'
    #: Allows RPC API control.
    RPC_API = 'rpc.api'
    #: Allows RPC notification reading.
    RPC_NOTIFICATIONS_READ = 'rpc.notifications.read'
    #: Allows reading the voice settings via RPC.
    RPC_VOICE_READ = 'rpc.voice.read'
    #: Allows changing the voice settings via RPC.
    RPC_VOICE_WRITE = 'rpc.voice.write'
    #: Allows setting the activity via RPC.
    RPC_ACTIVITIES_WRITE = 'rpc.activities.write'

    #: Creates an incoming webhook when authorized.
    WEBHOOK_INCOMING = 'webhook.incoming'


def scope_names(scopes: Iterable[Union[OAuth2Scope, str]]) -> List[str]:
    """
    Converts a list of scopes into the scope names sent to Discord.

    :param scopes: :class:`.OAuth2Scope` members, or plain scope names.
    """
    return [scope.value if isinstance(scope, OAuth2Scope) else str(scope) for scope in scopes]
