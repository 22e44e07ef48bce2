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
Wrappers for Rich Presence objects.

.. currentmodule:: discord_ipc.dataclasses.presence
"""
import enum
from typing import List, Type

from discord_ipc.dataclasses.bases import Model, render

#: The maximum number of buttons on a single presence.
MAX_BUTTONS = 2


class ActivityType(enum.IntEnum):
    """
    Represents an activity's type.
    """
    #: Shows the ``Playing`` text.
    PLAYING = 0

    #: Shows the ``Listening to`` text.
    LISTENING = 2

    #: Shows the ``Watching`` text.
    WATCHING = 3

    #: Shows the ``Competing in`` text.
    COMPETING = 5


class Timestamps(Model):
    """
    Represents the start and end timestamps of an activity, in unix epoch seconds.
    """
    __slots__ = "start", "end"


class Party(Model):
    """
    Represents the party the player is in.
    """
    __slots__ = "id", "size"

    def __init__(self, id: str = None, size: List[int] = None) -> None:
        """
        :param id: The ID of the party.
        :param size: The party's current and maximum size, as ``[current, max]``.
        """
        if size is not None:
            if len(size) != 2:
                raise ValueError("Party size must be [current, max]")

            size = [int(size[0]), int(size[1])]

        super().__init__(id=id, size=size)


class Assets(Model):
    """
    Represents the images, hover texts and links used by an activity.
    """
    __slots__ = ("large_image", "large_text", "large_url",
                 "small_image", "small_text", "small_url")


class Secrets(Model):
    """
    Represents the secrets used for joining and spectating.
    """
    __slots__ = "join", "spectate", "match"


class Button(Model):
    """
    Represents a button shown under an activity.
    """
    __slots__ = "label", "url"

    def __init__(self, label: str, url: str) -> None:
        """
        :param label: The text on the button. 1-32 characters.
        :param url: The URL opened when the button is clicked. 1-512 characters.
        """
        if not 1 <= len(label) <= 32:
            raise ValueError("Button label must be between 1 and 32 characters")

        if not 1 <= len(url) <= 512:
            raise ValueError("Button URL must be between 1 and 512 characters")

        super().__init__(label=label, url=url)


def _make_property(field: str, doc: str = None, max_size: int = None) -> property:
    def _getter(self):
        return self._rich_fields.get(field)

    def _setter(self, value: str):
        if value is None:
            self._rich_fields.pop(field, None)
            return

        if max_size is not None and len(value) > max_size:
            raise ValueError("Field '{}' cannot be longer than {} characters"
                             .format(field, max_size))

        self._rich_fields[field] = value

    prop = property(_getter, _setter, doc=doc)
    return prop


def _make_object_property(field: str, type_: Type[Model], doc: str = None) -> property:
    def _getter(self):
        return self._rich_fields.get(field)

    def _setter(self, value):
        if value is None:
            self._rich_fields.pop(field, None)
            return

        if not isinstance(value, type_):
            value = type_(**value)

        self._rich_fields[field] = value

    prop = property(_getter, _setter, doc=doc)
    return prop


class RichPresence(object):
    """
    Represents a Rich Presence. This class can be created safely for usage with
    :meth:`.IPCClient.set_activity`.

    .. code-block:: python3

        presence = RichPresence(state="In a match", details="Ranked")
        presence.assets = Assets(large_image="map-icon", large_text="Dust II")
        presence.buttons = [Button("Watch", "https://example.com")]

    Every field is optional. Fields that are never set are not sent.
    """

    __slots__ = "_rich_fields",

    def __init__(self, **fields) -> None:
        """
        :param fields: The rich presence fields.
        """
        self._rich_fields = {}

        for name, value in fields.items():
            if not isinstance(getattr(RichPresence, name, None), property):
                raise TypeError("Unknown rich presence field '{}'".format(name))

            setattr(self, name, value)

    def __repr__(self) -> str:
        return "<RichPresence {!r}>".format(self.to_dict())

    state = _make_property("state", "The state for this presence.", 128)
    details = _make_property("details", "The details for this presence.", 128)

    timestamps = _make_object_property("timestamps", Timestamps,
                                       "The :class:`.Timestamps` for this presence.")
    party = _make_object_property("party", Party, "The :class:`.Party` for this presence.")
    assets = _make_object_property("assets", Assets, "The :class:`.Assets` for this presence.")
    secrets = _make_object_property("secrets", Secrets,
                                    "The :class:`.Secrets` for this presence.")

    @property
    def type(self) -> ActivityType:
        """
        The :class:`.ActivityType` for this presence.
        """
        return self._rich_fields.get("type")

    @type.setter
    def type(self, value):
        if value is None:
            self._rich_fields.pop("type", None)
            return

        self._rich_fields["type"] = ActivityType(value)

    @property
    def buttons(self) -> List[Button]:
        """
        The list of :class:`.Button` for this presence. At most two buttons are allowed.
        """
        return self._rich_fields.get("buttons", [])

    @buttons.setter
    def buttons(self, value: List[Button]):
        # an empty list is rejected by discord, so it clears the buttons instead
        if not value:
            self._rich_fields.pop("buttons", None)
            return

        if len(value) > MAX_BUTTONS:
            raise ValueError("A presence can have at most {} buttons".format(MAX_BUTTONS))

        self._rich_fields["buttons"] = [button if isinstance(button, Button) else Button(**button)
                                        for button in value]

    def to_dict(self) -> dict:
        """
        :return: The dict representation of this presence, as sent to Discord.
        """
        d = {}
        for field, value in self._rich_fields.items():
            value = render(value)
            # sub-objects with nothing set are left out entirely
            if value == {}:
                continue

            d[field] = value

        return d
