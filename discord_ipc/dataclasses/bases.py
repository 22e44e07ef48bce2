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
Base classes that the wire dataclasses inherit from.

.. currentmodule:: discord_ipc.dataclasses.bases
"""
import enum
from typing import Any, Callable, Dict

from discord_ipc.exc import ProtocolError


def render(value: Any) -> Any:
    """
    Renders a value into its JSON-compatible representation.
    """
    if isinstance(value, Model):
        return value.to_dict()

    if isinstance(value, enum.Enum):
        return value.value

    if isinstance(value, (list, tuple)):
        return [render(item) for item in value]

    return value


class Model(object):
    """
    The base class for all simple wire objects.

    Every slot is a field. Fields that are None are left out when serializing, and missing fields
    are None when deserializing.
    """

    __slots__ = ()

    #: Maps attribute names to their names on the wire, where they differ.
    _renames = {}  # type: Dict[str, str]

    #: Maps attribute names to a callable that converts the value received on the wire.
    _types = {}  # type: Dict[str, Callable[[Any], Any]]

    def __init__(self, **kwargs) -> None:
        for name in self.__slots__:
            setattr(self, name, kwargs.pop(name, None))

        if kwargs:
            raise TypeError("Unknown fields for {}: {}".format(type(self).__name__,
                                                               ", ".join(kwargs)))

    def __repr__(self) -> str:
        fields = " ".join("{}={!r}".format(name, getattr(self, name)) for name in self.__slots__
                          if getattr(self, name) is not None)
        return "<{} {}>".format(type(self).__name__, fields)

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    __hash__ = None

    def to_dict(self) -> dict:
        """
        :return: The dict representation of this object, without any unset fields.
        """
        d = {}
        for name in self.__slots__:
            value = getattr(self, name)
            if value is None:
                continue

            d[self._renames.get(name, name)] = render(value)

        return d

    @classmethod
    def from_dict(cls, data: dict):
        """
        Creates a new instance from the dict representation sent by Discord.

        Unknown keys are ignored.

        :raises ProtocolError: If ``data`` is not an object.
        """
        if not isinstance(data, dict):
            raise ProtocolError("Expected an object for {}, got {!r}".format(cls.__name__, data))

        kwargs = {}
        for name in cls.__slots__:
            value = data.get(cls._renames.get(name, name))
            if value is None:
                continue

            convert = cls._types.get(name)
            if convert is not None:
                try:
                    if isinstance(value, list):
                        value = [convert(item) for item in value]
                    else:
                        value = convert(value)
                except ValueError:
                    # keep unknown enum values as-is
                    pass

            kwargs[name] = value

        return cls(**kwargs)
