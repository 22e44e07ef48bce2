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
Wrappers for the voice settings of the Discord client.

.. currentmodule:: discord_ipc.dataclasses.voice_settings
"""
import enum

from discord_ipc.dataclasses.bases import Model


class VoiceMode(enum.Enum):
    """
    Represents the voice input mode.
    """
    PUSH_TO_TALK = "PUSH_TO_TALK"
    VOICE_ACTIVITY = "VOICE_ACTIVITY"


class ShortcutKeyType(enum.IntEnum):
    """
    Represents the kind of key in a shortcut key combo.
    """
    KEYBOARD_KEY = 0
    MOUSE_BUTTON = 1
    KEYBOARD_MODIFIER_KEY = 2
    GAMEPAD_BUTTON = 3


class VoiceAvailableDevice(Model):
    """
    Represents an audio device that can be selected.
    """
    __slots__ = "id", "name"


class VoiceIOSettings(Model):
    """
    Represents the input or output settings.

    Input volume ranges from 0 to 100, output volume from 0 to 200.
    """
    __slots__ = "device_id", "volume", "available_devices"

    _types = {"available_devices": VoiceAvailableDevice.from_dict}


class ShortcutKeyCombo(Model):
    """
    Represents one key of a shortcut.
    """
    __slots__ = "key_type", "code", "name"

    _renames = {"key_type": "type"}
    _types = {"key_type": ShortcutKeyType}


class VoiceModeSettings(Model):
    """
    Represents the voice mode settings.
    """
    __slots__ = "voice_mode", "auto_threshold", "threshold", "shortcut", "delay"

    _renames = {"voice_mode": "type"}
    _types = {
        "voice_mode": VoiceMode,
        "shortcut": ShortcutKeyCombo.from_dict
    }


class VoiceSettings(Model):
    """
    Represents the voice settings of the Discord client.

    Only the fields that are set are sent by :meth:`.IPCClient.set_voice_settings`, so a partial
    update only needs the fields that change:

    .. code-block:: python3

        client.set_voice_settings(VoiceSettings(mute=True))
    """
    __slots__ = ("input", "output", "mode", "automatic_gain_control", "echo_cancellation",
                 "noise_suppression", "qos", "silence_warning", "deaf", "mute")

    _types = {
        "input": VoiceIOSettings.from_dict,
        "output": VoiceIOSettings.from_dict,
        "mode": VoiceModeSettings.from_dict
    }
