# tests/test_voice_settings.py
import pytest

from discord_ipc.dataclasses.voice_settings import ShortcutKeyCombo, ShortcutKeyType, \
    VoiceAvailableDevice, VoiceIOSettings, VoiceMode, VoiceModeSettings, VoiceSettings
from discord_ipc.exc import ProtocolError

GET_VOICE_SETTINGS = {
    "input": {
        "available_devices": [{"id": "default", "name": "Default"},
                              {"id": "usb", "name": "USB Microphone"}],
        "device_id": "default",
        "volume": 49.803921580314636
    },
    "output": {
        "available_devices": [{"id": "default", "name": "Default"}],
        "device_id": "default",
        "volume": 93.00000071525574
    },
    "mode": {
        "type": "VOICE_ACTIVITY",
        "auto_threshold": True,
        "threshold": -46.92622950819673,
        "shortcut": [{"type": 0, "code": 12, "name": "i"}],
        "delay": 98.36065573770492
    },
    "automatic_gain_control": False,
    "echo_cancellation": False,
    "noise_suppression": False,
    "qos": False,
    "silence_warning": False,
    "deaf": False,
    "mute": False
}


def test_from_dict():
    settings = VoiceSettings.from_dict(GET_VOICE_SETTINGS)

    assert settings.input.available_devices[1] == VoiceAvailableDevice(id="usb",
                                                                       name="USB Microphone")
    assert settings.output.volume == 93.00000071525574
    assert settings.mode.voice_mode is VoiceMode.VOICE_ACTIVITY
    assert settings.mode.shortcut[0].key_type is ShortcutKeyType.KEYBOARD_KEY
    assert settings.qos is False


def test_to_dict_restores_wire_names():
    settings = VoiceSettings.from_dict(GET_VOICE_SETTINGS)
    assert settings.to_dict() == GET_VOICE_SETTINGS


def test_to_dict_omits_unset():
    settings = VoiceSettings(deaf=True, mode=VoiceModeSettings(voice_mode=VoiceMode.PUSH_TO_TALK))
    assert settings.to_dict() == {"deaf": True, "mode": {"type": "PUSH_TO_TALK"}}


def test_shortcut_to_dict():
    combo = ShortcutKeyCombo(key_type=ShortcutKeyType.MOUSE_BUTTON, code=3, name="MOUSE3")
    assert combo.to_dict() == {"type": 1, "code": 3, "name": "MOUSE3"}


def test_unknown_enum_value_kept():
    mode = VoiceModeSettings.from_dict({"type": "SOMETHING_NEW"})
    assert mode.voice_mode == "SOMETHING_NEW"


def test_unknown_keys_ignored():
    io_settings = VoiceIOSettings.from_dict({"volume": 10, "brand_new": True})
    assert io_settings.to_dict() == {"volume": 10}


@pytest.mark.parametrize("data", [
    {"input": "oops"},
    {"mode": ["VOICE_ACTIVITY"]},
    {"input": {"available_devices": ["default"]}},
])
def test_malformed_nested_object(data):
    with pytest.raises(ProtocolError):
        VoiceSettings.from_dict(data)
