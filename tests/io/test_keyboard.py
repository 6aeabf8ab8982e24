# tests/io/test_keyboard.py
"""
retro_chip8.io.keyboard の単体テスト。
"""
import pytest

from retro_chip8.io.keyboard import DEFAULT_KEYMAP, KeySource, KeyState

# @intent:test_suite キー状態のビットマスク管理を検証します。


class TestKeyState:
    def test_press_and_release(self):
        keys = KeyState()
        keys.press(0x0)
        keys.press(0xF)
        assert keys.key_mask == 0x8001
        assert keys.is_down(0xF)
        keys.release(0xF)
        assert keys.key_mask == 0x0001
        assert not keys.is_down(0xF)

    def test_release_all(self):
        keys = KeyState()
        for key in range(16):
            keys.press(key)
        assert keys.key_mask == 0xFFFF
        keys.release_all()
        assert keys.key_mask == 0

    @pytest.mark.parametrize("key", [-1, 0x10])
    def test_invalid_key(self, key):
        keys = KeyState()
        with pytest.raises(ValueError, match="hex key"):
            keys.press(key)
        with pytest.raises(ValueError):
            keys.is_down(key)


def test_custom_key_source():
    class AlwaysDown(KeySource):
        @property
        def key_mask(self) -> int:
            return 0xFFFF

    assert AlwaysDown().is_down(0xA)


def test_default_keymap_covers_every_hex_key():
    assert sorted(DEFAULT_KEYMAP.values()) == list(range(16))
