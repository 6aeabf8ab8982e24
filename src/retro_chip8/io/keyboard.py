# src/retro_chip8/io/keyboard.py
"""
16進キーパッドの状態源。

CPUはキー状態を1サイクルごとにポーリングするだけで、決して変更しません。
物理キーから論理キー(0x0-0xF)への対応付けはホスト側のアダプタ（ui/main_window.py）が行います。
"""
from abc import ABC, abstractmethod
from typing import Dict

from retro_chip8.common.types import KeyMask

KEY_COUNT = 0x10

# @intent:constant 物理キー名 -> 16進キー。COSMAC VIPの配列を左手側の4x4キーに割り当てる。
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}


def _check_key(key: int) -> None:
    if not 0 <= key < KEY_COUNT:
        raise ValueError(f"Key {key} is not a hex key (0x0-0xF).")


# @intent:responsibility CPUが参照するキー状態源のインターフェースを定義します。
class KeySource(ABC):
    @property
    @abstractmethod
    def key_mask(self) -> KeyMask:
        """現在押されているキーのビットマスク（ビットi = キーi）。"""
        pass

    def is_down(self, key: int) -> bool:
        _check_key(key)
        return bool(self.key_mask & (1 << key))


# @intent:responsibility 押下/解放イベントからビットマスクを維持する標準的なキー状態源。
class KeyState(KeySource):
    def __init__(self):
        self._mask: KeyMask = 0

    @property
    def key_mask(self) -> KeyMask:
        return self._mask

    def press(self, key: int) -> None:
        _check_key(key)
        self._mask |= 1 << key

    def release(self, key: int) -> None:
        _check_key(key)
        self._mask &= ~(1 << key) & 0xFFFF

    def release_all(self) -> None:
        self._mask = 0
