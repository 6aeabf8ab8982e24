# tests/arch/chip8/test_instruction_base.py
"""
retro_chip8.arch.chip8.instructions.base の算術ヘルパーの単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.instructions.base import add8, add16, sub8

# @intent:test_suite 8bit/16bit境界での結果のラップとキャリー/ボローを検証します。


@pytest.mark.parametrize("a, b, expected", [
    (0x00, 0x00, (0x00, False)),
    (0xFE, 0x01, (0xFF, False)),
    (0xFF, 0x01, (0x00, True)),
    (0xFF, 0xFF, (0xFE, True)),
])
def test_add8(a, b, expected):
    assert add8(a, b) == expected


@pytest.mark.parametrize("a, b, expected", [
    (0xFFFE, 0x01, (0xFFFF, False)),
    (0xFFFF, 0x01, (0x0000, True)),
    (0xFFF0, 0xFF, (0x00EF, True)),
    (0x0FFF, 0x05, (0x1004, False)),
])
def test_add16(a, b, expected):
    assert add16(a, b) == expected


@pytest.mark.parametrize("a, b, expected", [
    (0x05, 0x05, (0x00, True)),
    (0x05, 0x03, (0x02, True)),
    (0x03, 0x05, (0xFE, False)),
    (0x00, 0xFF, (0x01, False)),
])
def test_sub8(a, b, expected):
    assert sub8(a, b) == expected
