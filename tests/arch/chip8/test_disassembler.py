# tests/arch/chip8/test_disassembler.py
"""
retro_chip8.arch.chip8.disassembler の単体テスト。
"""
import logging

from retro_chip8.transport.memory import Memory
from retro_chip8.arch.chip8 import disassembler

# @intent:test_suite 逆アセンブルのリスティングと、DEBUG時のメモリダンプを検証します。


def make_memory(data: bytes, address: int = 0x200) -> Memory:
    memory = Memory(0x1000)
    memory.load(address, data)
    return memory


def test_disassemble_known_words():
    memory = make_memory(bytes([0x00, 0xE0, 0xA2, 0x2A, 0xD0, 0x15]))
    lines = disassembler.disassemble(memory, 0x200, 6)
    assert lines == [
        (0x200, "00E0", "CLS"),
        (0x202, "A22A", "LD I, 22A"),
        (0x204, "D015", "DRW V0, V1, 5"),
    ]


def test_unknown_word_is_rendered_as_data():
    memory = make_memory(bytes([0xF0, 0xFF]))
    assert disassembler.disassemble(memory, 0x200, 2) == [(0x200, "F0FF", "DW #F0FF")]


def test_disassemble_does_not_record_memory_activity():
    memory = make_memory(bytes([0x12, 0x00]))
    disassembler.disassemble(memory, 0x200, 2)
    assert memory.get_and_clear_activity_log() == []


def test_range_is_clamped_to_memory_end():
    memory = Memory(0x1000)
    lines = disassembler.disassemble(memory, 0xFFC, 0x100)
    assert [addr for addr, _, _ in lines] == [0xFFC, 0xFFE]


def test_dump_memory_logs_only_at_debug(caplog):
    memory = make_memory(bytes([0xA2, 0x2A]))
    with caplog.at_level(logging.INFO, logger=disassembler.logger.name):
        disassembler.dump_memory(memory)
    assert caplog.records == []

    with caplog.at_level(logging.DEBUG, logger=disassembler.logger.name):
        disassembler.dump_memory(memory)
    assert len(caplog.records) == 0x800
    assert any("A22A" in r.getMessage() and "LD I, 22A" in r.getMessage() for r in caplog.records)
