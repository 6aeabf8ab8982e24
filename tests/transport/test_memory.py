# tests/transport/test_memory.py
"""
retro_chip8.transport.memory の単体テスト。
"""
import pytest

from retro_chip8.common.errors import MemoryAccessError
from retro_chip8.transport.memory import Memory, MemoryAccess, MemoryAccessType

# @intent:test_suite 範囲チェック、書き込み保護、アクセスログを検証します。


@pytest.fixture
def memory():
    return Memory(0x1000, protected_end=0x50)


class TestMemory:
    def test_read_write(self, memory):
        memory.write(0x200, 0xAB)
        assert memory.read(0x200) == 0xAB

    @pytest.mark.parametrize("address", [-1, 0x1000, 0x2000])
    def test_out_of_range_access(self, memory, address):
        with pytest.raises(MemoryAccessError, match="out of bounds") as excinfo:
            memory.read(address)
        assert excinfo.value.address == address
        with pytest.raises(MemoryAccessError):
            memory.write(address, 0)
        with pytest.raises(MemoryAccessError):
            memory.peek(address)

    def test_memory_access_error_is_an_index_error(self, memory):
        with pytest.raises(IndexError):
            memory.read(0x1000)

    def test_write_rejects_non_byte(self, memory):
        with pytest.raises(ValueError, match="8-bit"):
            memory.write(0x200, 0x100)

    def test_protected_region_rejects_writes(self, memory):
        with pytest.raises(MemoryAccessError, match="read-only"):
            memory.write(0x4F, 0x01)
        memory.write(0x50, 0x01)
        assert memory.peek(0x50) == 0x01

    def test_load_bypasses_protection_and_log(self, memory):
        memory.load(0x000, bytes([0xF0, 0x90]))
        assert memory.peek(0x000) == 0xF0
        assert memory.get_and_clear_activity_log() == []

    def test_load_out_of_range(self, memory):
        with pytest.raises(MemoryAccessError):
            memory.load(0xFFF, bytes([1, 2]))

    def test_read_block(self, memory):
        memory.load(0x300, bytes([1, 2, 3]))
        assert memory.read_block(0x300, 3) == bytes([1, 2, 3])
        assert memory.read_block(0x300, 0) == b""
        with pytest.raises(MemoryAccessError, match="Range"):
            memory.read_block(0xFFE, 3)

    def test_ensure_writable_checks_whole_range(self, memory):
        memory.ensure_writable(0xFFD, 3)
        with pytest.raises(MemoryAccessError):
            memory.ensure_writable(0xFFE, 3)
        with pytest.raises(MemoryAccessError):
            memory.ensure_writable(0x4E, 3)

    def test_activity_log(self, memory):
        memory.write(0x200, 0x12)
        memory.read(0x200)
        memory.peek(0x200)
        log = memory.get_and_clear_activity_log()
        assert log == [
            MemoryAccess(0x200, 0x12, MemoryAccessType.WRITE),
            MemoryAccess(0x200, 0x12, MemoryAccessType.READ),
        ]
        assert memory.get_and_clear_activity_log() == []

    def test_clear(self, memory):
        memory.load(0x000, bytes([0xFF]))
        memory.write(0x200, 0x01)
        memory.clear()
        assert memory.peek(0x000) == 0
        assert memory.peek(0x200) == 0
        assert memory.get_and_clear_activity_log() == []

    @pytest.mark.parametrize("size, protected_end", [(0, 0), (-1, 0), (0x100, 0x101), (0x100, -1)])
    def test_invalid_construction(self, size, protected_end):
        with pytest.raises(ValueError):
            Memory(size, protected_end=protected_end)
