# src/retro_chip8/arch/chip8/disassembler.py
"""
CHIP-8 逆アセンブラ。
メモリ上の2バイトワードを命令として解釈し、デバッグ用のリスティングを生成します。
"""
import logging
from typing import List

from retro_chip8.common.errors import UnknownInstructionError
from retro_chip8.common.types import DisassemblyLine
from retro_chip8.transport.memory import Memory
from retro_chip8.arch.chip8.instructions.decoder import decode_opcode

logger = logging.getLogger(__name__)


# @intent:responsibility 指定範囲（バイト数）を2バイト単位で逆アセンブルします。
# @intent:note 命令として解釈できないワードは "DW #HHHH" として出力します。
def disassemble(memory: Memory, start_addr: int, length: int) -> List[DisassemblyLine]:
    lines: List[DisassemblyLine] = []
    end = min(start_addr + length, memory.get_size() - 1)
    for addr in range(start_addr, end, 2):
        opcode = (memory.peek(addr) << 8) | memory.peek(addr + 1)
        try:
            text = decode_opcode(opcode).to_operation().text
        except UnknownInstructionError:
            text = f"DW #{opcode:04X}"
        lines.append((addr, f"{opcode:04X}", text))
    return lines


# @intent:responsibility メモリ全体のリスティングをDEBUGレベルでログに出力します。
def dump_memory(memory: Memory) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    for addr, word, text in disassemble(memory, 0, memory.get_size()):
        logger.debug("%04X\t%s\t%s", addr, word, text)
