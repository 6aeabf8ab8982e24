# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

このモジュールは仮想CPU（VirtualCpu）を提供し、AbstractCpuインターフェースを実装します。
メモリ、レジスタ、スタック、タイマーはこのインスタンスが排他的に所有します。
"""
import logging
import random
from typing import List, Optional

from retro_chip8.common.errors import RomTooLargeError
from retro_chip8.common.types import DisassemblyLine, KeyMask, RegisterMap
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Operation, Snapshot
from retro_chip8.transport.memory import Memory
from retro_chip8.io.keyboard import KeySource, KeyState
from retro_chip8.arch.chip8 import disassembler
from retro_chip8.arch.chip8.constants import (
    DEFAULT_CYCLE_RATE, FONT_SET, FONT_SET_END, FONT_SET_START, MAX_ROM_SIZE,
    MEMORY_SIZE, PROGRAM_START, REGISTER_COUNT, TIMER_RATE,
)
from retro_chip8.arch.chip8.display import DisplayBuffer
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.instructions import (
    DecodedInstruction, ExecutionContext, Instruction, decode_opcode, execute_instruction
)

logger = logging.getLogger(__name__)

_REDRAW_INSTRUCTIONS = frozenset({Instruction.CLS, Instruction.DRW})


# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジックを提供します。
class VirtualCpu(AbstractCpu):
    """
    CHIP-8の仮想CPU。

    cycle() 1回につき、フェッチ・デコード・実行をちょうど1命令分行います。
    タイマーはサイクルレートに関係なく60Hzで減算されます。
    """
    def __init__(self, display: Optional[DisplayBuffer] = None, keyboard: Optional[KeySource] = None,
                 cycle_rate: int = DEFAULT_CYCLE_RATE, rng: Optional[random.Random] = None,
                 memory: Optional[Memory] = None):
        if cycle_rate < TIMER_RATE:
            raise ValueError(f"Cycle rate must be at least {TIMER_RATE} Hz, got {cycle_rate}.")
        super().__init__(memory if memory is not None else Memory(MEMORY_SIZE, protected_end=FONT_SET_END))
        self.display = display if display is not None else DisplayBuffer()
        self.keyboard = keyboard if keyboard is not None else KeyState()
        self.cycle_rate = cycle_rate
        self._context = ExecutionContext(
            memory=self._memory,
            display=self.display,
            keyboard=self.keyboard,
            rng=rng if rng is not None else random.Random(),
        )
        self._last_key_state: KeyMask = 0
        self.redraw_requested = False

    @property
    def memory(self) -> Memory:
        return self._memory

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    def get_state(self) -> Chip8CpuState:
        return self._state

    # @intent:responsibility 状態を初期化し、フォントとROMをメモリにロードします。
    # @intent:pre-condition ROMは 4096 - 0x200 バイト以下である必要があります。
    def start(self, rom: bytes) -> None:
        """
        全ての状態をゼロクリアし、フォントセットを0x000に、ROMを0x200にロードします。
        """
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLargeError(len(rom), MAX_ROM_SIZE)
        self.reset()
        self._memory.clear()
        self._memory.load(FONT_SET_START, FONT_SET)
        self._memory.load(PROGRAM_START, bytes(rom))
        self.display.clear()
        self.redraw_requested = False
        self._last_key_state = self.keyboard.key_mask
        logger.info("rom.size=%d", len(rom))
        disassembler.dump_memory(self._memory)

    # @intent:responsibility 1命令分のフェッチ・デコード・実行を行います。
    def cycle(self) -> Snapshot:
        return self.step()

    # @intent:responsibility PCとPC+1をビッグエンディアンの16bitオペコードとして読み出します。
    def _fetch(self) -> int:
        pc = self._state.pc
        return (self._memory.read(pc) << 8) | self._memory.read(pc + 1)

    def _decode(self, opcode: int) -> DecodedInstruction:
        return decode_opcode(opcode)

    def _describe(self, decoded: DecodedInstruction) -> Operation:
        return decoded.to_operation()

    def _execute(self, decoded: DecodedInstruction) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            operation = decoded.to_operation()
            logger.debug("PC=%04X opcode=%s; %s", self._state.pc - 2, operation.opcode_hex, operation.text)

        self.redraw_requested = False
        self._context.previous_key_state = self._last_key_state
        self._context.key_state = self.keyboard.key_mask
        execute_instruction(decoded, self._state, self._context)
        self.redraw_requested = decoded.instruction in _REDRAW_INSTRUCTIONS

    # @intent:responsibility 実行後にタイマーを減算し、次サイクルのFx0A判定用にキー状態を記録します。
    def _post_execute(self, decoded: DecodedInstruction) -> None:
        if self._is_timer_tick(self._cycle_count):
            state = self._state
            if state.dt > 0:
                state.dt -= 1
            if state.st > 0:
                state.st -= 1
        self._last_key_state = self.keyboard.key_mask

    def _is_redraw(self, decoded: DecodedInstruction) -> bool:
        return self.redraw_requested

    # @intent:responsibility n番目(1始まり)のサイクルでタイマーを減算するかを判定します。
    # @intent:note サイクルレートが60の倍数なら rate/60 サイクルごと、500Hzなら8〜9サイクルごとに
    #              1秒あたりちょうど60回となる。
    def _is_timer_tick(self, ordinal: int) -> bool:
        return (ordinal * TIMER_RATE) // self.cycle_rate > ((ordinal - 1) * TIMER_RATE) // self.cycle_rate

    @property
    def sound_active(self) -> bool:
        return self._state.st > 0

    def get_register_map(self) -> RegisterMap:
        state = self._state
        registers = {f"V{index:X}": state.v[index] for index in range(REGISTER_COUNT)}
        registers.update({
            "I": state.i,
            "PC": state.pc,
            "SP": state.sp,
            "DT": state.dt,
            "ST": state.st,
        })
        return registers

    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._memory, start_addr, length)
