# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPUの状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState
from retro_chip8.arch.chip8.constants import PROGRAM_START, REGISTER_COUNT, STACK_SIZE, FLAG_REGISTER


# @intent:responsibility CHIP-8 CPUの全てのレジスタ、スタック、タイマーの状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態。
    CpuStateを拡張し、V0-VF、I、スタック、2つのタイマーを含みます。
    sp は次にpushされるスロットの番号 (0-16) です。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000  # Index register (下位12bitが意味を持つ)
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    dt: int = 0x00  # Delay Timer
    st: int = 0x00  # Sound Timer

    # @intent:accessor VFはキャリー/ボロー/衝突の結果を保持するフラグとして使われる。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value
