# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8 命令実行の共通基盤。

各命令関数が参照する周辺装置（メモリ、画面、キーボード、乱数源）と、
ビット精度が要求される算術ヘルパーを定義します。
"""
import random
from dataclasses import dataclass
from typing import Callable, Tuple

from retro_chip8.common.types import KeyMask
from retro_chip8.transport.memory import Memory
from retro_chip8.io.keyboard import KeySource
from retro_chip8.arch.chip8.display import DisplayBuffer
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.instructions.decoder import DecodedInstruction


# @intent:responsibility 1サイクルの実行に必要な周辺装置と、サイクル開始時の入力状態を束ねます。
@dataclass
class ExecutionContext:
    memory: Memory
    display: DisplayBuffer
    keyboard: KeySource
    rng: random.Random
    key_state: KeyMask = 0  # このサイクル開始時に取得したキー状態
    previous_key_state: KeyMask = 0  # 前サイクル終了時に取得したキー状態


# Execution Function Type
ExecFunc = Callable[[Chip8CpuState, ExecutionContext, DecodedInstruction], None]


# @intent:responsibility 8bit加算。(結果 mod 256, 和が256以上か)
def add8(a: int, b: int) -> Tuple[int, bool]:
    total = a + b
    return total & 0xFF, total >= 0x100


# @intent:responsibility 16bit加算。(結果 mod 65536, 和が65536以上か)
def add16(a: int, b: int) -> Tuple[int, bool]:
    total = a + b
    return total & 0xFFFF, total >= 0x10000


# @intent:responsibility 8bit減算 a - b。(2の補数でラップした結果, ボローが発生しなかったか)
def sub8(a: int, b: int) -> Tuple[int, bool]:
    return (a - b) & 0xFF, a >= b


# @intent:responsibility スキップ命令の共通処理。今サイクルで加算済みの+2に、さらに+2する。
def skip_if(state: Chip8CpuState, condition: bool) -> None:
    if condition:
        state.pc = (state.pc + 2) & 0xFFFF
