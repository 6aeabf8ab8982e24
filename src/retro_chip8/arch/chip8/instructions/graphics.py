# src/retro_chip8/arch/chip8/instructions/graphics.py
"""
CHIP-8 画面系命令 (CLS, DRW)。
"""
from retro_chip8.arch.chip8.constants import DISPLAY_WIDTH, DISPLAY_HEIGHT
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.instructions.base import ExecutionContext
from retro_chip8.arch.chip8.instructions.decoder import DecodedInstruction


def cls(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    ctx.display.clear()

# @intent:responsibility Dxyn: Iからnバイトのスプライトを読み、(Vx mod 64, Vy mod 32) に描画する。VF = 衝突。
def drw(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    sprite = ctx.memory.read_block(state.i, inst.n)
    collision = ctx.display.draw(
        state.v[inst.x] % DISPLAY_WIDTH,
        state.v[inst.y] % DISPLAY_HEIGHT,
        sprite,
    )
    state.vf = 1 if collision else 0
