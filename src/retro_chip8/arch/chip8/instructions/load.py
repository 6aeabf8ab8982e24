# src/retro_chip8/arch/chip8/instructions/load.py
"""
CHIP-8 ロード/ストア命令 (LD系)。
メモリへのアクセスは全てMemoryの範囲チェックを経由します。
"""
from retro_chip8.arch.chip8.constants import FONT_SET_START, FONT_SPRITE_SIZE
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.instructions.base import ExecutionContext
from retro_chip8.arch.chip8.instructions.decoder import DecodedInstruction

# --- Register loads ---

def ld_vx_kk(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x] = inst.kk

def ld_vx_vy(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x] = state.v[inst.y]

def ld_i(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.i = inst.addr

# --- Timers ---

def ld_vx_dt(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x] = state.dt

def ld_dt_vx(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.dt = state.v[inst.x]

def ld_st_vx(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.st = state.v[inst.x]

# --- Memory ---

# @intent:responsibility Fx29: Vxの下位4bitに対応するフォントグリフのアドレスをIに設定する。
def ld_f_vx(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.i = FONT_SET_START + (state.v[inst.x] & 0x0F) * FONT_SPRITE_SIZE

# @intent:responsibility Fx33: Vxの百の位、十の位、一の位を I, I+1, I+2 に格納する。
def ld_b_vx(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    value = state.v[inst.x]
    digits = (value // 100, (value // 10) % 10, value % 10)
    ctx.memory.ensure_writable(state.i, len(digits))
    for offset, digit in enumerate(digits):
        ctx.memory.write(state.i + offset, digit)

# @intent:responsibility Fx55: V0..Vx (xを含む) を I から順にメモリへ格納する。Iは変化しない。
def ld_mem_vx(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    ctx.memory.ensure_writable(state.i, inst.x + 1)
    for j in range(inst.x + 1):
        ctx.memory.write(state.i + j, state.v[j])

# @intent:responsibility Fx65: I から読み出した値を V0..Vx (xを含む) に格納する。Iは変化しない。
def ld_vx_mem(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    block = ctx.memory.read_block(state.i, inst.x + 1)
    for j, data in enumerate(block):
        state.v[j] = data
