# src/retro_chip8/arch/chip8/instructions/alu.py
"""
CHIP-8 算術論理演算命令 (ALU)。
VFはキャリー/NOTボローのフラグとして上書きされます。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.instructions.base import ExecutionContext, add8, add16, sub8
from retro_chip8.arch.chip8.instructions.decoder import DecodedInstruction

# --- Logical Operations (OR, AND, XOR) ---

def or_(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x] |= state.v[inst.y]

def and_(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x] &= state.v[inst.y]

def xor(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x] ^= state.v[inst.y]

# --- Arithmetic Operations ---

# @intent:note 7xkk はキャリーをVFに反映しない。
def add_vx_kk(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x], _ = add8(state.v[inst.x], inst.kk)

def add_vx_vy(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    value, carry = add8(state.v[inst.x], state.v[inst.y])
    state.v[inst.x] = value
    state.vf = 1 if carry else 0

# @intent:note VF = NOT borrow (Vx >= Vy のとき1)
def sub(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    value, no_borrow = sub8(state.v[inst.x], state.v[inst.y])
    state.v[inst.x] = value
    state.vf = 1 if no_borrow else 0

def subn(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    value, no_borrow = sub8(state.v[inst.y], state.v[inst.x])
    state.v[inst.x] = value
    state.vf = 1 if no_borrow else 0

# @intent:note SHR/SHL はシフトアウトしたビットをVFに設定しない（一般的な仕様書とは異なる挙動を維持）。
def shr(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x] >>= 1

def shl(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x] = (state.v[inst.x] << 1) & 0xFF

def add_i_vx(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    value, carry = add16(state.i, state.v[inst.x])
    state.i = value
    state.vf = 1 if carry else 0

def rnd(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.v[inst.x] = ctx.rng.randint(0x00, 0xFF) & inst.kk
