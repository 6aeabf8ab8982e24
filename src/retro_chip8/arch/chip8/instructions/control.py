# src/retro_chip8/arch/chip8/instructions/control.py
"""
CHIP-8 制御系命令 (Jump, Call/Return, Skip, Key wait, SYS)。

AbstractCpu.step() のフロー:
1. Fetch
2. Decode
3. Update PC (PC += 2)
4. Execute -> ここで PC を書き換えると、それが次の Fetch アドレスになる。
つまり、スキップ命令は成立時にさらに +2 するだけで良い。
"""
from retro_chip8.common.errors import StackOverflowError, StackUnderflowError
from retro_chip8.arch.chip8.constants import STACK_SIZE
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.instructions.base import ExecutionContext, skip_if
from retro_chip8.arch.chip8.instructions.decoder import DecodedInstruction

# --- System ---

# @intent:note 0nnn は旧来のマシン語ルーチン呼び出し。現代のインタプリタと同様に無視する。
def sys_(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    pass

# --- Jump / Call ---

def jp(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.pc = inst.addr

def jp_v0(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    state.pc = (state.v[0] + inst.addr) & 0xFFFF

# @intent:pre-condition スタックに空きがあること。満杯ならStackOverflowErrorを送出する。
def call(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    if state.sp >= STACK_SIZE:
        raise StackOverflowError(state.pc, STACK_SIZE)
    # 戻りアドレスは既に+2済みのPC（CALLの次の命令）
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = inst.addr

def ret(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    if state.sp == 0:
        raise StackUnderflowError(state.pc)
    state.sp -= 1
    state.pc = state.stack[state.sp]

# --- Skip ---

def se_vx_kk(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    skip_if(state, state.v[inst.x] == inst.kk)

def sne_vx_kk(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    skip_if(state, state.v[inst.x] != inst.kk)

def se_vx_vy(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    skip_if(state, state.v[inst.x] == state.v[inst.y])

def sne_vx_vy(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    skip_if(state, state.v[inst.x] != state.v[inst.y])

# --- Keyboard ---

def skp(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    skip_if(state, ctx.keyboard.is_down(state.v[inst.x] & 0xF))

def sknp(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    skip_if(state, not ctx.keyboard.is_down(state.v[inst.x] & 0xF))

# @intent:responsibility Fx0A: キーが押されるまで同じ命令を再実行し続ける。
# @intent:note 前サイクル終了時からこのサイクル開始時までに「離→押」へ遷移したキーのうち、
#              最小のキー番号をVxに格納する。遷移がなければPCを-2して同じ命令を再フェッチさせる。
def ld_vx_k(state: Chip8CpuState, ctx: ExecutionContext, inst: DecodedInstruction) -> None:
    pressed = ctx.key_state & ~ctx.previous_key_state & 0xFFFF
    if pressed:
        state.v[inst.x] = (pressed & -pressed).bit_length() - 1
    else:
        state.pc = (state.pc - 2) & 0xFFFF
