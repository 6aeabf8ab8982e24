"""
CHIP-8命令セット実装パッケージ。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext
from .decoder import DecodedInstruction, Instruction, decode_opcode
from .maps import EXECUTE_MAP


# @intent:responsibility デコードされたCHIP-8命令を実行し、CPUの状態を変更します。
def execute_instruction(inst: DecodedInstruction, state: Chip8CpuState, ctx: ExecutionContext) -> None:
    EXECUTE_MAP[inst.instruction](state, ctx, inst)
