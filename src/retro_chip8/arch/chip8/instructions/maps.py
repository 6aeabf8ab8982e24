# src/retro_chip8/arch/chip8/instructions/maps.py
"""
CHIP-8 命令マップ定義。
各命令モジュールから関数をインポートし、命令タグと実行関数の対応表を構築します。
"""
from typing import Dict

from retro_chip8.arch.chip8.instructions import alu, control, graphics, load
from retro_chip8.arch.chip8.instructions.base import ExecFunc
from retro_chip8.arch.chip8.instructions.decoder import Instruction

EXECUTE_MAP: Dict[Instruction, ExecFunc] = {
    # --- Control ---
    Instruction.SYS: control.sys_,
    Instruction.RET: control.ret,
    Instruction.JP: control.jp,
    Instruction.CALL: control.call,
    Instruction.JP_V0: control.jp_v0,
    Instruction.SE_VX_KK: control.se_vx_kk,
    Instruction.SNE_VX_KK: control.sne_vx_kk,
    Instruction.SE_VX_VY: control.se_vx_vy,
    Instruction.SNE_VX_VY: control.sne_vx_vy,
    Instruction.SKP: control.skp,
    Instruction.SKNP: control.sknp,
    Instruction.LD_VX_K: control.ld_vx_k,

    # --- ALU ---
    Instruction.ADD_VX_KK: alu.add_vx_kk,
    Instruction.OR: alu.or_,
    Instruction.AND: alu.and_,
    Instruction.XOR: alu.xor,
    Instruction.ADD_VX_VY: alu.add_vx_vy,
    Instruction.SUB: alu.sub,
    Instruction.SHR: alu.shr,
    Instruction.SUBN: alu.subn,
    Instruction.SHL: alu.shl,
    Instruction.ADD_I_VX: alu.add_i_vx,
    Instruction.RND: alu.rnd,

    # --- Load/Store ---
    Instruction.LD_VX_KK: load.ld_vx_kk,
    Instruction.LD_VX_VY: load.ld_vx_vy,
    Instruction.LD_I: load.ld_i,
    Instruction.LD_VX_DT: load.ld_vx_dt,
    Instruction.LD_DT_VX: load.ld_dt_vx,
    Instruction.LD_ST_VX: load.ld_st_vx,
    Instruction.LD_F_VX: load.ld_f_vx,
    Instruction.LD_B_VX: load.ld_b_vx,
    Instruction.LD_MEM_VX: load.ld_mem_vx,
    Instruction.LD_VX_MEM: load.ld_vx_mem,

    # --- Graphics ---
    Instruction.CLS: graphics.cls,
    Instruction.DRW: graphics.drw,
}

# @intent:invariant 全ての命令タグに実行関数が存在すること。欠落はインポート時に検出する。
_missing = set(Instruction) - set(EXECUTE_MAP)
if _missing:
    raise RuntimeError(f"No executor registered for: {sorted(i.pattern for i in _missing)}")
