# src/retro_chip8/arch/chip8/instructions/decoder.py
"""
CHIP-8 命令デコーダ。

16bitのオペコードを命令タグ（Instruction）とオペランドフィールドに分解します。
状態を持たない純粋関数として実装されています。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from retro_chip8.common.errors import UnknownInstructionError
from retro_chip8.core.snapshot import Operation


# @intent:responsibility 35個の命令の識別子。値は (オペコード表記, ニーモニック)。
class Instruction(Enum):
    CLS = ("00E0", "CLS")
    RET = ("00EE", "RET")
    SYS = ("0nnn", "SYS")
    JP = ("1nnn", "JP")
    CALL = ("2nnn", "CALL")
    SE_VX_KK = ("3xkk", "SE")
    SNE_VX_KK = ("4xkk", "SNE")
    SE_VX_VY = ("5xy0", "SE")
    LD_VX_KK = ("6xkk", "LD")
    ADD_VX_KK = ("7xkk", "ADD")
    LD_VX_VY = ("8xy0", "LD")
    OR = ("8xy1", "OR")
    AND = ("8xy2", "AND")
    XOR = ("8xy3", "XOR")
    ADD_VX_VY = ("8xy4", "ADD")
    SUB = ("8xy5", "SUB")
    SHR = ("8xy6", "SHR")
    SUBN = ("8xy7", "SUBN")
    SHL = ("8xyE", "SHL")
    SNE_VX_VY = ("9xy0", "SNE")
    LD_I = ("Annn", "LD")
    JP_V0 = ("Bnnn", "JP")
    RND = ("Cxkk", "RND")
    DRW = ("Dxyn", "DRW")
    SKP = ("Ex9E", "SKP")
    SKNP = ("ExA1", "SKNP")
    LD_VX_DT = ("Fx07", "LD")
    LD_VX_K = ("Fx0A", "LD")
    LD_DT_VX = ("Fx15", "LD")
    LD_ST_VX = ("Fx18", "LD")
    ADD_I_VX = ("Fx1E", "ADD")
    LD_F_VX = ("Fx29", "LD")
    LD_B_VX = ("Fx33", "LD")
    LD_MEM_VX = ("Fx55", "LD")
    LD_VX_MEM = ("Fx65", "LD")

    @property
    def pattern(self) -> str:
        return self.value[0]

    @property
    def mnemonic(self) -> str:
        return self.value[1]


# @intent:responsibility 上位ニブルだけで命令が確定するオペコード範囲。
_BY_HIGH_NIBBLE: Dict[int, Instruction] = {
    0x1: Instruction.JP,
    0x2: Instruction.CALL,
    0x3: Instruction.SE_VX_KK,
    0x4: Instruction.SNE_VX_KK,
    0x5: Instruction.SE_VX_VY,
    0x6: Instruction.LD_VX_KK,
    0x7: Instruction.ADD_VX_KK,
    0x9: Instruction.SNE_VX_VY,
    0xA: Instruction.LD_I,
    0xB: Instruction.JP_V0,
    0xC: Instruction.RND,
    0xD: Instruction.DRW,
}

# @intent:responsibility 8xyN は下位ニブルで区別する。
_ALU_BY_LOW_NIBBLE: Dict[int, Instruction] = {
    0x0: Instruction.LD_VX_VY,
    0x1: Instruction.OR,
    0x2: Instruction.AND,
    0x3: Instruction.XOR,
    0x4: Instruction.ADD_VX_VY,
    0x5: Instruction.SUB,
    0x6: Instruction.SHR,
    0x7: Instruction.SUBN,
    0xE: Instruction.SHL,
}

_KEY_BY_LOW_BYTE: Dict[int, Instruction] = {
    0x9E: Instruction.SKP,
    0xA1: Instruction.SKNP,
}

_MISC_BY_LOW_BYTE: Dict[int, Instruction] = {
    0x07: Instruction.LD_VX_DT,
    0x0A: Instruction.LD_VX_K,
    0x15: Instruction.LD_DT_VX,
    0x18: Instruction.LD_ST_VX,
    0x1E: Instruction.ADD_I_VX,
    0x29: Instruction.LD_F_VX,
    0x33: Instruction.LD_B_VX,
    0x55: Instruction.LD_MEM_VX,
    0x65: Instruction.LD_VX_MEM,
}


# @intent:responsibility デコード済みの命令。命令タグとビット単位で抽出したオペランドを保持します。
@dataclass(frozen=True)
class DecodedInstruction:
    instruction: Instruction
    opcode: int

    @property
    def addr(self) -> int:
        return self.opcode & 0x0FFF

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.opcode & 0xF

    @property
    def kk(self) -> int:
        return self.opcode & 0xFF

    @property
    def mnemonic(self) -> str:
        return self.instruction.mnemonic

    # @intent:responsibility トレース用のシンボリックなオペランド列を返します。実行には使用しません。
    def operands(self) -> List[str]:
        addr = f"{self.addr:03X}"
        vx = f"V{self.x:X}"
        vy = f"V{self.y:X}"
        kk = f"{self.kk:02X}"
        table = {
            Instruction.CLS: [],
            Instruction.RET: [],
            Instruction.SYS: [addr],
            Instruction.JP: [addr],
            Instruction.CALL: [addr],
            Instruction.SE_VX_KK: [vx, kk],
            Instruction.SNE_VX_KK: [vx, kk],
            Instruction.SE_VX_VY: [vx, vy],
            Instruction.LD_VX_KK: [vx, kk],
            Instruction.ADD_VX_KK: [vx, kk],
            Instruction.LD_VX_VY: [vx, vy],
            Instruction.OR: [vx, vy],
            Instruction.AND: [vx, vy],
            Instruction.XOR: [vx, vy],
            Instruction.ADD_VX_VY: [vx, vy],
            Instruction.SUB: [vx, vy],
            Instruction.SHR: [vx],
            Instruction.SUBN: [vx, vy],
            Instruction.SHL: [vx],
            Instruction.SNE_VX_VY: [vx, vy],
            Instruction.LD_I: ["I", addr],
            Instruction.JP_V0: ["V0", addr],
            Instruction.RND: [vx, kk],
            Instruction.DRW: [vx, vy, f"{self.n:X}"],
            Instruction.SKP: [vx],
            Instruction.SKNP: [vx],
            Instruction.LD_VX_DT: [vx, "DT"],
            Instruction.LD_VX_K: [vx, "K"],
            Instruction.LD_DT_VX: ["DT", vx],
            Instruction.LD_ST_VX: ["ST", vx],
            Instruction.ADD_I_VX: ["I", vx],
            Instruction.LD_F_VX: ["F", vx],
            Instruction.LD_B_VX: ["B", vx],
            Instruction.LD_MEM_VX: ["[I]", vx],
            Instruction.LD_VX_MEM: [vx, "[I]"],
        }
        return table[self.instruction]

    def to_operation(self) -> Operation:
        return Operation(
            opcode_hex=f"{self.opcode:04X}",
            mnemonic=self.mnemonic,
            operands=self.operands(),
            length=2,
        )


# @intent:responsibility 16bitオペコードを命令タグに分類します。
# @intent:post-condition 下位セレクタがどの命令にも一致しない場合、UnknownInstructionErrorを送出します。
def decode_opcode(opcode: int) -> DecodedInstruction:
    """
    上位ニブルで分類し、0x0, 0x8, 0xE, 0xF の範囲のみ下位バイト/下位ニブルで区別します。
    """
    if not 0 <= opcode <= 0xFFFF:
        raise ValueError(f"Opcode {opcode} is not a 16-bit value.")

    high = opcode >> 12
    instruction = _BY_HIGH_NIBBLE.get(high)
    if instruction is None:
        if high == 0x0:
            if opcode == 0x00E0:
                instruction = Instruction.CLS
            elif opcode == 0x00EE:
                instruction = Instruction.RET
            else:
                instruction = Instruction.SYS
        elif high == 0x8:
            instruction = _ALU_BY_LOW_NIBBLE.get(opcode & 0x000F)
        elif high == 0xE:
            instruction = _KEY_BY_LOW_BYTE.get(opcode & 0x00FF)
        else:
            instruction = _MISC_BY_LOW_BYTE.get(opcode & 0x00FF)

    if instruction is None:
        raise UnknownInstructionError(opcode)
    return DecodedInstruction(instruction, opcode)
