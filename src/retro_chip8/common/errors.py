"""
エミュレータ全体で共通の例外定義。

プログラム（ROM）にとって致命的だが、エミュレータのプロセスにとっては
致命的ではない状態を表します。ホストはこれらを捕捉し、ROMの実行のみを停止できます。
"""


# @intent:responsibility CHIP-8コアが送出する全ての例外の基底クラス。
class Chip8Error(Exception):
    pass


# @intent:responsibility 定義済みのどの命令にも一致しないオペコードを表します。
class UnknownInstructionError(Chip8Error, ValueError):
    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Unknown instruction, opcode={opcode:#06x}")


class StackError(Chip8Error):
    pass


class StackOverflowError(StackError):
    def __init__(self, pc: int, capacity: int):
        self.pc = pc
        super().__init__(f"Stack overflow at PC {pc:#06x} (capacity {capacity}).")


class StackUnderflowError(StackError):
    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"Stack underflow at PC {pc:#06x}.")


# @intent:responsibility メモリ範囲外、または書き込み禁止領域へのアクセスを表します。
class MemoryAccessError(Chip8Error, IndexError):
    def __init__(self, address: int, message: str):
        self.address = address
        super().__init__(message)


class DisplayRangeError(Chip8Error, ValueError):
    pass


class RomTooLargeError(Chip8Error, ValueError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"ROM size {size} bytes exceeds the {limit} bytes available for programs.")


class ConfigError(Chip8Error, ValueError):
    pass
