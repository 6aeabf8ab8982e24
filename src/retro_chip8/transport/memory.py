# retro_chip8/transport/memory.py
"""
Transport Layer (メモリ)

このモジュールは、CHIP-8の4KiBアドレス空間を表現し、
範囲チェック付きの読み書きとアクセスの記録を行う責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List

from retro_chip8.common.errors import MemoryAccessError


# @intent:responsibility メモリアクセスを記録するためのタイプを定義します。
class MemoryAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"


# @intent:responsibility 個々のメモリアクセス操作を記録します。
@dataclass(frozen=True)
class MemoryAccess:
    address: int
    data: int  # 8bit value
    access_type: MemoryAccessType


# @intent:responsibility 固定長のメモリ領域を管理し、全てのアクセスを範囲チェックします。
# @intent:rationale 範囲外アクセスはラップアラウンドせず、必ずMemoryAccessErrorとして報告します。
class Memory:
    """
    固定長のバイト列で表現されるメモリ。
    protected_end より前のアドレス（フォント領域）は命令からの書き込みを拒否します。
    初期化時の書き込みにはバックドアの load() を使用します。
    """
    # @intent:pre-condition sizeは正の整数、protected_endは0以上size以下である必要があります。
    def __init__(self, size: int, protected_end: int = 0):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("Memory size must be a positive integer.")
        if not 0 <= protected_end <= size:
            raise ValueError("Protected region must lie inside memory.")
        self._memory = bytearray(size)
        self._size = size
        self._protected_end = protected_end
        self._activity_log: List[MemoryAccess] = []

    def get_size(self) -> int:
        return self._size

    def _check_range(self, address: int, length: int = 1) -> None:
        if address < 0 or address + length > self._size:
            if length == 1:
                message = f"Address {address:#06x} out of bounds for memory of size {self._size}."
            else:
                message = (f"Range {address:#06x}..{address + length - 1:#06x} "
                           f"out of bounds for memory of size {self._size}.")
            raise MemoryAccessError(address, message)

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出し、アクセスを記録します。
    def read(self, address: int) -> int:
        self._check_range(address)
        data = self._memory[address]
        self._activity_log.append(MemoryAccess(address, data, MemoryAccessType.READ))
        return data

    # @intent:responsibility 連続した領域を読み出します。スプライトの読み出しに使用されます。
    def read_block(self, address: int, length: int) -> bytes:
        self._check_range(address, length)
        block = bytes(self._memory[address:address + length])
        for offset, data in enumerate(block):
            self._activity_log.append(MemoryAccess(address + offset, data, MemoryAccessType.READ))
        return block

    # @intent:responsibility ログを記録せずに読み出します。逆アセンブルなどのインスペクタ用。
    def peek(self, address: int) -> int:
        self._check_range(address)
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込み、アクセスを記録します。
    # @intent:pre-condition アドレスは保護領域外であり、データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        self.ensure_writable(address, 1)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data
        self._activity_log.append(MemoryAccess(address, data, MemoryAccessType.WRITE))

    # @intent:responsibility 複数バイトの書き込みに先立ち、領域全体が書き込み可能かを検証します。
    # @intent:rationale 途中まで書き込まれた状態を残さないため、書き込み前に一括で確認します。
    def ensure_writable(self, address: int, length: int) -> None:
        self._check_range(address, length)
        if address < self._protected_end:
            raise MemoryAccessError(
                address, f"Address {address:#06x} is inside the read-only region below {self._protected_end:#06x}."
            )

    # @intent:responsibility 保護領域を含めて内容を初期化するためのバックドアです。ログには記録しません。
    def load(self, address: int, data: bytes) -> None:
        self._check_range(address, len(data))
        self._memory[address:address + len(data)] = data

    def clear(self) -> None:
        self._memory[:] = bytes(self._size)
        self._activity_log = []

    # @intent:responsibility 記録されたアクセスログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[MemoryAccess]:
        log = self._activity_log
        self._activity_log = []
        return log
