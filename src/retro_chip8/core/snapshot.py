# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1サイクル実行後のCPUの状態を記録した不変のデータ構造を定義します。
ホストへの情報提供と、トレース時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.memory import MemoryAccess


# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str  # 例: "A22A"
    mnemonic: str  # 例: "LD"
    operands: List[str] = field(default_factory=list)  # 例: ["I", "22A"]
    length: int = 2  # 命令のバイト長

    @property
    def text(self) -> str:
        if not self.operands:
            return self.mnemonic
        return f"{self.mnemonic} {', '.join(self.operands)}"


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    cycle_count: int  # 累計サイクル数
    trace: Optional[str] = None  # 例: "PC=0200 A22A  LD I, 22A"


# @intent:responsibility ある一時点におけるCPUの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1サイクル実行直後のCPUの状態を記録した不変のデータ構造。
    state は実行後の状態のコピーであり、以降のサイクルで変化しません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    memory_activity: List[MemoryAccess] = field(default_factory=list)
    redraw: bool = False  # このサイクルでCLSまたはDRWが実行されたか
