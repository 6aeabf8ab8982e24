# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import copy
from abc import ABC, abstractmethod
from typing import Any, List

from retro_chip8.common.types import DisassemblyLine, RegisterMap
from retro_chip8.core.snapshot import Metadata, Operation, Snapshot
from retro_chip8.core.state import CpuState
from retro_chip8.transport.memory import Memory


# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    メモリとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `memory`は有効なMemoryオブジェクトである必要があります。
    def __init__(self, memory: Memory):
        self._memory = memory
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> CpuState:
        """
        現在のCPUの状態（レジスタ値など）を返します。
        返されるのは内部状態そのものであり、コピーではありません。
        """
        return self._state

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCからオペコードをフェッチして返します。PCは変更しません。
        """
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Any:
        """
        オペコードを解析し、アーキテクチャ固有の命令表現を返します。
        """
        pass

    @abstractmethod
    def _describe(self, decoded: Any) -> Operation:
        """
        デコード済みの命令から、Snapshot用のOperationを生成します。
        """
        pass

    @abstractmethod
    def _execute(self, decoded: Any) -> None:
        """
        デコードされた命令を実行し、レジスタやメモリの状態を更新します。
        """
        pass

    # @intent:responsibility 命令実行前にPCを更新します。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    # @intent:responsibility 命令実行後の処理（タイマー、入力のラッチなど）を行うフック。
    def _post_execute(self, decoded: Any) -> None:
        pass

    def _is_redraw(self, decoded: Any) -> bool:
        return False

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（ログクリア→フェッチ→デコード→PC更新→実行→後処理→Snapshot生成）を定義します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUの状態を含むSnapshotオブジェクトを返します。
        """
        self._memory.get_and_clear_activity_log()
        initial_pc = self._state.pc

        opcode = self._fetch()
        decoded = self._decode(opcode)
        operation = self._describe(decoded)

        self._update_pc(operation)
        self._execute(decoded)

        self._cycle_count += 1
        self._post_execute(decoded)

        return Snapshot(
            state=copy.deepcopy(self._state),
            operation=operation,
            metadata=Metadata(
                cycle_count=self._cycle_count,
                trace=f"PC={initial_pc:04X} {operation.opcode_hex}  {operation.text}",
            ),
            memory_activity=self._memory.get_and_clear_activity_log(),
            redraw=self._is_redraw(decoded),
        )

    @abstractmethod
    def get_register_map(self) -> RegisterMap:
        """
        現在のレジスタ値を辞書形式で返す。
        """
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_word, text) のタプルリストを返す。
        """
        pass
