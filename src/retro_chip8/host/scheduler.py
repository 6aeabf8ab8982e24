# retro_chip8/host/scheduler.py
"""
サイクルドライバ（スケジューラ）モジュール。

ホストが所有し、VirtualCpu.cycle() を固定レートで呼び出します。
CPUの公開インターフェースのみを使用し、画面のフラッシュ要求をディスプレイシンクへ中継します。
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from retro_chip8.common.errors import Chip8Error
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.arch.chip8.cpu import VirtualCpu

logger = logging.getLogger(__name__)


# @intent:responsibility パックされた画面バッファを受け取り、任意の表現に変換するシンクのインターフェース。
class DisplaySink(ABC):
    @abstractmethod
    def flush(self, frame: bytes) -> None:
        """256バイト（64x32ビット）のパックされたバッファを受け取ります。"""
        pass


# @intent:responsibility CPUを固定レートで駆動し、実測スループットを記録します。
class Scheduler:
    """
    CPUのサイクルを固定レートで実行するドライバ。

    tick() は1サイクルを実行し、CLS/DRWが実行されていればシンクをフラッシュします。
    Chip8Errorが発生した場合はログに記録し、on_errorを呼び出して停止します。
    """
    def __init__(self, cpu: VirtualCpu, sink: Optional[DisplaySink] = None,
                 on_error: Optional[Callable[[Chip8Error], None]] = None,
                 clock: Callable[[], float] = time.perf_counter):
        self.cpu = cpu
        self.sink = sink
        self.on_error = on_error
        self._clock = clock
        self._running = False
        self.error: Optional[Chip8Error] = None
        self.last_snapshot: Optional[Snapshot] = None

        self._next_deadline: Optional[float] = None
        self._window_start: Optional[float] = None
        self._window_cycles = 0
        self.throughput: float = 0.0  # 実測 cycles/s

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval(self) -> float:
        return 1.0 / self.cpu.cycle_rate

    def start(self) -> None:
        self._running = True
        self.error = None
        now = self._clock()
        self._next_deadline = now
        self._window_start = now
        self._window_cycles = 0

    # @intent:responsibility 任意のtick境界で停止します。
    def stop(self) -> None:
        self._running = False

    # @intent:responsibility 1サイクル実行します。エラーが発生した場合はFalseを返し、停止します。
    def tick(self) -> bool:
        try:
            snapshot = self.cpu.cycle()
        except Chip8Error as e:
            self._fail(e)
            return False

        self.last_snapshot = snapshot
        if snapshot.redraw and self.sink is not None:
            self.sink.flush(self.cpu.display.snapshot())
        self._record_throughput()
        return True

    def _fail(self, error: Chip8Error) -> None:
        self._running = False
        self.error = error
        logger.error("Program halted at PC=%04X: %s", self.cpu.get_state().pc, error)
        if self.on_error is not None:
            self.on_error(error)

    def _record_throughput(self) -> None:
        self._window_cycles += 1
        now = self._clock()
        if self._window_start is None:
            self._window_start = now
            return
        elapsed = now - self._window_start
        if elapsed >= 1.0:
            self.throughput = self._window_cycles / elapsed
            logger.debug("%.1f cycles/s", self.throughput)
            self._window_start = now
            self._window_cycles = 0

    # @intent:responsibility n サイクルを待機なしで連続実行します。実行できたサイクル数を返します。
    def run_cycles(self, count: int) -> int:
        executed = 0
        for _ in range(count):
            if not self.tick():
                break
            executed += 1
        return executed

    # @intent:responsibility 期限が到来しているサイクルを全て実行します。GUIのタイマーコールバックから呼ばれます。
    # @intent:note 1回の呼び出しで実行するサイクル数には上限を設け、遅延が蓄積した場合は期限をリセットする。
    def run_pending(self, max_cycles: Optional[int] = None) -> int:
        if not self._running:
            return 0
        if max_cycles is None:
            max_cycles = max(1, self.cpu.cycle_rate // 10)

        now = self._clock()
        executed = 0
        while self._running and self._next_deadline <= now and executed < max_cycles:
            if not self.tick():
                break
            executed += 1
            self._next_deadline += self.interval
        if self._running and self._next_deadline <= now:
            self._next_deadline = now
        return executed

    # @intent:responsibility stop()されるかエラーが発生するまで固定レートで実行し続けるブロッキングループ。
    def run(self, max_cycles: Optional[int] = None, sleep: Callable[[float], None] = time.sleep) -> int:
        """
        Qtを使わないホスト向けのドライバ。max_cycles を指定した場合はその回数で停止します。
        実行したサイクル数を返します。
        """
        self.start()
        executed = 0
        while self._running:
            if max_cycles is not None and executed >= max_cycles:
                self._running = False
                break
            remaining = self._next_deadline - self._clock()
            if remaining > 0:
                sleep(remaining)
            if not self.tick():
                break
            executed += 1
            self._next_deadline += self.interval
        return executed
