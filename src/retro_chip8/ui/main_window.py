# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
画面ウィジェット、キーボード入力、サイクルを駆動するタイマーを保持します。
"""
import logging
from typing import Dict, Optional

from PySide6.QtWidgets import QMainWindow, QLabel, QFileDialog, QMessageBox, QToolBar
from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QAction, QCloseEvent, QFontDatabase, QKeyEvent, QFocusEvent

from retro_chip8.common.errors import Chip8Error
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.io.keyboard import KeyState
from retro_chip8.loader.rom import RomLoader
from retro_chip8.host.scheduler import Scheduler
from .screen import ScreenSink, ScreenWidget

logger = logging.getLogger(__name__)

ROM_FILE_FILTER = "CH8 Files (*.ch8);;All Files (*)"

# QTimerの発火間隔(ms)。1回の発火で期限が到来した分のサイクルをまとめて実行する。
TIMER_INTERVAL_MS = 2
STATUS_INTERVAL_MS = 250


# @intent:responsibility 設定ファイルのキー名 ("Q", "UP" など) に対応するQt.Keyを大文字小文字を区別せずに探します。
def find_qt_key(name: str) -> Optional[Qt.Key]:
    wanted = f"key_{name}".lower()
    for member_name, member in Qt.Key.__members__.items():
        if member_name.lower() == wanted:
            return member
    return None


# @intent:responsibility Qtのキーコードを16進キーに変換し、KeyStateへ押下/解放を反映します。
class QtKeyboard:
    def __init__(self, keymap: Dict[str, int], key_state: Optional[KeyState] = None):
        self.key_state = key_state if key_state is not None else KeyState()
        self._by_qt_key: Dict[int, int] = {}
        for name, key in keymap.items():
            qt_key = find_qt_key(name)
            if qt_key is None:
                logger.warning("Ignoring keymap entry '%s': no such Qt key", name)
                continue
            self._by_qt_key[int(qt_key)] = key

    def lookup(self, qt_key: int) -> Optional[int]:
        return self._by_qt_key.get(int(qt_key))

    # @intent:responsibility マップに存在するキーであれば処理してTrueを返します。
    def handle_press(self, qt_key: int) -> bool:
        key = self.lookup(qt_key)
        if key is None:
            return False
        self.key_state.press(key)
        return True

    def handle_release(self, qt_key: int) -> bool:
        key = self.lookup(qt_key)
        if key is None:
            return False
        self.key_state.release(key)
        return True


# @intent:responsibility アプリケーションのメインウィンドウを定義し、エミュレータのUIを組み立てます。
class MainWindow(QMainWindow):
    """
    CHIP-8エミュレータのメインウィンドウ。

    CPUはGUIスレッド上のQTimerから駆動されるため、描画とキー入力との間で排他制御は不要です。
    """
    def __init__(self, scheduler: Scheduler, keyboard: QtKeyboard, config: Optional[EmulatorConfig] = None,
                 rom_loader: Optional[RomLoader] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.config = config if config is not None else EmulatorConfig()
        self.scheduler = scheduler
        self.keyboard = keyboard
        self.rom_loader = rom_loader if rom_loader is not None else RomLoader()
        self._rom_path: Optional[str] = None

        self.setWindowTitle("Retro CHIP-8")

        display = self.config.display
        self.screen_widget = ScreenWidget(display.scale, display.foreground, display.background)
        self.setCentralWidget(self.screen_widget)
        self.scheduler.sink = ScreenSink(self.screen_widget)
        self.scheduler.on_error = self._on_cpu_error

        self._create_toolbar()
        self._create_menus()
        self._create_status_bar()

        self._cycle_timer = QTimer(self)
        self._cycle_timer.setTimerType(Qt.PreciseTimer)
        self._cycle_timer.timeout.connect(self._run_pending)

        self._status_timer = QTimer(self)
        self._status_timer.timeout.connect(self._update_status)
        self._status_timer.start(STATUS_INTERVAL_MS)

        self._update_ui_state(False)
        self.setFocusPolicy(Qt.StrongFocus)

    # @intent:responsibility メニューバーを作成し、ROMのロードアクションを追加します。
    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.open_action = QAction("Open ROM...", self)
        self.open_action.setShortcut("Ctrl+O")
        self.open_action.triggered.connect(self._open_rom_dialog)
        file_menu.addAction(self.open_action)

        file_menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        toolbar.setFocusPolicy(Qt.NoFocus)
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.resume)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.pause)
        toolbar.addAction(self.stop_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset)
        toolbar.addAction(self.reset_action)

    def _create_status_bar(self):
        self.status_label = QLabel("No ROM loaded", self)
        self.status_label.setFont(QFontDatabase.systemFont(QFontDatabase.FixedFont))
        self.statusBar().addWidget(self.status_label)

    def _update_ui_state(self, is_running: bool):
        has_rom = self._rom_path is not None
        self.run_action.setEnabled(has_rom and not is_running)
        self.stop_action.setEnabled(is_running)
        self.reset_action.setEnabled(has_rom)

    # @intent:responsibility ROMファイルをロードし、実行を開始します。
    def load_rom(self, path: str) -> None:
        self.pause()
        self.rom_loader.load_rom(path, self.scheduler.cpu)
        self._rom_path = path
        self.keyboard.key_state.release_all()
        self.screen_widget.set_frame(self.scheduler.cpu.display.snapshot())
        self.setWindowTitle(f"Retro CHIP-8 - {path}")
        self.resume()

    @Slot()
    def resume(self):
        if self._rom_path is None:
            return
        self.scheduler.start()
        self._cycle_timer.start(TIMER_INTERVAL_MS)
        self._update_ui_state(True)

    @Slot()
    def pause(self):
        self._cycle_timer.stop()
        self.scheduler.stop()
        self._update_ui_state(False)

    @Slot()
    def _reset(self):
        if self._rom_path is not None:
            self._load_rom_with_report(self._rom_path)

    @Slot()
    def _open_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", ROM_FILE_FILTER)
        if file_name:
            self._load_rom_with_report(file_name)

    def _load_rom_with_report(self, path: str) -> None:
        try:
            self.load_rom(path)
        except (OSError, Chip8Error) as e:
            logger.error("Failed to load ROM %s: %s", path, e)
            QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")

    @Slot()
    def _run_pending(self):
        self.scheduler.run_pending()

    # @intent:responsibility 実行時エラーでタイマーを停止し、ユーザーに報告します。
    def _on_cpu_error(self, error: Chip8Error) -> None:
        self._cycle_timer.stop()
        self._update_ui_state(False)
        QMessageBox.critical(self, "CHIP-8 Error", str(error))

    @Slot()
    def _update_status(self):
        if self._rom_path is None:
            return
        cpu = self.scheduler.cpu
        state = cpu.get_state()
        sound = "  BEEP" if cpu.sound_active else ""
        mode = "RUN" if self.scheduler.running else "STOP"
        self.status_label.setText(
            f"{mode}  PC={state.pc:04X}  I={state.i:04X}  DT={state.dt:02X}  ST={state.st:02X}  "
            f"{self.scheduler.throughput:7.1f} cycles/s{sound}"
        )

    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat() or not self.keyboard.handle_press(event.key()):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat() or not self.keyboard.handle_release(event.key()):
            super().keyReleaseEvent(event)

    # @intent:note フォーカスを失うとキー解放イベントが届かないため、全キーを解放する。
    def focusOutEvent(self, event: QFocusEvent):
        self.keyboard.key_state.release_all()
        super().focusOutEvent(event)

    def closeEvent(self, event: QCloseEvent):
        self.pause()
        self._status_timer.stop()
        event.accept()
