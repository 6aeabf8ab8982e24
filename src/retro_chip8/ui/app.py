# src/retro_chip8/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
コマンドライン引数と設定ファイルを統合し、エミュレータとメインウィンドウを起動します。
"""
import argparse
import logging
import random
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication, QFileDialog, QMessageBox

from retro_chip8.common.errors import Chip8Error
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.arch.chip8 import DisplayBuffer, VirtualCpu
from retro_chip8.host.scheduler import Scheduler
from retro_chip8.loader.rom import RomLoader
from .main_window import MainWindow, QtKeyboard, ROM_FILE_FILTER

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 virtual machine")
    parser.add_argument("--config", help="Path to a YAML configuration file")
    parser.add_argument("--rom", help="Path to a CHIP-8 ROM (*.ch8)")
    parser.add_argument("--rate", type=int, help="Instruction cycles per second (>= 60)")
    parser.add_argument("--scale", type=int, help="Screen pixels per CHIP-8 pixel")
    parser.add_argument("--seed", type=int, help="Seed for the RND instruction")
    parser.add_argument("--log-level", choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
                        type=str.upper, help="Logging level")
    return parser


# @intent:responsibility 設定ファイルを読み込み、コマンドライン引数で上書きした設定を返します。
def resolve_config(args: argparse.Namespace) -> EmulatorConfig:
    loader = ConfigLoader()
    config = loader.load_from_file(args.config) if args.config else EmulatorConfig()
    if args.rom is not None:
        config.rom = args.rom
    if args.rate is not None:
        config.cycle_rate = args.rate
    if args.scale is not None:
        config.display.scale = args.scale
    if args.seed is not None:
        config.seed = args.seed
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


# @intent:responsibility 設定に従ってCPUとスケジューラを組み立てます。
def build_emulator(config: EmulatorConfig, keyboard: QtKeyboard) -> Scheduler:
    cpu = VirtualCpu(
        display=DisplayBuffer(wrap_horizontal=config.display.wrap_horizontal),
        keyboard=keyboard.key_state,
        cycle_rate=config.cycle_rate,
        rng=random.Random(config.seed),
    )
    return Scheduler(cpu)


# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    ROMが指定されていない場合はファイル選択ダイアログを表示します。
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.rate is not None and args.rate < 60:
        parser.error(f"--rate must be at least 60, got {args.rate}")
    if args.scale is not None and args.scale <= 0:
        parser.error(f"--scale must be positive, got {args.scale}")

    try:
        config = resolve_config(args)
    except (OSError, Chip8Error) as e:
        parser.exit(1, f"retro-chip8: {e}\n")

    logging.basicConfig(level=getattr(logging, config.log_level), format=LOG_FORMAT)

    app = QApplication(sys.argv[:1])

    rom_path = config.rom
    if rom_path is None:
        rom_path, _ = QFileDialog.getOpenFileName(None, "Open CHIP-8 ROM", "", ROM_FILE_FILTER)
        if not rom_path:
            logger.info("No ROM selected")
            return 0

    keyboard = QtKeyboard(config.keyboard.keymap)
    scheduler = build_emulator(config, keyboard)
    main_win = MainWindow(scheduler, keyboard, config, RomLoader())
    try:
        main_win.load_rom(rom_path)
    except (OSError, Chip8Error) as e:
        logger.error("Failed to load ROM %s: %s", rom_path, e)
        QMessageBox.critical(None, "Error", f"Failed to load ROM: {e}")
        return 1

    main_win.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
