# retro_chip8/loader/rom.py
"""
ROMローダーモジュール。
生のバイト列（.ch8）を読み込み、サイズを検証してCPUに渡します。
"""
import logging
from pathlib import Path
from typing import Union

from retro_chip8.common.errors import RomTooLargeError
from retro_chip8.arch.chip8.constants import MAX_ROM_SIZE
from retro_chip8.arch.chip8.cpu import VirtualCpu

logger = logging.getLogger(__name__)


class RomLoader:
    """
    CHIP-8 ROMファイルを読み込むローダー。
    ROMは0x200から配置されるため、最大 4096 - 0x200 = 3584 バイトです。
    """
    # @intent:responsibility ROMファイルを読み込み、サイズを検証したバイト列を返します。
    # @intent:post-condition 上限を超えるROMはRomTooLargeErrorとしてロード時に報告されます。
    def read_rom(self, file_path: Union[str, Path]) -> bytes:
        path = Path(file_path)
        rom = path.read_bytes()
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLargeError(len(rom), MAX_ROM_SIZE)
        logger.debug("Read %d bytes from %s", len(rom), path)
        return rom

    # @intent:responsibility ROMファイルを読み込み、CPUを初期化して実行可能な状態にします。
    def load_rom(self, file_path: Union[str, Path], cpu: VirtualCpu) -> None:
        cpu.start(self.read_rom(file_path))
