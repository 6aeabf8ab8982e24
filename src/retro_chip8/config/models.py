from dataclasses import dataclass, field
from typing import Dict, Optional

from retro_chip8.arch.chip8.constants import DEFAULT_CYCLE_RATE
from retro_chip8.io.keyboard import DEFAULT_KEYMAP


@dataclass
class DisplayConfig:
    scale: int = 8  # CHIP-8の1ピクセルを何ピクセル四方で描くか
    wrap_horizontal: bool = False
    foreground: str = "#FFFFFF"
    background: str = "#000000"


@dataclass
class KeyboardConfig:
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))


@dataclass
class EmulatorConfig:
    cycle_rate: int = DEFAULT_CYCLE_RATE
    rom: Optional[str] = None
    seed: Optional[int] = None
    log_level: str = "INFO"
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keyboard: KeyboardConfig = field(default_factory=KeyboardConfig)
