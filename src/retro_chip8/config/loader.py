import logging
from typing import Any, Dict, Optional

import yaml

from retro_chip8.common.errors import ConfigError
from retro_chip8.arch.chip8.constants import TIMER_RATE
from .models import EmulatorConfig, DisplayConfig, KeyboardConfig

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"cycle_rate", "rom", "seed", "log_level", "display", "keyboard"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


# @intent:responsibility YAMLの設定ファイルを解析し、EmulatorConfigを生成します。
class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r', encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return self._parse_config(data)

    def load_from_string(self, text: str) -> EmulatorConfig:
        return self._parse_config(yaml.safe_load(text))

    def _parse_config(self, data: Optional[Dict[str, Any]]) -> EmulatorConfig:
        if data is None:
            return EmulatorConfig()
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping.")

        for key in sorted(set(data) - _KNOWN_KEYS):
            logger.warning("Ignoring unknown configuration key '%s'", key)

        cycle_rate = self._parse_int(data.get("cycle_rate", EmulatorConfig.cycle_rate))
        if cycle_rate < TIMER_RATE:
            raise ConfigError(f"cycle_rate must be at least {TIMER_RATE}, got {cycle_rate}")

        seed = data.get("seed")
        rom = data.get("rom")

        log_level = str(data.get("log_level", "INFO")).upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigError(f"Invalid log_level: {log_level}")

        return EmulatorConfig(
            cycle_rate=cycle_rate,
            rom=str(rom) if rom is not None else None,
            seed=self._parse_int(seed) if seed is not None else None,
            log_level=log_level,
            display=self._parse_display(data.get("display") or {}),
            keyboard=self._parse_keyboard(data.get("keyboard") or {}),
        )

    def _parse_display(self, data: Dict[str, Any]) -> DisplayConfig:
        if not isinstance(data, dict):
            raise ConfigError("'display' must be a mapping.")
        defaults = DisplayConfig()
        scale = self._parse_int(data.get("scale", defaults.scale))
        if scale <= 0:
            raise ConfigError(f"display.scale must be positive, got {scale}")
        return DisplayConfig(
            scale=scale,
            wrap_horizontal=bool(data.get("wrap_horizontal", defaults.wrap_horizontal)),
            foreground=str(data.get("foreground", defaults.foreground)),
            background=str(data.get("background", defaults.background)),
        )

    def _parse_keyboard(self, data: Dict[str, Any]) -> KeyboardConfig:
        if not isinstance(data, dict):
            raise ConfigError("'keyboard' must be a mapping.")
        keymap_data = data.get("keymap")
        if keymap_data is None:
            return KeyboardConfig()
        if not isinstance(keymap_data, dict):
            raise ConfigError("'keyboard.keymap' must be a mapping.")

        keymap = {}
        for name, value in keymap_data.items():
            key = self._parse_int(value)
            if not 0 <= key <= 0xF:
                raise ConfigError(f"Key '{name}' maps to {key}, which is not a hex key (0x0-0xF)")
            keymap[str(name).upper()] = key
        return KeyboardConfig(keymap=keymap)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format: {value}")
