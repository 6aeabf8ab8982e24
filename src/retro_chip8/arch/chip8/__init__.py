# src/retro_chip8/arch/chip8/__init__.py
"""
CHIP-8 Architecture Package
"""
from .cpu import VirtualCpu
from .display import DisplayBuffer
from .state import Chip8CpuState
