# src/retro_chip8/arch/chip8/constants.py
"""
CHIP-8 仮想マシンの定数定義。
"""

# @intent:constant メモリマップ
MEMORY_SIZE = 0x1000  # 4KiB RAM
FONT_SET_START = 0x000
PROGRAM_START = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START

# @intent:constant レジスタとスタック
REGISTER_COUNT = 0x10  # V0-VF
FLAG_REGISTER = 0xF
STACK_SIZE = 0x10  # 16 levels

# @intent:constant 画面 (64x32, 1ピクセル1ビット、1バイト8ピクセル)
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
DISPLAY_ROW_BYTES = DISPLAY_WIDTH // 8
DISPLAY_BUFFER_SIZE = DISPLAY_ROW_BYTES * DISPLAY_HEIGHT

# @intent:constant タイマーはCPUのサイクルレートに関係なく60Hzで減算される
TIMER_RATE = 60
DEFAULT_CYCLE_RATE = 500

# @intent:constant 16進数字 0-F のフォントスプライト (各5バイト)
FONT_SPRITE_SIZE = 5
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
FONT_SET_END = FONT_SET_START + len(FONT_SET)  # 0x050
