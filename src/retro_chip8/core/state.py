# retro_chip8/core/state.py
"""
CPU状態の基底定義。
どのアーキテクチャにも共通するのは、プログラムカウンタとスタックポインタの2つだけです。
"""
from dataclasses import dataclass


# @intent:responsibility 命令サイクルが参照する最小限のレジスタを保持します。
@dataclass
class CpuState:
    """
    pc は次にフェッチする命令のアドレス。
    sp の意味はアーキテクチャごとに異なります（CHIP-8では使用中のスタック段数）。
    """
    pc: int = 0
    sp: int = 0
