"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import Dict, Tuple

# @intent:data_structure 16個の16進キー(0x0-0xF)の押下状態。ビットiがキーiに対応します。
KeyMask = int

# @intent:data_structure レジスタ名と値の対応。UIやトレースが内部構造を知らずに値を表示するために使用されます。
RegisterMap = Dict[str, int]

# @intent:data_structure 逆アセンブル結果の1行 (address, hex_word, text)。
DisassemblyLine = Tuple[int, str, str]
