"""
sheet2csv - スプレッドシート (.xls/.xlsx) をCSVに変換するツール

ヘッドレスモードのオフィススイート (LibreOffice) に変換を任せ、
生成されたCSVを指定の出力先に配置します。出力エンコーディングは UTF-8 と Shift-JIS に対応します。
"""

__version__ = "1.0.0"

# 主要コンポーネントをインポート
from sheet2csv.config import DEFAULT_CONFIG, Encoding, parse_encoding
from sheet2csv.core.converter import convert_to_csv
