"""
エラー定義モジュール - 変換処理で発生する例外の階層を定義します。
"""

import signal
from typing import Optional


class Sheet2CsvError(Exception):
    """sheet2csv の全例外の基底クラス"""


class UsageError(Sheet2CsvError):
    """コマンドラインの使い方が誤っている場合の例外"""

    def __init__(self, message: str, usage: str = ""):
        super().__init__(message)
        self.usage = usage


class ArgumentError(Sheet2CsvError):
    """引数の値や個数が不正な場合の例外"""


class EncodingError(ArgumentError):
    """未対応のエンコーディング名が指定された場合の例外"""


class ResolutionError(Sheet2CsvError):
    """入力ファイルのパスを解決できない場合の例外"""


class ExternalToolError(Sheet2CsvError):
    """外部の変換ツールが失敗した場合の例外"""

    def __init__(self, message: str,
                 returncode: Optional[int] = None,
                 stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class RelocationError(Sheet2CsvError):
    """変換結果を出力先へ移動できない場合の例外"""


class ConversionInterrupted(Sheet2CsvError):
    """シグナルによって処理が中断された場合の例外"""

    def __init__(self, signum: int):
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        super().__init__(f"interrupted by {name}")
        self.signum = signum
