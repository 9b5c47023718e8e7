"""
pandas による変換 - オフィススイートを使わずに、最初のシートをCSVとして書き出します。
"""

import os
import csv
import logging
from typing import Optional

import pandas as pd

from sheet2csv.config import Encoding
from sheet2csv.errors import ExternalToolError
from sheet2csv.utils.path_resolver import csv_name


class PandasWriter:
    """pandas.read_excel でスプレッドシートを読み込みCSVに変換するクラス"""

    # 拡張子ごとの読み込みエンジン
    EXCEL_ENGINES = {
        ".xlsx": "openpyxl",
        ".xlsm": "openpyxl",
        ".xls": "xlrd",
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def read_sheet(self, source: str) -> pd.DataFrame:
        """
        最初のシートを文字列のデータフレームとして読み込む

        Args:
            source: 入力ファイルのパス

        Returns:
            pd.DataFrame: 読み込まれたデータフレーム（ヘッダー行なし）

        Raises:
            ExternalToolError: 読み込みに失敗した場合
        """
        engine = self.EXCEL_ENGINES.get(os.path.splitext(source)[1].lower())
        try:
            df = pd.read_excel(source, sheet_name=0, header=None, dtype=str, engine=engine)
        except Exception as e:
            raise ExternalToolError(f"failed to read {os.path.basename(source)}: {e}")

        self.logger.debug(f"Read {len(df)} rows x {len(df.columns)} columns with engine {engine or 'auto'}")
        return df

    def convert(self, source: str, outdir: str, encoding: Encoding) -> str:
        """
        スプレッドシートをCSVに変換して outdir に出力する

        Args:
            source: 入力ファイルの絶対パス
            outdir: 出力先の一時ディレクトリ
            encoding: 出力エンコーディング

        Returns:
            str: 出力されたCSVファイルのパス

        Raises:
            ExternalToolError: 変換に失敗した場合
        """
        df = self.read_sheet(source)
        output = os.path.join(outdir, csv_name(source))

        try:
            df.to_csv(
                output,
                sep=",",
                quotechar='"',
                quoting=csv.QUOTE_MINIMAL,
                index=False,
                header=False,
                encoding=encoding.codec,
                lineterminator="\n",
            )
        except UnicodeEncodeError as e:
            raise ExternalToolError(f"cannot encode {os.path.basename(source)} as {encoding.codec}: {e}")

        return output
