"""
変換メイン処理モジュール - スプレッドシートからCSVへの変換を行います。

処理の流れ: パス解決 → 一時ディレクトリ作成 → 変換 → 出力先へ移動
"""

import os
import shutil
import logging
from typing import Any, Dict, NamedTuple, Optional, Union

from sheet2csv.config import DEFAULT_CONFIG, CommandLineArgs, Encoding, ENGINES, parse_encoding
from sheet2csv.errors import ArgumentError, RelocationError
from sheet2csv.utils.path_resolver import resolve_source, resolve_destination
from sheet2csv.utils.temp_workspace import ScopedTempDir
from sheet2csv.utils.office_runner import OfficeRunner
from sheet2csv.utils.pandas_writer import PandasWriter


class ConversionContext(NamedTuple):
    """1回の変換に必要な設定値（起動時に一度だけ作成する）"""
    source: str
    destination: str
    encoding: Encoding
    engine: str
    office_binary: Optional[str]
    timeout: Optional[float]
    launch_dir: str
    debug: bool


def create_context(args: CommandLineArgs,
                   config: Optional[Dict[str, Any]] = None,
                   launch_dir: Optional[str] = None) -> ConversionContext:
    """
    コマンドライン引数と設定から変換コンテキストを作成する

    Args:
        args: 解析済みのコマンドライン引数
        config: 設定値（Noneの場合はデフォルト設定）
        launch_dir: 起動ディレクトリ（Noneの場合はカレントディレクトリ）

    Returns:
        ConversionContext: パス解決済みのコンテキスト

    Raises:
        ResolutionError: 入力ファイルが存在しない場合
    """
    config = config or DEFAULT_CONFIG
    launch_dir = os.path.abspath(launch_dir or os.getcwd())

    source = resolve_source(args.source, launch_dir)
    destination = resolve_destination(args.destination, source, launch_dir)

    return ConversionContext(
        source=source,
        destination=destination,
        encoding=args.encoding,
        engine=args.engine,
        office_binary=config.get("office_binary") or None,
        timeout=config.get("timeout") or None,
        launch_dir=launch_dir,
        debug=args.debug,
    )


class SpreadsheetConverter:
    """スプレッドシートをCSVに変換して出力先に配置するクラス"""

    def __init__(self, context: ConversionContext, logger: Optional[logging.Logger] = None):
        """
        初期化関数

        Args:
            context: 変換コンテキスト
            logger: ロガーオブジェクト
        """
        self.context = context
        self.logger = logger or logging.getLogger(__name__)

    def create_engine(self):
        if self.context.engine == "soffice":
            return OfficeRunner(
                binary=self.context.office_binary,
                timeout=self.context.timeout,
                logger=self.logger,
            )
        if self.context.engine == "pandas":
            return PandasWriter(logger=self.logger)
        raise ArgumentError(f"unknown engine: {self.context.engine!r} (choose from {', '.join(ENGINES)})")

    def convert(self) -> str:
        """
        変換を実行する

        Returns:
            str: 出力されたCSVファイルのパス

        Raises:
            Sheet2CsvError: いずれかの段階で失敗した場合（一時ディレクトリは削除済み）
        """
        ctx = self.context
        self.logger.debug(f"Source: {ctx.source}")
        self.logger.debug(f"Destination: {ctx.destination}")
        self.logger.debug(f"Encoding: {ctx.encoding.name} (code {ctx.encoding.code}), engine: {ctx.engine}")

        engine = self.create_engine()

        with ScopedTempDir(logger=self.logger) as workdir:
            produced = engine.convert(ctx.source, workdir, ctx.encoding)
            self.logger.debug(f"Converted file: {produced}")
            self._relocate(produced)

        return ctx.destination

    def _relocate(self, produced: str):
        """変換結果を出力先へ移動する（既存ファイルは上書き）"""
        destination = self.context.destination
        parent = os.path.dirname(destination)

        if not os.path.isdir(parent):
            raise RelocationError(f"destination directory does not exist: {parent}")

        try:
            shutil.move(produced, destination)
        except OSError as e:
            raise RelocationError(f"cannot move result to {destination}: {e}")

        self.logger.debug(f"Moved {produced} -> {destination}")


def convert_to_csv(source: str,
                   destination: Optional[str] = None,
                   encoding: Union[Encoding, str] = Encoding.UTF8,
                   engine: str = "soffice",
                   office_binary: Optional[str] = None,
                   timeout: Optional[float] = None,
                   launch_dir: Optional[str] = None,
                   debug: bool = False) -> str:
    """
    スプレッドシートをCSVに変換する

    Args:
        source: 入力ファイルのパス
        destination: 出力先のファイルまたはディレクトリ（Noneの場合は起動ディレクトリ）
        encoding: 出力エンコーディング（Encoding または "utf8" などの名前）
        engine: 変換方法 ("soffice" または "pandas")
        office_binary: オフィススイートの実行ファイル
        timeout: 変換の制限時間（秒）
        launch_dir: 相対パスの基準ディレクトリ
        debug: デバッグモード

    Returns:
        str: 出力されたCSVファイルの絶対パス
    """
    args = CommandLineArgs(
        source=source,
        destination=destination,
        encoding=parse_encoding(encoding),
        engine=engine,
        debug=debug,
        log_file=None,
    )
    config = dict(DEFAULT_CONFIG, office_binary=office_binary or "", timeout=timeout or 0.0)
    context = create_context(args, config, launch_dir)
    return SpreadsheetConverter(context, logging.getLogger(__name__)).convert()
