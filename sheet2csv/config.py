"""
設定管理モジュール - エンコーディング定義、コマンドライン引数やデフォルト設定を管理します。
"""

import os
import sys
import argparse
from enum import Enum
from typing import Dict, Any, List, NamedTuple, Optional

from sheet2csv import __version__
from sheet2csv.errors import ArgumentError, EncodingError, UsageError


class Encoding(Enum):
    """出力CSVの文字エンコーディング (オフィススイートのコード, Pythonのコーデック)"""
    UTF8 = (76, "utf-8")
    SHIFT_JIS = (64, "cp932")

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def codec(self) -> str:
        return self.value[1]


# --encoding で受け付ける名前
ENCODING_ALIASES = {
    "sjis": Encoding.SHIFT_JIS,
    "Shift-JIS": Encoding.SHIFT_JIS,
    "utf8": Encoding.UTF8,
    "UTF-8": Encoding.UTF8,
}

ENGINES = ("soffice", "pandas")

# デフォルト設定
DEFAULT_CONFIG = {
    "encoding": "utf8",
    "engine": "soffice",
    "office_binary": "",
    "timeout": 0.0,
    "debug": False,
}

ENV_PREFIX = "SHEET2CSV_"


class CommandLineArgs(NamedTuple):
    """コマンドライン引数を格納する型付きタプル"""
    source: str
    destination: Optional[str]
    encoding: Encoding
    engine: str
    debug: bool
    log_file: Optional[str]


def parse_encoding(value) -> Encoding:
    """
    エンコーディング名を Encoding に変換する

    Args:
        value: エンコーディング名（または Encoding）

    Returns:
        Encoding: 対応するエンコーディング

    Raises:
        EncodingError: 未対応の名前が指定された場合
    """
    if isinstance(value, Encoding):
        return value
    try:
        return ENCODING_ALIASES[value]
    except (KeyError, TypeError):
        choices = ", ".join(ENCODING_ALIASES)
        raise EncodingError(f"invalid encoding: {value!r} (choose from {choices})")


class _ArgumentParser(argparse.ArgumentParser):
    """エラー時に終了コード2で終了する代わりに UsageError を送出するパーサー"""

    def error(self, message):
        raise UsageError(message, usage=self.format_usage())


def _encoding_type(value: str) -> Encoding:
    try:
        return parse_encoding(value)
    except EncodingError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser(config: Optional[Dict[str, Any]] = None) -> argparse.ArgumentParser:
    """コマンドライン引数のパーサーを作成する"""
    config = config or DEFAULT_CONFIG

    parser = _ArgumentParser(
        prog="sheet2csv",
        allow_abbrev=False,
        usage="%(prog)s [-h] [--version] [-e ENCODING] [--engine {soffice,pandas}] "
              "[--log-file PATH] [--debug] SOURCE [DEST]",
        description='スプレッドシート (.xls/.xlsx) をヘッドレスのオフィススイートでCSVに変換します。',
    )

    parser.add_argument(
        'paths',
        nargs='*',
        metavar='SOURCE [DEST]',
        help='入力ファイルのパスと、省略可能な出力先（ファイルまたはディレクトリ）'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--encoding', '-e',
        type=_encoding_type,
        default=config['encoding'],
        metavar="ENCODING",
        help='出力CSVの文字エンコーディング: utf8, UTF-8, sjis, Shift-JIS'
             f'（デフォルト: {DEFAULT_CONFIG["encoding"]}）'
    )

    parser.add_argument(
        '--engine',
        choices=ENGINES,
        default=config['engine'],
        help='変換方法: soffice (オフィススイートを使用) または pandas (ライブラリで変換)'
    )

    parser.add_argument(
        '--log-file',
        default=None,
        metavar="PATH",
        help='ログをファイルにも出力します'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        default=config['debug'],
        help='デバッグモード: 詳細な処理情報を表示します'
    )

    return parser


def parse_args(argv: Optional[List[str]] = None,
               config: Optional[Dict[str, Any]] = None) -> CommandLineArgs:
    """
    コマンドライン引数を解析する関数

    Args:
        argv: 引数のリスト（Noneの場合は sys.argv を使用）
        config: デフォルト値として使う設定

    Returns:
        CommandLineArgs: 解析されたコマンドライン引数

    Raises:
        UsageError: 不明なオプションや入力ファイルの指定がない場合
        ArgumentError: 位置引数が多すぎる場合
    """
    parser = build_parser(config)
    if argv is None:
        argv = sys.argv[1:]

    # "--" 以降を位置引数として扱う書き方は受け付けない
    if "--" in argv:
        raise UsageError("unrecognized arguments: --", usage=parser.format_usage())

    # オプションと位置引数が混在していても順序を保つ
    args = parser.parse_intermixed_args(argv)

    if not args.paths:
        raise UsageError("the following arguments are required: SOURCE",
                         usage=parser.format_usage())
    for path in args.paths:
        if path.startswith("-"):
            raise UsageError(f"unrecognized arguments: {path}", usage=parser.format_usage())
    if len(args.paths) > 2:
        raise ArgumentError(f"too many arguments: {' '.join(args.paths[2:])}")

    encoding = parse_encoding(args.encoding)

    return CommandLineArgs(
        source=args.paths[0],
        destination=args.paths[1] if len(args.paths) == 2 else None,
        encoding=encoding,
        engine=args.engine,
        debug=args.debug,
        log_file=args.log_file
    )


def get_config() -> Dict[str, Any]:
    """
    設定値を環境変数とデフォルト値から取得する関数
    環境変数がある場合はそれを優先、ない場合はデフォルト値を使用

    Returns:
        Dict[str, Any]: 設定値の辞書

    Raises:
        ArgumentError: 環境変数の値を変換できない場合
    """
    config = DEFAULT_CONFIG.copy()

    for key in DEFAULT_CONFIG.keys():
        env_key = f"{ENV_PREFIX}{key.upper()}"
        if env_key in os.environ:
            env_value = os.environ[env_key]

            # 値の型に応じた変換
            try:
                if isinstance(DEFAULT_CONFIG[key], bool):
                    config[key] = env_value.lower() in ('true', 'yes', '1', 'y')
                elif isinstance(DEFAULT_CONFIG[key], float):
                    config[key] = float(env_value)
                else:
                    config[key] = env_value
            except ValueError:
                raise ArgumentError(f"invalid value for {env_key}: {env_value!r}")

    if config["engine"] not in ENGINES:
        raise ArgumentError(f"invalid value for {ENV_PREFIX}ENGINE: {config['engine']!r}")

    return config
