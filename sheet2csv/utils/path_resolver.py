"""
パス解決ユーティリティ - 入力ファイルと出力先のパスを絶対パスに解決します。
"""

import os
from typing import Optional

from sheet2csv.errors import ResolutionError


def csv_name(source: str) -> str:
    """
    入力ファイル名の最後の拡張子を .csv に置き換えたファイル名を返す

    Args:
        source: 入力ファイルのパス

    Returns:
        str: CSVファイル名（ディレクトリ部分なし）
    """
    stem = os.path.splitext(os.path.basename(source))[0]
    return f"{stem}.csv"


def resolve_source(source: str, launch_dir: Optional[str] = None) -> str:
    """
    入力ファイルのパスを、シンボリックリンクを解決した絶対パスにする

    Args:
        source: 入力ファイルのパス（相対パスは起動ディレクトリ基準）
        launch_dir: 起動ディレクトリ（Noneの場合はカレントディレクトリ）

    Returns:
        str: 解決された絶対パス

    Raises:
        ResolutionError: ファイルが存在しない場合
    """
    launch_dir = launch_dir or os.getcwd()
    path = os.path.realpath(os.path.join(launch_dir, os.path.expanduser(source)))

    if not os.path.exists(path):
        raise ResolutionError(f"no such file: {source}")
    if not os.path.isfile(path):
        raise ResolutionError(f"not a regular file: {source}")

    return path


def resolve_destination(destination: Optional[str],
                        source: str,
                        launch_dir: Optional[str] = None) -> str:
    """
    出力先のCSVファイルパスを決定する

    - 出力先の指定なし: <起動ディレクトリ>/<入力ファイル名>.csv
    - 既存のディレクトリ: <ディレクトリ>/<入力ファイル名>.csv
    - それ以外: 指定されたパスそのもの（親ディレクトリの存在は確認しない）

    Args:
        destination: 出力先のパス（ファイルまたはディレクトリ）
        source: 解決済みの入力ファイルパス
        launch_dir: 起動ディレクトリ（Noneの場合はカレントディレクトリ）

    Returns:
        str: 出力CSVファイルの絶対パス
    """
    launch_dir = launch_dir or os.getcwd()

    if destination is None:
        return os.path.join(os.path.abspath(launch_dir), csv_name(source))

    path = os.path.abspath(os.path.join(launch_dir, os.path.expanduser(destination)))
    if os.path.isdir(path):
        return os.path.join(os.path.realpath(path), csv_name(source))

    return path
