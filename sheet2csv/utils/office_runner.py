"""
オフィススイート実行ユーティリティ - LibreOffice (soffice) をヘッドレスモードで起動し、
スプレッドシートをCSVに変換します。
"""

import os
import shutil
import logging
import subprocess
from typing import List, Optional

import psutil

from sheet2csv.config import Encoding
from sheet2csv.errors import ExternalToolError
from sheet2csv.utils.path_resolver import csv_name

# CSVフィルタの設定 (区切り文字 44 = ",", 文字列の引用符 34 = '"')
CSV_FILTER = "csv:Text - txt - csv (StarCalc)"
FIELD_DELIMITER = 44
TEXT_DELIMITER = 34
FILTER_FLAG = 1

DEFAULT_BINARIES = ("soffice", "libreoffice")
MACOS_BINARY = "/Applications/LibreOffice.app/Contents/MacOS/soffice"

# 子プロセスだけに適用するロケール
LOCALE_ENV = {
    "LANG": "en_US.UTF-8",
    "LC_ALL": "en_US.UTF-8",
}


def filter_options(encoding: Encoding) -> str:
    """--convert-to に渡す出力形式の指定文字列を作成する"""
    return f"{CSV_FILTER}:{FIELD_DELIMITER},{TEXT_DELIMITER},{encoding.code},{FILTER_FLAG}"


class OfficeRunner:
    """ヘッドレスのオフィススイートで変換を行うクラス"""

    def __init__(self,
                 binary: Optional[str] = None,
                 timeout: Optional[float] = None,
                 logger: Optional[logging.Logger] = None,
                 grace_period: float = 3.0):
        """
        初期化関数

        Args:
            binary: 実行ファイルの名前またはパス（Noneの場合は自動検出）
            timeout: 変換の制限時間（秒、Noneまたは0の場合は無制限）
            logger: ロガーオブジェクト
            grace_period: 子プロセスを強制終了するまでの猶予（秒）
        """
        self.binary = binary or None
        self.timeout = timeout or None
        self.logger = logger or logging.getLogger(__name__)
        self.grace_period = grace_period

    def find_binary(self) -> str:
        """
        実行ファイルのパスを検出する

        Returns:
            str: 実行ファイルの絶対パス

        Raises:
            ExternalToolError: 実行ファイルが見つからない場合
        """
        if self.binary:
            found = shutil.which(self.binary)
            if found:
                return found
            raise ExternalToolError(f"office binary not found: {self.binary}")

        for name in DEFAULT_BINARIES:
            found = shutil.which(name)
            if found:
                return found

        if os.access(MACOS_BINARY, os.X_OK):
            return MACOS_BINARY

        raise ExternalToolError(
            f"office binary not found (tried {', '.join(DEFAULT_BINARIES)}); "
            "install LibreOffice or set SHEET2CSV_OFFICE_BINARY"
        )

    def build_command(self, binary: str, source: str, outdir: str, encoding: Encoding) -> List[str]:
        return [
            binary,
            "--headless",
            "--convert-to", filter_options(encoding),
            "--outdir", outdir,
            source,
        ]

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
        command = self.build_command(self.find_binary(), source, outdir, encoding)
        self.logger.debug(f"Running: {subprocess.list2cmdline(command)}")

        env = os.environ.copy()
        env.update(LOCALE_ENV)

        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                env=env,
            )
        except OSError as e:
            raise ExternalToolError(f"failed to start {command[0]}: {e}")

        with process:
            try:
                _, stderr = process.communicate(timeout=self.timeout)
            except subprocess.TimeoutExpired:
                self.terminate_tree(process)
                raise ExternalToolError(
                    f"{os.path.basename(command[0])} timed out after {self.timeout} seconds"
                )
            except BaseException:
                # シグナルなどで中断された場合は子プロセスごと終了させる
                self.terminate_tree(process)
                raise

        stderr_text = stderr.decode("utf-8", errors="replace").strip()
        if stderr_text:
            self.logger.debug(f"{os.path.basename(command[0])} stderr: {stderr_text}")

        if process.returncode != 0:
            raise ExternalToolError(
                f"{os.path.basename(command[0])} exited with status {process.returncode}"
                + (f": {stderr_text}" if stderr_text else ""),
                returncode=process.returncode,
                stderr=stderr_text,
            )

        output = os.path.join(outdir, csv_name(source))
        if not os.path.isfile(output):
            raise ExternalToolError(
                f"{os.path.basename(command[0])} did not produce {csv_name(source)}"
                + (f": {stderr_text}" if stderr_text else ""),
                returncode=process.returncode,
                stderr=stderr_text,
            )

        return output

    def terminate_tree(self, process: subprocess.Popen):
        """子プロセスとその子孫を終了させる"""
        procs = []
        try:
            parent = psutil.Process(process.pid)
            procs = parent.children(recursive=True) + [parent]
        except psutil.NoSuchProcess:
            pass

        for proc in procs:
            try:
                proc.terminate()
            except psutil.NoSuchProcess:
                pass

        _, alive = psutil.wait_procs(procs, timeout=self.grace_period)
        for proc in alive:
            self.logger.debug(f"Killing process {proc.pid}")
            try:
                proc.kill()
            except psutil.NoSuchProcess:
                pass

        process.wait()
