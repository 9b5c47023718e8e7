"""
sheet2csv/utils/logging_utils.py - ロギング関連のユーティリティ
"""

import os
import sys
import logging
from typing import Optional

from sheet2csv.errors import ArgumentError

LOGGER_NAME = "sheet2csv"
FILE_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# 重要度ごとの端末表示色 (ANSIエスケープシーケンス)
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
RESET_COLOR = "\033[0m"


class SeverityFormatter(logging.Formatter):
    """INFO 以外のレコードに重要度の接頭辞を付けるフォーマッタ"""

    def __init__(self, use_color: bool = False):
        super().__init__('%(message)s')
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message

        prefix = f"{record.levelname}:"
        if self.use_color:
            color = LEVEL_COLORS.get(record.levelno, "")
            prefix = f"{color}{prefix}{RESET_COLOR}"
        return f"{prefix} {message}"


def setup_logging(verbose: bool = False,
                  log_file: Optional[str] = None,
                  log_name: Optional[str] = None,
                  stream=None) -> logging.Logger:
    """
    ロギングの設定を行う

    Args:
        verbose: 詳細なログを出力するかどうか
        log_file: ログファイルのパス（Noneの場合はファイルに出力しない）
        log_name: ロガー名（Noneの場合はパッケージ名）
        stream: コンソール出力先（Noneの場合は標準エラー出力）

    Returns:
        logging.Logger: 設定されたロガーオブジェクト
    """
    if stream is None:
        stream = sys.stderr

    # ログレベルの設定
    level = logging.DEBUG if verbose else logging.INFO

    # ロガーを取得
    logger = logging.getLogger(log_name or LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # 既存のハンドラを削除（重複防止）
    close_logger(logger)

    # コンソールハンドラを追加（端末の場合のみ色付き）
    is_tty = hasattr(stream, "isatty") and stream.isatty()
    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(SeverityFormatter(use_color=is_tty))
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    # ファイルハンドラを追加
    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        try:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise ArgumentError(f"cannot open log file {log_file}: {e}")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger


def close_logger(logger: logging.Logger):
    """
    ロガーのクリーンアップを行う

    Args:
        logger: クローズするロガーオブジェクト
    """
    # ハンドラをクローズして削除
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
