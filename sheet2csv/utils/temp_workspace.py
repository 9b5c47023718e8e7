"""
一時作業ディレクトリ - 1回の変換に専用の一時ディレクトリを用意し、
正常終了・例外・シグナル受信のいずれでも確実に削除します。
"""

import logging
import shutil
import signal
import tempfile
import threading
from typing import Dict, Optional

from sheet2csv.errors import ConversionInterrupted

# 一時ディレクトリの削除対象となるシグナル
HANDLED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP")
    if hasattr(signal, name)
)


class ScopedTempDir:
    """with ブロックの間だけ存在する一時ディレクトリ"""

    def __init__(self,
                 prefix: str = "sheet2csv.",
                 base_dir: Optional[str] = None,
                 logger: Optional[logging.Logger] = None):
        """
        初期化関数

        Args:
            prefix: ディレクトリ名の接頭辞
            base_dir: 作成先（Noneの場合はシステムの一時ディレクトリ）
            logger: ロガーオブジェクト
        """
        self.prefix = prefix
        self.base_dir = base_dir
        self.logger = logger or logging.getLogger(__name__)
        self.path = None
        self.received_signal = None
        self._pending_signal = None
        self._cleaned = False
        self._previous_handlers: Dict[int, object] = {}

    def __enter__(self) -> str:
        self.path = tempfile.mkdtemp(prefix=self.prefix, dir=self.base_dir)
        self.logger.debug(f"Created temporary directory: {self.path}")
        self._install_handlers()
        return self.path

    def __exit__(self, exc_type, exc_value, traceback):
        try:
            self.cleanup()
        finally:
            self._restore_handlers()

        # 削除中に届いたシグナルは処理が成功していても中断として扱う
        if self._pending_signal is not None and exc_type is None:
            raise ConversionInterrupted(self._pending_signal)
        return False

    def cleanup(self):
        """一時ディレクトリを削除する（2回目以降の呼び出しは何もしない）"""
        if self._cleaned or self.path is None:
            return
        self._cleaned = True
        shutil.rmtree(self.path, ignore_errors=True)
        self.logger.debug(f"Removed temporary directory: {self.path}")

    def _handle_signal(self, signum, frame):
        # 削除処理中に届いたシグナルは記録だけ行う
        self.received_signal = signum
        if self._cleaned:
            self._pending_signal = signum
            return
        raise ConversionInterrupted(signum)

    def _install_handlers(self):
        # シグナルハンドラはメインスレッドでしか設定できない
        if threading.current_thread() is not threading.main_thread():
            return
        for signum in HANDLED_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)

    def _restore_handlers(self):
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()
