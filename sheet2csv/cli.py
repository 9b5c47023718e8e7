"""
CLI - スプレッドシートをCSVに変換するコマンドラインインターフェース
"""

import sys
import traceback
from typing import List, Optional

from sheet2csv.config import get_config, parse_args
from sheet2csv.core.converter import SpreadsheetConverter, create_context
from sheet2csv.errors import Sheet2CsvError, UsageError
from sheet2csv.utils.logging_utils import close_logger, setup_logging


def main(argv: Optional[List[str]] = None) -> int:
    """コマンドラインからの実行のエントリーポイント"""
    logger = setup_logging()

    try:
        # 設定とコマンドライン引数を解析
        config = get_config()
        args = parse_args(argv, config)
        if args.debug or args.log_file:
            logger = setup_logging(verbose=args.debug, log_file=args.log_file)

        # 変換処理実行
        context = create_context(args, config)
        destination = SpreadsheetConverter(context, logger).convert()

    except UsageError as e:
        sys.stderr.write(e.usage)
        logger.error(str(e))
        return 1

    except Sheet2CsvError as e:
        logger.error(str(e))
        logger.debug(traceback.format_exc())
        return 1

    except KeyboardInterrupt:
        logger.error("interrupted")
        return 1

    finally:
        close_logger(logger)

    print(f"Saved: {destination}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
