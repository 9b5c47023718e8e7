"""
sheet2csv.utils - ユーティリティ機能を提供するモジュール
"""

from sheet2csv.utils.path_resolver import csv_name, resolve_source, resolve_destination
from sheet2csv.utils.temp_workspace import ScopedTempDir
from sheet2csv.utils.office_runner import OfficeRunner
from sheet2csv.utils.pandas_writer import PandasWriter
from sheet2csv.utils.logging_utils import setup_logging, close_logger
