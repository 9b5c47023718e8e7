"""
sheet2csv.core - 変換処理の本体
"""

from sheet2csv.core.converter import ConversionContext, SpreadsheetConverter, create_context, convert_to_csv
