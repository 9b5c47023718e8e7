import pytest

from sheet2csv.config import Encoding
from sheet2csv.errors import ExternalToolError
from sheet2csv.utils.pandas_writer import PandasWriter


class TestPandasWriter:
    def test_single_cell(self, tmp_path, make_workbook):
        source = make_workbook(tmp_path / "book.xlsx", [["hello"]])
        outdir = tmp_path / "out"
        outdir.mkdir()
        result = PandasWriter().convert(str(source), str(outdir), Encoding.UTF8)
        assert result == str(outdir / "book.csv")
        assert (outdir / "book.csv").read_text(encoding="utf-8") == "hello\n"

    def test_no_header_row_inferred(self, tmp_path, make_workbook):
        source = make_workbook(tmp_path / "table.xlsx", [["name", "city"], ["Sato", "Tokyo"]])
        result = PandasWriter().convert(str(source), str(tmp_path), Encoding.UTF8)
        with open(result, encoding="utf-8") as f:
            assert f.read().splitlines() == ["name,city", "Sato,Tokyo"]

    def test_quotes_fields_with_delimiters(self, tmp_path, make_workbook):
        source = make_workbook(tmp_path / "quoted.xlsx", [["a,b", 'say "hi"']])
        result = PandasWriter().convert(str(source), str(tmp_path), Encoding.UTF8)
        with open(result, encoding="utf-8") as f:
            assert f.read() == '"a,b","say ""hi"""\n'

    def test_shift_jis_output(self, tmp_path, make_workbook):
        source = make_workbook(tmp_path / "jp.xlsx", [["東京"]])
        result = PandasWriter().convert(str(source), str(tmp_path), Encoding.SHIFT_JIS)
        with open(result, "rb") as f:
            assert f.read() == "東京\n".encode("cp932")

    def test_unreadable_file(self, tmp_path):
        source = tmp_path / "broken.xlsx"
        source.write_bytes(b"not a workbook")
        with pytest.raises(ExternalToolError, match="failed to read broken.xlsx"):
            PandasWriter().convert(str(source), str(tmp_path), Encoding.UTF8)
