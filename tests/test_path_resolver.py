import os

import pytest

from sheet2csv.errors import ResolutionError
from sheet2csv.utils.path_resolver import csv_name, resolve_destination, resolve_source


class TestCsvName:
    def test_xlsx(self):
        assert csv_name("/data/book.xlsx") == "book.csv"

    def test_only_last_extension_replaced(self):
        assert csv_name("report.2024.xls") == "report.2024.csv"

    def test_no_extension(self):
        assert csv_name("sheet") == "sheet.csv"


class TestResolveSource:
    def test_relative_to_launch_dir(self, tmp_path):
        (tmp_path / "book.xlsx").write_bytes(b"")
        assert resolve_source("book.xlsx", str(tmp_path)) == os.path.realpath(tmp_path / "book.xlsx")

    def test_uses_cwd_by_default(self, workdir):
        (workdir / "book.xlsx").write_bytes(b"")
        assert resolve_source("book.xlsx") == os.path.realpath(workdir / "book.xlsx")

    def test_symlink_resolved(self, tmp_path):
        target = tmp_path / "real.xlsx"
        target.write_bytes(b"")
        link = tmp_path / "link.xlsx"
        link.symlink_to(target)
        assert resolve_source(str(link)) == os.path.realpath(target)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResolutionError, match="no such file"):
            resolve_source("missing.xlsx", str(tmp_path))

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(ResolutionError):
            resolve_source(str(tmp_path))


class TestResolveDestination:
    SOURCE = "/data/input/book.xlsx"

    def test_default_is_launch_dir(self, tmp_path):
        assert resolve_destination(None, self.SOURCE, str(tmp_path)) == str(tmp_path / "book.csv")

    def test_existing_directory(self, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        result = resolve_destination(str(out), self.SOURCE, str(tmp_path))
        assert result == os.path.join(os.path.realpath(out), "book.csv")

    def test_relative_directory(self, tmp_path):
        (tmp_path / "out").mkdir()
        result = resolve_destination("out", self.SOURCE, str(tmp_path))
        assert result == os.path.join(os.path.realpath(tmp_path / "out"), "book.csv")

    def test_new_file_path_used_literally(self, tmp_path):
        assert resolve_destination("result.csv", self.SOURCE, str(tmp_path)) == str(tmp_path / "result.csv")

    def test_missing_parent_not_checked(self, tmp_path):
        dest = tmp_path / "nowhere" / "result.csv"
        assert resolve_destination(str(dest), self.SOURCE, str(tmp_path)) == str(dest)
