import json
import os
import sys
import tempfile

import pytest
from openpyxl import Workbook

# Make the package importable without installing it
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


FAKE_OFFICE = """#!{python}
import json, os, sys, time

args = sys.argv[1:]
log = os.environ.get("FAKE_OFFICE_LOG")
if log:
    with open(log, "w") as f:
        json.dump({{"argv": args,
                   "pid": os.getpid(),
                   "lang": os.environ.get("LANG"),
                   "lc_all": os.environ.get("LC_ALL")}}, f)

time.sleep(float(os.environ.get("FAKE_OFFICE_SLEEP", "0")))

status = int(os.environ.get("FAKE_OFFICE_STATUS", "0"))
if status:
    sys.stderr.write("fake failure\\n")
    sys.exit(status)

print("convert " + args[-1])
if os.environ.get("FAKE_OFFICE_NO_OUTPUT") != "1":
    outdir = args[args.index("--outdir") + 1]
    stem = os.path.splitext(os.path.basename(args[-1]))[0]
    with open(os.path.join(outdir, stem + ".csv"), "w") as f:
        f.write("value\\n")
"""


class FakeOffice:
    """Executable stand-in for soffice that records how it was called."""

    def __init__(self, path, log):
        self.path = path
        self.log = log

    def calls(self):
        with open(self.log) as f:
            return json.load(f)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("SHEET2CSV_") or key.startswith("FAKE_OFFICE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def fake_office(tmp_path, monkeypatch):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    path = bin_dir / "soffice"
    path.write_text(FAKE_OFFICE.format(python=sys.executable))
    path.chmod(0o755)

    log = tmp_path / "office-call.json"
    monkeypatch.setenv("FAKE_OFFICE_LOG", str(log))
    monkeypatch.setenv("SHEET2CSV_OFFICE_BINARY", str(path))
    return FakeOffice(str(path), str(log))


@pytest.fixture
def temp_root(tmp_path, monkeypatch):
    """Redirect scoped temporary directories so leftovers can be inspected."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    path = tmp_path / "work"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


def _make_workbook(path, rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def make_workbook():
    return _make_workbook


@pytest.fixture
def workbook(workdir):
    """A 1-row, 1-column workbook in the launch directory."""
    return _make_workbook(workdir / "book.xlsx", [["hello"]])
