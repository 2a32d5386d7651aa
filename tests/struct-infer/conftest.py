import gzip
import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[2] / "src"
TESTDATA_DIR = Path(__file__).resolve().parent / "testdata"


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """No config file discovery or STRUCT_INFER_* variables leak into a test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in list(os.environ):
        if name.startswith("STRUCT_INFER_"):
            monkeypatch.delenv(name)
    return tmp_path


@pytest.fixture
def write_file(tmp_path):
    def _w(name: str, text: str, gz: bool = False) -> str:
        p = tmp_path / name
        if gz:
            with gzip.open(p, "wt", encoding="utf-8") as f:
                f.write(text)
        else:
            p.write_text(text, encoding="utf-8")
        return str(p)

    return _w


@pytest.fixture
def run_cli(tmp_path):
    def _run_cli(args: list[str], input_text: str = ""):
        env = {k: v for k, v in os.environ.items() if not k.startswith("STRUCT_INFER_")}
        env["HOME"] = str(tmp_path)
        env["NO_COLOR"] = "1"
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
        )
        return subprocess.run(
            [sys.executable, "-m", "struct_infer.cli", *args],
            input=input_text,
            capture_output=True,
            text=True,
            cwd=tmp_path,
            env=env,
        )

    return _run_cli
