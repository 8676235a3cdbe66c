"""Pytest configuration for the Kairo test suite."""

import subprocess
from pathlib import Path
from typing import List

import pytest

from kairo.pipeline import CompilerConfig


class FakeRun:
    """Stands in for subprocess.run and records every command."""

    def __init__(self):
        self.calls: List[List[str]] = []
        self.rustc_returncode = 0
        self.rustc_stderr = ""
        self.program_returncode = 0

    def __call__(self, cmd, *args, **kwargs):
        cmd = [str(c) for c in cmd]
        self.calls.append(cmd)
        if '-o' in cmd:
            if self.rustc_returncode == 0:
                Path(cmd[cmd.index('-o') + 1]).write_text("binary")
            return subprocess.CompletedProcess(cmd, self.rustc_returncode, "", self.rustc_stderr)
        return subprocess.CompletedProcess(cmd, self.program_returncode)


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def out_dir(tmp_path, monkeypatch):
    path = tmp_path / "out"
    monkeypatch.setenv("KAIRO_OUT_DIR", str(path))
    monkeypatch.delenv("RUSTC", raising=False)
    monkeypatch.delenv("KAIRO_MINIMAL_UI", raising=False)
    return path


@pytest.fixture
def config(out_dir):
    return CompilerConfig(out_dir=out_dir)


@pytest.fixture
def write_source(tmp_path):
    def _write(text: str, name: str = "demo.kr") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
