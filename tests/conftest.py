from __future__ import annotations

import subprocess
from dataclasses import dataclass, field

import pytest


@dataclass
class FakeRunner:
    """Records subprocess.run calls and answers with preset exit codes."""

    returncodes: list[int] = field(default_factory=list)
    calls: list[dict] = field(default_factory=list)
    on_call: object = None

    def __call__(self, argv, cwd=None, env=None, **kwargs):
        self.calls.append({"argv": list(argv), "cwd": cwd, "env": env})
        if self.on_call is not None:
            self.on_call(argv)
        code = self.returncodes.pop(0) if self.returncodes else 0
        return subprocess.CompletedProcess(argv, code)

    @property
    def argvs(self) -> list[list[str]]:
        return [c["argv"] for c in self.calls]


@pytest.fixture
def runner(monkeypatch):
    fake = FakeRunner()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CXX", "CXXFLAGS", "LDFLAGS", "TERMINFO", "HALIDE_PATH"):
        monkeypatch.delenv(name, raising=False)
