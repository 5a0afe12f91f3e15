from __future__ import annotations

import stat
from pathlib import Path

import pytest


@pytest.fixture
def stub_binary(tmp_path: Path):
    """Write an executable /bin/sh script and return its path."""

    def make(body: str, name: str = "brew") -> Path:
        p = tmp_path / name
        p.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
        p.chmod(p.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return p

    return make


class SpyRunner:
    """Stands in for ProcessRunner; records invocations, never spawns."""

    def __init__(self, results=None) -> None:
        self.calls: list[tuple[str, object]] = []
        self._results = list(results or [])

    def run(self, invocation, mode):
        self.calls.append((invocation, mode))
        if not self._results:
            raise AssertionError(f"unexpected spawn: {invocation}")
        return self._results.pop(0)


@pytest.fixture
def spy_runner():
    return SpyRunner
