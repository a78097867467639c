from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable, Dict

import pytest

from queuegraph.ast.loader import ParsedFile, parse_source


def parse_ts(source: str, name: str = "sample.ts") -> ParsedFile:
    return parse_source(textwrap.dedent(source).encode("utf-8"), Path("/virtual/src") / name)


@pytest.fixture
def ts() -> Callable[..., ParsedFile]:
    return parse_ts


@pytest.fixture
def nest_project(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """Write a minimal NestJS layout and return its root."""

    def _write(files: Dict[str, str], tsconfig: bool = True) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        if tsconfig:
            (root / "tsconfig.json").write_text('{"compilerOptions": {}}', encoding="utf-8")
        for relative, content in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(content), encoding="utf-8")
        return root

    return _write
