from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Callable

import pytest

from hwsubmit.config import build_context
from hwsubmit.io.loaders import load_submit_config
from hwsubmit.io.schema import SubmitContext


PART1_FILES = [
    "src/rm_DOC",
    "src/rm_test.cc",
    "src/Makefile",
    "src/pf.h",
    "src/redbase.h",
    "lib/librm.a",
    "lib/libpf.a",
]


def write_files(root: Path, names: list[str]) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"contents of {name}\n", encoding="utf-8")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "redbase"
    for sub in ("src", "lib", "build"):
        (root / sub).mkdir(parents=True)
    return root


@pytest.fixture
def make_ctx(tmp_path: Path) -> Callable[..., SubmitContext]:
    def _make(root: Path, **kwargs) -> SubmitContext:
        dest = kwargs.pop("dest_dir", tmp_path / "submit")
        cfg = replace(load_submit_config(), dest_dir=dest)
        tmp_root = tmp_path / "tmp"
        tmp_root.mkdir(exist_ok=True)
        return build_context(
            cfg,
            cwd=root,
            environ={"TMPDIR": str(tmp_root)},
            user=kwargs.pop("user", "alice"),
            host=kwargs.pop("host", "myth12"),
        )

    return _make
