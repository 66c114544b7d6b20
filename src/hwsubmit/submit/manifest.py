from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable

from ..io.schema import DeliverablePart, SubmitContext
from .rules import collect_files, dedupe, rules_for_part


logger = logging.getLogger(__name__)


def _default_file_mode() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def build_manifest(ctx: SubmitContext, part: DeliverablePart) -> Path:
    """Collect the files for ``part`` and write them to its manifest.

    Every rule is evaluated before anything touches the filesystem, and the
    result is written to a temporary file that only replaces the manifest once
    complete. A failure therefore never leaves a partial manifest behind and
    never modifies an existing one.
    """
    manifest_path = ctx.manifest_path(part)
    entries = dedupe(collect_files(rules_for_part(part, ctx), ctx.root))

    fd, tmp_name = tempfile.mkstemp(prefix=f".{manifest_path.name}.", dir=ctx.root)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("".join(f"{entry}\n" for entry in entries))
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, manifest_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("wrote %d entries to %s", len(entries), manifest_path)
    return manifest_path


def read_manifest(manifest_path: Path) -> list[str]:
    entries: list[str] = []
    for line in manifest_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def render_manifest(manifest_path: Path, part: DeliverablePart) -> str:
    text = manifest_path.read_text(encoding="utf-8")
    if text and not text.endswith("\n"):
        text += "\n"
    return (
        f"Files to be submitted for part {part.label} ({manifest_path.name}):\n\n"
        f"{text}\n"
        f"Edit {manifest_path} to add or remove files, then run with -s {part.number} to submit.\n"
    )


def ask_yes_no(
    question: str,
    default: bool = True,
    input_fn: Callable[[str], str] | None = None,
) -> bool:
    read = input_fn or input
    suffix = " [Y/n] " if default else " [y/N] "
    while True:
        try:
            answer = read(question + suffix).strip().lower()
        except EOFError:
            return default
        if answer == "":
            return default
        if answer in {"y", "yes"}:
            return True
        if answer in {"n", "no"}:
            return False


def should_rebuild(manifest_path: Path, confirm: Callable[[], bool]) -> bool:
    if not manifest_path.exists():
        return True
    return confirm()
