from __future__ import annotations

import glob
import logging
import os
from pathlib import Path
from typing import Iterable

from ..errors import MissingFilesError
from ..io.schema import ARITY_ANY, ARITY_EACH, DeliverablePart, FileRule, SubmitContext


logger = logging.getLogger(__name__)

DRIVER_PARTS = {"3", "4", "5"}


def _source_patterns(ctx: SubmitContext, stem: str) -> tuple[str, ...]:
    return tuple(f"{ctx.source_dir}/{stem}*.{ext}" for ext in ctx.source_extensions)


def rules_for_part(part: DeliverablePart, ctx: SubmitContext) -> list[FileRule]:
    src = ctx.source_dir
    lib = ctx.library_dir
    build = ctx.build_dir

    rules = [
        FileRule((f"{src}/{part.ident}_DOC",), ARITY_EACH, "missing documentation file"),
        FileRule(_source_patterns(ctx, part.ident), ARITY_ANY, f"no {part.ident} source files found"),
        FileRule((f"{src}/Makefile",), ARITY_EACH, "missing Makefile"),
    ]

    if part.number in DRIVER_PARTS:
        for name in [
            f"{src}/redbase.cc",
            f"{src}/dbcreate.cc",
            f"{src}/dbdestroy.cc",
            f"{build}/dbcreate",
            f"{build}/dbdestroy",
        ]:
            rules.append(FileRule((name,), ARITY_ANY, "missing driver file"))

    if part.number == "2":
        rules.append(
            FileRule(
                (
                    f"{src}/pf.h",
                    f"{src}/rm.h",
                    f"{lib}/libpf.a",
                    f"{lib}/librm.a",
                    f"{lib}/libix.a",
                ),
                ARITY_EACH,
                "missing header or library",
            )
        )

    if part.number == "1":
        rules.append(
            FileRule(
                (
                    f"{src}/pf.h",
                    f"{src}/redbase.h",
                    f"{lib}/librm.a",
                    f"{lib}/libpf.a",
                ),
                ARITY_EACH,
                "missing header or library",
            )
        )

    rules.append(FileRule(_source_patterns(ctx, ""), ARITY_ANY, f"no source files found in {src}/"))
    return rules


def _is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def match_pattern(root: Path, pattern: str) -> list[str]:
    """Readable files under ``root`` matching ``pattern``, as sorted POSIX relative paths."""
    matches = glob.glob(pattern, root_dir=root)
    return sorted(Path(m).as_posix() for m in matches if _is_readable(root / m))


def evaluate_rule(rule: FileRule, root: Path) -> list[str]:
    found: list[str] = []
    missing: list[str] = []
    for pattern in rule.patterns:
        hits = match_pattern(root, pattern)
        if not hits:
            missing.append(pattern)
        found.extend(hits)

    if rule.arity == ARITY_EACH and missing:
        raise MissingFilesError(rule.message, missing)
    if rule.arity == ARITY_ANY and not found:
        raise MissingFilesError(rule.message, list(rule.patterns))

    logger.debug("rule %s matched %d file(s)", rule.patterns[0], len(found))
    return found


def collect_files(rules: Iterable[FileRule], root: Path) -> list[str]:
    collected: list[str] = []
    for rule in rules:
        collected.extend(evaluate_rule(rule, root))
    return collected


def dedupe(paths: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        out.append(path)
    return out
