"""Manifest construction and submission staging."""

from __future__ import annotations

from .manifest import ask_yes_no, build_manifest, read_manifest, render_manifest, should_rebuild
from .rules import collect_files, dedupe, evaluate_rule, rules_for_part
from .stager import archive_name, build_archive, stage_files, submit

__all__ = [
    "archive_name",
    "ask_yes_no",
    "build_archive",
    "build_manifest",
    "collect_files",
    "dedupe",
    "evaluate_rule",
    "read_manifest",
    "render_manifest",
    "rules_for_part",
    "should_rebuild",
    "stage_files",
    "submit",
]
