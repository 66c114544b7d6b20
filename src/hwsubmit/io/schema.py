from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from ..errors import UsageError


ARITY_EACH = "each"
ARITY_ANY = "any"

DEFAULT_SOURCE_EXTENSIONS = ["c", "cc", "cpp", "h", "hh", "y", "l"]


@dataclass(frozen=True)
class DeliverablePart:
    number: str
    ident: str

    @property
    def label(self) -> str:
        return f"{self.number}-{self.ident}"


PARTS: Dict[str, DeliverablePart] = {
    number: DeliverablePart(number=number, ident=ident)
    for number, ident in [("1", "rm"), ("2", "ix"), ("3", "sm"), ("4", "ql"), ("5", "ex")]
}


def get_part(number: str) -> DeliverablePart:
    try:
        return PARTS[str(number).strip()]
    except KeyError:
        raise UsageError(f"unknown deliverable {number!r}; expected one of {', '.join(PARTS)}") from None


@dataclass(frozen=True)
class FileRule:
    patterns: Tuple[str, ...]
    arity: str
    message: str

    def __post_init__(self) -> None:
        if self.arity not in {ARITY_EACH, ARITY_ANY}:
            raise ValueError(f"unknown rule arity: {self.arity}")
        if not self.patterns:
            raise ValueError("rule needs at least one pattern")


@dataclass(frozen=True)
class SubmitConfig:
    dest_dir: Path
    manifest_name: str
    source_dir: str
    library_dir: str
    build_dir: str
    source_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_SOURCE_EXTENSIONS))
    allowed_hosts: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SubmitContext:
    root: Path
    user: str
    host: str
    tmp_dir: Path
    dest_dir: Path
    manifest_name: str
    source_dir: str
    library_dir: str
    build_dir: str
    source_extensions: Tuple[str, ...]

    def manifest_path(self, part: DeliverablePart) -> Path:
        return self.root / self.manifest_name.format(ident=part.ident, number=part.number)
