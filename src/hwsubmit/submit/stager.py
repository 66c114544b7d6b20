from __future__ import annotations

import logging
import shutil
import tarfile
import tempfile
from datetime import datetime
from pathlib import Path, PurePosixPath

from ..errors import DestinationMissingError, StagingError
from ..io.schema import DeliverablePart, SubmitContext
from .manifest import read_manifest


logger = logging.getLogger(__name__)


def archive_name(ctx: SubmitContext, part: DeliverablePart, when: datetime) -> str:
    return f"{ctx.user}.{part.label}.{when.strftime('%Y%m%d-%H%M%S')}.tar.gz"


def _safe_relative(entry: str) -> PurePosixPath:
    rel = PurePosixPath(entry)
    if rel.is_absolute() or ".." in rel.parts:
        raise StagingError(f"manifest entry must be relative to the project root: {entry}")
    return rel


def stage_files(entries: list[str], root: Path, stage_dir: Path) -> list[Path]:
    copied: list[Path] = []
    for entry in entries:
        rel = _safe_relative(entry)
        src = root / rel
        dst = stage_dir / rel
        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)
        except OSError as exc:
            raise StagingError(f"could not copy {entry}: {exc.strerror or exc}") from exc
        logger.debug("staged %s", entry)
        copied.append(dst)
    return copied


def build_archive(stage_dir: Path, archive_path: Path) -> Path:
    try:
        with tarfile.open(archive_path, "w:gz") as tar:
            for child in sorted(stage_dir.iterdir()):
                tar.add(child, arcname=child.name)
    except (OSError, tarfile.TarError) as exc:
        raise StagingError(f"could not write archive {archive_path.name}: {exc}") from exc
    return archive_path


def submit(
    ctx: SubmitContext,
    part: DeliverablePart,
    manifest_path: Path,
    now: datetime | None = None,
) -> Path:
    """Stage the files listed in ``manifest_path`` and move their archive into ``ctx.dest_dir``.

    The destination only ever receives a complete archive; on failure the
    temporary staging area is discarded and the destination is not touched.
    """
    if not ctx.dest_dir.is_dir():
        raise DestinationMissingError(f"submission directory does not exist: {ctx.dest_dir}")

    entries = read_manifest(manifest_path)
    if not entries:
        raise StagingError(f"manifest is empty: {manifest_path}")

    name = archive_name(ctx, part, now or datetime.now())
    final_path = ctx.dest_dir / name
    if final_path.exists():
        raise StagingError(f"archive already exists in submission directory: {name}")

    with tempfile.TemporaryDirectory(prefix="hwsubmit.", dir=ctx.tmp_dir) as work:
        work_dir = Path(work)
        stage_dir = work_dir / "stage"
        stage_dir.mkdir()

        stage_files(entries, ctx.root, stage_dir)
        archive = build_archive(stage_dir, work_dir / name)

        try:
            shutil.move(str(archive), str(final_path))
        except OSError as exc:
            raise StagingError(f"could not place archive in {ctx.dest_dir}: {exc}") from exc

    logger.info("submitted %d file(s) as %s", len(entries), final_path)
    return final_path
