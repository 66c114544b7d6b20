from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence

from ..config import CONFIG_ENV_VAR, load_context
from ..errors import DestinationMissingError, SubmitError
from ..io.schema import PARTS, DeliverablePart, SubmitContext, get_part
from ..submit.manifest import ask_yes_no, build_manifest, render_manifest, should_rebuild
from ..submit.stager import submit


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hwsubmit",
        description="Collect and submit the files of one project deliverable.",
        epilog="Run with -c first to review the file list, then -s to submit.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "-c",
        dest="mode",
        action="store_const",
        const="collect",
        help="Build (or review) the manifest of files to submit.",
    )
    mode.add_argument(
        "-s",
        dest="mode",
        action="store_const",
        const="submit",
        help="Package the files in the manifest and submit them.",
    )
    parser.add_argument(
        "part",
        choices=list(PARTS),
        help="Deliverable number: " + ", ".join(f"{p.number}={p.ident}" for p in PARTS.values()),
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Optional config JSON (defaults to ${CONFIG_ENV_VAR}).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def run_collect(ctx: SubmitContext, part: DeliverablePart, confirm: Callable[[], bool]) -> str:
    manifest_path = ctx.manifest_path(part)
    if should_rebuild(manifest_path, confirm):
        build_manifest(ctx, part)
    return render_manifest(manifest_path, part)


def run_submit(ctx: SubmitContext, part: DeliverablePart) -> Path:
    manifest_path = ctx.manifest_path(part)
    if not ctx.dest_dir.is_dir():
        raise DestinationMissingError(f"submission directory does not exist: {ctx.dest_dir}")
    if not manifest_path.exists():
        build_manifest(ctx, part)
    return submit(ctx, part, manifest_path)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        part = get_part(args.part)
        ctx = load_context(args.config)
        if args.mode == "collect":
            manifest_path = ctx.manifest_path(part)
            question = f"{manifest_path.name} already exists. Overwrite it?"
            print(run_collect(ctx, part, lambda: ask_yes_no(question)), end="")
        else:
            archive = run_submit(ctx, part)
            print(f"Submitted part {part.label}: {archive}")
    except SubmitError as exc:
        logger.error("%s", exc)
        return 1
    except ValueError as exc:
        logger.error("bad configuration: %s", exc)
        return 1
    except OSError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.error("interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
