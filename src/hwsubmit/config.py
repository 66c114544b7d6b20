from __future__ import annotations

import getpass
import logging
import os
import socket
import tempfile
from pathlib import Path
from typing import Mapping

from .errors import ProjectRootNotFound, UnknownHostError
from .io.loaders import load_submit_config
from .io.schema import SubmitConfig, SubmitContext


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HWSUBMIT_CONFIG"


def find_project_root(start: Path, markers: tuple[str, ...]) -> Path:
    """Walk upward from ``start`` to the first directory holding every marker subdirectory."""
    current = start.resolve()
    for candidate in [current, *current.parents]:
        if all((candidate / name).is_dir() for name in markers):
            return candidate
    raise ProjectRootNotFound(
        f"no directory containing {', '.join(m + '/' for m in markers)} found above {current}"
    )


def resolve_tmp_dir(environ: Mapping[str, str]) -> Path:
    override = (environ.get("TMPDIR") or "").strip()
    if override:
        return Path(override)
    return Path(tempfile.gettempdir())


def check_host(host: str, allowed_prefixes: list[str]) -> None:
    if not allowed_prefixes:
        return
    if not any(host.startswith(prefix) for prefix in allowed_prefixes):
        raise UnknownHostError(
            f"host {host!r} is not a recognized submission host ({', '.join(allowed_prefixes)})"
        )


def build_context(
    cfg: SubmitConfig,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
    user: str | None = None,
    host: str | None = None,
) -> SubmitContext:
    env = os.environ if environ is None else environ
    host = host if host is not None else socket.gethostname()
    check_host(host, cfg.allowed_hosts)

    root = find_project_root(
        Path.cwd() if cwd is None else cwd,
        (cfg.source_dir, cfg.library_dir, cfg.build_dir),
    )
    ctx = SubmitContext(
        root=root,
        user=user if user is not None else getpass.getuser(),
        host=host,
        tmp_dir=resolve_tmp_dir(env),
        dest_dir=cfg.dest_dir,
        manifest_name=cfg.manifest_name,
        source_dir=cfg.source_dir,
        library_dir=cfg.library_dir,
        build_dir=cfg.build_dir,
        source_extensions=tuple(cfg.source_extensions),
    )
    logger.debug("project root %s, user %s, host %s, tmp %s", ctx.root, ctx.user, ctx.host, ctx.tmp_dir)
    return ctx


def load_context(config_path: str | Path | None = None, **overrides) -> SubmitContext:
    env = overrides.get("environ")
    env = os.environ if env is None else env
    path = config_path or (env.get(CONFIG_ENV_VAR) or "").strip() or None
    return build_context(load_submit_config(path), **overrides)
