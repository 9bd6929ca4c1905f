"""Path display, atomic JSON writes, logging setup."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .errors import ConfigParseError, IoError

logger = logging.getLogger(__name__)


def short_path(path: str | Path, home: Path | None = None) -> str:
    """Return path relative to home directory, using ~ prefix."""
    p = Path(path)
    try:
        rel = p.relative_to(home or Path.home())
        return f"~/{rel}" if str(rel) != "." else "~"
    except ValueError:
        return str(p)


def dump_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False) + "\n"


def write_json_atomic(path: Path, data) -> None:
    """Serialize *data* to a sibling temp file, then rename it over *path*.

    A failure at any point leaves the previous file content in place.
    """
    try:
        content = dump_json(data)
    except ValueError as e:
        raise ConfigParseError(path, f"cannot serialize as JSON: {e}") from e
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            delete=False,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            encoding="utf-8",
        ) as tf:
            tmp_name = tf.name
            tf.write(content)
            tf.flush()
            os.fsync(tf.fileno())
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o777)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise IoError(path, e.strerror or str(e)) from e
    logger.debug("wrote %s (%d bytes)", path, len(content.encode("utf-8")))


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route log records to stderr through rich."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        rich_tracebacks=True,
    )
    root = logging.getLogger("mcpadmin")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False
