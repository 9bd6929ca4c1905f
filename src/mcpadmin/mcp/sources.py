"""Source reader: load the global settings file and per-project .mcp.json files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from mcpadmin.core.config import LOCAL_CONFIG_NAME
from mcpadmin.core.errors import ConfigParseError, IoError
from mcpadmin.core.models import SourceId

from .values import freeze

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mcpadmin.core.config import Config

logger = logging.getLogger(__name__)


@dataclass
class SourceDocument:
    """Servers found in one source, in document order."""

    source_id: SourceId
    path: Path
    servers: dict[str, Mapping[str, Any]] = field(default_factory=dict)


@dataclass
class SourceSet:
    """Everything read for one invocation."""

    documents: list[SourceDocument] = field(default_factory=list)
    local_path: Path | None = None
    local_document: dict | None = None  # raw current-project document, None if absent


def _pairs_hook(path: Path):
    def hook(pairs: list[tuple[str, Any]]) -> dict:
        obj: dict = {}
        for key, value in pairs:
            if key in obj:
                logger.warning("duplicate key '%s' in %s, last value wins", key, path)
            obj[key] = value
        return obj

    return hook


def read_document(path: Path) -> dict | None:
    """Parse a JSON object from *path*. A missing file yields None."""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("no file at %s", path)
        return None
    except UnicodeDecodeError as e:
        raise ConfigParseError(path, f"not UTF-8 text ({e.reason})") from e
    except OSError as e:
        raise IoError(path, e.strerror or str(e)) from e

    try:
        data = json.loads(content, object_pairs_hook=_pairs_hook(path))
    except json.JSONDecodeError as e:
        raise ConfigParseError(path, f"line {e.lineno}, column {e.colno}: {e.msg}") from e

    if not isinstance(data, dict):
        raise ConfigParseError(path, "top-level value must be an object")
    logger.debug("read %s", path)
    return data


def server_map(document: dict, path: Path, where: str = "") -> dict[str, Mapping[str, Any]]:
    """Extract the ``mcpServers`` mapping of *document* as frozen definitions."""
    label = f"{where}.mcpServers" if where else "mcpServers"
    servers = document.get("mcpServers")
    if servers is None:
        return {}
    if not isinstance(servers, dict):
        raise ConfigParseError(path, f"'{label}' must be an object")

    result: dict[str, Mapping[str, Any]] = {}
    for name, definition in servers.items():
        if not isinstance(definition, dict):
            raise ConfigParseError(path, f"server '{name}' in '{label}' must be an object")
        result[name] = freeze(definition)
    return result


def _global_projects(document: dict | None, path: Path) -> dict[str, dict]:
    if document is None:
        return {}
    projects = document.get("projects", {})
    if not isinstance(projects, dict):
        raise ConfigParseError(path, "'projects' must be an object")
    for project_path, entry in projects.items():
        if not isinstance(entry, dict):
            raise ConfigParseError(path, f"project '{project_path}' must be an object")
    return projects


def load_sources(config: Config) -> SourceSet:
    """Read every known source once: global projects first, then local files.

    Local files are looked up in every project root named by the global file
    plus the current directory. Each class is ordered by path.
    """
    global_path = config.global_config
    projects = _global_projects(read_document(global_path), global_path)
    sources = SourceSet(local_path=config.local_config)

    for project_path in sorted(projects):
        servers = server_map(projects[project_path], global_path, where=f"projects.{project_path}")
        if servers:
            sources.documents.append(
                SourceDocument(SourceId.global_(project_path), global_path, servers)
            )

    current = str(config.cwd)
    for root in sorted(set(projects) | {current}):
        local_path = Path(root) / LOCAL_CONFIG_NAME
        document = read_document(local_path)
        if root == current:
            sources.local_document = document
        if document is None:
            continue
        servers = server_map(document, local_path)
        if servers:
            sources.documents.append(SourceDocument(SourceId.local(root), local_path, servers))

    logger.debug(
        "loaded %d source(s) from %d project root(s)", len(sources.documents), len(projects)
    )
    return sources


def load_local_document(config: Config) -> dict | None:
    """Read only the current project's local file."""
    document = read_document(config.local_config)
    if document is not None:
        server_map(document, config.local_config)
    return document
