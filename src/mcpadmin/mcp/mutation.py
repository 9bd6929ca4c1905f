"""Add/remove servers in the current project's .mcp.json."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from mcpadmin.core.errors import (
    AmbiguousSourceError,
    ConfigParseError,
    NoMatchError,
    ServerNotFoundError,
)
from mcpadmin.core.models import SourceId
from mcpadmin.core.utils import write_json_atomic

from .catalog import Catalog, build_catalog
from .sources import SourceSet, load_local_document, load_sources
from .values import json_equal, thaw

if TYPE_CHECKING:
    from mcpadmin.core.config import Config

logger = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass(frozen=True)
class AddResult:
    name: str
    source: SourceId
    definition: dict
    path: Path
    replaced: bool  # name was already present in the local file
    written: bool  # False when the file already held this exact definition


@dataclass(frozen=True)
class RemoveResult:
    name: str
    path: Path
    removed: bool


def resolve_definition(
    catalog: Catalog, name: str, from_pattern: str | None = None
) -> tuple[SourceId, Mapping[str, Any]]:
    """Pick the single definition of *name* to copy."""
    if name not in catalog:
        raise ServerNotFoundError(name)
    pairs = catalog.entry(name)

    if from_pattern is not None:
        matches = [(source, d) for source, d in pairs if source.matches(from_pattern)]
        if not matches:
            raise NoMatchError(name, from_pattern, [source for source, _ in pairs])
        if len(matches) > 1:
            raise AmbiguousSourceError(name, [source for source, _ in matches], from_pattern)
        return matches[0]

    if len(pairs) > 1:
        raise AmbiguousSourceError(name, [source for source, _ in pairs])
    return pairs[0]


def _rewrite_project_paths(definition: dict, old: str, new: str) -> dict:
    args = definition.get("args")
    if old == new or not isinstance(args, list):
        return definition
    definition["args"] = [a.replace(old, new) if isinstance(a, str) else a for a in args]
    return definition


def _servers_of(document: dict, path: Path) -> dict:
    if document.get("mcpServers") is None:
        document["mcpServers"] = {}
    servers = document["mcpServers"]
    if not isinstance(servers, dict):
        raise ConfigParseError(path, "'mcpServers' must be an object")
    return servers


def add_server(
    config: Config,
    name: str,
    from_pattern: str | None = None,
    *,
    rewrite_paths: bool = False,
    sources: SourceSet | None = None,
) -> AddResult:
    """Copy one definition of *name* into the current project's local file.

    Any previous definition under *name* is overwritten; every other key of
    the file is left as it was. Nothing is written when resolution fails.
    """
    if sources is None:
        sources = load_sources(config)
    catalog = build_catalog(sources.documents, config.current_source)
    source, frozen = resolve_definition(catalog, name, from_pattern)

    definition = thaw(frozen)
    if rewrite_paths:
        definition = _rewrite_project_paths(definition, source.path, str(config.cwd))

    path = config.local_config
    document = copy.deepcopy(sources.local_document) if sources.local_document else {}
    servers = _servers_of(document, path)
    replaced = name in servers
    if replaced and json_equal(servers[name], definition):
        logger.debug("'%s' in %s already matches %s", name, path, source)
        return AddResult(name, source, definition, path, replaced=True, written=False)

    servers[name] = definition
    write_json_atomic(path, document)
    logger.info("added '%s' from %s to %s", name, source, path)
    return AddResult(name, source, definition, path, replaced=replaced, written=True)


def remove_server(config: Config, name: str, document: dict | None = _UNSET) -> RemoveResult:
    """Delete *name* from the current project's local file.

    An absent file or absent name is a no-op: the file is not touched.
    """
    path = config.local_config
    if document is _UNSET:
        document = load_local_document(config)
    if document is None:
        return RemoveResult(name, path, removed=False)

    servers = document.get("mcpServers")
    if not isinstance(servers, dict) or name not in servers:
        return RemoveResult(name, path, removed=False)

    document = copy.deepcopy(document)
    del document["mcpServers"][name]
    write_json_atomic(path, document)
    logger.info("removed '%s' from %s", name, path)
    return RemoveResult(name, path, removed=True)
