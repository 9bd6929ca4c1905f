"""MCP server catalog: sources, divergence, status and mutation."""

from mcpadmin.core.models import SourceId

from .catalog import Catalog, Status, build_catalog
from .divergence import DivergenceResult, analyze
from .mutation import AddResult, RemoveResult, add_server, remove_server, resolve_definition
from .sources import (
    SourceDocument,
    SourceSet,
    load_local_document,
    load_sources,
    read_document,
    server_map,
)
from .values import MISSING, FieldDiff, diff_values, json_equal

__all__ = [
    "MISSING",
    "AddResult",
    "Catalog",
    "DivergenceResult",
    "FieldDiff",
    "RemoveResult",
    "SourceDocument",
    "SourceId",
    "SourceSet",
    "Status",
    "add_server",
    "analyze",
    "build_catalog",
    "diff_values",
    "json_equal",
    "load_local_document",
    "load_sources",
    "read_document",
    "remove_server",
    "resolve_definition",
    "server_map",
]
