"""Server catalog: every definition of every server name, with provenance."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import Any

from mcpadmin.core.models import SourceId

from .divergence import DivergenceResult, Pair, analyze
from .sources import SourceDocument

logger = logging.getLogger(__name__)


class Status(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


class Catalog:
    """Server name -> ordered (SourceId, definition) pairs.

    Built once per invocation from the loaded sources and never mutated
    afterwards. ``current`` is the source that decides enabled/disabled.
    """

    def __init__(self, entries: dict[str, tuple[Pair, ...]], current: SourceId) -> None:
        self._entries = entries
        self.current = current
        self._divergence: dict[str, DivergenceResult] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def names(self) -> list[str]:
        return sorted(self._entries)

    def entry(self, name: str) -> tuple[Pair, ...]:
        """Pairs for *name*; KeyError if the name was never discovered."""
        return self._entries[name]

    def sources(self, name: str) -> list[SourceId]:
        return [source for source, _ in self._entries[name]]

    def divergence(self, name: str) -> DivergenceResult:
        if name not in self._divergence:
            self._divergence[name] = analyze(self._entries[name])
        return self._divergence[name]

    # ── status ──────────────────────────────────────────────────────

    def status(self, name: str) -> Status:
        if any(source == self.current for source, _ in self._entries[name]):
            return Status.ENABLED
        return Status.DISABLED

    def is_enabled(self, name: str) -> bool:
        return self.status(name) is Status.ENABLED

    def has_multiple_configs(self, name: str) -> bool:
        """True only when the name has two or more definitions that are not all identical."""
        return len(self._entries[name]) >= 2 and not self.divergence(name).identical

    def enabled_count(self) -> int:
        return sum(1 for name in self._entries if self.is_enabled(name))


def build_catalog(documents: Iterable[SourceDocument], current: SourceId) -> Catalog:
    """Append each server of each document, in order, to its name's pair list."""
    collected: dict[str, list[tuple[SourceId, Mapping[str, Any]]]] = {}
    for doc in documents:
        for name, definition in doc.servers.items():
            collected.setdefault(name, []).append((doc.source_id, definition))
    logger.debug("catalog holds %d server name(s)", len(collected))
    return Catalog({name: tuple(pairs) for name, pairs in collected.items()}, current)
