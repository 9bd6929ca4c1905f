"""Divergence analysis across the definitions of one server name."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from mcpadmin.core.models import SourceId

from .values import FieldDiff, diff_values

Pair = tuple[SourceId, Mapping[str, Any]]


@dataclass(frozen=True)
class DivergenceResult:
    """``diffs`` maps each source whose definition differs from the reference
    (the first pair's definition) to its field-level differences."""

    reference_source: SourceId
    reference: Mapping[str, Any]
    diffs: dict[SourceId, list[FieldDiff]] = field(default_factory=dict)

    @property
    def identical(self) -> bool:
        return not self.diffs

    def diff_for(self, source: SourceId) -> list[FieldDiff]:
        return self.diffs.get(source, [])

    def changed_paths(self, source: SourceId) -> set[str]:
        return {d.path for d in self.diff_for(source)}


def analyze(pairs: Sequence[Pair]) -> DivergenceResult:
    """Compare every definition against the first one. Never raises for valid entries."""
    if not pairs:
        raise ValueError("a catalog entry has at least one definition")
    ref_source, reference = pairs[0]
    diffs: dict[SourceId, list[FieldDiff]] = {}
    for source, definition in pairs[1:]:
        found = diff_values(reference, definition)
        if found:
            diffs[source] = found
    return DivergenceResult(ref_source, reference, diffs)
