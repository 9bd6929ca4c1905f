"""Source identity shared by config and the catalog."""

from __future__ import annotations

from dataclasses import dataclass

GLOBAL = "global"
LOCAL = "local"


@dataclass(frozen=True, order=True)
class SourceId:
    """Where a definition was found. Sorts global before local, then by path."""

    kind: str
    path: str

    @classmethod
    def global_(cls, path: str) -> SourceId:
        return cls(GLOBAL, path)

    @classmethod
    def local(cls, path: str) -> SourceId:
        return cls(LOCAL, path)

    def matches(self, pattern: str) -> bool:
        """Substring match on the path; a ``global/`` or ``local/`` prefix pins the kind."""
        for k in (GLOBAL, LOCAL):
            prefix = f"{k}/"
            if pattern.startswith(prefix):
                return self.kind == k and pattern[len(prefix) :] in self.path
        return pattern in self.path

    def __str__(self) -> str:
        return f"{self.kind}/{self.path}"
