"""Error taxonomy: every failure the engine reports to the user."""

from __future__ import annotations

from pathlib import Path


class McpAdminError(Exception):
    """Base class for errors that end the current command."""

    exit_code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def details(self) -> list[str]:
        """Extra lines shown under the error message."""
        return []


class ConfigParseError(McpAdminError):
    def __init__(self, path: Path | str, cause: str) -> None:
        super().__init__(f"cannot parse {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


class IoError(McpAdminError):
    def __init__(self, path: Path | str, cause: str) -> None:
        super().__init__(f"cannot access {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


class ServerNotFoundError(McpAdminError):
    def __init__(self, name: str) -> None:
        super().__init__(f"MCP server '{name}' not found in any project")
        self.name = name


class AmbiguousSourceError(McpAdminError):
    """More than one source could provide the definition."""

    def __init__(self, name: str, candidates: list, pattern: str | None = None) -> None:
        if pattern is None:
            msg = f"multiple configurations found for '{name}'; use --from to pick one"
        else:
            msg = f"'{pattern}' matches {len(candidates)} configurations of '{name}'"
        super().__init__(msg)
        self.name = name
        self.pattern = pattern
        self.candidates = list(candidates)

    @property
    def details(self) -> list[str]:
        return [str(c) for c in self.candidates]


class NoMatchError(McpAdminError):
    def __init__(self, name: str, pattern: str, available: list) -> None:
        super().__init__(f"no configuration of '{name}' matches '{pattern}'")
        self.name = name
        self.pattern = pattern
        self.available = list(available)

    @property
    def details(self) -> list[str]:
        return [str(a) for a in self.available]
