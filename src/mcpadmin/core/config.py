"""Configuration: env, paths, current project."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .models import SourceId

GLOBAL_CONFIG_NAME = ".claude.json"
LOCAL_CONFIG_NAME = ".mcp.json"


@dataclass
class Config:
    cwd: Path = field(default_factory=Path.cwd)
    home: Path = field(default_factory=Path.home)
    global_config: Path | None = None  # None = home / .claude.json
    verbose: bool = False

    def __post_init__(self) -> None:
        self.cwd = Path(self.cwd).expanduser().resolve()
        if self.global_config is None:
            self.global_config = self.home / GLOBAL_CONFIG_NAME
        else:
            self.global_config = Path(self.global_config)

    @property
    def local_config(self) -> Path:
        return self.cwd / LOCAL_CONFIG_NAME

    @property
    def current_source(self) -> SourceId:
        """SourceId every enabled/disabled check resolves against."""
        return SourceId.local(str(self.cwd))


def load_config(
    global_config: str | Path | None = None,
    project: str | Path | None = None,
    verbose: bool = False,
) -> Config:
    """Load config with priority: CLI args > env > .env > defaults."""
    load_dotenv()

    if global_config is None:
        if env_path := os.getenv("MCPADMIN_GLOBAL_CONFIG"):
            global_config = Path(env_path).expanduser()
        elif config_dir := os.getenv("CLAUDE_CONFIG_DIR"):
            global_config = Path(config_dir).expanduser() / GLOBAL_CONFIG_NAME
    else:
        global_config = Path(global_config).expanduser()

    if project is None:
        project = os.getenv("MCPADMIN_PROJECT")

    if project:
        return Config(cwd=Path(project), global_config=global_config, verbose=verbose)
    return Config(global_config=global_config, verbose=verbose)
