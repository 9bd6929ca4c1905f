"""Shared fixtures: a fake home with ~/.claude.json and project directories."""

import json
from dataclasses import dataclass
from pathlib import Path

import pytest

from mcpadmin.core.config import Config


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


@dataclass
class Workspace:
    home: Path
    project: Path  # the current project

    @property
    def global_path(self) -> Path:
        return self.home / ".claude.json"

    @property
    def local_path(self) -> Path:
        return self.project / ".mcp.json"

    def config(self) -> Config:
        return Config(cwd=self.project, home=self.home, global_config=self.global_path)

    def project_dir(self, name: str) -> Path:
        path = self.home / name
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write(self, path: Path, data) -> Path:
        return write_json(path, data)

    def write_global(self, projects, **extra) -> Path:
        return write_json(self.global_path, {**extra, "projects": projects})

    def write_local(self, servers: dict, project: Path | None = None, **extra) -> Path:
        root = project or self.project
        return write_json(root / ".mcp.json", {**extra, "mcpServers": servers})


@pytest.fixture
def ws(tmp_path):
    home = tmp_path.resolve() / "home"
    project = home / "work" / "current"
    project.mkdir(parents=True)
    return Workspace(home=home, project=project)
