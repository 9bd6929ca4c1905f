"""Rich output for list/show/add/remove."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from .core.errors import AmbiguousSourceError, McpAdminError
from .core.models import SourceId
from .core.utils import short_path
from .mcp import MISSING, AddResult, Catalog, RemoveResult, json_equal
from .mcp.values import thaw


def _value(value: Any) -> str:
    if value is MISSING:
        return "(absent)"
    return json.dumps(thaw(value), ensure_ascii=False)


def source_label(source: SourceId, home: Path | None = None) -> str:
    return f"{source.kind}/{short_path(source.path, home)}"


def display_target(definition) -> tuple[str, str]:
    """(label, target) for the one-line summary of a definition."""
    if isinstance(definition.get("command"), str):
        return "command:", definition["command"]
    if isinstance(definition.get("url"), str):
        return "url:", definition["url"]
    return "command:", "(unknown)"


# ── list ────────────────────────────────────────────────────────────


def render_list(console: Console, catalog: Catalog, home: Path | None = None) -> None:
    if not len(catalog):
        console.print("No MCP servers found across any projects.")
        return

    console.print("[bold]MCP Servers:[/bold]")
    console.print()

    for name in catalog.names():
        enabled = catalog.is_enabled(name)
        multiple = catalog.has_multiple_configs(name)

        marker = "[green]●[/green]" if enabled else "[dim]○[/dim]"
        name_display = f"[bold green]{escape(name)}[/bold green]" if enabled else escape(name)
        diff_marker = " [yellow](multiple configs)[/yellow]" if multiple else ""
        console.print(f"  {marker} {name_display}{diff_marker}")

        _, first = catalog.entry(name)[0]
        label, target = display_target(first)
        varies = " [dim](varies)[/dim]" if multiple else ""
        console.print(f"    [dim]{label}[/dim] {escape(target)}{varies}")

        console.print("    [dim]used in:[/dim]")
        for source in catalog.sources(name):
            shown = escape(source_label(source, home))
            if source == catalog.current:
                console.print(f"      [green]→ {shown} (current)[/green]")
            else:
                console.print(f"      - {shown}")
        console.print()

    console.print(f"[dim]Total: {len(catalog)} unique MCP servers across all projects[/dim]")
    console.print(f"[dim]Current project: {catalog.enabled_count()} servers enabled[/dim]")


# ── show ────────────────────────────────────────────────────────────


def render_show(console: Console, catalog: Catalog, name: str, home: Path | None = None) -> None:
    pairs = catalog.entry(name)
    result = catalog.divergence(name)

    if catalog.is_enabled(name):
        status = "[green]enabled in current project[/green]"
    else:
        status = "[yellow]not enabled in current project[/yellow]"
    console.print(f"[bold]MCP Server:[/bold] [bold]{escape(name)}[/bold]")
    console.print(f"  [dim]Status:[/dim] {status}")
    if len(pairs) > 1:
        state = "identical" if result.identical else "[yellow]divergent[/yellow]"
        console.print(f"  [dim]Sources:[/dim] {len(pairs)} ({state})")
    console.print()

    reference = result.reference
    for i, (source, definition) in enumerate(pairs, start=1):
        console.print(
            f"  [bold]Configuration #{i}:[/bold] [dim]{escape(source_label(source, home))}[/dim]"
        )
        differs = i > 1 and source in result.diffs
        for key, value in definition.items():
            shown = escape(_value(value))
            if differs and (key not in reference or not json_equal(reference[key], value)):
                shown = f"[yellow]{shown}[/yellow]"
            console.print(f"    [dim]{escape(key)}:[/dim] {shown}")
        if differs:
            for key in reference:
                if key not in definition:
                    console.print(f"    [dim]{escape(key)}:[/dim] [yellow](none)[/yellow]")
            console.print("    [dim]differences from #1:[/dim]")
            for d in result.diff_for(source):
                path = escape(d.path or "(root)")
                console.print(
                    f"      [yellow]{path}[/yellow]: "
                    f"{escape(_value(d.left))} → {escape(_value(d.right))}"
                )
        console.print()


# ── add / remove ────────────────────────────────────────────────────


def render_add(console: Console, result: AddResult, home: Path | None = None) -> None:
    name = escape(result.name)
    origin = escape(source_label(result.source, home))
    if not result.written:
        console.print(
            f"[yellow]Note:[/yellow] MCP server '{name}' is already enabled "
            f"with this configuration"
        )
        return
    verb = "Replaced" if result.replaced else "Added"
    console.print(f"[green]✓[/green] {verb} MCP server [bold green]{name}[/bold green] from {origin}")
    label, target = display_target(result.definition)
    console.print(f"  [dim]{label}[/dim] {escape(target)}")
    if result.definition.get("args"):
        console.print(f"  [dim]args:[/dim] {escape(_value(result.definition['args']))}")
    console.print(f"  [dim]written to:[/dim] {escape(short_path(result.path, home))}")


def render_remove(console: Console, result: RemoveResult, home: Path | None = None) -> None:
    name = escape(result.name)
    if result.removed:
        console.print(f"[green]✓[/green] Removed MCP server [bold green]{name}[/bold green]")
    else:
        console.print(
            f"[dim]MCP server '{name}' is not in {escape(short_path(result.path, home))}; "
            f"nothing to remove[/dim]"
        )


def render_error(console: Console, error: McpAdminError) -> None:
    console.print(f"[bold red]error:[/bold red] {escape(error.message)}")
    details = error.details
    if not details:
        return
    ambiguous = isinstance(error, AmbiguousSourceError)
    console.print("candidates:" if ambiguous else "available:")
    for line in details:
        console.print(f"  → {escape(line)}")
    if ambiguous:
        console.print(
            "[dim]retry with --from <partial-path> "
            "(prefix with global/ or local/ to pick the source kind)[/dim]"
        )
