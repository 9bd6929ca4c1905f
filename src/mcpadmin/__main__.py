"""CLI entry point + Rich output."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from . import __version__
from .core.config import Config, load_config
from .core.errors import McpAdminError, ServerNotFoundError
from .core.utils import setup_logging
from .mcp import add_server, build_catalog, load_sources, remove_server
from .render import render_add, render_error, render_list, render_remove, render_show

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

logger = logging.getLogger(__name__)


class _ShowFallbackGroup(click.Group):
    """`cc-mcp-admin <name>` is shorthand for `cc-mcp-admin show <name>`."""

    def resolve_command(self, ctx, args):
        if args and args[0] not in self.commands and not args[0].startswith("-"):
            return "show", self.commands["show"], args
        return super().resolve_command(ctx, args)


def _fail(ctx: click.Context, error: McpAdminError) -> None:
    render_error(err_console, error)
    logger.debug("command failed", exc_info=error)
    ctx.exit(error.exit_code)


def _catalog(config: Config):
    sources = load_sources(config)
    return sources, build_catalog(sources.documents, config.current_source)


# ── CLI ─────────────────────────────────────────────────────────────


@click.group(cls=_ShowFallbackGroup, invoke_without_command=True)
@click.option(
    "--global-config",
    type=click.Path(dir_okay=False),
    default=None,
    help="Global settings file (default: ~/.claude.json)",
)
@click.option(
    "--project",
    type=click.Path(file_okay=False),
    default=None,
    help="Treat this directory as the current project",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(__version__, prog_name="cc-mcp-admin")
@click.pass_context
def cli(ctx: click.Context, global_config: str | None, project: str | None, verbose: bool):
    """Claude Code MCP server manager."""
    setup_logging(verbose, err_console)
    ctx.obj = load_config(global_config=global_config, project=project, verbose=verbose)
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_cmd)


@cli.command("list")
@click.pass_context
def list_cmd(ctx: click.Context):
    """List all MCP servers across all projects."""
    config: Config = ctx.obj
    try:
        _, catalog = _catalog(config)
    except McpAdminError as e:
        _fail(ctx, e)
        return
    render_list(console, catalog, config.home)


@cli.command("show")
@click.argument("name")
@click.pass_context
def show_cmd(ctx: click.Context, name: str):
    """Show every configuration of an MCP server."""
    config: Config = ctx.obj
    try:
        _, catalog = _catalog(config)
        if name not in catalog:
            raise ServerNotFoundError(name)
    except McpAdminError as e:
        _fail(ctx, e)
        return
    render_show(console, catalog, name, config.home)


@cli.command("add")
@click.argument("name")
@click.option(
    "--from",
    "from_pattern",
    default=None,
    help="Source project to copy from (partial path match)",
)
@click.option(
    "--rewrite-paths",
    is_flag=True,
    help="Replace the source project's path in args with the current project's",
)
@click.pass_context
def add_cmd(ctx: click.Context, name: str, from_pattern: str | None, rewrite_paths: bool):
    """Add an MCP server to the current project."""
    config: Config = ctx.obj
    try:
        result = add_server(config, name, from_pattern, rewrite_paths=rewrite_paths)
    except McpAdminError as e:
        _fail(ctx, e)
        return
    render_add(console, result, config.home)


@cli.command("remove")
@click.argument("name")
@click.pass_context
def remove_cmd(ctx: click.Context, name: str):
    """Remove an MCP server from the current project."""
    config: Config = ctx.obj
    try:
        result = remove_server(config, name)
    except McpAdminError as e:
        _fail(ctx, e)
        return
    render_remove(console, result, config.home)


def main():
    cli()


if __name__ == "__main__":
    main()
