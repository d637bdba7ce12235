"""Root CLI group for orgmap with global flags and command registration."""

from __future__ import annotations

import click

from orgmap import __version__
from orgmap.commands import register_commands
from orgmap.commands._context import AppContext
from orgmap.config.settings import OrgmapSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="orgmap")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (ids only).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("-d", "--dataset", default=None, help="Dataset to read or load.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    dataset: str | None,
) -> None:
    """orgmap: browse a scraped group/subgroup/project hierarchy."""
    ctx.ensure_object(dict)
    flags: dict[str, object] = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    if dataset:
        flags["dataset"] = dataset
    settings = OrgmapSettings.from_cli(config_path=config_path, **flags)
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
