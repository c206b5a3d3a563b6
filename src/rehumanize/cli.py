"""Click-based CLI for rehumanize."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console

from rehumanize import __version__
from rehumanize.config import RehumanizeConfig, load_config
from rehumanize.models.options import (
    Conservativeness,
    EmptyTextError,
    HumanizeOptions,
    Mode,
    Readability,
    Strength,
    Tone,
)

logger = logging.getLogger("rehumanize")


def _choices(enum_cls: type) -> click.Choice:
    return click.Choice([m.value for m in enum_cls], case_sensitive=False)


def _read_input(text: str | None, input_file: Path | None) -> str:
    """Resolve the text to humanize from the argument, a file, or stdin."""
    if text is not None and input_file is not None:
        raise click.UsageError("Pass either TEXT or --file, not both.")
    if input_file is not None:
        return input_file.read_text(encoding="utf-8")
    if text is not None:
        return text
    if sys.stdin.isatty():
        raise click.UsageError("No input: pass TEXT, --file, or pipe text on stdin.")
    return click.get_text_stream("stdin").read()


def _with_api_key(config: RehumanizeConfig, api_key: str | None) -> RehumanizeConfig:
    """Return ``config`` with the API key replaced, keeping the key verbatim."""
    if not api_key:
        return config
    return replace(config, service=replace(config.service, api_key=api_key))


@click.group()
@click.version_option(version=__version__, prog_name="rehumanize")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to user config TOML file.",
)
@click.option(
    "--api-key",
    envvar="REHUMANIZE_API_KEY",
    default=None,
    help="Service API key (overrides config file).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output.")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Suppress all output.")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    api_key: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """rehumanize -- rewrite text through a humanization service."""
    ctx.ensure_object(dict)
    try:
        cfg = _with_api_key(load_config(user_config_path=config_path), api_key)
    except (TypeError, ValueError) as exc:
        raise click.UsageError(f"Invalid configuration: {exc}") from exc
    ctx.obj = {
        "config": cfg,
        "config_path": config_path,
        "api_key": api_key,
        "verbose": verbose,
        "quiet": quiet,
    }

    # Configure logging; -v and -q take precedence over general.log_level
    if quiet:
        level = logging.CRITICAL
    elif verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, cfg.general.log_level.upper())
    logging.basicConfig(level=level, format="%(name)s: %(message)s", stream=sys.stderr)


@main.command()
@click.argument("text", required=False)
@click.option(
    "-f",
    "--file",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read the text from a file.",
)
@click.option("--mode", type=_choices(Mode), default=None, help="Rewrite purpose.")
@click.option("--readability", type=_choices(Readability), default=None, help="Reading level.")
@click.option("--strength", type=_choices(Strength), default=None, help="Humanization strength.")
@click.option(
    "--conservativeness",
    type=_choices(Conservativeness),
    default=None,
    help="Accepted for compatibility; not sent to the service.",
)
@click.option("--tone", type=_choices(Tone), default=None, help="Tone for the local fallback.")
@click.option(
    "--show-source",
    is_flag=True,
    default=False,
    help="Report on stderr whether the output came from the service or the fallback.",
)
@click.option("-o", "--output", "output_path", type=click.Path(path_type=Path), default=None)
@click.pass_context
def humanize(
    ctx: click.Context,
    text: str | None,
    input_file: Path | None,
    mode: str | None,
    readability: str | None,
    strength: str | None,
    conservativeness: str | None,
    tone: str | None,
    show_source: bool,
    output_path: Path | None,
) -> None:
    """Humanize TEXT (or --file, or stdin)."""
    from rehumanize.progress import PollReporter
    from rehumanize.service import HumanizeService

    obj = ctx.obj
    config: RehumanizeConfig = obj["config"]
    console = Console(stderr=True, quiet=obj["quiet"])

    source_text = _read_input(text, input_file)
    options = HumanizeOptions.from_dict(
        {
            "mode": mode,
            "readability": readability,
            "strength": strength,
            "conservativeness": conservativeness,
            "tone": tone,
        }
    )

    reporter = PollReporter(console, verbose=obj["verbose"], quiet=obj["quiet"])
    service = HumanizeService(config, progress_callback=reporter.callback)

    reporter.start(max_attempts=service.policy.max_attempts)
    try:
        result = service.humanize_detailed_sync(source_text, options)
    except EmptyTextError as exc:
        raise click.UsageError(str(exc)) from exc
    finally:
        reporter.finish()

    if output_path is not None:
        output_path.write_text(result.text, encoding="utf-8")
        click.echo(f"Output: {output_path}")
    else:
        click.echo(result.text)

    if show_source:
        console.print(f"[dim]source: {result.source}[/dim]")


@main.command()
@click.pass_context
def credits(ctx: click.Context) -> None:
    """Show the remaining service credits."""
    from rehumanize.service import HumanizeService

    config: RehumanizeConfig = ctx.obj["config"]
    click.echo(HumanizeService(config).get_credits_sync())


@main.command(name="config")
@click.option("--set", "set_kv", nargs=2, multiple=True, help="Set KEY VALUE.")
@click.pass_context
def config_cmd(
    ctx: click.Context,
    set_kv: tuple[tuple[str, str], ...],
) -> None:
    """View the resolved rehumanize configuration."""
    import json as json_mod

    from rich.syntax import Syntax

    obj = ctx.obj
    config: RehumanizeConfig = obj["config"]
    console = Console(quiet=obj["quiet"])

    if set_kv:
        try:
            config = load_config(user_config_path=obj["config_path"], cli_overrides=dict(set_kv))
        except (TypeError, ValueError) as exc:
            raise click.BadParameter(str(exc), param_hint="--set") from exc
        config = _with_api_key(config, obj["api_key"])

    json_str = json_mod.dumps(config.to_dict(), indent=2)
    syntax = Syntax(json_str, "json", theme="monokai")
    console.print(syntax)
