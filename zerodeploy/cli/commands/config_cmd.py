"""Config command for viewing and managing zerodeploy configuration."""

import typer
from rich.markup import escape

from ..app import app, console
from ... import config as config_module
from ...config import CLI_MODES, OUTPUT_FORMATS, get_config, reset_config


VALID_KEYS = {
    "detect.tag",
    "output.format",
    "output.indent",
    "cli.mode",
}

INT_FIELDS = {"indent"}

CHOICES = {
    "output.format": OUTPUT_FORMATS,
    "cli.mode": CLI_MODES,
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. detect.tag, output.format)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify zerodeploy configuration.

    Examples:
        zerodeploy config show
        zerodeploy config set detect.tag canary
        zerodeploy config set output.format yaml
        zerodeploy config set cli.mode agent
        zerodeploy config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] zerodeploy config set <key> <value>")
            console.print()
            _print_keys()
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {escape(action)}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _print_keys():
    console.print("Available keys:")
    for k in sorted(VALID_KEYS):
        console.print(f"  {k}")


def _show_config():
    """Display current resolved configuration."""
    config = get_config()
    config_file = config_module.CONFIG_FILE

    console.print()
    console.print("[bold]zerodeploy Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Detect[/bold cyan]")
    console.print(f"  tag    = {escape(config.detect.tag) or '[dim](none)[/dim]'}")

    console.print()
    console.print("[bold cyan]Output[/bold cyan] (deployment documents)")
    console.print(f"  format = {config.output.format}")
    console.print(f"  indent = {config.output.indent}")

    console.print()
    console.print("[bold cyan]CLI[/bold cyan]")
    console.print(f"  mode   = {config.cli.mode}")

    console.print()
    if config_file.exists():
        console.print(f"Config file: {escape(str(config_file))}")
    else:
        console.print(
            f"Config file: [dim]not created yet[/dim] ({escape(str(config_file))})"
        )
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {escape(key)}")
        console.print()
        _print_keys()
        raise typer.Exit(1)

    choices = CHOICES.get(key)
    if choices and value not in choices:
        console.print(f"[red]Invalid value for {escape(key)}:[/red] {escape(value)}")
        console.print(f"Valid values: {', '.join(choices)}")
        raise typer.Exit(1)

    config = get_config()
    zone, field_name = key.split(".", 1)
    target = getattr(config, zone)

    if field_name in INT_FIELDS:
        try:
            setattr(target, field_name, int(value))
        except ValueError:
            console.print(f"[red]Invalid integer value:[/red] {escape(value)}")
            raise typer.Exit(1)
    else:
        setattr(target, field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {escape(key)} = {escape(value)}")
    console.print(f"  Saved to {escape(str(config_module.CONFIG_FILE))}")


def _reset_config():
    """Reset config to defaults."""
    config_file = config_module.CONFIG_FILE
    if config_file.exists():
        config_file.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {escape(str(config_file))}")
    else:
        console.print("Config already at defaults (no config file exists)")
