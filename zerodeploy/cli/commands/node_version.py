"""Node.js runtime selection command."""

from pathlib import Path

import typer

from ...project import load_manifest
from ...runtime import (
    SUPPORTED_NODE_VERSIONS,
    UnsupportedNodeVersionError,
    get_supported_node_version,
)
from ..app import app, console, is_json_output
from ..utils import ExitCode, Output


@app.command("node-version")
def node_version_command(
    engine_range: str | None = typer.Argument(
        None, help="npm semver range, e.g. '>=10' or '8.10.x'"
    ),
    path: Path | None = typer.Option(
        None,
        "--path",
        "-p",
        help="Read engines.node from this project's package.json instead",
    ),
):
    """Select the Node.js runtime for an engines range.

    Examples:
        zerodeploy node-version ">=8 <11"
        zerodeploy node-version --path ./my-app
        zerodeploy node-version            # default selection
    """
    out = Output(console=console, json_mode=is_json_output())

    if engine_range is None and path is not None:
        if not path.is_dir():
            out.error(
                f"Project directory not found: {path}",
                exit_code=ExitCode.PATH_NOT_FOUND,
            )
            raise typer.Exit(out.finish())
        manifest = load_manifest(path)
        engine_range = manifest.node_engine if manifest is not None else None

    try:
        selected = get_supported_node_version(engine_range)
    except UnsupportedNodeVersionError as e:
        out.error(
            e.message,
            code=e.code,
            suggestion="Supported ranges: "
            + ", ".join(v.range for v in SUPPORTED_NODE_VERSIONS),
            exit_code=ExitCode.UNSUPPORTED_RUNTIME,
        )
        raise typer.Exit(out.finish())

    if engine_range:
        message = f"{engine_range} → {selected.runtime} (range {selected.range})"
    else:
        message = f"No engines range, using default {selected.runtime}"
    out.success(message, node_version=selected.model_dump())
    raise typer.Exit(out.finish())
