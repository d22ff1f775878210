"""Detection commands: builders, routes and the combined deployment document."""

from pathlib import Path

import typer
import yaml
from rich.syntax import Syntax

from ...config import OUTPUT_FORMATS, get_config
from ...core.models import (
    BuildersResult,
    DeploymentConfig,
    DetectOptions,
    Manifest,
)
from ...detection import detect_builders, detect_routes
from ...project import list_project_files, load_manifest
from ...runtime import UnsupportedNodeVersionError, resolve_manifest_node_version
from ..app import app, console, is_json_output
from ..utils import ExitCode, Output

_PATH_ARGUMENT = typer.Argument(Path("."), help="Project directory")
_TAG_OPTION = typer.Option(
    None,
    "--tag",
    "-t",
    help="Release tag appended to builder names (e.g. canary); defaults to config detect.tag",
)


def _options(tag: str | None) -> DetectOptions:
    if tag is None:
        tag = get_config().detect.tag
    return DetectOptions(tag=tag or None)


def _read_project(
    out: Output, path: Path
) -> tuple[list[str], Manifest | None] | None:
    """Read files and manifest, reporting a missing directory on ``out``."""
    try:
        files = list_project_files(path)
    except FileNotFoundError as e:
        out.error(str(e), exit_code=ExitCode.PATH_NOT_FOUND)
        return None
    return files, load_manifest(path)


def _report_builders(out: Output, result: BuildersResult) -> bool:
    """Show builder detection output. Returns False when detection failed."""
    if result.errors:
        for diagnostic in result.errors:
            out.error(diagnostic.message, code=diagnostic.code)
        return False
    if result.builders is None:
        out.warning(
            "Nothing to build",
            suggestion="Add an api/ directory, a public/ directory or a build script",
        )
        out.set_data("builders", None)
        return True
    out.records(
        "Builders",
        ["src", "use"],
        [builder.to_dict() for builder in result.builders],
    )
    return True


@app.command("builders")
def builders_command(
    path: Path = _PATH_ARGUMENT,
    tag: str | None = _TAG_OPTION,
):
    """Show the builders detected for a project directory."""
    out = Output(console=console, json_mode=is_json_output())
    project = _read_project(out, path)
    if project is None:
        raise typer.Exit(out.finish())

    files, manifest = project
    result = detect_builders(files, manifest, _options(tag))
    _report_builders(out, result)
    raise typer.Exit(out.finish())


@app.command("routes")
def routes_command(
    path: Path = _PATH_ARGUMENT,
    tag: str | None = _TAG_OPTION,
):
    """Show the default routes derived from the detected builders."""
    out = Output(console=console, json_mode=is_json_output())
    project = _read_project(out, path)
    if project is None:
        raise typer.Exit(out.finish())

    files, manifest = project
    builders = detect_builders(files, manifest, _options(tag))
    if builders.errors:
        _report_builders(out, builders)
        raise typer.Exit(out.finish())

    result = detect_routes(files, builders.builders)
    if result.error is not None:
        out.error(result.error.message, code=result.error.code)
    elif result.default_routes is None:
        out.warning("Nothing to route: no builders were detected")
        out.set_data("routes", None)
    else:
        out.records(
            "Routes",
            ["src", "dest", "status"],
            [route.to_dict() for route in result.default_routes],
        )
    raise typer.Exit(out.finish())


@app.command("detect")
def detect_command(
    path: Path = _PATH_ARGUMENT,
    tag: str | None = _TAG_OPTION,
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the deployment document to this file"
    ),
    fmt: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Document format: json or yaml (defaults to file suffix, then config)",
    ),
):
    """Detect builders and routes and emit a deployment document.

    Examples:
        zerodeploy detect .
        zerodeploy detect ./my-app -o now.json
        zerodeploy detect ./my-app -o deploy.yaml --tag canary
    """
    out = Output(console=console, json_mode=is_json_output())
    config = get_config()

    if fmt is not None and fmt not in OUTPUT_FORMATS:
        out.error(
            f"Unknown format: {fmt}",
            suggestion=f"Use one of: {', '.join(OUTPUT_FORMATS)}",
        )
        raise typer.Exit(out.finish())

    project = _read_project(out, path)
    if project is None:
        raise typer.Exit(out.finish())
    files, manifest = project

    builders = detect_builders(files, manifest, _options(tag))
    if builders.errors:
        _report_builders(out, builders)
        raise typer.Exit(out.finish())

    routes = detect_routes(files, builders.builders)
    if routes.error is not None:
        out.error(routes.error.message, code=routes.error.code)
        raise typer.Exit(out.finish())

    if manifest is not None:
        try:
            node = resolve_manifest_node_version(manifest, silent=True)
        except UnsupportedNodeVersionError as e:
            out.error(e.message, code=e.code, exit_code=ExitCode.UNSUPPORTED_RUNTIME)
            raise typer.Exit(out.finish())
        out.success(
            f"Node.js runtime: {node.runtime} (range {node.range})",
            node_version=node.model_dump(),
        )

    document = DeploymentConfig(
        builds=builders.builders or [],
        routes=routes.default_routes or [],
    )

    if fmt is None:
        if output is not None and output.suffix in (".yaml", ".yml"):
            fmt = "yaml"
        elif output is not None and output.suffix == ".json":
            fmt = "json"
        else:
            fmt = config.output.format

    if output is not None:
        if fmt == "yaml":
            document.to_yaml(output)
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(document.to_json(indent=config.output.indent) + "\n")
        out.success(
            f"Wrote {len(document.builds)} builds and {len(document.routes)} "
            f"routes to {output}",
            output=str(output),
        )
    elif fmt == "yaml" and not out.json_mode:
        out.renderable(
            Syntax(
                yaml.dump(document.to_dict(), sort_keys=False, allow_unicode=True),
                "yaml",
            )
        )
    else:
        out.renderable(Syntax(document.to_json(indent=config.output.indent), "json"))

    out.set_data("deployment", document.to_dict())
    raise typer.Exit(out.finish())
