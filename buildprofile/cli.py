"""buildprofile CLI.

Resolves build declarations into profiles for the packaging toolchain.
"""

import json
import logging
import sys
from pathlib import Path

import click

from .config import ResolverSettings
from .config import create_default_config
from .config import get_config_path
from .config import load_config
from .declarations import load_declaration
from .errors import ProfileValidationError
from .history import ReleaseHistory
from .models import BuildType
from .resolution import resolve

logger = logging.getLogger(__name__)

BUILD_TYPES = [build_type.value for build_type in BuildType]


def configure_logging(settings: ResolverSettings) -> None:
    """Configure root logging from settings (logs go to stderr)."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: $BUILDPROFILE_HOME/config/buildprofile.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None):
    """buildprofile - Resolve Android build declarations into build profiles."""
    settings = load_config(config_path)
    configure_logging(settings)
    ctx.obj = settings


@cli.command(name="resolve")
@click.argument("declaration", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--build-type", type=click.Choice(BUILD_TYPES), default=None, help="Build type to resolve")
@click.option(
    "--strict-signing/--no-strict-signing",
    default=None,
    help="Fail instead of warning when a release build falls back to debug signing",
)
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write profile JSON to file")
@click.option("--record", is_flag=True, default=False, help="Record the release in the release history")
@click.pass_obj
def resolve_command(
    settings: ResolverSettings,
    declaration: Path,
    build_type: str | None,
    strict_signing: bool | None,
    output: Path | None,
    record: bool,
):
    """Resolve DECLARATION into a build profile (JSON)."""
    build_type = build_type or settings.build_type.value
    strict = settings.strict_signing if strict_signing is None else strict_signing
    record = record or settings.record_releases

    try:
        raw_settings = load_declaration(declaration, build_type)

        history = None
        previous_version_code = None
        if record and build_type == BuildType.RELEASE.value:
            history = ReleaseHistory()
            application_id = raw_settings.get("applicationId")
            if isinstance(application_id, str):
                previous_version_code = history.last_version_code(application_id)

        result = resolve(
            raw_settings,
            settings.framework,
            build_type=build_type,
            strict_signing=strict,
            previous_version_code=previous_version_code,
        )
    except ProfileValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for warning in result.warnings:
        click.secho(f"Warning: {warning.message}", fg="yellow", err=True)

    payload = json.dumps(result.profile.to_json_dict(), indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload + "\n", encoding="utf-8")
        click.echo(f"Profile written to {output}")
    else:
        click.echo(payload)

    if history is not None:
        history.record(result.profile)
        click.echo(f"Recorded release {result.profile.version_name} ({result.profile.version_code})")
    elif record:
        click.echo(f"Not recording: {build_type} builds are not releases", err=True)


@cli.command(name="init-config")
def init_config():
    """Create the default config file if it doesn't exist."""
    create_default_config()
    click.echo(f"Config: {get_config_path()}")


@cli.command(name="show-config")
@click.pass_obj
def show_config(settings: ResolverSettings):
    """Show the effective configuration."""
    click.echo(json.dumps(settings.model_dump(mode="json"), indent=2))


def main():
    """Entry point for the buildprofile command."""
    cli()


if __name__ == "__main__":
    main()
