"""CLI interface for stackprint.

Provides commands for detecting project profiles, managing the profile
cache and running the MCP server.
"""

import json
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env before importing other stackprint modules
# This ensures env vars are set before module-level code reads them
load_dotenv()

from stackprint import __version__  # noqa: E402
from stackprint.errors import StackprintError  # noqa: E402
from stackprint.models.profile import LOCK_GROUPS, ProjectProfile  # noqa: E402


@click.group()
@click.version_option(version=__version__, prog_name="stackprint")
def cli() -> None:
    """stackprint - convention profiling for Java/Spring projects."""
    pass


@cli.command()
def serve() -> None:
    """Start the MCP server on stdio."""
    # Import here to avoid slow startup for the other commands
    from stackprint import run_server

    run_server()


@cli.command()
@click.argument("project_path", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option("--refresh", is_flag=True, help="Ignore the cached profile and detect again")
@click.option("--no-cache", is_flag=True, help="Neither read nor write the profile cache")
@click.option("--json", "as_json", is_flag=True, help="Print the full profile as JSON")
def detect(project_path: str, refresh: bool, no_cache: bool, as_json: bool) -> None:
    """Detect the conventions of a project.

    PROJECT_PATH: Project root (the directory holding src/main/java).
    """
    from stackprint.analyzers.detector import detect as detect_profile
    from stackprint.utils.cache import ProfileCache

    try:
        if no_cache:
            profile = detect_profile(project_path)
        else:
            profile = ProfileCache(project_path).load_or_detect(refresh=refresh)
    except StackprintError as e:
        click.echo(f"Detection failed: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(profile.model_dump_json(indent=2))
    else:
        click.echo(_format_summary(profile))


def _format_summary(profile: ProjectProfile) -> str:
    lines = [
        f"Project:      {profile.project_root}",
        f"Architecture: {profile.architecture.value} ({profile.arch_confidence:.0%})",
    ]
    if profile.feature_modules:
        style = profile.feature_style.value if profile.feature_style else "nested"
        lines.append(f"Modules:      {', '.join(profile.feature_modules)} ({style})")
    lines += [
        f"Base package: {profile.base_package or '(default package)'}",
        f"DTO naming:   {profile.dto_naming.value}",
        f"ID type:      {profile.id_type}",
        f"Mapper:       {profile.mapper.value}",
        f"Database:     {profile.database.value}",
        f"Validation:   {profile.validation_style.value}",
        f"API docs:     {profile.swagger_style.value}",
        f"Lombok:       {'yes' if profile.lombok.detected else 'no'}",
    ]
    if profile.base_entity is not None:
        lines.append(f"Base entity:  {profile.base_entity_import()}")
    if profile.locked_fields:
        lines.append(f"Locked:       {', '.join(profile.locked_fields)}")
    return "\n".join(lines)


@cli.group()
def cache() -> None:
    """Manage the cached profile of a project."""
    pass


@cache.command("info")
@click.argument("project_path", type=click.Path(exists=True, file_okay=False, resolve_path=True))
def cache_info(project_path: str) -> None:
    """Show the cache state of a project.

    PROJECT_PATH: Project root.
    """
    from stackprint.utils.cache import ProfileCache

    click.echo(json.dumps(ProfileCache(project_path).info(), indent=2))


@cache.command("clear")
@click.argument("project_path", type=click.Path(exists=True, file_okay=False, resolve_path=True))
def cache_clear(project_path: str) -> None:
    """Delete the cached profile of a project.

    PROJECT_PATH: Project root.
    """
    from stackprint.utils.cache import ProfileCache

    profile_cache = ProfileCache(project_path)
    existed = profile_cache.exists()
    try:
        profile_cache.clear()
    except StackprintError as e:
        click.echo(f"Clear failed: {e}", err=True)
        sys.exit(1)
    click.echo(f"Cleared {profile_cache.cache_dir}" if existed else "No cache to clear")


@cli.command()
@click.argument("project_path", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.argument("fields", nargs=-1, required=True)
def lock(project_path: str, fields: tuple[str, ...]) -> None:
    """Keep detected values across re-detection.

    PROJECT_PATH: Project root.
    FIELDS: Lock groups (arch, dto_naming, id, mapper, database) or profile
    field names.
    """
    _update_locks(project_path, fields, locked=True)


@cli.command()
@click.argument("project_path", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.argument("fields", nargs=-1, required=True)
def unlock(project_path: str, fields: tuple[str, ...]) -> None:
    """Let re-detection overwrite previously locked values.

    PROJECT_PATH: Project root.
    FIELDS: Lock groups or profile field names.
    """
    _update_locks(project_path, fields, locked=False)


def _update_locks(project_path: str, fields: tuple[str, ...], locked: bool) -> None:
    from stackprint.utils.cache import ProfileCache

    for name in fields:
        if f"{name}_locked" not in LOCK_GROUPS and name not in ProjectProfile.model_fields:
            raise click.BadParameter(f"Unknown field: {name}", param_hint="FIELDS")

    profile_cache = ProfileCache(project_path)
    try:
        profile = profile_cache.load_or_detect()
        for name in fields:
            flag = f"{name}_locked"
            if flag in LOCK_GROUPS:
                setattr(profile, flag, locked)
            elif locked:
                profile.lock_field(name)
            else:
                profile.unlock_field(name)
        profile_cache.save(profile)
    except StackprintError as e:
        click.echo(f"Updating locks failed: {e}", err=True)
        sys.exit(1)

    state = "Locked" if locked else "Unlocked"
    click.echo(f"{state}: {', '.join(fields)}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
