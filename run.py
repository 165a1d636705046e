#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for Blogpad. All functionality is accessible through
command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action config
    python run.py --action test --test-type unit
"""

import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from blogpad.backend.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "config", "test", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run (for test action).",
)
@click.option(
    "--coverage",
    is_flag=True,
    help="Run tests with coverage (for test action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Blogpad Entry Point.

    Run the blog server, view configuration, or run tests.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # View loaded configuration
        python run.py --action config

        # Run unit tests with coverage
        python run.py --action test --test-type unit --coverage

        # Show application info
        python run.py --action info
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "config":
        show_config(logger)
    elif action == "test":
        run_tests(logger, test_type, coverage)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI development server."""
    from blogpad.backend.core.config import get_app_config, get_server_address

    try:
        configured_host, configured_port = get_server_address()
        if get_app_config().storage.backend == "memory":
            click.echo(click.style(
                "Warning: storage backend is 'memory', posts are lost when the server stops.",
                fg="yellow",
            ))
    except (FileNotFoundError, ValueError) as e:
        logger.warning(
            "Could not load application.yaml, using defaults",
            extra={"error": str(e)},
        )
        configured_host, configured_port = "127.0.0.1", 8000

    server_host = host or configured_host
    server_port = port or configured_port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "blogpad.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting Blogpad at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def _flatten(values: dict, prefix: str) -> dict:
    flat = {}
    for key, value in values.items():
        name = f"{prefix}.{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


def _echo_section(title: str, values: dict) -> None:
    click.echo(f"\n{title}:")
    click.echo("-" * 40)
    for key, value in values.items():
        click.echo(f"  {key}: {value}")


def _data_file(backend: str, entries_key: str) -> str:
    from blogpad.backend.core.config import get_data_dir

    if backend == "memory":
        return "(in memory, not persisted)"
    return str(get_data_dir() / f"{entries_key}.json")


def show_config(logger) -> None:
    """Display where posts are stored, how they are shown, and the server and logging settings."""
    click.echo("Blogpad Configuration:")

    try:
        from blogpad.backend.core.config import get_app_config, get_settings

        app_config = get_app_config()
        settings = get_settings()
        storage = app_config.storage

        _echo_section(
            "Storage",
            {
                **_flatten(storage.model_dump(), "storage"),
                "BLOGPAD_DATA_DIR": settings.data_dir or "(not set)",
                "data file": _data_file(storage.backend, storage.entries_key),
            },
        )
        _echo_section("Display", _flatten(app_config.display.model_dump(), "display"))
        _echo_section(
            "Server",
            _flatten(app_config.application.server.model_dump(), "application.server"),
        )
        _echo_section(
            "Logging",
            {
                **_flatten(app_config.logging.model_dump(), "logging"),
                "BLOGPAD_LOG_LEVEL": settings.log_level or "(not set)",
            },
        )

        logger.info("Configuration displayed successfully")

    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})

    cmd = [sys.executable, "-m", "pytest"]

    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")

    cmd.append("-v")

    if coverage:
        cmd.extend(["--cov=blogpad", "--cov-report=term-missing"])

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e '.[test]'")
        sys.exit(1)


def show_info(logger) -> None:
    """Display the blog's identity, where its posts live and how dates are shown."""
    click.echo("Blogpad")
    click.echo("=" * 40)

    try:
        from blogpad.backend.core.config import get_app_config
        from blogpad.backend.core.utils import format_long_datetime, utc_now

        app_config = get_app_config()
        application = app_config.application
        storage = app_config.storage
        display = app_config.display

        click.echo(f"Name: {application.name}")
        click.echo(f"Version: {application.version}")
        click.echo(f"Description: {application.description}")
        click.echo()
        click.echo(f"Store backend: {storage.backend}")
        click.echo(f"Entries key: {storage.entries_key}")
        click.echo(f"Data file: {_data_file(storage.backend, storage.entries_key)}")
        click.echo(f"Page title: {display.page_title}")
        click.echo(
            f"Dates shown as: {format_long_datetime(utc_now(), display.locale, display.timezone)}"
            f" ({display.locale}, {display.timezone})"
        )
    except (FileNotFoundError, ValueError) as e:
        logger.warning("Could not load configuration", extra={"error": str(e)})
        click.echo("Name: Blogpad")
        click.echo(click.style(f"Configuration unavailable: {e}", fg="yellow"))

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the blog server")
    click.echo("  --action config   Display storage, display and server settings")
    click.echo("  --action test     Run test suite")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
