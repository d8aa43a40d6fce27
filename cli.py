#!/usr/bin/env python3
"""
Sticky Board CLI.

Primary entry point for all application operations.
Use --service to select what to run, --action to control the server lifecycle.

Usage:
    python cli.py --help
    python cli.py --service server --verbose
    python cli.py --service server --action stop
    python cli.py --service health --debug
    python cli.py --service config
    python cli.py --service notes
    python cli.py --service test --test-type unit
"""

import asyncio
import os
import signal
import subprocess
import sys
import time
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.table import Table

from stickyboard.backend.core.logging import get_logger, setup_logging

PROJECT_ROOT = Path(__file__).parent

LONG_RUNNING_SERVICES = {"server"}


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


def _find_process_on_port(port: int) -> list[int]:
    """Find PIDs listening on a port."""
    result = subprocess.run(
        ["lsof", "-ti", f":{port}"],
        capture_output=True, text=True,
    )
    pids = result.stdout.strip().split("\n")
    return [int(p) for p in pids if p.strip()]


def _service_stop(logger, service: str, port: int) -> None:
    pids = _find_process_on_port(port)
    if not pids:
        click.echo(f"No {service} running on port {port}.")
        return

    for pid in pids:
        os.kill(pid, signal.SIGINT)
        logger.info("Sent SIGINT", service=service, pid=pid, port=port)

    click.echo(f"{service.title()} on port {port} stopped (PID: {', '.join(str(p) for p in pids)}).")


def _service_status(service: str, port: int) -> None:
    pids = _find_process_on_port(port)
    if pids:
        click.echo(f"{service.title()} is running on port {port} (PID: {', '.join(str(p) for p in pids)}).")
    else:
        click.echo(f"{service.title()} is not running on port {port}.")


def _get_service_port(port: int | None) -> int:
    if port is not None:
        return port
    from stickyboard.backend.core.config import get_app_config
    return get_app_config().application.server.port


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["server", "health", "config", "notes", "test", "info"]),
    default="info",
    help="Service or command to run.",
)
@click.option(
    "--action", "-a",
    type=click.Choice(["start", "stop", "restart", "status"]),
    default="start",
    help="Lifecycle action for the server.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (INFO level logging).")
@click.option("--debug", "-d", is_flag=True, help="Enable debug output (DEBUG level logging).")
@click.option("--host", default=None, help="Server host.")
@click.option("--port", default=None, type=int, help="Server port.")
@click.option("--reload", is_flag=True, help="Enable auto-reload (server only).")
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run.",
)
def main(
    service: str,
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
) -> None:
    """
    Sticky Board CLI.

    Use --service to select what to run. For the server, use --action
    to control lifecycle (start/stop/restart/status).

    \b
    Examples:
        python cli.py --service server --verbose
        python cli.py --service server --action stop
        python cli.py --service server --action status
        python cli.py --service health --debug
        python cli.py --service config
        python cli.py --service notes
        python cli.py --service test --test-type unit
        python cli.py --service info
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")

    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)

    logger.debug("CLI invoked", service=service, action=action, log_level=log_level)

    if service in LONG_RUNNING_SERVICES and action != "start":
        service_port = _get_service_port(port)

        if action == "stop":
            _service_stop(logger, service, service_port)
            return
        elif action == "status":
            _service_status(service, service_port)
            return
        elif action == "restart":
            _service_stop(logger, service, service_port)
            time.sleep(2)

    if service == "server":
        run_server(logger, host, port, reload)
    elif service == "health":
        check_health(logger)
    elif service == "config":
        show_config(logger)
    elif service == "notes":
        list_notes(logger)
    elif service == "test":
        run_tests(logger, test_type)
    elif service == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the sticky store API server."""
    from stickyboard.backend.core.config import get_app_config

    try:
        server_config = get_app_config().application.server
    except Exception as e:
        logger.error("Failed to load configuration.", error=str(e))
        click.echo(
            click.style("Error: Could not load config/settings/application.yaml.", fg="red"),
            err=True,
        )
        sys.exit(1)

    server_host = host or server_config.host
    server_port = port or server_config.port

    logger.info("Starting server", host=server_host, port=server_port, reload=reload)

    cmd = [
        sys.executable, "-m", "uvicorn",
        "stickyboard.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", exit_code=e.returncode)
        sys.exit(e.returncode)


def check_health(logger) -> None:
    """Check application health by testing imports and configuration."""
    click.echo("Checking application health...\n")

    checks = []

    try:
        from stickyboard.backend.core.config import get_app_config
        from stickyboard.backend.core.exceptions import PersistenceError  # noqa: F401
        checks.append(("Core imports", True, None))
        logger.debug("Core imports successful")
    except Exception as e:
        checks.append(("Core imports", False, str(e)))
        logger.error("Core imports failed", error=str(e))

    try:
        app_config = get_app_config()
        app_name = app_config.application.name
        checks.append(("YAML configuration", True, f"App: {app_name}"))
        logger.debug("Configuration loaded", app_name=app_name)
    except Exception as e:
        checks.append(("YAML configuration", False, str(e)))
        logger.error("Configuration failed", error=str(e))

    try:
        board = get_app_config().board
        checks.append(("Board defaults", True, f"Debounce: {board.save_debounce_ms}ms"))
    except Exception as e:
        checks.append(("Board defaults", False, str(e)))
        logger.error("Board configuration failed", error=str(e))

    try:
        from stickyboard.backend.main import get_app
        app = get_app()
        checks.append(("FastAPI application", True, f"Title: {app.title}"))
        logger.debug("FastAPI app loaded", title=app.title)
    except Exception as e:
        checks.append(("FastAPI application", False, str(e)))
        logger.error("FastAPI app failed", error=str(e))

    try:
        from stickyboard.backend.models import Sticky  # noqa: F401
        from stickyboard.backend.schemas.sticky import StickyResponse  # noqa: F401
        checks.append(("Sticky model and schemas", True, None))
    except Exception as e:
        checks.append(("Sticky model and schemas", False, str(e)))
        logger.error("Model or schema import failed", error=str(e))

    try:
        from stickyboard.board.controller import BoardController  # noqa: F401
        checks.append(("Board widgets", True, None))
    except Exception as e:
        checks.append(("Board widgets", False, str(e)))
        logger.error("Board import failed", error=str(e))

    click.echo("Health Check Results:")
    click.echo("-" * 50)

    all_passed = True
    for name, passed, detail in checks:
        status = click.style("✓ PASS", fg="green") if passed else click.style("✗ FAIL", fg="red")
        detail_str = f" ({detail})" if detail else ""
        click.echo(f"  {status}  {name}{detail_str}")
        if not passed:
            all_passed = False

    click.echo("-" * 50)

    if all_passed:
        click.echo(click.style("\nAll checks passed!", fg="green"))
    else:
        click.echo(click.style("\nSome checks failed. See details above.", fg="yellow"))
        sys.exit(1)


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from stickyboard.backend.core.config import get_app_config

        app_config = get_app_config()
        sections = [
            ("Application Settings", app_config.application),
            ("Database Settings", app_config.database),
            ("Logging Settings", app_config.logging),
            ("Board Settings", app_config.board),
        ]

        for title, section in sections:
            click.echo(f"{title} (from YAML):")
            click.echo("-" * 40)
            for key, value in section.model_dump().items():
                if isinstance(value, dict):
                    click.echo(f"  {key}:")
                    for k, v in value.items():
                        click.echo(f"    {k}: {v}")
                else:
                    click.echo(f"  {key}: {value}")
            click.echo()

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", error=str(e))
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def list_notes(logger) -> None:
    """Show every stored note from a running server."""
    from stickyboard.backend.core.exceptions import PersistenceError
    from stickyboard.client.api import APIClient
    from stickyboard.client.persistence import StickyStoreClient

    async def fetch():
        store = StickyStoreClient(APIClient(frontend="cli"))
        try:
            return await store.list_all()
        finally:
            await store.close()

    try:
        notes = asyncio.run(fetch())
    except PersistenceError as e:
        logger.error("Could not list notes", error=e.message, status_code=e.status_code)
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)

    table = Table(title=f"Sticky notes ({len(notes)})")
    table.add_column("ID", style="dim")
    table.add_column("Color")
    table.add_column("Position", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Z", justify="right")
    table.add_column("Text")

    for note in notes:
        text = note.text if len(note.text) <= 40 else note.text[:37] + "..."
        table.add_row(
            note.id,
            note.color.value,
            f"{note.position.x:g}, {note.position.y:g}",
            f"{note.size.width:g} x {note.size.height:g}",
            str(note.z_index),
            text,
        )

    Console().print(table)
    logger.debug("Notes listed", count=len(notes))


def run_tests(logger, test_type: str) -> None:
    """Run the test suite."""
    logger.info("Running tests", type=test_type)

    cmd = [sys.executable, "-m", "pytest"]

    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")

    cmd.append("-v")

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e '.[test]'")
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    click.echo("Sticky Board")
    click.echo("=" * 40)

    try:
        from stickyboard.backend.core.config import get_app_config
        application = get_app_config().application
        click.echo(f"Name: {application.name}")
        click.echo(f"Version: {application.version}")
        click.echo(f"Description: {application.description}")
    except Exception as e:
        logger.error("Failed to load application configuration", error=str(e))
        click.echo(
            click.style("Error: Could not load application.yaml configuration.", fg="red"),
            err=True,
        )
        sys.exit(1)

    click.echo()
    click.echo("Services (--service):")
    click.echo("  server         Sticky store API server")
    click.echo("  health         Check application health")
    click.echo("  config         Display configuration")
    click.echo("  notes          List stored notes (server must be running)")
    click.echo("  test           Run test suite")
    click.echo("  info           Show this information")
    click.echo()
    click.echo("Lifecycle actions (--action, server only):")
    click.echo("  start          Start the server (default)")
    click.echo("  stop           Stop a running server")
    click.echo("  restart        Stop then start")
    click.echo("  status         Check if running")
    click.echo()
    click.echo("Options:")
    click.echo("  --verbose, -v  Enable INFO level logging")
    click.echo("  --debug, -d    Enable DEBUG level logging")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
