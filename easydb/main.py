from __future__ import annotations

import sys

import typer

from easydb.config import get_settings
from easydb.infrastructure.db_factory import redact_dsn
from easydb.registry import Registry, connect_from_settings
from easydb.utils.logging import configure_logging

app = typer.Typer(help="easydb master/slave connection helper.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    master = redact_dsn(settings.db_master_dsn) if settings.db_master_dsn else "<unset>"
    slave = redact_dsn(settings.db_slave_dsn) if settings.db_slave_dsn else "<unset>"
    typer.echo(
        f"driver={settings.db_driver} | master={master} | slave={slave} | "
        f"pool=({settings.db_pool_min_size},{settings.db_pool_max_size}) "
        f"timeout={settings.db_connect_timeout}s"
    )


@app.command()
def ping() -> None:
    """
    Connect the configured master/slave pools and ping each one.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    registry = Registry()
    try:
        connect_from_settings(settings, registry=registry)
        for role, handle in (("master", registry.master), ("slave", registry.slave)):
            if handle is None:
                typer.echo(f"{role}: not configured")
                continue
            handle.ping()
            typer.echo(f"{role}: ok")
    except Exception as exc:  # noqa: BLE001 - report any connection failure as exit status
        typer.echo(f"ping failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        registry.close()


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
