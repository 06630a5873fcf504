from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

import typer
from typing_extensions import Annotated

from .container import Container
from ..core.domain.models import Document, DocumentOptions
from ..core.domain.results import SubmissionResult


app = typer.Typer(add_completion=False, help="CRPT document registration client")


class LogLevel(str, Enum):
    OFF = "OFF"          # logging disabled
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"
    NOTSET = "NOTSET"


@contextmanager
def provide_container() -> Iterator[Container]:
    container = Container()
    container.init_resources()
    try:
        yield container
    finally:
        container.shutdown_resources()


@app.callback()
def main(
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option(
            "--log-level",
            help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG, NOTSET). Default: OFF",
        ),
    ] = None,
) -> None:
    """Root command callback to configure logging if requested."""
    if log_level in (None, LogLevel.OFF):
        return

    level = logging.getLevelNamesMapping().get(log_level.value, logging.INFO)

    if __package__:
        package_name = __package__.split(".", 1)[0]
    else:
        package_name = "crpt_api"
    logger = logging.getLogger(package_name)

    # Avoid stacking console handlers when invoked repeatedly in one process
    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    logger.setLevel(level)


@app.command(help="Submit one document through the rate limiter. Exit code 1 on any failure.")
def submit(
    oms_id: str = typer.Option(..., "--oms-id", help="OMS identifier"),
    country: str = typer.Option(..., help="Country code (e.g., RU)"),
    product: str = typer.Option(..., help="Product name"),
    signature: str = typer.Option(..., help="Document signature, sent verbatim"),
    description: str | None = typer.Option(None, help="Optional description"),
    serial_number: str | None = typer.Option(None, "--serial-number", help="Optional serial number"),
    timeout: float | None = typer.Option(None, help="Seconds to wait for a rate limit permit (default: wait forever)"),
) -> None:
    doc = Document.create(
        oms_id,
        country,
        product,
        DocumentOptions(description=description, serial_number=serial_number),
    )
    with provide_container() as container:
        uc = container.create_document_uc()
        result = uc.execute(doc, signature, timeout=timeout)
    _print_result(result)
    if not result.ok:
        raise typer.Exit(code=1)


@app.command("config", help="Print the effective configuration as JSON.")
def show_config() -> None:
    container = Container()
    typer.echo(json.dumps(container.config(), ensure_ascii=False, default=str, indent=2))


def _print_result(result: SubmissionResult) -> None:
    if result.ok:
        typer.echo(f"OK {result.status_code}")
        if result.body:
            typer.echo(result.body)
        return
    typer.echo(f"{result.status.value}: {result.error}", err=True)
