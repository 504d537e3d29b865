# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Chainrecord CLI: operational commands (show, verify, serve).

Commands:
    show      Read the on-chain record once and print it (text or JSON).
    verify    Print the document verification status.
    serve     Run the HTTP API with uvicorn.

Environment:
    RPC_URL              JSON-RPC endpoint of an Ethereum mainnet node.
    RPC_TIMEOUT_S        Per-request JSON-RPC timeout in seconds.
    DOCUMENT_TIMEOUT_S   Reference document download timeout in seconds.

Exit codes:
    0  success
    1  fatal retrieval failure (configuration, missing contract, metadata read)
    2  ``verify --strict`` and the document does not match the commitment
"""

from __future__ import annotations

import asyncio
import json

import typer

from chainrecord_api.adapters.presenters.record_presenter import (
    FAILURE_HINT,
    RecordPresenter,
    format_record_date,
)
from chainrecord_api.config.record import DEFAULT_RECORD_CONFIG
from chainrecord_api.config.settings import get_settings
from chainrecord_api.dependencies.record import retrieve_onchain_record
from chainrecord_api.domain.entities.retrieval_result import RetrievalResult
from chainrecord_api.domain.enums.verification import VerificationStatus
from chainrecord_api.domain.exceptions.base import DomainError
from chainrecord_api.infrastructure.logging.logger import configure_root_logging, get_json_logger

configure_root_logging()
log = get_json_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)

EXIT_FATAL = 1
EXIT_MISMATCH = 2


def _run_retrieval(timeout_s: float | None) -> RetrievalResult:
    """Run one retrieval, exiting with ``EXIT_FATAL`` on a fatal failure."""

    async def _run() -> RetrievalResult:
        coro = retrieve_onchain_record(settings=get_settings(), config=DEFAULT_RECORD_CONFIG)
        if timeout_s is None:
            return await coro
        return await asyncio.wait_for(coro, timeout=timeout_s)

    try:
        return asyncio.run(_run())
    except DomainError as exc:
        log.error("cli.retrieve.failed", extra={"code": exc.code, "error": exc.message})
        typer.echo(f"Error: {exc.message or 'Failed to load contract data.'}", err=True)
        typer.echo(FAILURE_HINT, err=True)
        raise typer.Exit(code=EXIT_FATAL) from exc
    except TimeoutError as exc:
        log.error("cli.retrieve.timeout", extra={"timeout_s": timeout_s})
        typer.echo(f"Error: retrieval did not complete within {timeout_s}s.", err=True)
        typer.echo(FAILURE_HINT, err=True)
        raise typer.Exit(code=EXIT_FATAL) from exc


def _render_text(result: RetrievalResult) -> str:
    current = result.current_period
    view = RecordPresenter(explorer_url=DEFAULT_RECORD_CONFIG.explorer_url).to_http(result).view
    lines = [
        f"{current.label}: {view.headline.value or 'unavailable'} ({view.headline.tier})",
        f"  {result.metadata.interpretation}",
        f"Record date (UTC): {format_record_date(result.metadata.last_updated)}",
        f"On-chain hash:     {result.on_chain_commitment}",
        f"Raw integer:       {current.raw_value if current.raw_value is not None else '-'}",
        f"Source:            {result.metadata.source_name} <{result.source_url}>",
        f"Verification:      {result.verification.status.value}",
    ]
    if result.verification.computed_digest is not None:
        lines.append(f"Computed hash:     {result.verification.computed_digest}")
    lines.append("Periods:")
    for row in view.grid:
        shown = row.value if row.available else f"unavailable ({row.unavailable_reason})"
        lines.append(f"  {row.label:<10} {shown}")
    return "\n".join(lines)


@app.command("show")
def show(
    as_json: bool = typer.Option(False, "--json", help="Print the JSON success envelope."),  # noqa: B008
    timeout: float | None = typer.Option(  # noqa: B008
        None, "--timeout", min=0.1, help="Abort the whole retrieval after this many seconds."
    ),
) -> None:
    """Read the on-chain record once and print it."""
    result = _run_retrieval(timeout)
    if as_json:
        presenter = RecordPresenter(explorer_url=DEFAULT_RECORD_CONFIG.explorer_url)
        body = presenter.present_record(result).body
        typer.echo(json.dumps(body.model_dump_http() if body is not None else {}, indent=2))
        return
    typer.echo(_render_text(result))


@app.command("verify")
def verify(
    strict: bool = typer.Option(False, "--strict", help="Exit 2 when the document does not match."),  # noqa: B008
    timeout: float | None = typer.Option(None, "--timeout", min=0.1),  # noqa: B008
) -> None:
    """Print the document verification status."""
    result = _run_retrieval(timeout)
    outcome = result.verification
    typer.echo(outcome.status.value)
    typer.echo(f"on-chain: {result.on_chain_commitment}")
    typer.echo(f"computed: {outcome.computed_digest or '-'}")
    log.info("cli.verify.done", extra={"status": outcome.status.value, "strict": strict})
    if strict and outcome.status is VerificationStatus.MISMATCH:
        raise typer.Exit(code=EXIT_MISMATCH)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host"),  # noqa: B008
    port: int = typer.Option(8080, "--port", min=1, max=65535),  # noqa: B008
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("chainrecord_api.main:create_app", factory=True, host=host, port=port)


if __name__ == "__main__":
    app()
