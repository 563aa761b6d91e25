"""ComplyScan CLI — entry-point for scanning from the terminal.

Usage:
    python cli/main.py --help

Commands:
    scan     → full pipeline (homepage, legal pages, analyzer)
    extract  → fetch one page, print its cleaned text and signals
    legal    → legal-page discovery only
    serve    → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from complyscan.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import Optional

import typer

from cli.rendering import render_analysis, render_signals
from complyscan.config import settings
from complyscan.errors import FetchError, ScanError
from complyscan.logging_setup import configure_logging

app = typer.Typer(
    name="complyscan",
    help="ComplyScan website compliance scanner.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING …)."
    ),
) -> None:
    configure_logging(log_level or settings.log_level)


def _fail(exc: ScanError, prefix: str) -> None:
    typer.echo(f"[{prefix}] ❌ {exc.code}: {exc.message}", err=True)
    raise typer.Exit(1)


# ---------------------------------------------------------------------------
# scan
# ---------------------------------------------------------------------------
@app.command("scan")
def scan(
    domain: str = typer.Argument(..., help="Domain to scan, e.g. example.com."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON response."),
    payments: bool = typer.Option(False, "--payments/--no-payments", help="Site takes payments."),
    personal_data: bool = typer.Option(
        True, "--personal-data/--no-personal-data", help="Site collects personal data."
    ),
    tracking: bool = typer.Option(True, "--tracking/--no-tracking", help="Site uses tracking."),
    accounts: bool = typer.Option(False, "--accounts/--no-accounts", help="Site has user accounts."),
    eu: bool = typer.Option(True, "--eu/--no-eu", help="Site targets EU visitors."),
    usa: bool = typer.Option(True, "--usa/--no-usa", help="Site targets US visitors."),
    children: bool = typer.Option(
        False, "--children/--no-children", help="Site has content aimed at children."
    ),
    deadline: Optional[float] = typer.Option(
        None, "--deadline", help="Seconds allowed for fetching (0 disables)."
    ),
) -> None:
    """Run a full compliance scan of DOMAIN."""
    from complyscan.scanner.orchestrator import scan_domain

    options = {
        "hasPayments": payments,
        "collectsPersonalData": personal_data,
        "usesTracking": tracking,
        "hasUserAccounts": accounts,
        "targetsEU": eu,
        "targetsUSA": usa,
        "hasChildrenContent": children,
    }

    if not as_json:
        typer.echo(f"[scan] Scanning {domain!r} …")
    try:
        result = asyncio.run(scan_domain(domain, options, deadline=deadline))
    except ScanError as exc:
        if as_json:
            typer.echo(json.dumps(exc.to_dict(), indent=2))
            raise typer.Exit(1)
        _fail(exc, "scan")
        return

    if as_json:
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False))
        return

    typer.echo(f"[scan] URL           : {result['url']}")
    typer.echo(f"[scan] Text analysed : {result['textAnalyzed']} chars")
    typer.echo(f"[scan] Scan time     : {result['scanTime']}")
    typer.echo("")
    typer.echo(render_signals(result))
    typer.echo("")
    typer.echo(render_analysis(result["analysis"]))


# ---------------------------------------------------------------------------
# extract
# ---------------------------------------------------------------------------
async def _extract(url: str) -> dict:
    from complyscan.scraper import extract_all_signals, extract_homepage_text, fetch_page, new_client

    async with new_client() as client:
        fetched = await fetch_page(client, url)
    document = extract_homepage_text(fetched.html, url=fetched.final_url)
    signals = extract_all_signals(fetched.html, fetched.final_url)
    return {
        "url": fetched.final_url,
        "status": fetched.status_code,
        "title": document.title,
        "text": document.text,
        "textLength": document.text_length,
        "truncated": document.truncated,
        "cookieInfo": signals.cookies.to_dict(),
        "trackingInfo": signals.tracking.to_dict(),
        "copyrightInfo": signals.copyright.to_dict(),
        "legalLinks": {c.value: link for c, link in signals.legal_links.items()},
    }


@app.command("extract")
def extract(
    url: str = typer.Argument(..., help="Page URL to fetch."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON result."),
) -> None:
    """Fetch URL, print its cleaned text and the detected signals."""
    try:
        result = asyncio.run(_extract(url))
    except FetchError as exc:
        typer.echo(f"[extract] ❌ {exc.kind.value}: {exc.detail}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False))
        return

    typer.echo(f"[extract] HTTP {result['status']} {result['url']}")
    typer.echo(f"[extract] Title  : {result['title'] or '(none)'}")
    typer.echo(
        f"[extract] Length : {result['textLength']}"
        + (" (truncated)" if result["truncated"] else "")
    )
    typer.echo("")
    typer.echo(render_signals(result))
    if result["legalLinks"]:
        typer.echo("Legal links:")
        for category, link in result["legalLinks"].items():
            typer.echo(f"    {category:<11} {link}")
    typer.echo("")
    typer.echo(result["text"])


# ---------------------------------------------------------------------------
# legal
# ---------------------------------------------------------------------------
async def _legal(url: str) -> dict:
    from complyscan.scanner.legal_pages import resolve_legal_pages
    from complyscan.scraper import fetch_page, new_client

    async with new_client() as client:
        fetched = await fetch_page(client, url)
    async with new_client(settings.legal_page_max_redirects) as client:
        pages = await resolve_legal_pages(client, fetched.final_url, fetched.html)
    return {category.value: entry.to_dict(include_text=True) for category, entry in pages.items()}


@app.command("legal")
def legal(
    url: str = typer.Argument(..., help="Homepage URL, e.g. https://example.com."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON result."),
) -> None:
    """Discover and fetch the legal pages of the site at URL."""
    typer.echo(f"[legal] Looking for legal pages of {url!r} …", err=as_json)
    try:
        pages = asyncio.run(_legal(url))
    except FetchError as exc:
        typer.echo(f"[legal] ❌ {exc.kind.value}: {exc.detail}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(pages, indent=2, ensure_ascii=False))
        return

    found = 0
    for category, entry in pages.items():
        if entry["found"]:
            found += 1
            length = len(entry["text"] or "")
            typer.echo(
                f"  ✅ {category:<11} {entry['url']}  ({entry['discoveryMethod']}, {length} chars)"
            )
        else:
            typer.echo(f"  ❌ {category:<11} not found")
    typer.echo(f"[legal] {found}/{len(pages)} legal pages found.")


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(3001, help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes."),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("complyscan.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
