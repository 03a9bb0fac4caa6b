# src/drupalfront/cli.py
"""
Command-line interface for the Drupal front end.

This module provides CLI commands to:
- Load the work/page collections and print the normalized records
- Resolve a path alias through Drupal's router
- Print the SEO metatags behind a path alias
- Serve the contact form endpoint
"""

from dotenv import load_dotenv
load_dotenv()  # looks for a .env file in the working directory

import json
from typing import Optional

import httpx
import typer

from drupalfront.clients.drupal import DrupalClient, DrupalError
from drupalfront.config import ConfigurationError, Settings, configure_logging
from drupalfront.pipeline.loader import COLLECTIONS, load_collection
from drupalfront.pipeline.metatag import meta_for_alias

# Typer app instance for CLI commands
app = typer.Typer(help="Drupal JSON:API mirror and contact relay")


def _settings() -> Settings:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return settings


@app.command()
def load(
    kind: str = typer.Argument(..., help="Collection to load: work or page"),
    limit: int = typer.Option(0, "--limit", help="Only print the first N records (0 = all)"),
    ids_only: bool = typer.Option(False, "--ids-only", help="Print record ids instead of records"),
):
    """
    Fetch one collection from Drupal → normalize → print as JSON.
    Exits non-zero when nothing could be loaded.
    """
    if kind not in COLLECTIONS:
        raise typer.BadParameter(f"expected one of {', '.join(sorted(COLLECTIONS))}", param_hint="KIND")

    result = load_collection(_settings(), kind)

    records = list(result.records.items())
    if limit:
        records = records[:limit]

    typer.echo(json.dumps({
        "outcome": result.outcome.value,
        "loaded": len(result.records),
        "skipped": result.skipped,
        "error": result.error,
        "records": [rid for rid, _ in records] if ids_only else {rid: rec.as_dict() for rid, rec in records},
    }, indent=2))

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def alias(path: str = typer.Argument(..., help="Path alias, e.g. /about")):
    """
    Ask Drupal which entity sits behind a path alias.
    """
    try:
        with DrupalClient(_settings()) as client:
            resolved = client.resolve_alias(path)
    except ConfigurationError as e:
        raise SystemExit(str(e))
    except httpx.HTTPError as e:
        typer.echo(f"Drupal error: {e}", err=True)
        raise typer.Exit(code=1)

    if resolved is None:
        typer.echo(f"No route for {path!r}", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(resolved, indent=2))


@app.command()
def meta(path: str = typer.Argument(..., help="Path alias, e.g. /about")):
    """
    Debug: print title/description/Open Graph/canonical for a path alias.
    """
    try:
        with DrupalClient(_settings()) as client:
            parsed = meta_for_alias(client, path)
    except ConfigurationError as e:
        raise SystemExit(str(e))
    except (DrupalError, httpx.HTTPError) as e:
        typer.echo(f"Drupal error: {e}", err=True)
        raise typer.Exit(code=1)

    if parsed is None:
        typer.echo(f"No route for {path!r}", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(parsed, indent=2))


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8080, "--port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
    root_path: Optional[str] = typer.Option(None, "--root-path", help="ASGI root_path behind a proxy"),
):
    """
    Run the contact form endpoint (POST /api/contact) with uvicorn.
    """
    import uvicorn

    settings = _settings()
    typer.echo(f"Serving contact relay on http://{host}:{port}")
    uvicorn.run(
        "drupalfront.web:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        root_path=root_path or "",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
