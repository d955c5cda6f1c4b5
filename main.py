#!/usr/bin/env python3
"""
NFT Indexer CLI entrypoint
"""

import asyncio
import json
from typing import List, Optional
import typer
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from nft_indexer import CompleteNFT, NFTService, NFTServiceError
from nft_indexer.config import config
from nft_indexer.utils import setup_logging

app = typer.Typer(help="NFT Indexer - enriched NFT queries over a GraphQL indexer")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    setup_logging("DEBUG" if verbose else config.log_level)


def _shorten(value: Optional[str], size: int = 20) -> str:
    if not value:
        return "Unknown"
    return value[:size] + "..." if len(value) > size else value


def _print_nfts(nfts: List[CompleteNFT], title: str) -> None:
    table = Table(title=title)
    table.add_column("ID", style="yellow")
    table.add_column("Name", style="white")
    table.add_column("Owner", style="cyan")
    table.add_column("Listed", style="magenta")
    table.add_column("Price", style="green")

    for nft in nfts[:20]:  # Show first 20
        table.add_row(
            nft.id,
            nft.name or "Unnamed",
            (nft.owner_data.name if nft.owner_data and nft.owner_data.name else None) or _shorten(nft.owner),
            "✓" if nft.listed == 1 else "✗",
            nft.price,
        )

    console.print(table)
    if len(nfts) > 20:
        console.print(f"\n[dim]... and {len(nfts) - 20} more[/dim]")


def _save(output: Optional[str], payload) -> None:
    if output:
        with open(output, "w") as f:
            json.dump(payload, f, indent=2, default=str)
        console.print(f"\n[green]Saved to {output}[/green]")


async def _run(description: str, aw):
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(description, total=None)
        result = await aw
        progress.update(task, completed=True)
    return result


@app.command()
def nfts(
    page: int = typer.Option(1, min=1, help="Page number"),
    limit: int = typer.Option(10, min=1, help="NFTs per page"),
    fetch_all: bool = typer.Option(False, "--all", help="Fetch every NFT instead of one page"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (JSON)"),
):
    """List NFTs"""
    async def fetch():
        service = NFTService()
        if fetch_all:
            result = await _run("Fetching all NFTs...", service.get_all_nfts())
            console.print(f"\n[bold green]Found {len(result)} NFTs[/bold green]")
            _print_nfts(result, "NFTs")
            _save(output, [nft.to_wire() for nft in result])
        else:
            result = await _run(f"Fetching page {page}...", service.get_paginated_nfts(page, limit))
            console.print(f"\n[bold green]{result.total_count} NFTs in total[/bold green]")
            _print_nfts(result.data, f"NFTs - page {page}")
            _save(output, result.to_wire())

    _execute(fetch)


@app.command()
def nft(
    nft_id: str = typer.Argument(..., help="NFT id"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (JSON)"),
):
    """Show a single NFT"""
    async def fetch():
        service = NFTService()
        result = await _run(f"Fetching NFT {nft_id}...", service.get_nft(nft_id))

        table = Table(title=f"NFT {result.id}")
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Name", result.name or "Unnamed")
        table.add_row("Owner", result.owner)
        table.add_row("Creator", result.creator or "Unknown")
        table.add_row("Listed", "✓" if result.listed == 1 else "✗")
        table.add_row("Price", f"{result.price} CAPS / {result.price_tiime} TIIME")
        table.add_row("Series", f"{result.serie_id} ({result.total_listed_nft}/{result.total_nft} listed)" if result.serie_id else "None")
        table.add_row("Media", result.media.url if result.media else "None")
        table.add_row("Categories", ", ".join(c.name for c in result.categories) if result.categories else "None")
        console.print(table)
        _save(output, result.to_wire())

    _execute(fetch)


@app.command()
def owner(
    owner_id: str = typer.Argument(..., help="Owner wallet address"),
    page: int = typer.Option(1, min=1, help="Page number"),
    limit: int = typer.Option(10, min=1, help="NFTs per page"),
    fetch_all: bool = typer.Option(False, "--all", help="Fetch every NFT instead of one page"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (JSON)"),
):
    """List NFTs held by a wallet"""
    async def fetch():
        service = NFTService()
        if fetch_all:
            result = await _run(f"Fetching NFTs for {owner_id}...", service.get_nfts_from_owner(owner_id))
            console.print(f"\n[bold green]Found {len(result)} NFTs[/bold green]")
            _print_nfts(result, f"NFTs for {owner_id}")
            _save(output, [nft.to_wire() for nft in result])
        else:
            result = await _run(
                f"Fetching page {page} for {owner_id}...",
                service.get_paginated_nfts_from_owner(owner_id, page, limit),
            )
            console.print(f"\n[bold green]{result.total_count} NFTs in total[/bold green]")
            _print_nfts(result.data, f"NFTs for {owner_id} - page {page}")
            _save(output, result.to_wire())

    _execute(fetch)


def _execute(fetch) -> None:
    try:
        asyncio.run(fetch())
    except NFTServiceError as e:
        console.print(f"[bold red]{e}[/bold red] [dim]({e.kind.value})[/dim]")
        raise typer.Exit(code=1)


@app.command()
def serve(
    port: int = typer.Option(config.api_port, "--port", "-p", help="Port to run the API on"),
    host: str = typer.Option("0.0.0.0", "--host", help="Host to bind to"),
):
    """Start the HTTP API"""
    import uvicorn
    from nft_indexer.api.app import app as api_app

    console.print(f"[bold green]Starting NFT API on {host}:{port}[/bold green]")
    console.print(f"[dim]Endpoints:[/dim]")
    console.print(f"  GET  /api/nfts")
    console.print(f"  GET  /api/nfts/{{nft_id}}")
    console.print(f"  GET  /api/nfts/owner/{{owner_id}}")
    console.print(f"  GET  /health")

    uvicorn.run(api_app, host=host, port=port)


if __name__ == "__main__":
    app()
