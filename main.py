#!/usr/bin/env python3
"""
nftkit CLI entrypoint
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from nftkit import NFTKit
from nftkit.exceptions import NftkitError

app = typer.Typer(help="nftkit - inspect ERC-1155 editions and ERC-721 collections")
console = Console()


def _shorten(value: Optional[str], limit: int = 20) -> str:
    if not value:
        return "Unknown"
    return value[:limit] + "..." if len(value) > limit else value


def _run(description: str, fetch: Callable[[NFTKit], Awaitable[Any]]) -> Any:
    """Run a fetch with a spinner and map library errors to a clean exit"""

    async def runner():
        kit = NFTKit()
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                task = progress.add_task(description, total=None)
                result = await fetch(kit)
                progress.update(task, completed=True)
            return result
        finally:
            await kit.close()

    try:
        return asyncio.run(runner())
    except (NftkitError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


def _save(items: List[Any], output: Optional[str]):
    if output:
        with open(output, "w") as f:
            json.dump([item.model_dump() for item in items], f, indent=2, default=str)
        console.print(f"\n[green]Saved to {output}[/green]")


def _edition_table(title: str, editions: List[Any], with_owned: bool = False) -> Table:
    table = Table(title=title)
    table.add_column("Token ID", style="yellow")
    table.add_column("Name", style="white")
    table.add_column("Supply", style="cyan")
    if with_owned:
        table.add_column("Owned", style="green")
    table.add_column("Image", style="magenta")

    for edition in editions:
        row = [
            str(edition.metadata.id),
            edition.metadata.name or "Unnamed",
            str(edition.supply),
        ]
        if with_owned:
            row.append(str(edition.quantity_owned))
        row.append(_shorten(edition.metadata.image, 40))
        table.add_row(*row)
    return table


def _nft_table(title: str, nfts: List[Any]) -> Table:
    table = Table(title=title)
    table.add_column("Token ID", style="yellow")
    table.add_column("Name", style="white")
    table.add_column("Owner", style="cyan")
    table.add_column("Image", style="magenta")

    for nft in nfts:
        table.add_row(
            str(nft.metadata.id),
            nft.metadata.name or "Unnamed",
            _shorten(nft.owner),
            _shorten(nft.metadata.image, 40),
        )
    return table


@app.command()
def edition_get(
    contract: str = typer.Argument(..., help="ERC-1155 contract address"),
    token_id: int = typer.Argument(..., help="Token ID"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (JSON)"),
):
    """Get one edition with its supply"""
    edition = _run(
        f"Fetching token {token_id} of {contract}...",
        lambda kit: kit.get_edition(contract).get(token_id),
    )
    console.print(_edition_table(f"Edition: {contract}", [edition]))
    _save([edition], output)


@app.command()
def edition_all(
    contract: str = typer.Argument(..., help="ERC-1155 contract address"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (JSON)"),
):
    """Get every edition in a contract"""
    outcome = _run(
        f"Fetching editions of {contract}...",
        lambda kit: kit.get_edition(contract).get_all_detailed(),
    )
    console.print(f"\n[bold green]Found {len(outcome.succeeded)} editions[/bold green]")
    if outcome.failed:
        console.print(f"[yellow]Could not resolve token IDs: {escape(str(outcome.failed_ids))}[/yellow]")
    if outcome.succeeded:
        console.print(_edition_table(f"Editions: {contract}", outcome.succeeded))
    _save(outcome.succeeded, output)


@app.command()
def edition_owned(
    contract: str = typer.Argument(..., help="ERC-1155 contract address"),
    address: Optional[str] = typer.Option(None, "--address", "-a", help="Holder address (defaults to signer)"),
    skip_empty: bool = typer.Option(False, "--skip-empty", help="Hide editions with zero balance"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (JSON)"),
):
    """Get editions held by an address"""
    owned = _run(
        f"Fetching balances in {contract}...",
        lambda kit: kit.get_edition(contract).get_owned(address, skip_empty=skip_empty),
    )
    console.print(f"\n[bold green]Found {len(owned)} editions[/bold green]")
    if owned:
        console.print(_edition_table(f"Held in {contract}", owned, with_owned=True))
    _save(owned, output)


@app.command()
def nft_get(
    contract: str = typer.Argument(..., help="ERC-721 contract address"),
    token_id: int = typer.Argument(..., help="Token ID"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (JSON)"),
):
    """Get one NFT with its owner"""
    nft = _run(
        f"Fetching token {token_id} of {contract}...",
        lambda kit: kit.get_nft_collection(contract).get(token_id),
    )
    console.print(_nft_table(f"NFT: {contract}", [nft]))
    _save([nft], output)


@app.command()
def nft_all(
    contract: str = typer.Argument(..., help="ERC-721 contract address"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (JSON)"),
):
    """Get every NFT in a collection"""
    outcome = _run(
        f"Fetching collection {contract}...",
        lambda kit: kit.get_nft_collection(contract).get_all_detailed(),
    )
    console.print(f"\n[bold green]Found {len(outcome.succeeded)} NFTs in collection[/bold green]")
    if outcome.failed:
        console.print(f"[yellow]Could not resolve token IDs: {escape(str(outcome.failed_ids))}[/yellow]")
    if outcome.succeeded:
        console.print(_nft_table(f"Collection: {contract}", outcome.succeeded[:50]))
        if len(outcome.succeeded) > 50:
            console.print(f"\n[dim]... and {len(outcome.succeeded) - 50} more[/dim]")
    _save(outcome.succeeded, output)


@app.command()
def nft_owned(
    contract: str = typer.Argument(..., help="ERC-721 contract address"),
    address: Optional[str] = typer.Option(None, "--address", "-a", help="Holder address (defaults to signer)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (JSON)"),
):
    """Get NFTs held by an address"""
    owned = _run(
        f"Fetching tokens held in {contract}...",
        lambda kit: kit.get_nft_collection(contract).get_owned(address),
    )
    console.print(f"\n[bold green]Found {len(owned)} NFTs[/bold green]")
    if owned:
        console.print(_nft_table(f"Held in {contract}", owned))
    _save(owned, output)


if __name__ == "__main__":
    app()
