"""ABOUTME: CLI entry point for letsgodex commands.
ABOUTME: Provides fetch, evolution, matchup, and ui commands via Typer."""

import asyncio
import subprocess
import sys
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.table import Table

from letsgodex.config import get_dex_config
from letsgodex.ingestion import get_evolution_chain, get_multiple_type_data, get_pokemon_species, warm_cache
from letsgodex.logs import init_logging
from letsgodex.settings import settings
from letsgodex.utils.evolution_chain import describe_condition, flatten_evolution_chain
from letsgodex.utils.formatting import capitalize, format_pokemon_id
from letsgodex.utils.type_effectiveness import (
    TYPES,
    combine_type_data,
    format_multiplier,
    get_immunities,
    get_multiplier,
    get_resistances,
    get_weaknesses,
)

app = typer.Typer(
    name="letsgodex",
    help="Let's Go Pokedex companion: PokeAPI cache, evolution chains, and type matchups.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main() -> None:
    """Initialize logging for every command."""
    init_logging(settings.logging_config_path)


@app.command()
def fetch(
    force: bool = typer.Option(False, "--force", "-f", help="Re-download cached responses"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
) -> None:
    """Download every Pokemon and type payload into the local cache."""
    dex_config = get_dex_config()
    if verbose:
        suffix = " (force refresh)" if force else ""
        console.print(
            f"[blue]Caching {dex_config.max_pokemon} Pokémon and {len(TYPES)} types to {settings.cache_dir}{suffix}[/]"
        )
    try:
        counts = asyncio.run(warm_cache(dex_config, force=force))
    except httpx.HTTPError as e:
        console.print(f"[red]Error fetching data:[/] {e}")
        raise typer.Exit(1) from None

    console.print(f"[green]Cached {counts['pokemon']} Pokémon and {counts['types']} types.[/]")


@app.command()
def evolution(
    pokemon: str = typer.Argument(..., help="Pokemon name or dex number"),
) -> None:
    """Print the evolution chain of a Pokemon with its triggers."""
    dex_config = get_dex_config()
    try:
        species = asyncio.run(get_pokemon_species(pokemon.lower()))
        if species is None:
            console.print(f"[red]Error:[/] Unknown Pokémon '{pokemon}'")
            raise typer.Exit(1)
        if species.evolution_chain is None:
            console.print(f"[yellow]{capitalize(species.name)} has no evolution chain.[/]")
            return
        chain = asyncio.run(get_evolution_chain(species.evolution_chain.url))
    except httpx.HTTPError as e:
        console.print(f"[red]Error fetching data:[/] {e}")
        raise typer.Exit(1) from None

    stages = flatten_evolution_chain(chain.chain, dex_config.max_pokemon)

    table = Table(title=f"Evolution chain of {capitalize(species.name)}")
    table.add_column("#", justify="right")
    table.add_column("Pokémon")
    table.add_column("Trigger")
    for stage in stages:
        table.add_row(
            format_pokemon_id(stage.numeric_id),
            capitalize(stage.name),
            describe_condition(stage.conditions),
        )
    console.print(table)


@app.command()
def matchup(
    types: list[str] = typer.Argument(..., help="One or two defending types, e.g. 'water ground'"),
) -> None:
    """Print the damage a Pokemon of the given type(s) takes from each attacking type."""
    names = [name.lower() for name in types]
    unknown = [name for name in names if name not in TYPES]
    if unknown:
        console.print(f"[red]Error:[/] Unknown type(s): {', '.join(unknown)}")
        raise typer.Exit(1)

    try:
        type_data = asyncio.run(get_multiple_type_data(list(dict.fromkeys(names))))
    except httpx.HTTPError as e:
        console.print(f"[red]Error fetching data:[/] {e}")
        raise typer.Exit(1) from None

    effectiveness = combine_type_data(type_data)

    console.print(f"[bold]Defending as {' / '.join(capitalize(n) for n in dict.fromkeys(names))}[/]")
    for label, style, type_names in (
        ("Weak to", "red", get_weaknesses(effectiveness)),
        ("Resists", "green", get_resistances(effectiveness)),
        ("Immune to", "white", get_immunities(effectiveness)),
    ):
        entries = ", ".join(
            f"{capitalize(name)} {format_multiplier(get_multiplier(effectiveness, name))}" for name in type_names
        )
        console.print(f"[{style}]{label}:[/] {entries or '-'}")


@app.command()
def ui(
    port: int = typer.Option(8501, "--port", "-p", help="Port for Streamlit server"),
) -> None:
    """Launch the Streamlit UI."""
    app_path = Path(__file__).parent / "app" / "main.py"

    if not app_path.exists():
        console.print(f"[red]Error:[/] Streamlit app not found at {app_path}")
        raise typer.Exit(1)

    console.print(f"[blue]Starting Streamlit UI on port {port}...[/]")

    try:
        # All arguments are controlled/validated - not user-provided strings
        subprocess.run(  # noqa: S603
            [sys.executable, "-m", "streamlit", "run", str(app_path), "--server.port", str(port)],
            check=True,
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]UI stopped.[/]")
    except subprocess.CalledProcessError as e:
        console.print(f"[red]Streamlit failed:[/] {e}")
        raise typer.Exit(1) from None


if __name__ == "__main__":
    app()
