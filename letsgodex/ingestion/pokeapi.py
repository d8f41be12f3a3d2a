"""ABOUTME: Async PokeAPI client with a cache-forever JSON store on disk.
ABOUTME: Fetches Pokemon, species, evolution chains, types, and moves, fanning out with asyncio.gather."""

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from letsgodex.config import DexConfig, get_dex_config
from letsgodex.models import (
    EvolutionChain,
    Move,
    Pokemon,
    PokemonListResponse,
    PokemonSpecies,
    PokemonTypeData,
)
from letsgodex.settings import settings
from letsgodex.utils.evolution_chain import derive_numeric_id
from letsgodex.utils.type_effectiveness import TYPES

logger = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404

_CACHE_NAME_PATTERN = re.compile(r"[^A-Za-z0-9]+")


@dataclass
class SearchResult:
    """A Pokemon list entry matching a search query."""

    name: str
    id: int
    url: str


def _new_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(follow_redirects=True, timeout=settings.HTTP_TIMEOUT)


def resolve_url(endpoint: str) -> str:
    """Turn a relative endpoint ("/pokemon/25") into a full URL; full URLs pass through."""
    if endpoint.startswith("http"):
        return endpoint
    return f"{settings.API_BASE_URL}{endpoint}"


def cache_filename(url: str) -> str:
    """Build a filesystem-safe cache file name for a URL.

    Examples:
        >>> cache_filename("https://pokeapi.co/api/v2/pokemon/25/")
        'pokeapi_co_api_v2_pokemon_25.json'
    """
    without_scheme = url.split("://", 1)[-1]
    return _CACHE_NAME_PATTERN.sub("_", without_scheme).strip("_") + ".json"


async def fetch_json(
    endpoint: str,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
    force: bool = False,
) -> Any:
    """Fetch a PokeAPI resource as JSON, serving it from the disk cache when present.

    PokeAPI data does not change, so cached responses never expire.

    Args:
        endpoint: Relative endpoint (e.g., "/type/fire") or full resource URL.
        client: Optional httpx client for connection reuse.
        cache_dir: Directory for cached responses. Uses settings default if not provided.
        force: If True, re-download even if a cached response exists.

    Returns:
        Parsed JSON body.

    Raises:
        httpx.HTTPStatusError: If the request fails.
    """
    url = resolve_url(endpoint)

    if cache_dir is None:
        cache_dir = settings.cache_dir

    cache_path = cache_dir / cache_filename(url)

    if await asyncio.to_thread(cache_path.exists) and not force:
        logger.debug("Cache hit for %s", url)
        text = await asyncio.to_thread(cache_path.read_text, encoding="utf-8")
        return json.loads(text)

    await asyncio.to_thread(cache_dir.mkdir, parents=True, exist_ok=True)

    should_close_client = client is None
    if client is None:
        client = _new_client()

    try:
        logger.debug("Fetching %s", url)
        response = await client.get(url)
        response.raise_for_status()

        await asyncio.to_thread(cache_path.write_text, response.text, encoding="utf-8")
        return response.json()
    finally:
        if should_close_client:
            await client.aclose()


async def _fetch_optional(
    endpoint: str,
    client: httpx.AsyncClient | None,
    cache_dir: Path | None,
) -> Any | None:
    """Fetch JSON, returning None instead of raising when the resource does not exist."""
    try:
        return await fetch_json(endpoint, client=client, cache_dir=cache_dir)
    except httpx.HTTPStatusError as e:
        if e.response.status_code == HTTP_NOT_FOUND:
            logger.info("PokeAPI has no resource at %s", endpoint)
            return None
        raise


# ---------------------------------------------------------------------------
# Pokemon lists
# ---------------------------------------------------------------------------


async def get_pokemon_list(
    limit: int = 20,
    offset: int = 0,
    dex_config: DexConfig | None = None,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> PokemonListResponse:
    """Fetch one page of the Pokemon list, never running past the regional maximum.

    Args:
        limit: Page size.
        offset: Index of the first entry.
        dex_config: Regional dex configuration. Loads default if not provided.
        client: Optional httpx client for connection reuse.
        cache_dir: Directory for cached responses.

    Returns:
        The list page; empty when the offset is already past the regional maximum.
    """
    if dex_config is None:
        dex_config = get_dex_config()

    clamped_limit = dex_config.clamp_limit(limit, offset)
    if clamped_limit == 0:
        return PokemonListResponse(count=dex_config.max_pokemon)

    data = await fetch_json(f"/pokemon?limit={clamped_limit}&offset={offset}", client=client, cache_dir=cache_dir)
    return PokemonListResponse.model_validate(data)


async def get_pokemon_list_with_details(
    limit: int = 20,
    offset: int = 0,
    dex_config: DexConfig | None = None,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> list[Pokemon]:
    """Fetch a list page and the full payload of every entry on it concurrently.

    Args:
        limit: Page size.
        offset: Index of the first entry.
        dex_config: Regional dex configuration. Loads default if not provided.
        client: Optional httpx client for connection reuse.
        cache_dir: Directory for cached responses.

    Returns:
        Pokemon payloads in list order.
    """
    should_close_client = client is None
    if client is None:
        client = _new_client()

    try:
        list_data = await get_pokemon_list(limit, offset, dex_config, client=client, cache_dir=cache_dir)
        tasks = [fetch_json(item.url, client=client, cache_dir=cache_dir) for item in list_data.results]
        details = await asyncio.gather(*tasks)
    finally:
        if should_close_client:
            await client.aclose()

    return [Pokemon.model_validate(data) for data in details]


async def search_pokemon(
    query: str,
    dex_config: DexConfig | None = None,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> list[SearchResult]:
    """Search the regional dex by case-insensitive name substring.

    Args:
        query: Search text. Blank queries return no results without a request.
        dex_config: Regional dex configuration. Loads default if not provided.
        client: Optional httpx client for connection reuse.
        cache_dir: Directory for cached responses.

    Returns:
        Matching entries in dex order.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    if dex_config is None:
        dex_config = get_dex_config()

    all_pokemon = await get_pokemon_list(dex_config.max_pokemon, 0, dex_config, client=client, cache_dir=cache_dir)

    return [
        SearchResult(name=item.name, id=derive_numeric_id(item.url), url=item.url)
        for item in all_pokemon.results
        if needle in item.name
    ]


# ---------------------------------------------------------------------------
# Single resources
# ---------------------------------------------------------------------------


async def get_pokemon(
    id_or_name: int | str,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> Pokemon | None:
    """Fetch a Pokemon by dex number or name; None if PokeAPI does not know it."""
    data = await _fetch_optional(f"/pokemon/{id_or_name}", client, cache_dir)
    return None if data is None else Pokemon.model_validate(data)


async def get_pokemon_species(
    id_or_name: int | str,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> PokemonSpecies | None:
    """Fetch a Pokemon species by dex number or name; None if PokeAPI does not know it."""
    data = await _fetch_optional(f"/pokemon-species/{id_or_name}", client, cache_dir)
    return None if data is None else PokemonSpecies.model_validate(data)


async def get_pokemon_with_species(
    id_or_name: int | str,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> tuple[Pokemon | None, PokemonSpecies | None]:
    """Fetch a Pokemon and its species concurrently over one connection pool."""
    should_close_client = client is None
    if client is None:
        client = _new_client()

    try:
        pokemon, species = await asyncio.gather(
            get_pokemon(id_or_name, client=client, cache_dir=cache_dir),
            get_pokemon_species(id_or_name, client=client, cache_dir=cache_dir),
        )
    finally:
        if should_close_client:
            await client.aclose()

    return pokemon, species


async def get_evolution_chain(
    evolution_chain_url: str,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> EvolutionChain:
    """Fetch an evolution chain from the URL found on a species payload."""
    data = await fetch_json(evolution_chain_url, client=client, cache_dir=cache_dir)
    return EvolutionChain.model_validate(data)


async def get_move(
    name_or_id: int | str,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> Move | None:
    """Fetch a move by name or id; None if PokeAPI does not know it."""
    data = await _fetch_optional(f"/move/{name_or_id}", client, cache_dir)
    return None if data is None else Move.model_validate(data)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


async def get_type_data(
    type_name: str,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> PokemonTypeData:
    """Fetch a type's damage relations."""
    data = await fetch_json(f"/type/{type_name}", client=client, cache_dir=cache_dir)
    return PokemonTypeData.model_validate(data)


async def get_multiple_type_data(
    type_names: list[str],
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
) -> list[PokemonTypeData]:
    """Fetch several types concurrently, preserving the requested order."""
    should_close_client = client is None
    if client is None:
        client = _new_client()

    try:
        tasks = [get_type_data(name, client=client, cache_dir=cache_dir) for name in type_names]
        return list(await asyncio.gather(*tasks))
    finally:
        if should_close_client:
            await client.aclose()


# ---------------------------------------------------------------------------
# Cache warming
# ---------------------------------------------------------------------------


async def warm_cache(
    dex_config: DexConfig | None = None,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
    force: bool = False,
) -> dict[str, int]:
    """Download every Pokemon and type payload the app needs into the disk cache.

    Args:
        dex_config: Regional dex configuration. Loads default if not provided.
        client: Optional httpx client for connection reuse.
        cache_dir: Directory for cached responses.
        force: If True, re-download even if cached responses exist.

    Returns:
        Dictionary mapping resource kinds to how many were cached.
    """
    if dex_config is None:
        dex_config = get_dex_config()

    should_close_client = client is None
    if client is None:
        client = _new_client()

    try:
        list_data = PokemonListResponse.model_validate(
            await fetch_json(
                f"/pokemon?limit={dex_config.max_pokemon}&offset=0",
                client=client,
                cache_dir=cache_dir,
                force=force,
            )
        )

        pokemon_tasks = [
            fetch_json(item.url, client=client, cache_dir=cache_dir, force=force) for item in list_data.results
        ]
        type_tasks = [fetch_json(f"/type/{name}", client=client, cache_dir=cache_dir, force=force) for name in TYPES]

        pokemon_payloads = await asyncio.gather(*pokemon_tasks)
        type_payloads = await asyncio.gather(*type_tasks)
    finally:
        if should_close_client:
            await client.aclose()

    logger.info("Cached %d Pokemon and %d types", len(pokemon_payloads), len(type_payloads))
    return {"pokemon": len(pokemon_payloads), "types": len(type_payloads)}
