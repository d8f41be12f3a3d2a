# ABOUTME: Cached data access for the Streamlit pages.
# ABOUTME: Runs the async PokeAPI client synchronously and memoizes results per session server.

import asyncio

import streamlit as st

from letsgodex.config import get_dex_config
from letsgodex.ingestion.pokeapi import (
    SearchResult,
    get_evolution_chain,
    get_move,
    get_multiple_type_data,
    get_pokemon,
    get_pokemon_list_with_details,
    get_pokemon_with_species,
    search_pokemon,
)
from letsgodex.models import EvolutionChain, Move, Pokemon, PokemonSpecies, PokemonTypeData, TypeDamageRelations
from letsgodex.utils.type_effectiveness import TYPES


@st.cache_data(show_spinner=False)
def load_pokemon_page(page: int, page_size: int) -> list[Pokemon]:
    """Load one page of Pokemon with full details.

    Args:
        page: Zero-based page index.
        page_size: Entries per page.

    Returns:
        Pokemon payloads for the page.
    """
    return asyncio.run(get_pokemon_list_with_details(limit=page_size, offset=page * page_size))


@st.cache_data(show_spinner=False)
def load_pokemon(id_or_name: int | str) -> Pokemon | None:
    """Load a single Pokemon, None if unknown."""
    return asyncio.run(get_pokemon(id_or_name))


@st.cache_data(show_spinner=False)
def load_pokemon_with_species(id_or_name: int | str) -> tuple[Pokemon | None, PokemonSpecies | None]:
    """Load a Pokemon and its species together."""
    return asyncio.run(get_pokemon_with_species(id_or_name))


@st.cache_data(show_spinner=False)
def load_evolution_chain(evolution_chain_url: str) -> EvolutionChain:
    """Load an evolution chain by URL."""
    return asyncio.run(get_evolution_chain(evolution_chain_url))


@st.cache_data(show_spinner=False)
def load_move(name: str) -> Move | None:
    """Load a move by name, None if unknown."""
    return asyncio.run(get_move(name))


@st.cache_data(show_spinner=False)
def load_all_type_data() -> dict[str, PokemonTypeData]:
    """Load all 18 type payloads keyed by type name."""
    type_data = asyncio.run(get_multiple_type_data(TYPES))
    return {data.name: data for data in type_data}


def load_relations_by_type() -> dict[str, TypeDamageRelations]:
    """Damage relations of all 18 types keyed by type name."""
    return {name: data.damage_relations for name, data in load_all_type_data().items()}


@st.cache_data(show_spinner=False)
def run_search(query: str) -> list[SearchResult]:
    """Search the regional dex by name."""
    return asyncio.run(search_pokemon(query))


def get_page_count() -> int:
    """Number of list pages in the regional dex."""
    dex_config = get_dex_config()
    return -(-dex_config.max_pokemon // dex_config.page_size)
