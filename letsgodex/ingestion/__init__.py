"""ABOUTME: Ingestion module for fetching data from PokeAPI.
ABOUTME: Handles cached async downloads and payload transformations."""

from letsgodex.ingestion.pokeapi import (
    SearchResult,
    fetch_json,
    get_evolution_chain,
    get_move,
    get_multiple_type_data,
    get_pokemon,
    get_pokemon_list,
    get_pokemon_list_with_details,
    get_pokemon_species,
    get_pokemon_with_species,
    get_type_data,
    search_pokemon,
    warm_cache,
)
from letsgodex.ingestion.transformers import (
    LearnableMove,
    clean_flavor_text,
    get_english_flavor_text,
    get_lets_go_moves,
    get_training_info,
    get_type_names,
)

__all__ = [
    "LearnableMove",
    "SearchResult",
    "clean_flavor_text",
    "fetch_json",
    "get_english_flavor_text",
    "get_evolution_chain",
    "get_lets_go_moves",
    "get_training_info",
    "get_move",
    "get_multiple_type_data",
    "get_pokemon",
    "get_pokemon_list",
    "get_pokemon_list_with_details",
    "get_pokemon_species",
    "get_pokemon_with_species",
    "get_type_data",
    "get_type_names",
    "search_pokemon",
    "warm_cache",
]
