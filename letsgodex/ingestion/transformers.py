"""ABOUTME: Transforms fetched PokeAPI payloads into display-ready values.
ABOUTME: Handles flavor text selection/cleanup, Let's Go learnsets, type names, and training facts."""

import re
from dataclasses import dataclass

from letsgodex.models import FlavorTextEntry, Pokemon, PokemonSpecies
from letsgodex.utils.formatting import format_name

ENGLISH = "en"
LEVEL_UP_METHOD = "level-up"
MISSING_VALUE = "—"

_WHITESPACE_PATTERN = re.compile(r"\s+")


@dataclass
class LearnableMove:
    """A move a Pokemon can learn in the configured version group."""

    name: str
    url: str
    learn_method: str
    level: int


def clean_flavor_text(text: str) -> str:
    """Normalize raw flavor text (form feeds, hard line breaks, doubled spaces).

    Examples:
        >>> clean_flavor_text("When several of\\nthese POKéMON\\fgather")
        'When several of these POKéMON gather'
    """
    text = text.replace("\f", " ").replace("\n", " ")
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def get_english_flavor_text(entries: list[FlavorTextEntry], version: str) -> str:
    """Pick the English Pokedex entry, preferring the given game version.

    Args:
        entries: Species flavor text entries.
        version: Preferred game version name (e.g., "lets-go-pikachu").

    Returns:
        Cleaned flavor text, or an empty string when there is no English entry.
    """
    english = [entry for entry in entries if entry.language.name == ENGLISH]

    for entry in english:
        if entry.version is not None and entry.version.name == version:
            return clean_flavor_text(entry.flavor_text)

    return clean_flavor_text(english[0].flavor_text) if english else ""


def _move_sort_key(move: LearnableMove) -> tuple[int, int, str]:
    """Level-up moves first (by level), then everything else alphabetically."""
    if move.learn_method == LEVEL_UP_METHOD:
        return (0, move.level, "")
    return (1, 0, move.name)


def get_lets_go_moves(pokemon: Pokemon, version_group: str) -> list[LearnableMove]:
    """Collect the moves a Pokemon learns in a version group.

    Args:
        pokemon: Pokemon payload with its full move list.
        version_group: Version group name (e.g., "lets-go-pikachu-lets-go-eevee").

    Returns:
        Learnable moves sorted with level-up moves first.
    """
    moves: list[LearnableMove] = []

    for entry in pokemon.moves:
        detail = next(
            (d for d in entry.version_group_details if d.version_group.name == version_group),
            None,
        )
        if detail is None:
            continue
        moves.append(
            LearnableMove(
                name=entry.move.name,
                url=entry.move.url,
                learn_method=detail.move_learn_method.name,
                level=detail.level_learned_at,
            )
        )

    return sorted(moves, key=_move_sort_key)


def get_type_names(pokemon: Pokemon) -> list[str]:
    """Return a Pokemon's type names in slot order."""
    return [t.type.name for t in sorted(pokemon.types, key=lambda t: t.slot)]


def get_training_info(pokemon: Pokemon, species: PokemonSpecies | None) -> dict[str, str]:
    """Collect the training facts shown on the detail page.

    Args:
        pokemon: Pokemon payload (base experience).
        species: Species payload (growth rate, base happiness), None if unavailable.

    Returns:
        Display values keyed by label, with "—" for unknown values.
    """
    growth_rate = species.growth_rate if species is not None else None
    base_happiness = species.base_happiness if species is not None else None
    return {
        "Base Exp": str(pokemon.base_experience) if pokemon.base_experience is not None else MISSING_VALUE,
        "Growth Rate": format_name(growth_rate.name) if growth_rate is not None else MISSING_VALUE,
        "Base Happiness": str(base_happiness) if base_happiness is not None else MISSING_VALUE,
    }
