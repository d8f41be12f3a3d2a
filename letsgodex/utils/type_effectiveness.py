# ABOUTME: Combines PokeAPI type damage relations into incoming damage multipliers.
# ABOUTME: Provides lookups with the implicit 1x default and weak/resist/immune partitions.

from collections.abc import Iterable, Mapping

from letsgodex.models import PokemonTypeData, TypeDamageRelations

# Effectiveness thresholds
SUPER_EFFECTIVE_THRESHOLD = 2.0
RESISTANCE_THRESHOLD = 0.5
NEUTRAL_VALUE = 1.0
IMMUNITY_VALUE = 0.0

DOUBLE_DAMAGE = 2.0
HALF_DAMAGE = 0.5
NO_DAMAGE = 0.0

TYPES: list[str] = [
    "normal",
    "fire",
    "water",
    "electric",
    "grass",
    "ice",
    "fighting",
    "poison",
    "ground",
    "flying",
    "psychic",
    "bug",
    "rock",
    "ghost",
    "dragon",
    "dark",
    "steel",
    "fairy",
]

MULTIPLIER_LABELS: dict[float, str] = {
    4.0: "4×",
    2.0: "2×",
    1.0: "1×",
    0.5: "½×",
    0.25: "¼×",
    0.0: "0×",
}


def combine_type_effectiveness(relations: Iterable[TypeDamageRelations]) -> dict[str, float]:
    """Combine damage relation tables into a defender's incoming multiplier map.

    Every attacking type starts at an implicit 1x. For each table, types in
    ``double_damage_from`` are multiplied by 2, ``half_damage_from`` by 0.5 and
    ``no_damage_from`` by 0. Everything is a multiplication, so the table order
    does not matter and a 0 can never be undone.

    Args:
        relations: Damage relations of each of the defender's types (usually one or two).

    Returns:
        Mapping of attacking type name to multiplier. Types that were never
        mentioned are absent and count as 1x (see get_multiplier).

    Examples:
        A Water/Ground defender takes 4x from Grass and 0x from Electric.
    """
    effectiveness: dict[str, float] = {}

    for table in relations:
        for resource in table.double_damage_from:
            effectiveness[resource.name] = effectiveness.get(resource.name, NEUTRAL_VALUE) * DOUBLE_DAMAGE
        for resource in table.half_damage_from:
            effectiveness[resource.name] = effectiveness.get(resource.name, NEUTRAL_VALUE) * HALF_DAMAGE
        for resource in table.no_damage_from:
            effectiveness[resource.name] = effectiveness.get(resource.name, NEUTRAL_VALUE) * NO_DAMAGE

    return effectiveness


def combine_type_data(type_data: Iterable[PokemonTypeData]) -> dict[str, float]:
    """Combine full ``/type`` payloads (see combine_type_effectiveness)."""
    return combine_type_effectiveness(data.damage_relations for data in type_data)


def get_multiplier(effectiveness: Mapping[str, float], attacking_type: str) -> float:
    """Look up the multiplier of an attacking type, defaulting to 1x."""
    return effectiveness.get(attacking_type, NEUTRAL_VALUE)


def _ordered_types(effectiveness: Mapping[str, float]) -> list[str]:
    """Canonical type order, followed by any unknown type names alphabetically."""
    extra = sorted(name for name in effectiveness if name not in TYPES)
    return [*TYPES, *extra]


def get_weaknesses(effectiveness: Mapping[str, float]) -> list[str]:
    """Return attacking types at >=2x against the defender."""
    return [
        atk_type
        for atk_type in _ordered_types(effectiveness)
        if get_multiplier(effectiveness, atk_type) >= SUPER_EFFECTIVE_THRESHOLD
    ]


def get_resistances(effectiveness: Mapping[str, float]) -> list[str]:
    """Return attacking types at <=0.5x against the defender (excluding immunities)."""
    return [
        atk_type
        for atk_type in _ordered_types(effectiveness)
        if IMMUNITY_VALUE < get_multiplier(effectiveness, atk_type) <= RESISTANCE_THRESHOLD
    ]


def get_immunities(effectiveness: Mapping[str, float]) -> list[str]:
    """Return attacking types that deal no damage to the defender."""
    return [
        atk_type
        for atk_type in _ordered_types(effectiveness)
        if get_multiplier(effectiveness, atk_type) == IMMUNITY_VALUE
    ]


def format_multiplier(multiplier: float) -> str:
    """Format a multiplier for display, e.g. 0.25 -> "¼×"."""
    return MULTIPLIER_LABELS.get(multiplier, f"{multiplier:g}×")
