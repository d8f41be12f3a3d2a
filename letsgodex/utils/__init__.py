# ABOUTME: Utils package for letsgodex pure helpers.
# ABOUTME: Evolution chain flattening, type effectiveness, and display formatting.

from letsgodex.utils.evolution_chain import (
    FlatEvolutionStage,
    derive_numeric_id,
    describe_condition,
    flatten_evolution_chain,
)
from letsgodex.utils.type_effectiveness import (
    TYPES,
    combine_type_data,
    combine_type_effectiveness,
    format_multiplier,
    get_immunities,
    get_multiplier,
    get_resistances,
    get_weaknesses,
)

__all__ = [
    "TYPES",
    "FlatEvolutionStage",
    "combine_type_data",
    "combine_type_effectiveness",
    "derive_numeric_id",
    "describe_condition",
    "flatten_evolution_chain",
    "format_multiplier",
    "get_immunities",
    "get_multiplier",
    "get_resistances",
    "get_weaknesses",
]
