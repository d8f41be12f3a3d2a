"""ABOUTME: Pydantic models for the PokeAPI payloads the app consumes.
ABOUTME: Covers Pokemon, species, evolution chains, type damage relations, and moves."""

from typing import Any

from pydantic import BaseModel, Field


class NamedResource(BaseModel):
    """Reference to another PokeAPI resource, e.g. ``{"name": "pikachu", "url": ".../pokemon/25/"}``."""

    name: str
    url: str = ""


class ApiResource(BaseModel):
    """Unnamed resource reference (only a URL)."""

    url: str


# ---------------------------------------------------------------------------
# Pokemon
# ---------------------------------------------------------------------------


class PokemonStat(BaseModel):
    base_stat: int
    effort: int = 0
    stat: NamedResource


class PokemonType(BaseModel):
    slot: int
    type: NamedResource


class PokemonAbility(BaseModel):
    ability: NamedResource
    is_hidden: bool = False
    slot: int = 1


class MoveVersionGroupDetail(BaseModel):
    level_learned_at: int = 0
    move_learn_method: NamedResource
    version_group: NamedResource


class PokemonMove(BaseModel):
    move: NamedResource
    version_group_details: list[MoveVersionGroupDetail] = Field(default_factory=list)


class PokemonSprites(BaseModel):
    front_default: str | None = None
    front_shiny: str | None = None
    back_default: str | None = None
    back_shiny: str | None = None
    other: dict[str, Any] = Field(default_factory=dict)


class Pokemon(BaseModel):
    """Shape returned by ``GET /pokemon/{id or name}``.

    Attributes:
        id: National dex number.
        height: Height in decimetres.
        weight: Weight in hectograms.
        species: Reference used to look up flavor text and the evolution chain.
    """

    id: int
    name: str
    base_experience: int | None = None
    height: int = 0
    weight: int = 0
    is_default: bool = True
    order: int = 0
    abilities: list[PokemonAbility] = Field(default_factory=list)
    moves: list[PokemonMove] = Field(default_factory=list)
    sprites: PokemonSprites = Field(default_factory=PokemonSprites)
    stats: list[PokemonStat] = Field(default_factory=list)
    types: list[PokemonType] = Field(default_factory=list)
    species: NamedResource


class PokemonListResponse(BaseModel):
    """Paginated list returned by ``GET /pokemon?limit=..&offset=..``."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[NamedResource] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Species
# ---------------------------------------------------------------------------


class FlavorTextEntry(BaseModel):
    flavor_text: str
    language: NamedResource
    version: NamedResource | None = None


class GenusEntry(BaseModel):
    genus: str
    language: NamedResource


class PokemonSpecies(BaseModel):
    """Shape returned by ``GET /pokemon-species/{id}``."""

    id: int
    name: str
    base_happiness: int | None = None
    capture_rate: int = 0
    color: NamedResource | None = None
    evolution_chain: ApiResource | None = None
    flavor_text_entries: list[FlavorTextEntry] = Field(default_factory=list)
    genera: list[GenusEntry] = Field(default_factory=list)
    is_legendary: bool = False
    is_mythical: bool = False
    shape: NamedResource | None = None
    growth_rate: NamedResource | None = None


# ---------------------------------------------------------------------------
# Evolution chains
# ---------------------------------------------------------------------------


class EvolutionDetail(BaseModel):
    """One way of reaching a species from its parent in the chain.

    ``trigger.name`` is e.g. "level-up", "use-item", "trade"; the remaining fields
    are optional qualifiers and are None (or "" for time_of_day) when unused.
    """

    trigger: NamedResource
    item: NamedResource | None = None
    min_level: int | None = None
    min_happiness: int | None = None
    time_of_day: str = ""
    held_item: NamedResource | None = None
    known_move: NamedResource | None = None
    location: NamedResource | None = None


class ChainLink(BaseModel):
    """Recursive node of an evolution chain; the root is always the base form."""

    species: NamedResource
    evolution_details: list[EvolutionDetail] = Field(default_factory=list)
    evolves_to: list["ChainLink"] = Field(default_factory=list)
    is_baby: bool = False


class EvolutionChain(BaseModel):
    """Shape returned by ``GET /evolution-chain/{id}``."""

    id: int
    chain: ChainLink


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class TypeDamageRelations(BaseModel):
    """Damage relations of a single type, in both directions."""

    double_damage_from: list[NamedResource] = Field(default_factory=list)
    double_damage_to: list[NamedResource] = Field(default_factory=list)
    half_damage_from: list[NamedResource] = Field(default_factory=list)
    half_damage_to: list[NamedResource] = Field(default_factory=list)
    no_damage_from: list[NamedResource] = Field(default_factory=list)
    no_damage_to: list[NamedResource] = Field(default_factory=list)


class TypePokemon(BaseModel):
    pokemon: NamedResource
    slot: int


class PokemonTypeData(BaseModel):
    """Shape returned by ``GET /type/{name}``."""

    id: int
    name: str
    damage_relations: TypeDamageRelations
    pokemon: list[TypePokemon] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Moves
# ---------------------------------------------------------------------------


class MoveFlavorText(BaseModel):
    flavor_text: str
    language: NamedResource
    version_group: NamedResource


class Move(BaseModel):
    """Shape returned by ``GET /move/{id or name}``.

    ``accuracy`` is None for moves that never miss, ``power`` is None for status moves.
    """

    id: int
    name: str
    accuracy: int | None = None
    pp: int | None = None
    power: int | None = None
    priority: int = 0
    damage_class: NamedResource | None = None
    type: NamedResource
    effect_chance: int | None = None
    flavor_text_entries: list[MoveFlavorText] = Field(default_factory=list)
    target: NamedResource | None = None
