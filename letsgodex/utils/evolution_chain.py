# ABOUTME: Flattens PokeAPI evolution chain trees into ordered evolution stages.
# ABOUTME: Derives dex numbers from species URLs and builds short trigger labels.

from collections.abc import Sequence
from dataclasses import dataclass, field

from letsgodex.models import ChainLink, EvolutionDetail
from letsgodex.utils.formatting import capitalize, format_name


@dataclass
class FlatEvolutionStage:
    """A single species in a flattened evolution chain.

    Attributes:
        name: Species name (e.g., "pikachu").
        url: Species resource URL the dex number was derived from.
        numeric_id: Dex number parsed from the URL, 0 when it could not be parsed.
        primary_condition: First way of reaching this species, None for the base form.
        conditions: Every way of reaching this species from its parent (e.g., several stones).
    """

    name: str
    url: str
    numeric_id: int
    primary_condition: EvolutionDetail | None = None
    conditions: list[EvolutionDetail] = field(default_factory=list)

    @property
    def min_level(self) -> int | None:
        """Minimum level of the primary condition, if it has one."""
        if self.primary_condition is None:
            return None
        return self.primary_condition.min_level


def derive_numeric_id(url: str) -> int:
    """Parse the trailing path segment of a resource URL as a dex number.

    Args:
        url: Resource URL like "https://pokeapi.co/api/v2/pokemon-species/25/".

    Returns:
        The parsed number, or 0 when the URL has no numeric trailing segment.

    Examples:
        >>> derive_numeric_id("https://pokeapi.co/api/v2/pokemon-species/25/")
        25
        >>> derive_numeric_id("not-a-url")
        0
    """
    segments = [segment for segment in url.split("/") if segment]
    if not segments:
        return 0
    try:
        return int(segments[-1])
    except ValueError:
        return 0


def flatten_evolution_chain(root: ChainLink, max_numeric_id: int) -> list[FlatEvolutionStage]:
    """Flatten an evolution tree into pre-order stages within a dex number bound.

    Children are visited in order, each child's whole subtree before its next
    sibling. A species above ``max_numeric_id`` is left out of the result but its
    descendants are still visited.

    Args:
        root: Base form of the chain.
        max_numeric_id: Highest dex number to include (e.g., 151 for Kanto).

    Returns:
        Stages in pre-order, each carrying only its own evolution details.
    """
    stages: list[FlatEvolutionStage] = []
    stack: list[ChainLink] = [root]

    while stack:
        link = stack.pop()
        numeric_id = derive_numeric_id(link.species.url)

        if numeric_id <= max_numeric_id:
            details = list(link.evolution_details)
            stages.append(
                FlatEvolutionStage(
                    name=link.species.name,
                    url=link.species.url,
                    numeric_id=numeric_id,
                    primary_condition=details[0] if details else None,
                    conditions=details,
                )
            )

        # Reversed so the first child is popped next
        stack.extend(reversed(link.evolves_to))

    return stages


def describe_condition(details: Sequence[EvolutionDetail]) -> str:  # noqa: PLR0911
    """Build a short label for the first evolution detail.

    Args:
        details: Evolution details of a stage (only the first entry is described).

    Returns:
        Label like "Lv. 16", "Thunder Stone", "Trade holding Metal Coat", or ""
        when there are no details.
    """
    if not details:
        return ""

    detail = details[0]
    trigger = detail.trigger.name

    if trigger == "level-up":
        if detail.min_level:
            return f"Lv. {detail.min_level}"
        if detail.min_happiness:
            return f"Happiness ≥ {detail.min_happiness}"
        if detail.time_of_day:
            return capitalize(detail.time_of_day)
        if detail.location:
            return capitalize(detail.location.name)
    elif trigger == "use-item":
        if detail.item:
            return format_name(detail.item.name)
    elif trigger == "trade":
        if detail.held_item:
            return f"Trade holding {format_name(detail.held_item.name)}"
        return "Trade"

    return format_name(trigger)
