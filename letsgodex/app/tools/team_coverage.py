# ABOUTME: Defensive team summary for the team builder.
# ABOUTME: Counts how many team members are weak to, resist, or are immune to each attacking type.

from collections.abc import Mapping, Sequence
from typing import Any

from letsgodex.app.team_storage import TeamMember
from letsgodex.models import TypeDamageRelations
from letsgodex.utils.type_effectiveness import (
    TYPES,
    combine_type_effectiveness,
    get_immunities,
    get_resistances,
    get_weaknesses,
)


def member_effectiveness(
    member: TeamMember,
    relations_by_type: Mapping[str, TypeDamageRelations],
) -> dict[str, float]:
    """Combine the damage relations of a member's types.

    Args:
        member: Team member.
        relations_by_type: Damage relations keyed by type name.

    Returns:
        Incoming multiplier map for the member. Types missing from
        ``relations_by_type`` are skipped.
    """
    tables = [relations_by_type[name] for name in member.types if name in relations_by_type]
    return combine_type_effectiveness(tables)


def analyze_team_defense(
    team: Sequence[TeamMember],
    relations_by_type: Mapping[str, TypeDamageRelations],
) -> list[dict[str, Any]]:
    """Summarize the team's defensive matchups per attacking type.

    Args:
        team: Team members.
        relations_by_type: Damage relations keyed by type name.

    Returns:
        One dict per attacking type (canonical order) with keys:
        - type: Attacking type name.
        - weak: Number of members taking >=2x.
        - resist: Number of members taking <=0.5x (excluding immunities).
        - immune: Number of members taking 0x.
        - net: resist + immune - weak.
    """
    weak = dict.fromkeys(TYPES, 0)
    resist = dict.fromkeys(TYPES, 0)
    immune = dict.fromkeys(TYPES, 0)

    for member in team:
        effectiveness = member_effectiveness(member, relations_by_type)
        for atk_type in get_weaknesses(effectiveness):
            weak[atk_type] = weak.get(atk_type, 0) + 1
        for atk_type in get_resistances(effectiveness):
            resist[atk_type] = resist.get(atk_type, 0) + 1
        for atk_type in get_immunities(effectiveness):
            immune[atk_type] = immune.get(atk_type, 0) + 1

    return [
        {
            "type": atk_type,
            "weak": weak[atk_type],
            "resist": resist[atk_type],
            "immune": immune[atk_type],
            "net": resist[atk_type] + immune[atk_type] - weak[atk_type],
        }
        for atk_type in TYPES
    ]


def get_shared_weaknesses(
    team: Sequence[TeamMember],
    relations_by_type: Mapping[str, TypeDamageRelations],
    threshold: int = 3,
) -> list[str]:
    """Return attacking types that at least ``threshold`` members are weak to."""
    return [row["type"] for row in analyze_team_defense(team, relations_by_type) if row["weak"] >= threshold]
