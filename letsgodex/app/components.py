"""ABOUTME: Reusable UI components for displaying Pokemon, types, and evolutions.
ABOUTME: Provides type badges, stat bars, training facts, evolution cards, and effectiveness groups."""

from collections.abc import Callable, Mapping

import streamlit as st

from letsgodex.ingestion.transformers import get_training_info
from letsgodex.models import Pokemon, PokemonSpecies
from letsgodex.utils.evolution_chain import FlatEvolutionStage, describe_condition
from letsgodex.utils.formatting import (
    STAT_NAMES,
    capitalize,
    format_pokemon_id,
    get_sprite_url,
    get_stat_tier,
)
from letsgodex.utils.type_effectiveness import (
    format_multiplier,
    get_immunities,
    get_multiplier,
    get_resistances,
    get_weaknesses,
)

TYPE_COLORS: dict[str, str] = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
    "ice": "#96D9D6",
    "fighting": "#C22E28",
    "poison": "#A33EA1",
    "ground": "#E2BF65",
    "flying": "#A98FF3",
    "psychic": "#F95587",
    "bug": "#A6B91A",
    "rock": "#B6A136",
    "ghost": "#735797",
    "dragon": "#6F35FC",
    "dark": "#705746",
    "steel": "#B7B7CE",
    "fairy": "#D685AD",
}

STAT_TIER_COLORS: dict[str, str] = {
    "low": "#f87171",
    "fair": "#facc15",
    "good": "#4ade80",
    "great": "#10b981",
}

# Highest base stat among the original 151 (Chansey's HP) scales the bars
MAX_BASE_STAT = 250


def type_badge_html(type_name: str, suffix: str = "") -> str:
    """Build the HTML for a colored type badge."""
    color = TYPE_COLORS.get(type_name, "#68A090")
    label = capitalize(type_name) + (f" {suffix}" if suffix else "")
    return (
        f'<span style="background:{color};color:white;padding:2px 10px;'
        f'border-radius:999px;font-size:0.8rem;margin-right:4px;">{label}</span>'
    )


def render_type_badges(type_names: list[str]) -> None:
    """Render a row of type badges."""
    st.markdown("".join(type_badge_html(name) for name in type_names), unsafe_allow_html=True)


def render_pokemon_card(pokemon: Pokemon, on_select: Callable[[int], None]) -> None:
    """Render a compact Pokemon card with a button opening the detail view.

    Args:
        pokemon: Pokemon payload.
        on_select: Callback receiving the dex number when the card is opened.
    """
    with st.container(border=True):
        st.image(pokemon.sprites.front_default or get_sprite_url(pokemon.id), width=96)
        st.caption(format_pokemon_id(pokemon.id))
        st.markdown(f"**{capitalize(pokemon.name)}**")
        render_type_badges([t.type.name for t in sorted(pokemon.types, key=lambda t: t.slot)])
        st.button(
            "View",
            key=f"view_{pokemon.id}",
            on_click=on_select,
            args=(pokemon.id,),
            width="stretch",
        )


def render_stat_bars(pokemon: Pokemon) -> None:
    """Render base stats as colored bars."""
    for stat in pokemon.stats:
        label = STAT_NAMES.get(stat.stat.name, capitalize(stat.stat.name))
        percent = min(100.0, stat.base_stat / MAX_BASE_STAT * 100)
        color = STAT_TIER_COLORS[get_stat_tier(percent)]
        cols = st.columns([0.25, 0.1, 0.65])
        cols[0].write(label)
        cols[1].write(str(stat.base_stat))
        cols[2].markdown(
            f'<div style="background:#e5e7eb;border-radius:4px;height:10px;margin-top:8px;">'
            f'<div style="background:{color};width:{percent:.0f}%;height:10px;border-radius:4px;"></div></div>',
            unsafe_allow_html=True,
        )


def render_evolution_chain(
    stages: list[FlatEvolutionStage],
    current_id: int,
    on_select: Callable[[int], None],
) -> None:
    """Render flattened evolution stages as linked cards with trigger labels.

    Args:
        stages: Flattened stages in chain order.
        current_id: Dex number of the Pokemon being viewed (highlighted).
        on_select: Callback receiving the dex number of a clicked stage.
    """
    if len(stages) <= 1:
        st.caption("This Pokémon does not evolve.")
        return

    cols = st.columns(len(stages))
    for index, (col, stage) in enumerate(zip(cols, stages, strict=True)):
        with col, st.container(border=True):
            if index == 0:
                st.caption("Base form")
            else:
                st.caption(f"→ {describe_condition(stage.conditions)}")
            st.image(get_sprite_url(stage.numeric_id), width=80)
            name = capitalize(stage.name)
            st.markdown(f"**{name}**" if stage.numeric_id == current_id else name)
            st.button(
                format_pokemon_id(stage.numeric_id),
                key=f"evo_{index}_{stage.numeric_id}",
                on_click=on_select,
                args=(stage.numeric_id,),
                disabled=stage.numeric_id == current_id,
            )


def _render_effectiveness_group(title: str, effectiveness: Mapping[str, float], type_names: list[str]) -> None:
    if not type_names:
        return
    st.markdown(f"**{title}**")
    st.markdown(
        "".join(
            type_badge_html(name, format_multiplier(get_multiplier(effectiveness, name))) for name in type_names
        ),
        unsafe_allow_html=True,
    )


def render_effectiveness(effectiveness: Mapping[str, float]) -> None:
    """Render an incoming damage map as weak / resists / immune badge groups."""
    weaknesses = get_weaknesses(effectiveness)
    resistances = get_resistances(effectiveness)
    immunities = get_immunities(effectiveness)

    if not (weaknesses or resistances or immunities):
        st.caption("Takes neutral damage from every type.")
        return

    _render_effectiveness_group("Weak to", effectiveness, weaknesses)
    _render_effectiveness_group("Resists", effectiveness, resistances)
    _render_effectiveness_group("Immune to", effectiveness, immunities)


def render_training(pokemon: Pokemon, species: PokemonSpecies | None) -> None:
    """Render base experience, growth rate, and base happiness as metrics."""
    info = get_training_info(pokemon, species)
    for col, (label, value) in zip(st.columns(len(info)), info.items(), strict=True):
        col.metric(label, value)
