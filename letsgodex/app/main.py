"""ABOUTME: Streamlit application for the Let's Go Pokedex companion.
ABOUTME: Provides the Pokedex grid, Pokemon detail, type chart, and team builder pages."""

import httpx
import streamlit as st

from letsgodex.app.components import (
    render_effectiveness,
    render_evolution_chain,
    render_pokemon_card,
    render_stat_bars,
    render_training,
    render_type_badges,
)
from letsgodex.app.queries import (
    get_page_count,
    load_all_type_data,
    load_evolution_chain,
    load_move,
    load_pokemon,
    load_pokemon_page,
    load_pokemon_with_species,
    load_relations_by_type,
    run_search,
)
from letsgodex.app.team_storage import (
    add_member,
    build_team_member,
    count_covered_types,
    hydrate_team_from_browser,
    remove_member,
    set_nickname,
    update_team,
)
from letsgodex.app.tools.team_coverage import analyze_team_defense, get_shared_weaknesses
from letsgodex.config import get_dex_config
from letsgodex.ingestion.transformers import (
    clean_flavor_text,
    get_english_flavor_text,
    get_lets_go_moves,
    get_type_names,
)
from letsgodex.utils.evolution_chain import flatten_evolution_chain
from letsgodex.utils.formatting import (
    capitalize,
    format_height,
    format_name,
    format_pokemon_id,
    format_weight,
    get_sprite_url,
)
from letsgodex.utils.type_effectiveness import TYPES, combine_type_effectiveness

dex_config = get_dex_config()

PAGES = ["Pokédex", "Pokémon", "Type Chart", "Team"]
GRID_COLUMNS = 4
SEARCH_RESULT_LIMIT = 8
DEFAULT_POKEMON_ID = 25


def _open_pokemon(pokemon_id: int) -> None:
    """Callback: switch to the detail page for a Pokemon."""
    st.query_params["id"] = str(pokemon_id)
    st.session_state["nav"] = "Pokémon"


def _add_to_team(pokemon_id: int) -> None:
    """Callback: fetch a Pokemon and add it to the team."""
    team = st.session_state.get("team", [])
    pokemon = load_pokemon(pokemon_id)
    if pokemon is None:
        return
    update_team(add_member(team, build_team_member(pokemon), dex_config.max_team_size))


def _remove_from_team(pokemon_id: int) -> None:
    """Callback: remove a Pokemon from the team."""
    update_team(remove_member(st.session_state.get("team", []), pokemon_id))


def _save_nickname(pokemon_id: int) -> None:
    """Callback: store the nickname typed for a team member."""
    nickname = st.session_state.get(f"nickname_{pokemon_id}", "")
    update_team(set_nickname(st.session_state.get("team", []), pokemon_id, nickname))


def _int_query_param(name: str, default: int) -> int:
    """Read an integer query param, falling back to ``default`` when it is missing or malformed."""
    try:
        return int(st.query_params.get(name, default))
    except ValueError:
        return default


def _resolve_pokemon_id(raw: str | None) -> int:
    """Resolve the ``id`` query param, which may be a dex number or a Pokemon name."""
    if raw is None or not raw.strip():
        return DEFAULT_POKEMON_ID
    try:
        return int(raw)
    except ValueError:
        pokemon = load_pokemon(raw.strip().lower())
        return pokemon.id if pokemon is not None else DEFAULT_POKEMON_ID


def _render_grid(pokemon_list: list) -> None:
    for start in range(0, len(pokemon_list), GRID_COLUMNS):
        cols = st.columns(GRID_COLUMNS)
        for col, pokemon in zip(cols, pokemon_list[start : start + GRID_COLUMNS], strict=False):
            with col:
                render_pokemon_card(pokemon, _open_pokemon)


def render_pokedex_page() -> None:
    """Paginated Pokedex grid with name search (mirrored in the URL query params)."""
    st.header("Pokédex")

    query = st.text_input("Search by name", value=st.query_params.get("search", ""), placeholder="pikachu")
    if query:
        st.query_params["search"] = query
    elif "search" in st.query_params:
        del st.query_params["search"]

    if query.strip():
        results = run_search(query)
        if not results:
            st.info(f"No Pokémon found for '{query}'.")
            return
        st.caption(f"{len(results)} result(s)")
        pokemon_list = [p for p in (load_pokemon(result.id) for result in results) if p is not None]
        _render_grid(pokemon_list)
        return

    page_count = get_page_count()
    current_page = _int_query_param("page", 1)
    current_page = min(max(current_page, 1), page_count)
    page = st.number_input("Page", min_value=1, max_value=page_count, value=current_page, step=1)
    st.query_params["page"] = str(page)

    _render_grid(load_pokemon_page(int(page) - 1, dex_config.page_size))


def render_pokemon_page() -> None:
    """Detail page: stats, flavor text, evolution chain, matchups, and moves."""
    default_id = _resolve_pokemon_id(st.query_params.get("id"))
    pokemon_id = st.number_input(
        "Dex number",
        min_value=1,
        max_value=dex_config.max_pokemon,
        value=min(max(default_id, 1), dex_config.max_pokemon),
        step=1,
    )
    st.query_params["id"] = str(pokemon_id)

    pokemon, species = load_pokemon_with_species(int(pokemon_id))
    if pokemon is None:
        st.error(f"Pokémon {format_pokemon_id(int(pokemon_id))} not found.")
        return

    type_names = get_type_names(pokemon)
    left, right = st.columns([0.35, 0.65])

    with left:
        st.image(get_sprite_url(pokemon.id, kind="artwork"), width="stretch")

    with right:
        st.header(f"{capitalize(pokemon.name)} {format_pokemon_id(pokemon.id)}")
        render_type_badges(type_names)
        st.write(f"**Height:** {format_height(pokemon.height)} | **Weight:** {format_weight(pokemon.weight)}")
        abilities = ", ".join(
            format_name(a.ability.name) + (" (Hidden)" if a.is_hidden else "")
            for a in sorted(pokemon.abilities, key=lambda a: a.slot)
        )
        if abilities:
            st.write(f"**Abilities:** {abilities}")
        if species is not None:
            flavor = get_english_flavor_text(species.flavor_text_entries, dex_config.version)
            if flavor:
                st.info(flavor)
        team = st.session_state.get("team", [])
        on_team = any(m.id == pokemon.id for m in team)
        st.button(
            "On your team" if on_team else "Add to team",
            on_click=_add_to_team,
            args=(pokemon.id,),
            disabled=on_team or len(team) >= dex_config.max_team_size,
        )

    st.subheader("Base stats")
    render_stat_bars(pokemon)

    st.subheader("Training")
    render_training(pokemon, species)

    st.subheader("Evolution")
    if species is not None and species.evolution_chain is not None:
        chain = load_evolution_chain(species.evolution_chain.url)
        stages = flatten_evolution_chain(chain.chain, dex_config.max_pokemon)
        render_evolution_chain(stages, pokemon.id, _open_pokemon)
    else:
        st.caption("No evolution data.")

    st.subheader("Type matchups")
    relations = load_relations_by_type()
    effectiveness = combine_type_effectiveness(relations[name] for name in type_names if name in relations)
    render_effectiveness(effectiveness)

    st.subheader("Let's Go moves")
    moves = get_lets_go_moves(pokemon, dex_config.version_group)
    if moves:
        st.dataframe(
            [
                {
                    "Move": format_name(move.name),
                    "Method": format_name(move.learn_method),
                    "Level": move.level if move.learn_method == "level-up" else None,
                }
                for move in moves
            ],
            hide_index=True,
            width="stretch",
        )
        _render_move_details([move.name for move in moves])
    else:
        st.caption("No moves recorded for this version.")


def _render_move_details(move_names: list[str]) -> None:
    selected = st.selectbox("Move details", move_names, format_func=format_name, index=None, placeholder="Pick a move")
    if selected is None:
        return
    move = load_move(selected)
    if move is None:
        st.caption("No details available for this move.")
        return
    render_type_badges([move.type.name])
    cols = st.columns(4)
    cols[0].metric("Power", move.power if move.power is not None else "—")
    cols[1].metric("Accuracy", move.accuracy if move.accuracy is not None else "—")
    cols[2].metric("PP", move.pp if move.pp is not None else "—")
    cols[3].metric("Class", format_name(move.damage_class.name) if move.damage_class else "—")
    flavor = next((e.flavor_text for e in move.flavor_text_entries if e.language.name == "en"), "")
    if flavor:
        st.caption(clean_flavor_text(flavor))


def render_type_chart_page() -> None:
    """Damage received by each type, plus a dual-type calculator."""
    st.header("Type Chart")
    st.caption("What each type is weak to, resists, and is immune to.")

    relations = load_relations_by_type()

    st.subheader("Dual-type calculator")
    cols = st.columns(2)
    first = cols[0].selectbox("Primary type", TYPES, format_func=capitalize)
    second = cols[1].selectbox("Secondary type", ["(none)", *TYPES], format_func=capitalize)
    selected = [first] if second in ("(none)", first) else [first, second]
    render_type_badges(selected)
    render_effectiveness(combine_type_effectiveness(relations[name] for name in selected))

    st.divider()

    type_data = load_all_type_data()
    for start in range(0, len(TYPES), 3):
        for col, type_name in zip(st.columns(3), TYPES[start : start + 3], strict=False):
            with col, st.container(border=True):
                render_type_badges([type_name])
                if type_name in type_data:
                    render_effectiveness(combine_type_effectiveness([type_data[type_name].damage_relations]))


def render_team_page() -> None:
    """Team builder: search, add/remove, nicknames, and defensive coverage."""
    st.header("Team")
    team = st.session_state.get("team", [])

    st.caption(
        f"{len(team)}/{dex_config.max_team_size} Pokémon · {count_covered_types(team)} types covered"
    )

    slots = st.columns(dex_config.max_team_size)
    for index, slot in enumerate(slots):
        with slot, st.container(border=True):
            if index >= len(team):
                st.caption("Empty slot")
                continue
            member = team[index]
            st.image(member.sprite or get_sprite_url(member.id), width=64)
            st.markdown(f"**{capitalize(member.display_name)}**")
            if member.nickname:
                st.caption(capitalize(member.name))
            render_type_badges(member.types)
            st.text_input(
                "Nickname",
                value=member.nickname or "",
                key=f"nickname_{member.id}",
                max_chars=12,
                on_change=_save_nickname,
                args=(member.id,),
                label_visibility="collapsed",
                placeholder=capitalize(member.name),
            )
            st.button("Remove", key=f"remove_{member.id}", on_click=_remove_from_team, args=(member.id,))

    if len(team) < dex_config.max_team_size:
        query = st.text_input("Add a Pokémon", placeholder="Search by name")
        if query.strip():
            for result in run_search(query)[:SEARCH_RESULT_LIMIT]:
                cols = st.columns([0.1, 0.6, 0.3])
                cols[0].image(get_sprite_url(result.id), width=40)
                cols[1].write(f"{format_pokemon_id(result.id)} {capitalize(result.name)}")
                cols[2].button(
                    "Add",
                    key=f"add_{result.id}",
                    on_click=_add_to_team,
                    args=(result.id,),
                    disabled=any(m.id == result.id for m in team),
                )
    else:
        st.success("Your team is full!")

    if team:
        st.subheader("Defensive coverage")
        relations = load_relations_by_type()
        for atk_type in get_shared_weaknesses(team, relations):
            st.warning(f"Three or more team members are weak to {capitalize(atk_type)}.")
        rows = analyze_team_defense(team, relations)
        st.dataframe(
            [
                {
                    "Attacking type": capitalize(row["type"]),
                    "Weak": row["weak"],
                    "Resist": row["resist"],
                    "Immune": row["immune"],
                    "Net": row["net"],
                }
                for row in rows
            ],
            hide_index=True,
            width="stretch",
        )


def main() -> None:
    """Render the app for the current Streamlit run."""
    st.set_page_config(
        page_title="Let's Go Pokédex",
        page_icon=":zap:",
        layout="wide",
    )

    hydrate_team_from_browser()

    if "nav" not in st.session_state and "id" in st.query_params:
        st.session_state["nav"] = "Pokémon"

    page = st.sidebar.radio("Navigate", PAGES, key="nav")
    st.sidebar.caption(
        f"Scoped to the first {dex_config.max_pokemon} Pokémon ({format_name(dex_config.version)})."
    )

    try:
        if page == "Pokédex":
            render_pokedex_page()
        elif page == "Pokémon":
            render_pokemon_page()
        elif page == "Type Chart":
            render_type_chart_page()
        else:
            render_team_page()
    except httpx.HTTPError as e:
        st.error(f"Could not reach PokéAPI: {e}")


if __name__ == "__main__":
    main()
