# ABOUTME: Browser localStorage persistence for the user's team.
# ABOUTME: Pure team editing helpers plus Streamlit session/localStorage sync.

import json
import logging
import time
from typing import Any

import streamlit as st
from pydantic import BaseModel, Field, ValidationError, field_validator
from streamlit_local_storage import LocalStorage

from letsgodex.config import get_dex_config
from letsgodex.ingestion.transformers import get_type_names
from letsgodex.models import Pokemon
from letsgodex.utils.formatting import get_sprite_url

logger = logging.getLogger(__name__)

STORAGE_VERSION = 1
MAX_NICKNAME_LENGTH = 12
SESSION_TEAM_KEY = "team"
SESSION_HYDRATED_KEY = "_team_hydration_done"


def normalize_nickname(value: str | None) -> str | None:
    """Trim a nickname and cut it to 12 characters; blank becomes None."""
    if value is None:
        return None
    value = value.strip()[:MAX_NICKNAME_LENGTH]
    return value or None


class TeamMember(BaseModel):
    """A Pokemon on the user's team.

    Attributes:
        id: National dex number.
        name: Species name as returned by PokeAPI (e.g., "pikachu").
        sprite: Sprite URL, None to fall back to the default sprite.
        types: Type names in slot order (e.g., ["fire", "flying"]).
        added_at: Epoch milliseconds when the member was added.
        nickname: Optional nickname, at most 12 characters.
    """

    id: int
    name: str
    sprite: str | None = None
    types: list[str] = Field(default_factory=list)
    added_at: int = 0
    nickname: str | None = None

    @field_validator("nickname")
    @classmethod
    def check_nickname(cls, value: str | None) -> str | None:
        return normalize_nickname(value)

    @property
    def display_name(self) -> str:
        """Nickname if set, otherwise the species name."""
        return self.nickname or self.name


# ---------------------------------------------------------------------------
# Pure helpers (unit-testable, no Streamlit dependency)
# ---------------------------------------------------------------------------


def parse_team_data(raw: Any) -> list[TeamMember] | None:
    """Parse raw localStorage value into a team.

    Handles str (JSON), dict (versioned payload), list (bare team), None, and
    malformed data. Entries that fail validation are dropped.

    Args:
        raw: Value from localStorage.

    Returns:
        List of team members, or None if data is empty/malformed.
    """
    if raw is None:
        return None

    data: Any = raw
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except (json.JSONDecodeError, TypeError):
            return None

    if isinstance(data, dict):
        data = data.get("team")

    if not isinstance(data, list):
        return None

    team: list[TeamMember] = []
    for entry in data:
        try:
            team.append(TeamMember.model_validate(entry))
        except ValidationError:
            logger.warning("Dropping invalid team entry from browser storage: %r", entry)
    return team


def build_team_member(pokemon: Pokemon, added_at: int | None = None) -> TeamMember:
    """Create a team member from a fetched Pokemon payload.

    Args:
        pokemon: Pokemon payload.
        added_at: Epoch milliseconds; defaults to now.

    Returns:
        New team member without a nickname.
    """
    if added_at is None:
        added_at = int(time.time() * 1000)
    return TeamMember(
        id=pokemon.id,
        name=pokemon.name,
        sprite=pokemon.sprites.front_default or get_sprite_url(pokemon.id),
        types=get_type_names(pokemon),
        added_at=added_at,
    )


def add_member(team: list[TeamMember], member: TeamMember, max_size: int = 6) -> list[TeamMember]:
    """Append a member unless the team is full or already has that Pokemon.

    Args:
        team: Current team.
        member: Member to add.
        max_size: Maximum team size.

    Returns:
        New team list (unchanged copy when the member was not added).
    """
    if len(team) >= max_size or any(m.id == member.id for m in team):
        return list(team)
    return [*team, member]


def remove_member(team: list[TeamMember], pokemon_id: int) -> list[TeamMember]:
    """Remove a member by dex number (no-op if not found)."""
    return [m for m in team if m.id != pokemon_id]


def set_nickname(team: list[TeamMember], pokemon_id: int, nickname: str) -> list[TeamMember]:
    """Set a member's nickname; a blank nickname clears it.

    Args:
        team: Current team.
        pokemon_id: Dex number of the member to rename.
        nickname: New nickname (trimmed and cut to 12 characters).

    Returns:
        New team list with the member renamed.
    """
    normalized = normalize_nickname(nickname)
    return [m.model_copy(update={"nickname": normalized}) if m.id == pokemon_id else m for m in team]


def count_covered_types(team: list[TeamMember]) -> int:
    """Count distinct types across the team."""
    return len({type_name for member in team for type_name in member.types})


def build_storage_payload(team: list[TeamMember]) -> dict[str, Any]:
    """Build the localStorage payload dict from a team.

    Args:
        team: Team members.

    Returns:
        Dict with version and team keys.
    """
    return {"version": STORAGE_VERSION, "team": [m.model_dump() for m in team]}


# ---------------------------------------------------------------------------
# Streamlit-dependent functions
# ---------------------------------------------------------------------------


def _storage_key() -> str:
    return get_dex_config().storage_key


def get_team_from_browser() -> list[TeamMember] | None:
    """Read the team from browser localStorage.

    Returns:
        Team list, or None if localStorage is empty or unavailable.
    """
    try:
        storage = LocalStorage()
        raw = storage.getItem(_storage_key())
    except Exception:
        # LocalStorage unavailable (no Streamlit runtime, JS disabled, etc.)
        logger.debug("Could not read from browser localStorage")
        return None
    return parse_team_data(raw)


def save_team_to_browser(team: list[TeamMember]) -> None:
    """Write the team to browser localStorage as JSON."""
    try:
        storage = LocalStorage()
        storage.setItem(_storage_key(), json.dumps(build_storage_payload(team)))
    except Exception:
        # LocalStorage unavailable (no Streamlit runtime, JS disabled, etc.)
        logger.debug("Could not write to browser localStorage")


def hydrate_team_from_browser() -> list[TeamMember]:
    """Load the team into session state from localStorage, at most once per session.

    Returns:
        The session team.
    """
    if st.session_state.get(SESSION_HYDRATED_KEY):
        return st.session_state.get(SESSION_TEAM_KEY, [])

    browser_team = get_team_from_browser()
    if browser_team is None:
        # Don't set the flag: localStorage may not be available on first render.
        st.session_state.setdefault(SESSION_TEAM_KEY, [])
        return st.session_state[SESSION_TEAM_KEY]

    st.session_state[SESSION_TEAM_KEY] = browser_team
    st.session_state[SESSION_HYDRATED_KEY] = True
    logger.info("Hydrated team of %d from browser localStorage", len(browser_team))
    return browser_team


def update_team(team: list[TeamMember]) -> None:
    """Store the team in session state and persist it to localStorage."""
    st.session_state[SESSION_TEAM_KEY] = team
    save_team_to_browser(team)
