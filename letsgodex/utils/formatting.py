# ABOUTME: Display formatting helpers shared by the CLI, the Streamlit pages, and the core labels.
# ABOUTME: Name humanizing, dex number padding, sprite URLs, and unit conversions.

SPRITE_BASE_URL = "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon"

STAT_NAMES: dict[str, str] = {
    "hp": "HP",
    "attack": "Attack",
    "defense": "Defense",
    "special-attack": "Sp. Atk",
    "special-defense": "Sp. Def",
    "speed": "Speed",
}

# Stat bar tiers on a 0-100 scale (percentage of the highest base stat shown)
STAT_TIER_THRESHOLDS: list[tuple[float, str]] = [
    (25, "low"),
    (50, "fair"),
    (75, "good"),
]


def capitalize(text: str) -> str:
    """Upper-case the first character and leave the rest untouched.

    Examples:
        >>> capitalize("night")
        'Night'
        >>> capitalize("")
        ''
    """
    if not text:
        return ""
    return text[0].upper() + text[1:]


def format_name(text: str) -> str:
    """Turn a hyphenated PokeAPI name into display words.

    Examples:
        >>> format_name("thunder-stone")
        'Thunder Stone'
        >>> format_name("mr-mime")
        'Mr Mime'
    """
    return " ".join(capitalize(part) for part in text.split("-"))


def format_pokemon_id(pokemon_id: int) -> str:
    """Format a dex number as ``#001``."""
    return f"#{pokemon_id:03d}"


def get_sprite_url(pokemon_id: int, kind: str = "sprite") -> str:
    """Return the sprite (or official artwork) URL for a dex number.

    Args:
        pokemon_id: National dex number.
        kind: "sprite" for the small game sprite, "artwork" for official artwork.

    Returns:
        URL to the PNG image.
    """
    if kind == "artwork":
        return f"{SPRITE_BASE_URL}/other/official-artwork/{pokemon_id}.png"
    return f"{SPRITE_BASE_URL}/{pokemon_id}.png"


def format_height(decimetres: int) -> str:
    """Format a PokeAPI height (decimetres) in metres."""
    return f"{decimetres / 10:.1f} m"


def format_weight(hectograms: int) -> str:
    """Format a PokeAPI weight (hectograms) in kilograms."""
    return f"{hectograms / 10:.1f} kg"


def get_stat_tier(value: float) -> str:
    """Bucket a 0-100 stat percentage into low, fair, good, or great."""
    for threshold, tier in STAT_TIER_THRESHOLDS:
        if value < threshold:
            return tier
    return "great"
