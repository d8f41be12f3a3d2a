# ABOUTME: Let's Go Pokedex companion package.
# ABOUTME: PokeAPI client, evolution and type matchup helpers, and a Streamlit team builder.

__version__ = "0.1.0"
