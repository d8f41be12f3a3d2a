# ABOUTME: Analysis tools used by the Streamlit team builder page.
# ABOUTME: Exports the team defensive coverage helpers.

from letsgodex.app.tools.team_coverage import (
    analyze_team_defense,
    get_shared_weaknesses,
    member_effectiveness,
)

__all__ = [
    "analyze_team_defense",
    "get_shared_weaknesses",
    "member_effectiveness",
]
