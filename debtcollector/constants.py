"""
debtcollector.constants — Shared Constants & Helpers
=====================================================

Single source of truth for presentation constants and tiny text helpers.
Import from here instead of duplicating in cogs, embeds, and routes.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Leaderboard presentation
# ---------------------------------------------------------------------------
RANK_BADGES: list[str] = ["\U0001f947", "\U0001f948", "\U0001f949"]  # 🥇🥈🥉

RANK_LABELS: list[str] = ["**1st Place!**", "**2nd Place!**", "**3rd Place!**"]

DIVIDER = "━" * 40  # ━━━━

# ---------------------------------------------------------------------------
# User-facing messages shared by several commands
# ---------------------------------------------------------------------------
SELF_DEBT_MESSAGE = "You can't owe yourself money!"
NOT_FOUND_OR_FORBIDDEN = (
    "Transaction not found or you don't have permission to modify it."
)

# Select-menu / list label truncation
DESCRIPTION_PREVIEW_LENGTH = 30


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------
def pluralize(word: str, count: int) -> str:
    """Return *word* unchanged for a count of one, else with an ``s``."""
    return word if count == 1 else word + "s"


def ordinal(n: int) -> str:
    """``1 → "1st"``, ``12 → "12th"``, ``22 → "22nd"``."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def placement_badge(position: int) -> str:
    """Medal emoji for the podium, empty string below it."""
    if 0 < position <= len(RANK_BADGES):
        return RANK_BADGES[position - 1]
    return ""


def placement_label(position: int) -> str:
    """Bold podium label for the top three, ``"Nth Place"`` otherwise."""
    if 0 < position <= len(RANK_LABELS):
        return RANK_LABELS[position - 1]
    return f"{ordinal(position)} Place"


def preview(text: str | None, limit: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    """Shorten a description for one-line listings."""
    if not text:
        return "No description"
    if len(text) > limit:
        return text[:limit] + "..."
    return text
