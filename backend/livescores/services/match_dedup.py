"""
backend/livescores/services/match_dedup.py

Purpose:
    Collapse records that describe the same fixture across providers and
    endpoints. The key is the case-insensitive, trimmed (home, away) pair;
    the first record seen wins and survivors keep their input order.

Notes:
    - Same-named fixtures in unrelated competitions played concurrently are
      merged as well. Kickoff time and venue are not consulted.
"""

from __future__ import annotations

from typing import Iterable

from livescores.models.match import Match


def fixture_key(match: Match) -> tuple[str, str]:
    return (match.home_team.strip().lower(), match.away_team.strip().lower())


def dedupe_matches(matches: Iterable[Match]) -> list[Match]:
    seen: set[tuple[str, str]] = set()
    out: list[Match] = []
    for match in matches:
        key = fixture_key(match)
        if key in seen:
            continue
        seen.add(key)
        out.append(match)
    return out
