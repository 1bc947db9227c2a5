"""
backend/livescores/services/score_parser.py

Purpose:
    Parse textual cricket score fragments such as "186/4 (20 Ov)" into a
    CricketScore. Total and pure: unknown input yields a zero score.

Dependencies:
    - re
    - livescores.models.match
"""

from __future__ import annotations

import re
from typing import Any

from livescores.models.match import CricketScore

_FULL_RE = re.compile(r"(\d+)/(\d+)\s*\(([\d.]+)\s*Ov\)")
_SHORT_RE = re.compile(r"(\d+)/(\d+)")

EMPTY_SCORE = CricketScore()


def parse_score(text: str | None) -> CricketScore:
    """Parse "<runs>/<wickets> (<overs> Ov)" or "<runs>/<wickets>"."""
    if not text or not isinstance(text, str):
        return EMPTY_SCORE

    full = _FULL_RE.search(text)
    if full:
        return CricketScore(runs=int(full.group(1)), wickets=int(full.group(2)), overs=full.group(3))

    short = _SHORT_RE.search(text)
    if short:
        return CricketScore(runs=int(short.group(1)), wickets=int(short.group(2)), overs="")

    return EMPTY_SCORE


def _non_negative_int(value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    return number if number >= 0 else 0


def score_from_entry(entry: Any) -> CricketScore:
    """Accept either a textual fragment or a CricAPI innings object {r, w, o}."""
    if isinstance(entry, dict):
        overs = entry.get("o")
        return CricketScore(
            runs=_non_negative_int(entry.get("r")),
            wickets=_non_negative_int(entry.get("w")),
            overs="" if overs is None else str(overs),
        )
    return parse_score(entry)
