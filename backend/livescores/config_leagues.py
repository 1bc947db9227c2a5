"""
backend/livescores/config_leagues.py

Purpose:
    League catalogs polled per provider, plus the cricket competition labels
    shown in the catalog endpoint.
"""

OPENLIGADB_LEAGUES: list[dict[str, str]] = [
    {"id": "bl1", "name": "Bundesliga", "country": "Germany"},
    {"id": "bl2", "name": "2. Bundesliga", "country": "Germany"},
    {"id": "bl3", "name": "3. Liga", "country": "Germany"},
    {"id": "dfb", "name": "DFB-Pokal", "country": "Germany"},
    {"id": "ucl", "name": "Champions League", "country": "Europe"},
    {"id": "uel", "name": "Europa League", "country": "Europe"},
    {"id": "pl", "name": "Premier League", "country": "England"},
    {"id": "pd", "name": "La Liga", "country": "Spain"},
    {"id": "sa", "name": "Serie A", "country": "Italy"},
    {"id": "fl1", "name": "Ligue 1", "country": "France"},
]

THESPORTSDB_LEAGUES: list[dict[str, str]] = [
    {"id": "4791", "name": "Indian Super League", "country": "India"},
    {"id": "4328", "name": "Premier League", "country": "England"},
    {"id": "4335", "name": "La Liga", "country": "Spain"},
    {"id": "4332", "name": "Serie A", "country": "Italy"},
    {"id": "4331", "name": "Bundesliga", "country": "Germany"},
    {"id": "4334", "name": "Ligue 1", "country": "France"},
    {"id": "4480", "name": "MLS", "country": "USA"},
    {"id": "4346", "name": "Brasileirao", "country": "Brazil"},
    {"id": "4350", "name": "Eredivisie", "country": "Netherlands"},
    {"id": "4337", "name": "Primeira Liga", "country": "Portugal"},
]

CRICKET_COMPETITIONS: list[str] = [
    "International Matches",
    "IPL",
    "Big Bash League",
    "PSL",
    "T20 World Cup",
    "ODI World Cup",
    "Test Matches",
]

LEAGUE_ICONS: dict[str, str] = {
    "football": "⚽",
    "cricket": "🏏",
}
