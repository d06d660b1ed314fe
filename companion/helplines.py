from __future__ import annotations

from typing import Dict, List


HELPLINES: List[Dict[str, str]] = [
    {"country": "India", "name": "iCall", "number": "9152987821", "available": "24/7"},
    {"country": "India", "name": "Vandrevala Foundation", "number": "1860-2662-345", "available": "24/7"},
    {"country": "USA", "name": "National Suicide Prevention", "number": "988", "available": "24/7"},
    {"country": "UK", "name": "Samaritans", "number": "116 123", "available": "24/7"},
    {"country": "Global", "name": "Crisis Text Line", "number": "Text HOME to 741741", "available": "24/7"},
]


def helplines_for(country: str | None = None) -> List[Dict[str, str]]:
    """Helplines for one country plus the global entries; all of them when no country is given."""
    if not country:
        return list(HELPLINES)
    wanted = country.strip().lower()
    return [h for h in HELPLINES if h["country"].lower() in (wanted, "global")]
