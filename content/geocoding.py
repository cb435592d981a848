"""content.geocoding

Map adapter helper: coordinates of a map click -> nearest place (+ admin areas).

Uses the offline `reverse_geocoder` dataset (cities with population > 1000),
so a click anywhere resolves to the closest populated place without a network
call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import reverse_geocoder as rg

log = logging.getLogger(__name__)


def _normalize_coordinate(lat: float, lng: float) -> Optional[Tuple[float, float]]:
    try:
        lat_f = float(lat)
        lng_f = float(lng)
    except (TypeError, ValueError):
        log.warning("Invalid coordinate (%r, %r)", lat, lng)
        return None
    # folium reports wrapped longitudes after panning across the antimeridian
    lng_f = ((lng_f + 180.0) % 360.0) - 180.0
    if not -90.0 <= lat_f <= 90.0:
        log.warning("Latitude out of bounds: %s", lat_f)
        return None
    return (lat_f, lng_f)


_ADMIN_PREFIXES = ("Greater ", "City of ", "Ville de ", "Città di ", "Ciudad de ")
_ADMIN_SUFFIXES = (" Metropolitan City", " Municipality", " Prefecture", " District", " County", " Region", " City")


def _admin_variants(name: str) -> List[str]:
    """'Greater London' -> ['Greater London', 'London']; 'New York County' -> [..., 'New York']."""
    name = " ".join(str(name or "").split())
    if not name:
        return []
    out = [name]
    short = name
    for p in _ADMIN_PREFIXES:
        if short.startswith(p):
            short = short[len(p):]
            break
    for s in _ADMIN_SUFFIXES:
        if short.endswith(s):
            short = short[: -len(s)]
            break
    short = short.strip()
    if short and short != name:
        out.append(short)
    return out


@dataclass(frozen=True)
class MapPick:
    """Nearest populated place to a map click.

    The nearest GeoNames point inside a big city is usually a district
    (Manhattan, Shinjuku, Barbican), so the enclosing admin areas travel
    along as `aliases` for guess matching.
    """

    name: str
    admin1: str = ""
    admin2: str = ""
    cc: str = ""

    @property
    def aliases(self) -> Tuple[str, ...]:
        out: List[str] = []
        keys = {self.name.casefold()}
        for raw in (self.name, self.admin2, self.admin1):
            for v in _admin_variants(raw):
                if v.casefold() not in keys:
                    keys.add(v.casefold())
                    out.append(v)
        return tuple(out)


def reverse_geocode_place(lat: float, lng: float) -> Optional[MapPick]:
    """Return the nearest place for (lat, lng), or None when nothing resolves."""
    coord = _normalize_coordinate(lat, lng)
    if coord is None:
        return None
    try:
        matches = rg.search([coord], mode=1)
    except Exception:
        log.exception("reverse_geocoder.search failed for %s", coord)
        return None
    if not matches:
        log.info("No reverse geocode result for %s", coord)
        return None
    m = matches[0]
    name = str(m.get("name", "") or "").strip()
    if not name:
        return None
    pick = MapPick(
        name=name,
        admin1=str(m.get("admin1", "") or "").strip(),
        admin2=str(m.get("admin2", "") or "").strip(),
        cc=str(m.get("cc", "") or "").strip(),
    )
    log.debug("Reverse geocoded %s -> %s (aliases %s)", coord, pick.name, pick.aliases)
    return pick
