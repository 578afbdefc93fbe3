"""
Party imagery lookup.

Chooses a small fixed set of media references per party type. The concrete
assets live behind ``MEDIA_BASE_URL``; nothing else in the bot depends on the
URL values.
"""
from typing import List, Optional
from party_planner.core.config import get_settings


PREVIEW_MEDIA = {
    "bachelor": [
        "photo-1514525253161-7a46d19cd819",
        "photo-1470337458703-46ad1756a187",
    ],
    "bachelorette": [
        "photo-1519741497674-611481863552",
        "photo-1529636798458-92182e662485",
    ],
}

ITINERARY_MEDIA = {
    "bachelor": [
        "photo-1566737236500-c8ac43014a67",
        "photo-1540575467063-178a50c2df87",
        "photo-1506157786151-b8491531f063",
    ],
    "bachelorette": [
        "photo-1530103862676-de8c9debad1d",
        "photo-1492684223066-81342ee5ff30",
        "photo-1496843916299-590492c751f4",
    ],
}


def _urls(catalog, party_type: Optional[str]) -> List[str]:
    base = get_settings().MEDIA_BASE_URL.rstrip("/")
    # unknown party type falls back to the bachelor set
    assets = catalog.get(party_type or "", catalog["bachelor"])
    return [f"{base}/{asset}" for asset in assets]


def preview_media(party_type: Optional[str]) -> List[str]:
    """Images attached to the itinerary preview."""
    return _urls(PREVIEW_MEDIA, party_type)


def itinerary_media(party_type: Optional[str]) -> List[str]:
    """Images attached to the final itinerary."""
    return _urls(ITINERARY_MEDIA, party_type)
