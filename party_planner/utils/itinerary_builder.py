"""
Deterministic itinerary templating for a completed party intake.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, List, Optional
from party_planner.utils.media import itinerary_media, preview_media


DAY_ACTIVITIES = {
    "activities": [
        "Morning go-kart racing",
        "Afternoon boat cruise",
        "Escape room challenge",
    ],
    "package": [
        "Private brunch with bottomless drinks",
        "Spa or golf session",
        "Guided city highlights tour",
    ],
    "nightlife": [
        "Late brunch to recover",
        "Pool party at the hotel",
    ],
}

NIGHT_ACTIVITIES = {
    "activities": [
        "Group dinner",
        "Live music bar",
    ],
    "package": [
        "Reserved dinner for the group",
        "VIP club table with host",
    ],
    "nightlife": [
        "Rooftop bar opening round",
        "Bar crawl through the best spots",
        "VIP club table with host",
    ],
}

# rough per-guest cost when no budget was given
PER_GUEST_ESTIMATE = {
    "activities": Decimal("350"),
    "package": Decimal("600"),
    "nightlife": Decimal("400"),
}

CENTS = Decimal("0.01")


def _party_label(party_type: Optional[str]) -> str:
    return "Bachelorette" if party_type == "bachelorette" else "Bachelor"


def party_title(snapshot: Dict[str, Any]) -> str:
    """Display title, with neutral wording for fields left empty."""
    name = snapshot.get("party_name")
    owner = f"{name}'s" if name else "Your"
    city = snapshot.get("city") or "your city"
    return f"{owner} {_party_label(snapshot.get('party_type'))} Party in {city}"


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def allocate_budget(total_budget: Decimal) -> Dict[str, float]:
    """
    Split the party budget across the usual spending buckets.
    """
    return {
        "lodging": float(_money(total_budget * Decimal("0.35"))),
        "dining": float(_money(total_budget * Decimal("0.25"))),
        "activities": float(_money(total_budget * Decimal("0.20"))),
        "nightlife": float(_money(total_budget * Decimal("0.15"))),
        "buffer": float(_money(total_budget * Decimal("0.05"))),
    }


def day_activities_for(preference: Optional[str]) -> List[str]:
    return list(DAY_ACTIVITIES.get(preference or "", DAY_ACTIVITIES["package"]))


def night_activities_for(preference: Optional[str]) -> List[str]:
    return list(NIGHT_ACTIVITIES.get(preference or "", NIGHT_ACTIVITIES["package"]))


def estimate_cost(snapshot: Dict[str, Any]) -> Optional[Decimal]:
    """Use the stated budget, else a per-guest estimate for the chosen style."""
    budget = snapshot.get("budget")
    if budget is not None:
        return _money(Decimal(str(budget)))
    guests = snapshot.get("guest_count")
    if not guests:
        return None
    rate = PER_GUEST_ESTIMATE.get(snapshot.get("activity_preference") or "", PER_GUEST_ESTIMATE["package"])
    return _money(rate * guests)


def build_preview(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    """Short preview shown once all preferences are in."""
    return {
        "type": "itinerary_preview",
        "title": party_title(snapshot),
        "highlights": day_activities_for(snapshot.get("activity_preference"))[:1]
        + night_activities_for(snapshot.get("activity_preference"))[:1],
        "theme": snapshot.get("theme"),
        "media_urls": preview_media(snapshot.get("party_type")),
    }


def build_itinerary(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    """
    Compose the final itinerary document from the collected fields.

    Args:
        snapshot: Conversation fields as a plain dict

    Returns:
        Dict with the fields accepted by ``create_itinerary``
    """
    label = _party_label(snapshot.get("party_type"))
    preference = snapshot.get("activity_preference")
    day = day_activities_for(preference)
    night = night_activities_for(preference)
    cost = estimate_cost(snapshot)

    city = snapshot.get("city") or "your city"
    guests = snapshot.get("guest_count") or "your"
    dates = snapshot.get("party_dates") or "dates to be set"
    theme = snapshot.get("theme") or "open"
    description = (
        f"A {preference or 'custom'} {label.lower()} weekend in {city} "
        f"for {guests} guests on {dates}, themed \"{theme}\"."
    )

    activities = {
        "day": day,
        "night": night,
        "dining": snapshot.get("dining_preferences"),
        "music": snapshot.get("music_preferences"),
    }
    if cost is not None:
        activities["budget_allocation"] = allocate_budget(cost)

    return {
        "title": party_title(snapshot),
        "description": description,
        "activities": activities,
        "estimated_cost": float(cost) if cost is not None else None,
        "media_urls": itinerary_media(snapshot.get("party_type")),
        "day_activities": day,
        "night_activities": night,
    }
