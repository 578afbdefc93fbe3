"""
Node utilities for the party planner graph.

One node per conversation state. Nodes only read the turn state and return
the fields to update; persistence happens after the graph has run.
"""
from typing import Dict, Any, Optional
from decimal import Decimal, InvalidOperation
import logging
import re
from party_planner.agents.state import (
    PARTY_DETAIL_SLOTS,
    PREFERENCE_SLOTS,
    next_open_slot,
)
from party_planner.agents.replies import REPLIES, ask_next, render, reprompt_for_slot
from party_planner.models.models import ActivityPreference, ConversationState, PartyType
from party_planner.utils.itinerary_builder import build_itinerary, build_preview

logger = logging.getLogger(__name__)

# Checked in order; the first matching group wins.
EXPERIENCE_KEYWORDS = [
    (ActivityPreference.ACTIVITIES, ("activities", "adventure")),
    (ActivityPreference.PACKAGE, ("package", "complete")),
    (ActivityPreference.NIGHTLIFE, ("nightlife", "night")),
]

_GUEST_COUNT = re.compile(r"(?<![-\d.])(\d+)(?!\d|\.\d)")
_AMOUNT = re.compile(r"(-?\d+(?:\.\d+)?)\s*(k\b)?")
MAX_BUDGET = Decimal("99999999.99")
# largest value a 32-bit INTEGER column holds
MAX_GUEST_COUNT = 2147483647


def classify_party_type(text: str) -> Optional[str]:
    lowered = text.lower()
    if "bachelor" in lowered and "bachelorette" not in lowered:
        return PartyType.BACHELOR.value
    if "bachelorette" in lowered:
        return PartyType.BACHELORETTE.value
    return None


def classify_experience(text: str) -> Optional[str]:
    lowered = text.lower()
    for preference, keywords in EXPERIENCE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return preference.value
    return None


def parse_guest_count(text: str) -> Optional[int]:
    """Positive whole number from replies like "12" or "about 12 people"."""
    match = _GUEST_COUNT.search(text.replace(",", ""))
    if not match:
        return None
    count = int(match.group(1))
    if count <= 0 or count > MAX_GUEST_COUNT:
        return None
    return count


def parse_budget(text: str) -> Optional[Decimal]:
    """
    Amount from replies like "$2,500", "5k" or "around 3000 dollars".

    Returns None when the reply holds no usable amount; negative amounts
    are rejected.
    """
    match = _AMOUNT.search(text.lower().replace(",", ""))
    if not match:
        return None
    try:
        amount = Decimal(match.group(1))
    except InvalidOperation:
        return None
    if match.group(2):
        amount *= 1000
    if amount < 0 or amount > MAX_BUDGET:
        return None
    return amount.quantize(Decimal("0.01"))


def _merged(snapshot: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(snapshot)
    merged.update(updates)
    return merged


def party_type_node(state: Dict[str, Any]) -> Dict[str, Any]:
    """Handles both ``initial`` and the legacy ``party_type`` state."""
    party_type = classify_party_type(state["user_message"])
    if party_type is None:
        if state["conversation"]["current_state"] == ConversationState.INITIAL.value:
            return {"reply": render("greeting")}
        return {"reply": render("party_type_reprompt")}

    return {
        "updates": {
            "party_type": party_type,
            "current_state": ConversationState.CITY.value,
        },
        "reply": render("party_type_chosen", party_type=party_type),
    }


def city_node(state: Dict[str, Any]) -> Dict[str, Any]:
    city = state["user_message"].strip()
    if not city:
        return {"reply": render("city_reprompt")}

    return {
        "updates": {
            "city": city,
            "current_state": ConversationState.ACTIVITY_PREFERENCE.value,
        },
        "reply": render("city_chosen", city=city),
    }


def activity_preference_node(state: Dict[str, Any]) -> Dict[str, Any]:
    preference = classify_experience(state["user_message"])
    if preference is None:
        return {"reply": render("experience_reprompt")}

    return {
        "updates": {
            "activity_preference": preference,
            "current_state": ConversationState.PARTY_DETAILS.value,
        },
        "reply": render(f"experience_{preference}"),
    }


def party_details_node(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fills party_name, party_dates, guest_count and budget, one per turn."""
    snapshot = state["conversation"]
    text = state["user_message"].strip()
    slot = next_open_slot(snapshot, PARTY_DETAIL_SLOTS)

    updates: Dict[str, Any] = {}
    reply = ""
    if slot == "guest_count":
        guest_count = parse_guest_count(text)
        if guest_count is None:
            return {"reply": render("guest_count_invalid")}
        updates["guest_count"] = guest_count
        reply = render("guest_count_saved", guest_count=guest_count)
    elif slot == "budget":
        budget = parse_budget(text)
        if budget is not None:
            updates["budget"] = budget
        else:
            logger.info("No amount in budget reply for conversation %s", snapshot["id"])
    elif slot is not None:
        if not text:
            return {"reply": reprompt_for_slot(slot)}
        updates[slot] = text
        reply = render(f"{slot}_saved", **{slot: text})

    remaining = next_open_slot(_merged(snapshot, updates), PARTY_DETAIL_SLOTS)
    # the budget answer closes the details step even without a usable amount
    if slot == "budget" or remaining is None:
        updates["current_state"] = ConversationState.PREFERENCES.value
        next_preference = next_open_slot(_merged(snapshot, updates), PREFERENCE_SLOTS)
        reply = render("details_complete")
        if next_preference:
            reply = ask_next(reply, next_preference)
        return {"updates": updates, "reply": reply}

    return {"updates": updates, "reply": ask_next(reply, remaining)}


def preferences_node(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fills theme, dining and music preferences; the last one builds the preview."""
    snapshot = state["conversation"]
    text = state["user_message"].strip()
    slot = next_open_slot(snapshot, PREFERENCE_SLOTS)

    updates: Dict[str, Any] = {}
    if slot is not None:
        if not text:
            return {"reply": reprompt_for_slot(slot)}
        updates[slot] = text

    remaining = next_open_slot(_merged(snapshot, updates), PREFERENCE_SLOTS)
    if remaining is not None:
        return {
            "updates": updates,
            "reply": ask_next(render(f"{slot}_saved", **{slot: text}), remaining),
        }

    updates["current_state"] = ConversationState.GENERATING_ITINERARY.value
    preview = build_preview(_merged(snapshot, updates))
    return {
        "updates": updates,
        "reply": render("preview_ready", title=preview["title"]),
        "metadata": preview,
    }


def generating_itinerary_node(state: Dict[str, Any]) -> Dict[str, Any]:
    snapshot = state["conversation"]
    draft = build_itinerary(snapshot)

    updates: Dict[str, Any] = {"current_state": ConversationState.COMPLETED.value}
    for field in ("day_activities", "night_activities"):
        if snapshot.get(field) is None:
            updates[field] = draft[field]

    itinerary = {
        "title": draft["title"],
        "description": draft["description"],
        "activities": draft["activities"],
        "estimated_cost": draft["estimated_cost"],
        "media_urls": draft["media_urls"],
    }
    return {
        "updates": updates,
        "reply": render("itinerary_ready", title=draft["title"]),
        "itinerary": itinerary,
        "metadata": {
            "type": "itinerary",
            "title": draft["title"],
            "description": draft["description"],
            "activities": draft["activities"],
            "estimated_cost": draft["estimated_cost"],
            "media_urls": draft["media_urls"],
        },
    }


def completed_node(state: Dict[str, Any]) -> Dict[str, Any]:
    return {"reply": render("completed")}


def attach_media_node(state: Dict[str, Any]) -> Dict[str, Any]:
    """Mention the photos when the reply carries a media list."""
    metadata = state.get("metadata") or {}
    if not metadata.get("media_urls"):
        return {}
    return {"reply": f"{state['reply']} {REPLIES['media_attached']}"}
