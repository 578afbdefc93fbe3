"""
State definition for the party planning bot.
"""
from typing import TypedDict, Dict, Any, Optional


SNAPSHOT_FIELDS = (
    "id",
    "user_id",
    "party_type",
    "city",
    "activity_preference",
    "party_name",
    "party_dates",
    "guest_count",
    "budget",
    "theme",
    "dining_preferences",
    "music_preferences",
    "day_activities",
    "night_activities",
    "current_state",
)

# slot-filling states and the order their slots are collected in
PARTY_DETAIL_SLOTS = ("party_name", "party_dates", "guest_count", "budget")
PREFERENCE_SLOTS = ("theme", "dining_preferences", "music_preferences")


class TurnState(TypedDict):
    """
    State for one bot turn.

    Attributes:
        conversation: Snapshot of the conversation when the turn started
        user_message: The user's latest utterance
        updates: Conversation fields to persist (empty when nothing changes)
        reply: Bot reply text
        metadata: Rich media payload attached to the bot message
        itinerary: Final itinerary draft to persist, if one was generated
    """
    conversation: Dict[str, Any]
    user_message: str
    updates: Dict[str, Any]
    reply: str
    metadata: Optional[Dict[str, Any]]
    itinerary: Optional[Dict[str, Any]]


def snapshot_conversation(conversation) -> Dict[str, Any]:
    """Copy the fields of a Conversation row into a plain dict."""
    return {field: getattr(conversation, field) for field in SNAPSHOT_FIELDS}


def next_open_slot(snapshot: Dict[str, Any], slots) -> Optional[str]:
    """First slot in ``slots`` that has no value yet."""
    for slot in slots:
        if snapshot.get(slot) is None:
            return slot
    return None


def create_turn_state(snapshot: Dict[str, Any], user_message: str) -> TurnState:
    return TurnState(
        conversation=snapshot,
        user_message=user_message,
        updates={},
        reply="",
        metadata=None,
        itinerary=None,
    )

