"""
Client hints derived from the conversation state: suggested quick replies
and the intake progress bar.
"""
from typing import Dict, List, Any


QUICK_REPLIES: Dict[str, List[str]] = {
    "initial": ["Bachelor Party", "Bachelorette Party"],
    "party_type": ["Bachelor Party", "Bachelorette Party"],
    "city": ["Las Vegas", "Miami", "Nashville", "New York", "Austin"],
    "activity_preference": ["Activities & Adventures", "Complete Package", "Nightlife Focus"],
}

# (state, label) for each step shown in the progress bar
PROGRESS_STEPS = [
    ("party_type", "Party Type"),
    ("city", "City"),
    ("activity_preference", "Activities"),
    ("party_details", "Details"),
    ("preferences", "Preferences"),
    ("completed", "Complete"),
]

_STEP_FOR_STATE = {
    "initial": 0,
    "party_type": 0,
    "city": 1,
    "activity_preference": 2,
    "party_details": 3,
    "preferences": 4,
    "generating_itinerary": 4,
    "completed": 5,
}


def quick_replies_for(state: str) -> List[str]:
    return list(QUICK_REPLIES.get(state, []))


def progress_for(state: str) -> Dict[str, Any]:
    index = _STEP_FOR_STATE.get(state, 0)
    return {
        "step": index + 1,
        "total": len(PROGRESS_STEPS),
        "label": PROGRESS_STEPS[index][1],
    }
