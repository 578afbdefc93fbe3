"""
Reply catalog for the party planning bot.

Each entry is a format string; placeholders are filled from the collected
conversation fields.
"""

PARTY_TYPE_QUESTION = "are you planning a bachelor or bachelorette party?"
CITY_QUESTION = "which city are you thinking of for this celebration?"
EXPERIENCE_QUESTION = "Activities, a complete package, or nightlife focused?"

SLOT_QUESTIONS = {
    "party_name": "What's the name of the person you're celebrating?",
    "party_dates": "What dates are you thinking for the celebration?",
    "guest_count": "How many guests are you expecting?",
    "budget": "What's your total budget for the party?",
    "theme": "Do you have a theme in mind for the party?",
    "dining_preferences": "Any dining preferences? Steakhouse, brunch spots, private chef?",
    "music_preferences": "What kind of music gets your group going?",
}

REPLIES = {
    "greeting": (
        "Hi there! I'm excited to help you plan the perfect party! "
        "First, " + PARTY_TYPE_QUESTION
    ),
    "party_type_reprompt": (
        "I'd love to help you plan! Could you let me know if this is for a "
        "bachelor or bachelorette party?"
    ),
    "party_type_chosen": "Great choice for a {party_type} party! Now, " + CITY_QUESTION,
    "city_reprompt": "I didn't catch that. " + CITY_QUESTION[0].upper() + CITY_QUESTION[1:],
    "city_chosen": (
        "{city} sounds like an amazing place to celebrate! "
        "What type of experience are you looking for? " + EXPERIENCE_QUESTION
    ),
    "experience_reprompt": (
        "I'd love to help you choose! Are you interested in activities, "
        "a complete package, or nightlife focused experiences?"
    ),
    "experience_activities": (
        "Perfect! Activity-focused celebrations are so much fun. "
        "Now let's get some details. " + SLOT_QUESTIONS["party_name"]
    ),
    "experience_package": (
        "Excellent choice! A complete package takes all the stress out of planning. "
        + SLOT_QUESTIONS["party_name"]
    ),
    "experience_nightlife": (
        "Great! Nightlife celebrations are always memorable. "
        + SLOT_QUESTIONS["party_name"]
    ),
    "slot_reprompt": "Sorry, I didn't get that. {question}",
    "party_name_saved": "A party for {party_name}, love it!",
    "party_dates_saved": "{party_dates}, noted!",
    "guest_count_invalid": (
        "I need a number for the guest count. " + SLOT_QUESTIONS["guest_count"]
        + " Please reply with a number, like 12."
    ),
    "guest_count_saved": "{guest_count} guests, great crew!",
    "details_complete": "Thanks for those details! Now let's talk about your preferences.",
    "theme_saved": "\"{theme}\" is going to be a blast.",
    "dining_preferences_saved": "Yum, noted.",
    "preview_ready": (
        "This is going to be amazing! Here's a sneak peek of "
        "{title}. Send me any message when you're ready "
        "and I'll put together the full itinerary."
    ),
    "itinerary_ready": (
        "Your itinerary is ready! \"{title}\" is all planned out. "
        "I hope you have an absolutely amazing celebration!"
    ),
    "completed": (
        "Your itinerary is ready! I hope you have an absolutely amazing celebration. "
        "Is there anything else you'd like to adjust?"
    ),
    "media_attached": "Take a look at the photos for some inspiration.",
}


def render(key: str, **fields) -> str:
    return REPLIES[key].format(**fields)


def ask_next(reply: str, slot: str) -> str:
    """Follow an acknowledgement with the question for the next open slot."""
    return f"{reply} {SLOT_QUESTIONS[slot]}"


def reprompt_for_slot(slot: str) -> str:
    return render("slot_reprompt", question=SLOT_QUESTIONS[slot])
