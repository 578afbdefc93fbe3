"""Turn logic of the party planner graph, without storage."""

from __future__ import annotations

from decimal import Decimal

import pytest

from party_planner.agents.graph import create_party_planner_graph, route_by_state, run_turn
from party_planner.agents.node_utilities import (
    classify_experience,
    classify_party_type,
    parse_budget,
    parse_guest_count,
)


@pytest.fixture(scope="module")
def graph():
    return create_party_planner_graph()


DETAILS = dict(
    party_type="bachelor",
    city="Las Vegas",
    activity_preference="nightlife",
)


# ============================================================================
# Classifiers and parsers
# ============================================================================

@pytest.mark.parametrize(
    "text, expected",
    [
        ("I want a bachelor party", "bachelor"),
        ("bachelorette!!", "bachelorette"),
        ("BACHELOR Party", "bachelor"),
        ("Bachelorette Party", "bachelorette"),
        ("just a birthday", None),
    ],
)
def test_classify_party_type(text, expected):
    assert classify_party_type(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Activities & Adventures", "activities"),
        ("some adventure please", "activities"),
        ("Complete Package", "package"),
        ("nightlife focused", "nightlife"),
        ("a big night out", "nightlife"),
        ("not sure yet", None),
    ],
)
def test_classify_experience(text, expected):
    assert classify_experience(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12", 12),
        (" about 12 people ", 12),
        ("1,200", 1200),
        ("abc", None),
        ("0", None),
        ("-4", None),
        ("12.5", None),
        ("We'll have 12.", 12),
        ("99999999999999999999", None),
    ],
)
def test_parse_guest_count(text, expected):
    assert parse_guest_count(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("$2,500", Decimal("2500.00")),
        ("5k", Decimal("5000.00")),
        ("around 1250.50 dollars", Decimal("1250.50")),
        ("no idea, flexible", None),
        ("-500", None),
        ("1000000000000000000000000000000", None),
    ],
)
def test_parse_budget(text, expected):
    assert parse_budget(text) == expected


# ============================================================================
# Routing
# ============================================================================

def test_initial_and_legacy_party_type_share_a_node(make_snapshot):
    assert route_by_state({"conversation": make_snapshot(current_state="initial")}) == "party_type"
    assert route_by_state({"conversation": make_snapshot(current_state="party_type")}) == "party_type"


def test_unknown_state_is_rejected(make_snapshot):
    with pytest.raises(ValueError):
        route_by_state({"conversation": make_snapshot(current_state="dancing")})


# ============================================================================
# Forward transitions
# ============================================================================

def test_initial_bachelor(graph, make_snapshot):
    result = run_turn(graph, make_snapshot(), "I want a bachelor party")

    assert result["updates"] == {"party_type": "bachelor", "current_state": "city"}
    assert "which city" in result["reply"]
    assert result.get("metadata") is None


def test_initial_bachelorette(graph, make_snapshot):
    result = run_turn(graph, make_snapshot(), "bachelorette!!")

    assert result["updates"] == {"party_type": "bachelorette", "current_state": "city"}
    assert "bachelorette party" in result["reply"]


def test_city_is_trimmed(graph, make_snapshot):
    snapshot = make_snapshot(party_type="bachelor", current_state="city")
    result = run_turn(graph, snapshot, "  Bangkok  ")

    assert result["updates"] == {"city": "Bangkok", "current_state": "activity_preference"}
    assert result["reply"].startswith("Bangkok sounds like an amazing place")


@pytest.mark.parametrize(
    "text, preference, phrase",
    [
        ("activities", "activities", "Activity-focused"),
        ("complete package", "package", "complete package"),
        ("nightlife focused", "nightlife", "Nightlife"),
    ],
)
def test_activity_preference(graph, make_snapshot, text, preference, phrase):
    snapshot = make_snapshot(party_type="bachelor", city="Miami", current_state="activity_preference")
    result = run_turn(graph, snapshot, text)

    assert result["updates"] == {"activity_preference": preference, "current_state": "party_details"}
    assert phrase.lower() in result["reply"].lower()
    assert "name of the person" in result["reply"]


def test_party_details_fills_name_only(graph, make_snapshot):
    snapshot = make_snapshot(current_state="party_details", **DETAILS)
    result = run_turn(graph, snapshot, "John")

    assert result["updates"] == {"party_name": "John"}
    assert "What dates" in result["reply"]


def test_party_details_slot_order(graph, make_snapshot):
    snapshot = make_snapshot(current_state="party_details", party_name="John", **DETAILS)
    result = run_turn(graph, snapshot, "March 15-17")
    assert result["updates"] == {"party_dates": "March 15-17"}
    assert "How many guests" in result["reply"]

    snapshot["party_dates"] = "March 15-17"
    result = run_turn(graph, snapshot, "12")
    assert result["updates"] == {"guest_count": 12}
    assert "budget" in result["reply"]

    snapshot["guest_count"] = 12
    result = run_turn(graph, snapshot, "$3,000")
    assert result["updates"] == {"budget": Decimal("3000.00"), "current_state": "preferences"}
    assert "theme" in result["reply"]


def test_budget_without_amount_still_advances(graph, make_snapshot):
    snapshot = make_snapshot(
        current_state="party_details",
        party_name="John",
        party_dates="March 15-17",
        guest_count=12,
        **DETAILS,
    )
    result = run_turn(graph, snapshot, "we're flexible")

    assert result["updates"] == {"current_state": "preferences"}


def test_guest_count_rejects_non_numeric(graph, make_snapshot):
    snapshot = make_snapshot(
        current_state="party_details",
        party_name="John",
        party_dates="March 15-17",
        budget=Decimal("2000.00"),
        **DETAILS,
    )
    result = run_turn(graph, snapshot, "abc")

    assert result["updates"] == {}
    assert "number" in result["reply"]

    result = run_turn(graph, snapshot, "12")
    # budget was already known, so the details step is complete
    assert result["updates"] == {"guest_count": 12, "current_state": "preferences"}


def test_preferences_collect_then_preview(graph, make_snapshot):
    snapshot = make_snapshot(
        current_state="preferences",
        party_name="John",
        party_dates="March 15-17",
        guest_count=12,
        budget=Decimal("3000.00"),
        **DETAILS,
    )
    result = run_turn(graph, snapshot, "Casino Royale")
    assert result["updates"] == {"theme": "Casino Royale"}
    assert "dining" in result["reply"]
    assert result.get("metadata") is None

    snapshot["theme"] = "Casino Royale"
    result = run_turn(graph, snapshot, "steakhouse")
    assert result["updates"] == {"dining_preferences": "steakhouse"}
    assert "music" in result["reply"]

    snapshot["dining_preferences"] = "steakhouse"
    result = run_turn(graph, snapshot, "hip hop")
    assert result["updates"] == {
        "music_preferences": "hip hop",
        "current_state": "generating_itinerary",
    }
    preview = result["metadata"]
    assert preview["type"] == "itinerary_preview"
    assert preview["title"] == "John's Bachelor Party in Las Vegas"
    assert preview["media_urls"]
    assert "photos" in result["reply"]


def test_generating_itinerary_completes(graph, make_snapshot):
    snapshot = make_snapshot(
        current_state="generating_itinerary",
        party_name="Emma",
        party_dates="June 1-3",
        guest_count=8,
        budget=Decimal("4000.00"),
        theme="Disco",
        dining_preferences="brunch",
        music_preferences="pop",
        party_type="bachelorette",
        city="Nashville",
        activity_preference="package",
    )
    result = run_turn(graph, snapshot, "sounds great")

    assert result["updates"]["current_state"] == "completed"
    assert result["updates"]["day_activities"]
    assert result["updates"]["night_activities"]
    itinerary = result["itinerary"]
    assert itinerary["title"] == "Emma's Bachelorette Party in Nashville"
    assert itinerary["estimated_cost"] == 4000.0
    assert itinerary["activities"]["budget_allocation"]["lodging"] == 1400.0
    assert result["metadata"]["type"] == "itinerary"
    assert result["metadata"]["media_urls"] == itinerary["media_urls"]
    assert "Your itinerary is ready" in result["reply"]


def test_preview_and_itinerary_without_name_or_city(graph, make_snapshot):
    """Fields an admin update left empty fall back to neutral wording."""
    snapshot = make_snapshot(
        current_state="preferences",
        activity_preference="nightlife",
        party_dates="May 2-4",
        guest_count=6,
        theme="Neon",
        dining_preferences="tacos",
    )
    result = run_turn(graph, snapshot, "house music")

    assert result["metadata"]["title"] == "Your Bachelor Party in your city"
    assert "None" not in result["reply"]
    assert "Your Bachelor Party in your city" in result["reply"]

    snapshot.update(result["updates"])
    result = run_turn(graph, snapshot, "show me")

    assert result["itinerary"]["title"] == "Your Bachelor Party in your city"
    assert "None" not in result["itinerary"]["description"]
    assert "None" not in result["reply"]


def test_completed_stays_completed(graph, make_snapshot):
    snapshot = make_snapshot(current_state="completed", **DETAILS)
    result = run_turn(graph, snapshot, "thanks!")

    assert result["updates"] == {}
    assert "anything else you'd like to adjust" in result["reply"]
    assert result.get("metadata") is None


# ============================================================================
# Re-prompts
# ============================================================================

@pytest.mark.parametrize(
    "state, fields, text, phrase",
    [
        ("initial", {}, "Hello", "bachelor or bachelorette"),
        ("party_type", {}, "I need help planning", "bachelor or bachelorette"),
        ("city", {"party_type": "bachelor"}, "   ", "which city"),
        ("activity_preference", {"party_type": "bachelor", "city": "Miami"}, "hmm", "activities, a complete package, or nightlife"),
        ("party_details", DETAILS, "  ", "name of the person"),
        ("preferences", dict(DETAILS, party_name="J", party_dates="May", guest_count=4), "", "theme"),
    ],
)
def test_unrecognized_input_reprompts(graph, make_snapshot, state, fields, text, phrase):
    snapshot = make_snapshot(current_state=state, **fields)
    result = run_turn(graph, snapshot, text)

    assert result["updates"] == {}
    assert phrase.lower() in result["reply"].lower()
