"""
Graph construction for the party planner bot.
"""
from typing import Dict, Any
from langgraph.graph import StateGraph, START, END
from party_planner.agents.state import TurnState, create_turn_state
from party_planner.agents.node_utilities import (
    party_type_node,
    city_node,
    activity_preference_node,
    party_details_node,
    preferences_node,
    generating_itinerary_node,
    completed_node,
    attach_media_node,
)


# current_state -> node handling the turn
STATE_NODES = {
    "initial": "party_type",
    "party_type": "party_type",
    "city": "city",
    "activity_preference": "activity_preference",
    "party_details": "party_details",
    "preferences": "preferences",
    "generating_itinerary": "generating_itinerary",
    "completed": "completed",
}


def route_by_state(state: TurnState) -> str:
    """Pick the node for the conversation's current state."""
    current = state["conversation"]["current_state"]
    try:
        return STATE_NODES[current]
    except KeyError:
        raise ValueError(f"Unknown conversation state: {current!r}") from None


def create_party_planner_graph(checkpointer=None):
    """
    Create the party planner graph.

    Every turn enters at the node for ``current_state``, runs exactly one
    state node and then ``attach_media``.

    Args:
        checkpointer: Optional checkpointer for state persistence

    Returns:
        Compiled StateGraph
    """
    workflow = StateGraph(TurnState)

    workflow.add_node("party_type", party_type_node)
    workflow.add_node("city", city_node)
    workflow.add_node("activity_preference", activity_preference_node)
    workflow.add_node("party_details", party_details_node)
    workflow.add_node("preferences", preferences_node)
    workflow.add_node("generating_itinerary", generating_itinerary_node)
    workflow.add_node("completed", completed_node)
    workflow.add_node("attach_media", attach_media_node)

    state_nodes = sorted(set(STATE_NODES.values()))
    workflow.add_conditional_edges(
        START,
        route_by_state,
        {node: node for node in state_nodes},
    )
    for node in state_nodes:
        workflow.add_edge(node, "attach_media")
    workflow.add_edge("attach_media", END)

    return workflow.compile(checkpointer=checkpointer)


def run_turn(graph, snapshot: Dict[str, Any], user_message: str) -> Dict[str, Any]:
    """
    Compute one bot turn without touching storage.

    Args:
        graph: Compiled party planner graph
        snapshot: Conversation fields as a plain dict
        user_message: The user's utterance

    Returns:
        Final TurnState with ``updates``, ``reply``, ``metadata`` and ``itinerary``
    """
    return graph.invoke(create_turn_state(snapshot, user_message))
