"""
Runs one bot turn against storage: load, advance, persist.
"""
from typing import Optional
import logging

from sqlalchemy.orm import Session

from party_planner.agents.graph import create_party_planner_graph, run_turn
from party_planner.agents.state import snapshot_conversation
from party_planner.core.errors import ConversationNotFoundError
from party_planner.models.models import Conversation, Message, MessageType
from party_planner.services.chat_store import (
    create_itinerary,
    get_conversation,
    send_message,
    storage_operation,
    update_conversation,
)

logger = logging.getLogger(__name__)

party_graph = create_party_planner_graph()


def advance(db: Session, conversation: Conversation, user_message: str) -> Message:
    """
    Advance the conversation by one turn and store the bot reply.

    The caller records the user's own message beforehand. Conversation
    fields, any generated itinerary and the bot message are committed
    together.
    """
    from_state = conversation.current_state
    result = run_turn(party_graph, snapshot_conversation(conversation), user_message)
    updates = result.get("updates") or {}
    metadata: Optional[dict] = result.get("metadata")

    with storage_operation(db, "Bot response processing"):
        if updates:
            update_conversation(db, conversation.id, updates, commit=False)

        draft = result.get("itinerary")
        if draft:
            itinerary = create_itinerary(db, conversation.id, commit=False, **draft)
            metadata = dict(metadata or {}, itinerary_id=itinerary.id)

        message = send_message(
            db,
            conversation.id,
            result["reply"],
            message_type=MessageType.BOT.value,
            metadata=metadata,
            commit=False,
        )
        db.commit()
        db.refresh(message)

    logger.info(
        "Conversation %s: %s -> %s",
        conversation.id,
        from_state,
        updates.get("current_state", from_state),
    )
    return message


def process_bot_response(db: Session, conversation_id: int, user_message: str) -> Message:
    conversation = get_conversation(db, conversation_id)
    if conversation is None:
        raise ConversationNotFoundError(conversation_id)
    return advance(db, conversation, user_message)
