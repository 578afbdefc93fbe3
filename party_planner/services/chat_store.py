from contextlib import contextmanager, nullcontext
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from party_planner.core.config import get_settings
from party_planner.core.errors import ConversationNotFoundError
from party_planner.models.models import Conversation, ConversationState, Itinerary, Message, MessageType

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {
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
}


def _to_decimal(value) -> Optional[Decimal]:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@contextmanager
def storage_operation(db: Session, operation: str):
    """Roll back, log and re-raise any storage failure."""
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.exception("%s failed", operation)
        raise


def _write_operation(db: Session, operation: str, commit: bool):
    # uncommitted writes belong to the caller's storage_operation
    return storage_operation(db, operation) if commit else nullcontext()


def _save(db: Session, row, commit: bool):
    if commit:
        db.commit()
        db.refresh(row)
    else:
        db.flush()
    return row


def _require_conversation(db: Session, conversation_id: int) -> Conversation:
    conversation = db.get(Conversation, conversation_id)
    if conversation is None:
        raise ConversationNotFoundError(conversation_id)
    return conversation


def start_conversation(db: Session, user_id: str) -> Conversation:
    with storage_operation(db, "Conversation creation"):
        conversation = Conversation(
            user_id=user_id,
            current_state=ConversationState.INITIAL.value,
        )
        db.add(conversation)
        return _save(db, conversation, commit=True)


def get_conversation(db: Session, conversation_id: int) -> Optional[Conversation]:
    with storage_operation(db, "Get conversation"):
        return db.get(Conversation, conversation_id)


def update_conversation(db: Session, conversation_id: int, fields: dict[str, Any], commit: bool = True) -> Conversation:
    """
    Apply the supplied fields only; everything omitted is left as it is.
    The modification timestamp is refreshed on every call.
    """
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update conversation fields: {sorted(unknown)}")

    with _write_operation(db, "Conversation update", commit):
        conversation = _require_conversation(db, conversation_id)
        for field, value in fields.items():
            if field == "budget":
                value = _to_decimal(value)
            setattr(conversation, field, value)
        conversation.updated_at = datetime.now(timezone.utc)
        return _save(db, conversation, commit)


def send_message(
    db: Session,
    conversation_id: int,
    content: str,
    message_type: str = MessageType.USER.value,
    metadata: Optional[dict] = None,
    commit: bool = True,
) -> Message:
    with _write_operation(db, "Send message", commit):
        _require_conversation(db, conversation_id)
        message = Message(
            conversation_id=conversation_id,
            message_type=message_type,
            content=content,
            meta=metadata,
        )
        db.add(message)
        return _save(db, message, commit)


def get_conversation_history(db: Session, conversation_id: int, limit: Optional[int] = None) -> list[Message]:
    """Oldest messages first, at most ``limit`` of them."""
    if limit is None:
        limit = get_settings().HISTORY_LIMIT
    with storage_operation(db, "Get conversation history"):
        return (
            db.query(Message)
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
            .limit(limit)
            .all()
        )


def create_itinerary(
    db: Session,
    conversation_id: int,
    title: str,
    description: str,
    activities: Any,
    estimated_cost: Optional[float] = None,
    media_urls: Optional[list[str]] = None,
    commit: bool = True,
) -> Itinerary:
    with _write_operation(db, "Itinerary creation", commit):
        _require_conversation(db, conversation_id)
        itinerary = Itinerary(
            conversation_id=conversation_id,
            title=title,
            description=description,
            activities=activities,
            estimated_cost=_to_decimal(estimated_cost),
            media_urls=media_urls,
        )
        db.add(itinerary)
        return _save(db, itinerary, commit)


def get_itineraries(db: Session, conversation_id: int) -> list[Itinerary]:
    with storage_operation(db, "Get itineraries"):
        return (
            db.query(Itinerary)
            .filter(Itinerary.conversation_id == conversation_id)
            .order_by(Itinerary.created_at.asc(), Itinerary.id.asc())
            .all()
        )
