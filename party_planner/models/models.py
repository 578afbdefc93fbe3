from sqlalchemy import Column, String, DateTime, JSON, Integer, Text, Numeric, ForeignKey, Enum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
from party_planner.core.database import Base


class PartyType(str, enum.Enum):
    BACHELOR = "bachelor"
    BACHELORETTE = "bachelorette"


class ActivityPreference(str, enum.Enum):
    ACTIVITIES = "activities"
    PACKAGE = "package"
    NIGHTLIFE = "nightlife"


class ConversationState(str, enum.Enum):
    INITIAL = "initial"
    PARTY_TYPE = "party_type"
    CITY = "city"
    ACTIVITY_PREFERENCE = "activity_preference"
    PARTY_DETAILS = "party_details"
    PREFERENCES = "preferences"
    GENERATING_ITINERARY = "generating_itinerary"
    COMPLETED = "completed"


class MessageType(str, enum.Enum):
    USER = "user"
    BOT = "bot"
    SYSTEM = "system"


def _utcnow():
    return datetime.now(timezone.utc)


def _values(enum_cls):
    return [member.value for member in enum_cls]


class Conversation(Base):
    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Text, nullable=False)

    party_type = Column(Enum(*_values(PartyType), name="party_type"))
    city = Column(Text)
    activity_preference = Column(Enum(*_values(ActivityPreference), name="activity_preference"))
    party_name = Column(Text)
    party_dates = Column(Text)
    guest_count = Column(Integer)
    budget = Column(Numeric(10, 2))
    theme = Column(Text)
    dining_preferences = Column(Text)
    music_preferences = Column(Text)
    day_activities = Column(JSON)
    night_activities = Column(JSON)

    current_state = Column(
        Enum(*_values(ConversationState), name="conversation_state"),
        nullable=False,
        default=ConversationState.INITIAL.value,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    messages = relationship("Message", back_populates="conversation", cascade="all, delete-orphan")
    itineraries = relationship("Itinerary", back_populates="conversation", cascade="all, delete-orphan")


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(
        Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message_type = Column(Enum(*_values(MessageType), name="message_type"), nullable=False)
    content = Column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    meta = Column("metadata", JSON)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    conversation = relationship("Conversation", back_populates="messages")


class Itinerary(Base):
    __tablename__ = "itineraries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(
        Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    activities = Column(JSON, nullable=False)
    estimated_cost = Column(Numeric(10, 2))
    media_urls = Column(JSON)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    conversation = relationship("Conversation", back_populates="itineraries")
