"""
Pydantic schemas for API requests and responses.
"""
from pydantic import BaseModel, Field
from typing import Optional, Any
from datetime import datetime
from party_planner.models.models import (
    ActivityPreference,
    ConversationState,
    MessageType,
    PartyType,
)
from party_planner.agents.progress import progress_for, quick_replies_for


def _as_float(value) -> Optional[float]:
    return float(value) if value is not None else None


class StartConversationRequest(BaseModel):
    """Start a new conversation for a user."""
    user_id: str


class UpdateConversationRequest(BaseModel):
    """Partial conversation update; omitted fields are left untouched."""
    party_type: Optional[PartyType] = None
    city: Optional[str] = None
    activity_preference: Optional[ActivityPreference] = None
    party_name: Optional[str] = None
    party_dates: Optional[str] = None
    guest_count: Optional[int] = Field(default=None, gt=0)
    budget: Optional[float] = Field(default=None, ge=0)
    theme: Optional[str] = None
    dining_preferences: Optional[str] = None
    music_preferences: Optional[str] = None
    day_activities: Optional[list[str]] = None
    night_activities: Optional[list[str]] = None
    current_state: Optional[ConversationState] = None

    def to_fields(self) -> dict:
        fields = self.model_dump(exclude_unset=True, exclude_none=True)
        return {
            key: value.value if hasattr(value, "value") else value
            for key, value in fields.items()
        }


class SendMessageRequest(BaseModel):
    """Message appended to a conversation."""
    content: str
    message_type: MessageType = MessageType.USER


class BotResponseRequest(BaseModel):
    """User utterance the bot should answer."""
    user_message: str


class ChatMessage(BaseModel):
    """One full chat turn from the client."""
    conversation_id: int
    message: str


class CreateItineraryRequest(BaseModel):
    """Itinerary attached to a conversation."""
    title: str
    description: str
    activities: Any
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    media_urls: Optional[list[str]] = None


class ProgressResponse(BaseModel):
    step: int
    total: int
    label: str


class ConversationResponse(BaseModel):
    """Conversation response."""
    id: int
    user_id: str
    party_type: Optional[str]
    city: Optional[str]
    activity_preference: Optional[str]
    party_name: Optional[str]
    party_dates: Optional[str]
    guest_count: Optional[int]
    budget: Optional[float]
    theme: Optional[str]
    dining_preferences: Optional[str]
    music_preferences: Optional[str]
    day_activities: Optional[list[str]]
    night_activities: Optional[list[str]]
    current_state: str
    created_at: datetime
    updated_at: datetime
    quick_replies: list[str]
    progress: ProgressResponse

    @classmethod
    def from_row(cls, conversation) -> "ConversationResponse":
        return cls(
            id=conversation.id,
            user_id=conversation.user_id,
            party_type=conversation.party_type,
            city=conversation.city,
            activity_preference=conversation.activity_preference,
            party_name=conversation.party_name,
            party_dates=conversation.party_dates,
            guest_count=conversation.guest_count,
            budget=_as_float(conversation.budget),
            theme=conversation.theme,
            dining_preferences=conversation.dining_preferences,
            music_preferences=conversation.music_preferences,
            day_activities=conversation.day_activities,
            night_activities=conversation.night_activities,
            current_state=conversation.current_state,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
            quick_replies=quick_replies_for(conversation.current_state),
            progress=ProgressResponse(**progress_for(conversation.current_state)),
        )


class MessageResponse(BaseModel):
    """Message response."""
    id: int
    conversation_id: int
    message_type: str
    content: str
    metadata: Optional[dict]
    created_at: datetime

    @classmethod
    def from_row(cls, message) -> "MessageResponse":
        return cls(
            id=message.id,
            conversation_id=message.conversation_id,
            message_type=message.message_type,
            content=message.content,
            metadata=message.meta,
            created_at=message.created_at,
        )


class ItineraryResponse(BaseModel):
    """Itinerary response."""
    id: int
    conversation_id: int
    title: str
    description: str
    activities: Any
    estimated_cost: Optional[float]
    media_urls: Optional[list[str]]
    created_at: datetime

    @classmethod
    def from_row(cls, itinerary) -> "ItineraryResponse":
        return cls(
            id=itinerary.id,
            conversation_id=itinerary.conversation_id,
            title=itinerary.title,
            description=itinerary.description,
            activities=itinerary.activities,
            estimated_cost=_as_float(itinerary.estimated_cost),
            media_urls=itinerary.media_urls,
            created_at=itinerary.created_at,
        )


class ChatTurnResponse(BaseModel):
    """Result of one chat turn."""
    user_message: MessageResponse
    bot_message: MessageResponse
    conversation: ConversationResponse
