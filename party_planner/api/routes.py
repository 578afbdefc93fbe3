from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from party_planner.core.database import get_db
from party_planner.core.config import get_settings
from party_planner.schemas.schemas import (
    BotResponseRequest,
    ChatMessage,
    ChatTurnResponse,
    ConversationResponse,
    CreateItineraryRequest,
    ItineraryResponse,
    MessageResponse,
    SendMessageRequest,
    StartConversationRequest,
    UpdateConversationRequest,
)
from party_planner.services import chat_store
from party_planner.services.bot import process_bot_response

router = APIRouter()


@router.post("/conversations", response_model=ConversationResponse)
def start_conversation(request: StartConversationRequest, db: Session = Depends(get_db)):
    """Create a new conversation."""
    conversation = chat_store.start_conversation(db, request.user_id)
    return ConversationResponse.from_row(conversation)


@router.get("/conversations/{conversation_id}", response_model=Optional[ConversationResponse])
def get_conversation(conversation_id: int, db: Session = Depends(get_db)):
    """Get conversation details, or null when it does not exist."""
    conversation = chat_store.get_conversation(db, conversation_id)
    if conversation is None:
        return None
    return ConversationResponse.from_row(conversation)


@router.patch("/conversations/{conversation_id}", response_model=ConversationResponse)
def update_conversation(
    conversation_id: int,
    request: UpdateConversationRequest,
    db: Session = Depends(get_db)
):
    """Update only the supplied conversation fields."""
    conversation = chat_store.update_conversation(db, conversation_id, request.to_fields())
    return ConversationResponse.from_row(conversation)


@router.post("/conversations/{conversation_id}/messages", response_model=MessageResponse)
def send_message(
    conversation_id: int,
    request: SendMessageRequest,
    db: Session = Depends(get_db)
):
    """Append a message to a conversation."""
    message = chat_store.send_message(
        db, conversation_id, request.content, message_type=request.message_type.value
    )
    return MessageResponse.from_row(message)


@router.get("/conversations/{conversation_id}/messages", response_model=list[MessageResponse])
def get_conversation_history(
    conversation_id: int,
    limit: Optional[int] = Query(default=None, gt=0),
    db: Session = Depends(get_db)
):
    """Messages in chronological order."""
    if limit is None:
        limit = get_settings().HISTORY_LIMIT
    rows = chat_store.get_conversation_history(db, conversation_id, limit=limit)
    return [MessageResponse.from_row(row) for row in rows]


@router.post("/conversations/{conversation_id}/bot-response", response_model=MessageResponse)
def bot_response(
    conversation_id: int,
    request: BotResponseRequest,
    db: Session = Depends(get_db)
):
    """Advance the conversation with the user's message and return the bot reply."""
    message = process_bot_response(db, conversation_id, request.user_message)
    return MessageResponse.from_row(message)


@router.post("/conversations/{conversation_id}/itineraries", response_model=ItineraryResponse)
def create_itinerary(
    conversation_id: int,
    request: CreateItineraryRequest,
    db: Session = Depends(get_db)
):
    """Attach an itinerary to a conversation."""
    itinerary = chat_store.create_itinerary(
        db,
        conversation_id,
        title=request.title,
        description=request.description,
        activities=request.activities,
        estimated_cost=request.estimated_cost,
        media_urls=request.media_urls,
    )
    return ItineraryResponse.from_row(itinerary)


@router.get("/conversations/{conversation_id}/itineraries", response_model=list[ItineraryResponse])
def get_itineraries(conversation_id: int, db: Session = Depends(get_db)):
    """List itineraries for a conversation."""
    rows = chat_store.get_itineraries(db, conversation_id)
    return [ItineraryResponse.from_row(row) for row in rows]


@router.post("/chat", response_model=ChatTurnResponse)
def chat(chat_message: ChatMessage, db: Session = Depends(get_db)):
    """Run one full chat turn: store the user message, answer it, return both."""
    user_message = chat_store.send_message(db, chat_message.conversation_id, chat_message.message)
    bot_message = process_bot_response(db, chat_message.conversation_id, chat_message.message)
    conversation = chat_store.get_conversation(db, chat_message.conversation_id)
    return ChatTurnResponse(
        user_message=MessageResponse.from_row(user_message),
        bot_message=MessageResponse.from_row(bot_message),
        conversation=ConversationResponse.from_row(conversation),
    )
