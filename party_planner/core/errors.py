"""
Error types raised by the persistence layer and the bot turn.

Storage failures are not wrapped: any ``sqlalchemy.exc.SQLAlchemyError`` is
logged and propagated to the caller as-is.
"""


class NotFoundError(Exception):
    """A looked-up row does not exist."""


class ConversationNotFoundError(NotFoundError):
    def __init__(self, conversation_id: int):
        self.conversation_id = conversation_id
        super().__init__(f"Conversation with id {conversation_id} not found")
