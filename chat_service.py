# backend/chat_service.py
"""Handlers behind the RPC procedures.

Each function takes the request's SQLAlchemy session first and performs one
or two statements against it. Failures are logged here once and re-raised
for the routers to report.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import models
import schemas
from responder import Responder, generate_response

logger = logging.getLogger(__name__)


class NotFoundError(ValueError):
    """A referenced user or conversation does not exist."""


class ConflictError(Exception):
    """The write collides with an existing row (duplicate email)."""


# ─── Users ─────────────────────────────────────────────────────────────────────
def find_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    existing = find_user_by_email(db, user.email)
    if existing:
        logger.warning("User creation rejected: email %s already registered", user.email)
        raise ConflictError("Email already registered")

    now = datetime.utcnow()
    new_user = models.User(
        username=user.username,
        email=user.email,
        created_at=now,
        updated_at=now,
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same email
        db.rollback()
        logger.warning("User creation failed: email %s already registered", user.email)
        raise ConflictError("Email already registered")
    db.refresh(new_user)
    return new_user


# ─── Conversations ─────────────────────────────────────────────────────────────
def create_conversation(db: Session, conv: schemas.ConversationCreate) -> models.Conversation:
    owner = db.query(models.User).filter(models.User.id == conv.user_id).first()
    if owner is None:
        logger.error("Conversation creation failed: user %s does not exist", conv.user_id)
        raise NotFoundError(f"User with id {conv.user_id} does not exist")

    now = datetime.utcnow()
    new_conv = models.Conversation(
        user_id=conv.user_id,
        title=conv.title or None,
        created_at=now,
        updated_at=now,
    )
    db.add(new_conv)
    db.commit()
    db.refresh(new_conv)
    return new_conv


def get_conversations(db: Session, user_id: int) -> List[models.Conversation]:
    """Most recently updated first; empty for unknown users."""
    return (
        db.query(models.Conversation)
          .filter(models.Conversation.user_id == user_id)
          .order_by(models.Conversation.updated_at.desc(), models.Conversation.id.desc())
          .all()
    )


def update_conversation_title(
    db: Session, update: schemas.UpdateConversationTitleInput
) -> models.Conversation:
    conv = (
        db.query(models.Conversation)
          .filter(models.Conversation.id == update.conversation_id)
          .first()
    )
    if conv is None:
        logger.error("Title update failed: conversation %s not found", update.conversation_id)
        raise NotFoundError(f"Conversation with id {update.conversation_id} not found")

    conv.title = update.title
    conv.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(conv)
    return conv


# ─── Messages ──────────────────────────────────────────────────────────────────
def send_message(
    db: Session,
    msg: schemas.SendMessageInput,
    responder: Optional[Responder] = None,
) -> models.Message:
    """Store the user's message and the assistant reply; return the reply.

    The conversation is not looked up first: a missing conversation surfaces
    as the store's foreign key violation. Both rows are committed together.
    """
    agent_type = msg.ai_agent_type or models.AiAgentType.general_qa
    responder = responder or generate_response

    try:
        user_msg = models.Message(
            conversation_id=msg.conversation_id,
            role=models.MessageRole.user,
            content=msg.content,
            ai_agent_type=None,
            created_at=datetime.utcnow(),
        )
        db.add(user_msg)
        db.flush()

        reply = responder(msg.content, agent_type)

        bot_msg = models.Message(
            conversation_id=msg.conversation_id,
            role=models.MessageRole.assistant,
            content=reply,
            ai_agent_type=agent_type,
            created_at=datetime.utcnow(),
        )
        db.add(bot_msg)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error("Send message failed for conversation %s: %s", msg.conversation_id, e.orig)
        raise
    except Exception:
        # Logged by the application's generic error handler
        db.rollback()
        raise

    db.refresh(bot_msg)
    logger.info(
        "Message stored: conversation=%s, message_id=%s, response_id=%s, agent=%s",
        msg.conversation_id, user_msg.id, bot_msg.id, agent_type.value,
    )
    return bot_msg


def get_messages(db: Session, conversation_id: int) -> List[models.Message]:
    """Oldest first; empty for unknown conversations."""
    return (
        db.query(models.Message)
          .filter(models.Message.conversation_id == conversation_id)
          .order_by(models.Message.created_at.asc(), models.Message.id.asc())
          .all()
    )
