# backend/schemas.py

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

from models import AiAgentType, MessageRole

# ---------- User-related schemas ----------

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr

class UserOut(BaseModel):
    id: int
    username: str
    email: EmailStr
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- Conversation-related schemas ----------

class ConversationCreate(BaseModel):
    user_id: int
    title: Optional[str] = None

class GetConversationsInput(BaseModel):
    user_id: int

class UpdateConversationTitleInput(BaseModel):
    conversation_id: int
    title: str

class ConversationOut(BaseModel):
    id: int
    user_id: int
    title: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- Chat message schemas ----------

class SendMessageInput(BaseModel):
    conversation_id: int
    content: str = Field(..., min_length=1)
    ai_agent_type: Optional[AiAgentType] = None

class GetMessagesInput(BaseModel):
    conversation_id: int

class MessageOut(BaseModel):
    id: int
    conversation_id: int
    role: MessageRole
    content: str
    ai_agent_type: Optional[AiAgentType]
    created_at: datetime

    class Config:
        from_attributes = True


# ---------- Service schemas ----------

class HealthcheckOut(BaseModel):
    status: str
    timestamp: str
