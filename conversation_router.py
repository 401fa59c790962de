# backend/conversation_router.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

import chat_service
import schemas
from db import get_db

router = APIRouter(
    prefix="/rpc",
    tags=["conversations"]
)

# GET /rpc/getConversations?user_id= → list a user's conversations, newest activity first
@router.get("/getConversations", response_model=List[schemas.ConversationOut])
def get_conversations(
    params: schemas.GetConversationsInput = Depends(),
    db: Session = Depends(get_db)
):
    return chat_service.get_conversations(db, params.user_id)

# POST /rpc/createConversation → create a new conversation for a user
@router.post("/createConversation", response_model=schemas.ConversationOut, status_code=201)
def create_conversation(
    conv: schemas.ConversationCreate,
    db: Session = Depends(get_db)
):
    try:
        return chat_service.create_conversation(db, conv)
    except chat_service.NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

# POST /rpc/updateConversationTitle → rename a conversation
@router.post("/updateConversationTitle", response_model=schemas.ConversationOut)
def update_conversation_title(
    update: schemas.UpdateConversationTitleInput,
    db: Session = Depends(get_db)
):
    try:
        return chat_service.update_conversation_title(db, update)
    except chat_service.NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
