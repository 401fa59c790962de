# backend/chat_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

import chat_service
import schemas
from db import get_db
from responder import Responder, get_responder

router = APIRouter(
    prefix="/rpc",
    tags=["chat"]
)

# ─── GET /rpc/getMessages?conversation_id= ─────────────────────────────────────
@router.get("/getMessages", response_model=List[schemas.MessageOut])
def get_messages(
    params: schemas.GetMessagesInput = Depends(),
    db: Session = Depends(get_db)
):
    # No existence check: an unknown conversation simply has no messages
    return chat_service.get_messages(db, params.conversation_id)


# ─── POST /rpc/sendMessage ─────────────────────────────────────────────────────
@router.post("/sendMessage", response_model=schemas.MessageOut, status_code=201)
def send_message(
    msg: schemas.SendMessageInput,
    db: Session = Depends(get_db),
    responder: Responder = Depends(get_responder)
):
    # Stores the user's message and the reply; returns only the reply.
    # A missing conversation fails on the foreign key (mapped to 409 in main).
    return chat_service.send_message(db, msg, responder=responder)
