# backend/user_router.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

import chat_service
import schemas
from db import get_db

router = APIRouter(
    prefix="/rpc",
    tags=["users"]
)

# POST /rpc/createUser → register a user
@router.post("/createUser", response_model=schemas.UserOut, status_code=201)
def create_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    try:
        return chat_service.create_user(db, user)
    except chat_service.ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
