# backend/main.py

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

import config
from db import engine, Base

# IMPORT MODELS so that create_all() sees them
import models
import schemas

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables (users, conversations, messages)
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized at %s", config.DATABASE_URL)
    yield


app = FastAPI(title="Multi-agent chat", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def root():
    return {"message": "Backend is running"}

@app.get("/rpc/healthcheck", response_model=schemas.HealthcheckOut)
def healthcheck():
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat() + "Z"}


# ——————————————————————————————————————————————
# Errors raised by the store itself are passed through as conflicts.
# The handler that caught them has already logged them.
@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc.orig)}
    )

@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


# ——————————————————————————————————————————————
# Include user, conversation, and chat routers
from user_router import router as user_router
from conversation_router import router as conv_router
from chat_router import router as chat_router

app.include_router(user_router)
app.include_router(conv_router)
app.include_router(chat_router)


if __name__ == "__main__":
    import uvicorn

    logger.info("RPC server listening at port: %s", config.SERVER_PORT)
    uvicorn.run(app, host=config.SERVER_HOST, port=config.SERVER_PORT)
