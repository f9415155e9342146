"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Crée le store des sessions d'auth et le chat propriétaire (app.state)
- Initialise FastAPILimiter (Redis) avec options de test (fakeredis)
- Variables d'environnement supportées:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: désactive complètement (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: utilise fakeredis (tests)
  - LOCAL_RATE_LIMIT_FALLBACK=1: active un fallback local si l'init échoue
"""
import os
import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

from rewear.config import CHAT_MAX_TRANSCRIPTS, CHAT_REPLY_DELAY_SECONDS, SESSION_STORE_URL
from rewear.infra.session_store import build_session_store
from rewear.messages.chat import ChatStore, OwnerChat

logger = logging.getLogger("uvicorn.error")

async def _init_rate_limiter(app: FastAPI) -> None:
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return
    try:
        if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
            from fakeredis.aioredis import FakeRedis  # tests only
            r = FakeRedis(decode_responses=True)
        else:
            redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
            r = aioredis.from_url(redis_url, encoding="utf-8", decode_responses=True)

        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            app.state.rate_limit_enabled = True
            logger.warning(f"Rate limiting falling back to local in-memory due to init error: {e}")
        else:
            app.state.rate_limit_enabled = False
            logger.warning(f"Rate limiting disabled due to init error: {e}")

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.session_store = build_session_store(SESSION_STORE_URL)
    app.state.owner_chat = OwnerChat(ChatStore(CHAT_MAX_TRANSCRIPTS), reply_delay=CHAT_REPLY_DELAY_SECONDS)
    logger.info("Session store: %s", type(app.state.session_store).__name__)
    await _init_rate_limiter(app)
    yield
