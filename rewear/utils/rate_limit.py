"""
Limitation de débit optionnelle (fastapi-limiter + Redis).

- Désactivée si le lifespan n'a pas pu initialiser le limiter (app.state.rate_limit_enabled=False)
- LOCAL_RATE_LIMIT_FALLBACK=1: fenêtre glissante en mémoire (dev)
- Identifiant: hash du token de session, sinon IP, combiné au chemin
"""
from typing import Dict, Any
from urllib.parse import urlparse
from fastapi import Request, Response, HTTPException
import hashlib
import os
import time

from rewear.utils.security import extract_token

def rate_limit_key(request: Request) -> str:
    token = extract_token(request)
    path = request.url.path
    if token:
        h = hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]
        return f"user:{h}:{path}"
    ip = request.client.host if request.client else "local"
    return f"ip:{ip}:{path}"

def _local_hit(request: Request, times: int, seconds: int) -> None:
    now = time.time()
    key = rate_limit_key(request)
    store = getattr(request.app.state, "_rl_store", None)
    if store is None:
        store = {}
        request.app.state._rl_store = store
    hits = [t for t in store.get(key, []) if now - t < seconds]
    if len(hits) >= times:
        raise HTTPException(status_code=429, detail="Trop de requêtes, réessayez plus tard")
    hits.append(now)
    store[key] = hits

def optional_rate_limit(times: int, seconds: int):
    async def _dep(request: Request, response: Response):
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            _local_hit(request, times, seconds)
            return

        if getattr(request.app.state, "rate_limit_enabled", None) is not True:
            return

        try:
            from fastapi_limiter.depends import RateLimiter

            async def _identifier(req: Request) -> str:
                return rate_limit_key(req)
            limiter = RateLimiter(times=times, seconds=seconds, identifier=_identifier)
        except Exception:
            return
        # HTTPException(429) levée par le limiter est propagée telle quelle
        return await limiter(request, response)
    return _dep

def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)
    info: Dict[str, Any] = {
        "enabled": (bool(enabled) if enabled is not None else None),
        "local_fallback": os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1",
    }
    redis_url = os.getenv("RATE_LIMIT_REDIS_URL")
    if enabled and redis_url:
        p = urlparse(redis_url)
        info["redis"] = {"scheme": p.scheme, "host": p.hostname, "port": p.port}
    return info
