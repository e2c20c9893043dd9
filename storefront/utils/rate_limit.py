from typing import Any, Dict, List, Tuple
from fastapi import Request, Response, HTTPException
import os
import time
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

def _client_key(request: Request) -> str:
    # Pas d'utilisateur authentifié dans la boutique: clé = IP + chemin
    ip = request.client.host if request.client else "local"
    return f"ip:{ip}:{request.url.path}"

def _prune_local_store(store: Dict[str, Tuple[int, List[float]]], now: float) -> None:
    # Retire les clés dont la dernière requête est sortie de leur fenêtre
    expired = [k for k, (window, hits) in store.items() if not hits or now - hits[-1] >= window]
    for k in expired:
        del store[k]

def optional_rate_limit(times: int, seconds: int):
    """
    Dépendance FastAPI de rate limiting « best-effort ».
    - LOCAL_RATE_LIMIT_FALLBACK=1: compteur mémoire par clé (dev/tests)
    - app.state.rate_limit_enabled is False: aucune limite
    - sinon fastapi-limiter (Redis) s'il a été initialisé par le lifespan, aucune limite sinon
    """
    async def _dep(request: Request, response: Response):
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            now = time.time()
            key = _client_key(request)
            store = getattr(request.app.state, "_rl_store", {})
            _prune_local_store(store, now)
            _, previous = store.get(key, (seconds, []))
            hits = [t for t in previous if now - t < seconds]
            if len(hits) >= times:
                store[key] = (seconds, hits)
                request.app.state._rl_store = store
                raise HTTPException(status_code=429, detail="Too Many Requests")
            hits.append(now)
            store[key] = (seconds, hits)
            request.app.state._rl_store = store
            return

        if getattr(request.app.state, "rate_limit_enabled", None) is False:
            return

        if getattr(FastAPILimiter, "redis", None) is None:
            return

        async def _identifier(req: Request) -> str:
            return _client_key(req)
        await RateLimiter(times=times, seconds=seconds, identifier=_identifier)(request, response)
    return _dep

def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)
    ready = getattr(FastAPILimiter, "redis", None) is not None
    return {
        "enabled": (bool(enabled) if enabled is not None else None),
        "ready": ready,
        "backend": "redis" if ready else None,
        "local_fallback": os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1",
    }
