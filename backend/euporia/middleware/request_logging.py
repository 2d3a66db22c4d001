import logging
import time

from fastapi import Request

from euporia.utils.logger import get_logger

logger = get_logger(__name__)


async def log_requests_middleware(request: Request, call_next):
    """Log one line per request: method, path, status and elapsed time.

    Write bodies are logged at DEBUG, truncated to ``request_log_body_limit``.
    """
    started = time.perf_counter()

    if logger.isEnabledFor(logging.DEBUG) and request.method in {"POST", "PUT"}:
        body = await request.body()
        limit = request.app.state.settings.request_log_body_limit
        preview = body[:limit].decode("utf-8", errors="replace")
        suffix = "…" if len(body) > limit else ""
        logger.debug("→ %s %s body=%s%s", request.method, request.url.path, preview, suffix)

    response = await call_next(request)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s → %d (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response
