"""Shared HTTP helpers used by the Maven repository client.

Encapsulates timeout, retry and caching behavior so callers deal only with
(status, headers, body) results. Network failures never raise from here;
they come back as status 0.
"""
from __future__ import annotations

import logging
import os
import threading
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, str], str]

# In-memory GET cache: key -> (response tuple, stored_at)
_http_cache: Dict[str, Tuple[Response, float]] = {}
_http_cache_lock = threading.Lock()


def _trace(message: str, **fields: Any) -> None:
    if is_debug_enabled(logger):
        logger.debug(message, extra=extra_context(component="http_client", **fields))


def _get_cache_key(method: str, url: str, headers: Optional[Dict[str, str]] = None) -> str:
    headers_str = str(sorted(headers.items())) if headers else ""
    return f"{method}:{url}:{headers_str}"


def _cached(cache_key: str) -> Optional[Response]:
    """Return a fresh cached response; expired entries are evicted."""
    with _http_cache_lock:
        entry = _http_cache.get(cache_key)
        if entry is None:
            return None
        result, stored_at = entry
        if time.time() - stored_at >= Constants.HTTP_CACHE_TTL_SEC:
            del _http_cache[cache_key]
            return None
        return result


def clear_cache() -> None:
    with _http_cache_lock:
        _http_cache.clear()


def robust_get(url: str, *, headers: Optional[Dict[str, str]] = None, **kwargs: Any) -> Response:
    """GET with timeout, retries and response caching.

    Responses below HTTP 500 are cached for HTTP_CACHE_TTL_SEC. After
    HTTP_RETRY_MAX failed attempts the result is (0, {}, reason).
    """
    cache_key = _get_cache_key("GET", url, headers)
    target = safe_url(url)

    cached = _cached(cache_key)
    if cached is not None:
        _trace("HTTP cache hit", event="cache_hit", action="GET", target=target)
        return cached

    failure = None
    for attempt in range(1, Constants.HTTP_RETRY_MAX + 1):
        _trace("HTTP request", event="http_request", action="GET", target=target, attempt=attempt)
        with Timer() as t:
            try:
                response = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
            except requests.Timeout:
                failure = "timeout"
            except requests.RequestException as exc:
                failure = str(exc)
            else:
                failure = None
        if failure is not None:
            _trace("HTTP request failed", event="http_exception", action="GET", target=target,
                   attempt=attempt, outcome=failure)
            continue

        result = (response.status_code, dict(response.headers), response.text)
        if response.status_code < 500:
            with _http_cache_lock:
                _http_cache[cache_key] = (result, time.time())
        _trace("HTTP response", event="http_response", action="GET", target=target,
               status_code=response.status_code, duration_ms=t.duration_ms())
        return result

    logger.warning(
        "HTTP GET failed after %s attempts: %s",
        Constants.HTTP_RETRY_MAX,
        target,
        extra=extra_context(event="http_exception", component="http_client", outcome="exhausted"),
    )
    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {failure}"


def safe_head(url: str, *, context: str, **kwargs: Any) -> int:
    """Perform a HEAD request; return the status code, or 0 on network failure."""
    target = safe_url(url)
    with Timer() as t:
        try:
            res = requests.head(url, timeout=Constants.REQUEST_TIMEOUT, allow_redirects=True, **kwargs)
        except requests.RequestException as exc:  # includes Timeout and ConnectionError
            logger.debug("%s HEAD failed: %s", context, exc)
            return 0
    _trace("HTTP response", event="http_response", action="HEAD", target=target,
           status_code=res.status_code, duration_ms=t.duration_ms(), context=context)
    return res.status_code


def stream_to_file(url: str, destination: str, *, context: str, **kwargs: Any) -> bool:
    """Stream a GET response body into a file; return True on HTTP 200.

    The body lands in a sibling '.part' file that only replaces destination
    once the transfer completes.
    """
    target = safe_url(url)
    partial = f"{destination}.part"
    try:
        with requests.get(url, timeout=Constants.REQUEST_TIMEOUT, stream=True, **kwargs) as res:
            if res.status_code != 200:
                logger.warning(
                    "%s download returned HTTP %s",
                    context,
                    res.status_code,
                    extra=extra_context(event="http_response", outcome="handled_non_2xx", target=target),
                )
                return False
            with open(partial, "wb") as fh:
                for chunk in res.iter_content(chunk_size=Constants.DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
        os.replace(partial, destination)
    except requests.RequestException as exc:
        logger.error("%s download failed: %s", context, exc)
        return False
    finally:
        if os.path.exists(partial):
            os.remove(partial)
    return True
