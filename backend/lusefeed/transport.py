from __future__ import annotations

import json
import socket
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from lusefeed.errors import ParseError, TransportError


HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
JSON_ACCEPT = "application/json,text/plain;q=0.9,*/*;q=0.5"


def _build_request(url: str, user_agent: str, accept: str) -> Request:
    return Request(
        url,
        headers={
            "User-Agent": user_agent,
            "Accept": accept,
            "Accept-Language": "en-US,en;q=0.5",
        },
    )


def fetch_text(
    provider: str,
    url: str,
    *,
    user_agent: str,
    timeout: float,
    accept: str = HTML_ACCEPT,
) -> str:
    request = _build_request(url, user_agent, accept)
    try:
        with urlopen(request, timeout=timeout) as response:
            body = response.read()
            charset = response.headers.get_content_charset() or "utf-8"
    except HTTPError as exc:
        raise TransportError(provider, f"HTTP {exc.code} from {url}") from exc
    except (URLError, TimeoutError, socket.timeout) as exc:
        raise TransportError(provider, f"{url} unreachable: {exc}") from exc
    except (HTTPException, OSError) as exc:
        raise TransportError(provider, f"{url} failed: {exc}") from exc

    try:
        return body.decode(charset)
    except (LookupError, UnicodeDecodeError) as exc:
        raise ParseError(provider, f"Undecodable body from {url}") from exc


def fetch_json(provider: str, url: str, *, user_agent: str, timeout: float) -> Any:
    body = fetch_text(provider, url, user_agent=user_agent, timeout=timeout, accept=JSON_ACCEPT)
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise ParseError(provider, f"Invalid JSON from {url}: {exc.msg}") from exc
