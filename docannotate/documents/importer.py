"""Fetch a remote plain-text document for import.

Only http/https URLs are accepted. The whole exchange runs under one
wall-clock budget, and the body is streamed so an oversized response is
abandoned as soon as it crosses the byte limit.
"""

import asyncio
import logging
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

import httpx

from docannotate.errors import UpstreamFailure, ValidationError

logger = logging.getLogger(__name__)

ACCEPT = "text/plain, text/*;q=0.9, */*;q=0.1"
DEFAULT_NAME = "imported.txt"


@dataclass
class FetchedText:
    name: str
    content: str


def parse_import_url(url: str):
    try:
        parsed = urlsplit(url.strip())
    except ValueError:
        raise ValidationError("Invalid URL", fields=["url"])
    if parsed.scheme.lower() not in ("http", "https"):
        raise ValidationError("Only http/https URLs are allowed", fields=["url"])
    if not parsed.netloc:
        raise ValidationError("Invalid URL", fields=["url"])
    return parsed


def name_from_path(path: str) -> str:
    segments = [s for s in path.split("/") if s]
    return unquote(segments[-1]) if segments else DEFAULT_NAME


def _too_large(max_bytes: int) -> UpstreamFailure:
    return UpstreamFailure(f"File too large (max {max_bytes // (1024 * 1024)}MB)", status_code=413)


async def _fetch(url: str, parsed, max_bytes: int, transport: httpx.AsyncBaseTransport | None) -> FetchedText:
    async with httpx.AsyncClient(transport=transport, follow_redirects=True) as client:
        async with client.stream("GET", url, headers={"Accept": ACCEPT}) as r:
            if not r.is_success:
                raise UpstreamFailure(f"Upstream responded {r.status_code}")

            content_type = r.headers.get("content-type", "").lower()
            is_text = content_type.startswith("text/")
            is_txt = parsed.path.lower().endswith(".txt")
            if not is_text and not is_txt:
                raise UpstreamFailure("Only TXT/text content can be imported", status_code=415)

            declared = r.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > max_bytes:
                raise _too_large(max_bytes)

            body = bytearray()
            async for chunk in r.aiter_bytes():
                body.extend(chunk)
                if len(body) > max_bytes:
                    raise _too_large(max_bytes)

            text = body.decode(r.charset_encoding or "utf-8", errors="replace")

    return FetchedText(name=name_from_path(parsed.path), content=text)


async def fetch_text(
    url: str,
    *,
    timeout: float,
    max_bytes: int,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchedText:
    parsed = parse_import_url(url)
    try:
        fetched = await asyncio.wait_for(_fetch(url, parsed, max_bytes, transport), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Import of %s timed out after %ss", url, timeout)
        raise UpstreamFailure("Failed to fetch URL (timed out)")
    except (httpx.HTTPError, LookupError) as e:
        logger.warning("Import of %s failed: %s", url, e)
        raise UpstreamFailure("Failed to fetch URL")
    logger.info("Fetched %s (%d chars)", url, len(fetched.content))
    return fetched
