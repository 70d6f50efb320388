"""Image upload for shareable URLs.

The destination URL picks the strategy: 0x0.st takes a multipart POST,
Vercel Blob a PUT returning JSON, and anything else a generic PUT
(S3-style) whose URL comes from JSON, a Location header, or the
destination itself.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

import httpx

from before_after.errors import UploadError
from before_after.models.config import DEFAULT_UPLOAD_URL

logger = logging.getLogger(__name__)

USER_AGENT = "before-after-cli/1.0"
REQUEST_TIMEOUT = httpx.Timeout(connect=10.0, read=60.0, write=60.0, pool=10.0)


class UploadDestination(str, Enum):
    ZERO_X_ZERO = "0x0.st"
    VERCEL_BLOB = "blob.vercel"
    GENERIC_PUT = "generic"


def classify_destination(url: str) -> UploadDestination:
    if UploadDestination.ZERO_X_ZERO.value in url:
        return UploadDestination.ZERO_X_ZERO
    if UploadDestination.VERCEL_BLOB.value in url:
        return UploadDestination.VERCEL_BLOB
    return UploadDestination.GENERIC_PUT


async def _upload_0x0st(client: httpx.AsyncClient, image: bytes, filename: str, url: str) -> str:
    response = await client.post(
        url,
        headers={"User-Agent": USER_AGENT},
        files={"file": (filename, image)},
    )
    result = response.text.strip()
    if not result.startswith("http"):
        raise UploadError(f"Upload failed: {result}")
    return result


async def _put_image(client: httpx.AsyncClient, image: bytes, filename: str, url: str) -> httpx.Response:
    response = await client.put(
        f"{url}/{filename}",
        headers={"Content-Type": "image/png"},
        content=image,
    )
    if not response.is_success:
        raise UploadError(f"Upload failed: {response.reason_phrase}")
    return response


async def _upload_vercel_blob(client: httpx.AsyncClient, image: bytes, filename: str, url: str) -> str:
    response = await _put_image(client, image, filename, url)
    try:
        return response.json()["url"]
    except (ValueError, KeyError, TypeError) as e:
        raise UploadError(f"Upload failed: unexpected response {response.text!r}") from e


async def _upload_generic_put(client: httpx.AsyncClient, image: bytes, filename: str, url: str) -> str:
    response = await _put_image(client, image, filename, url)
    if "application/json" in response.headers.get("content-type", ""):
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("url"):
            return data["url"]
    return response.headers.get("location") or f"{url}/{filename}"


_Strategy = Callable[[httpx.AsyncClient, bytes, str, str], Awaitable[str]]

UPLOAD_STRATEGIES: dict[UploadDestination, _Strategy] = {
    UploadDestination.ZERO_X_ZERO: _upload_0x0st,
    UploadDestination.VERCEL_BLOB: _upload_vercel_blob,
    UploadDestination.GENERIC_PUT: _upload_generic_put,
}


async def upload_image(
    image: bytes,
    filename: str,
    upload_url: Optional[str] = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Upload one image and return its public URL."""
    upload_url = upload_url or DEFAULT_UPLOAD_URL
    destination = classify_destination(upload_url)
    strategy = UPLOAD_STRATEGIES[destination]
    logger.debug("Uploading %s (%d bytes) via %s", filename, len(image), destination.name)

    owns_client = client is None
    http_client = client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT)
    try:
        url = await strategy(http_client, image, filename, upload_url)
    except httpx.HTTPError as e:
        raise UploadError(f"Upload failed: {e}") from e
    finally:
        if owns_client:
            await http_client.aclose()
    logger.info("Uploaded %s -> %s", filename, url)
    return url


async def upload_before_after(
    before: tuple[bytes, str],
    after: tuple[bytes, str],
    upload_url: Optional[str] = None,
    client: httpx.AsyncClient | None = None,
) -> tuple[str, str]:
    """Upload both (image, filename) pairs concurrently.

    Returns (before_url, after_url). If either upload fails the other is
    cancelled and the call raises; a lone successful URL is never returned.
    """
    tasks = [
        asyncio.ensure_future(upload_image(before[0], before[1], upload_url, client=client)),
        asyncio.ensure_future(upload_image(after[0], after[1], upload_url, client=client)),
    ]
    try:
        before_url, after_url = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Collect the sibling's outcome so no exception goes unretrieved
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return before_url, after_url
