import asyncio
import mimetypes
import os
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional
from urllib.parse import urlparse

import aiofiles
import aiofiles.os
import aiohttp

from messaging_nodes.base.errors import ValidationError
from messaging_nodes.base.models import MediaFile
from messaging_nodes.config.logger import logging
from messaging_nodes.enum.message import RejectionReason

logger = logging.getLogger(__name__)

MB = 1024 * 1024
CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class MediaPolicy:
    label: str
    extensions: FrozenSet[str]
    max_bytes: int

    def describe_extensions(self) -> str:
        return ", ".join(sorted(self.extensions))


def session_kwargs(timeout: Optional[float]) -> Dict[str, Any]:
    """ClientSession kwargs; no timeout means aiohttp's own default."""
    if not timeout:
        return {}
    return {"timeout": aiohttp.ClientTimeout(total=timeout)}


def is_remote(ref: str) -> bool:
    return ref.lower().startswith("http")


def media_filename(ref: str) -> str:
    if is_remote(ref):
        return os.path.basename(urlparse(ref).path) or "media"
    return os.path.basename(ref)


def file_extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lower().lstrip(".")


def guess_content_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or "application/octet-stream"


def _too_large(policy: MediaPolicy, size: int, at_least: bool = False) -> ValidationError:
    current = f"{'over ' if at_least else ''}{size / MB:.2f}MB"
    return ValidationError(
        f"{policy.label.capitalize()} size exceeds {policy.max_bytes // MB}MB limit. "
        f"Current size: {current}",
        reason=RejectionReason.MEDIA_TOO_LARGE,
    )


async def load_media(
    ref: str, policy: MediaPolicy, timeout: Optional[float] = None
) -> MediaFile:
    """
    Resolve a local path or URL into bytes, enforcing the policy.
    Local files are size-checked before they are read; URLs are streamed and
    abandoned as soon as they pass the size ceiling. Raises ValidationError on
    any rejection.
    """
    filename = media_filename(ref)
    remote = is_remote(ref)

    if not remote and not await aiofiles.os.path.isfile(ref):
        raise ValidationError(
            f"{policy.label.capitalize()} file not found at path: {ref}",
            reason=RejectionReason.MEDIA_NOT_FOUND,
        )

    ext = file_extension(filename)
    if ext not in policy.extensions:
        raise ValidationError(
            f"Unsupported {policy.label} format: .{ext or '?'}. "
            f"Supported formats are: {policy.describe_extensions()}.",
            reason=RejectionReason.MEDIA_TYPE,
        )

    if remote:
        content = await _fetch_remote(ref, policy, timeout)
        size = len(content)
    else:
        size = await aiofiles.os.path.getsize(ref)
        if size > policy.max_bytes:
            raise _too_large(policy, size)
        async with aiofiles.open(ref, "rb") as f:
            content = await f.read()

    return MediaFile(
        filename=filename,
        content=content,
        size=size,
        content_type=guess_content_type(filename),
    )


async def _fetch_remote(url: str, policy: MediaPolicy, timeout: Optional[float]) -> bytes:
    try:
        async with aiohttp.ClientSession(**session_kwargs(timeout)) as session:
            async with session.get(url) as resp:
                if resp.status != 200:
                    logger.warning("Media fetch %s returned %s", url, resp.status)
                    raise ValidationError(
                        f"Could not fetch media from {url}: HTTP {resp.status}",
                        reason=RejectionReason.MEDIA_UNAVAILABLE,
                        status=resp.status,
                    )
                if resp.content_length is not None and resp.content_length > policy.max_bytes:
                    raise _too_large(policy, resp.content_length)

                buf = bytearray()
                async for chunk in resp.content.iter_chunked(CHUNK_SIZE):
                    buf.extend(chunk)
                    if len(buf) > policy.max_bytes:
                        logger.warning(
                            "Media fetch %s passed %s bytes; aborted", url, policy.max_bytes
                        )
                        raise _too_large(policy, len(buf), at_least=True)
                return bytes(buf)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning("Media fetch %s failed: %s", url, e)
        raise ValidationError(
            f"Could not fetch media from {url}: {str(e) or type(e).__name__}",
            reason=RejectionReason.MEDIA_UNAVAILABLE,
        ) from e
