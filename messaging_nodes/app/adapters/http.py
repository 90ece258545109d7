import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp

from messaging_nodes.base.adapter_base import ProviderInvoker
from messaging_nodes.base.errors import TransportError
from messaging_nodes.base.models import MediaFile, ProviderResponse
from messaging_nodes.config.logger import logging
from messaging_nodes.helpers.file_util import session_kwargs

logger = logging.getLogger(__name__)


class HttpProviderInvoker(ProviderInvoker):
    """
    aiohttp plumbing shared by every provider invoker.
    Subclasses build the wire request; this class sends it and decodes the reply.
    """

    provider_label = "Provider"

    async def post_json(
        self,
        url: str,
        body: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> ProviderResponse:
        headers = {"Content-Type": "application/json", **(headers or {})}
        return await self._post(url, headers, timeout, json=body)

    async def post_form(
        self,
        url: str,
        fields: Dict[str, Optional[str]],
        media: Optional[MediaFile] = None,
        media_field: str = "media",
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> ProviderResponse:
        form = aiohttp.FormData()
        for key, value in fields.items():
            if value is not None and value != "":
                form.add_field(key, str(value))
        if media is not None:
            form.add_field(
                media_field,
                media.content,
                filename=media.filename,
                content_type=media.content_type,
            )
        return await self._post(url, headers or {}, timeout, data=form)

    async def _post(
        self,
        url: str,
        headers: Dict[str, str],
        timeout: Optional[float],
        **kwargs: Any,
    ) -> ProviderResponse:
        try:
            async with aiohttp.ClientSession(**session_kwargs(timeout)) as session:
                async with session.post(url, headers=headers, **kwargs) as resp:
                    text = await resp.text(errors="replace")
                    if resp.status >= 400:
                        logger.error(
                            "%s API error: %s, body=%s",
                            self.provider_label,
                            resp.status,
                            text[:500],
                        )
                    return ProviderResponse(status=resp.status, data=_decode(text))
        except asyncio.TimeoutError as e:
            logger.warning("%s request timed out after %ss", self.provider_label, timeout)
            raise TransportError(
                f"{self.provider_label} request timed out after {timeout}s"
            ) from e
        except aiohttp.ClientError as e:
            logger.warning("%s request failed: %s", self.provider_label, e)
            raise TransportError(
                f"{self.provider_label} request failed: {str(e) or type(e).__name__}"
            ) from e


def _decode(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text
