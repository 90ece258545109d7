from typing import Any, Callable, Container, Dict, Optional

from messaging_nodes.base.adapter_base import OutcomeEncoder
from messaging_nodes.base.errors import MessagingError, ProviderError
from messaging_nodes.base.models import (
    AdapterConfig,
    Outcome,
    ParsedRequest,
    ProviderResponse,
)
from messaging_nodes.config.settings import settings

ERROR_KEYS = ("msg", "message", "description", "error")

SuccessMessage = Callable[[ProviderResponse, ParsedRequest, AdapterConfig], Outcome]


def truncate(text: str, limit: Optional[int] = None) -> str:
    limit = limit if limit is not None else settings.max_error_length
    return text[:limit]


def lookup(data: Any, path: str) -> Any:
    """Follow a dotted path ("data.success") through nested dicts."""
    for part in path.split("."):
        if not isinstance(data, dict):
            return None
        data = data.get(part)
    return data


def error_text(data: Any, fallback: str) -> str:
    if isinstance(data, dict):
        for key in ERROR_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    elif isinstance(data, str) and data.strip():
        return data.strip()
    return fallback


class BaseOutcomeEncoder(OutcomeEncoder):
    def __init__(self, success: SuccessMessage, provider_label: str = "Provider"):
        self._success = success
        self.provider_label = provider_label

    def failure(self, error: MessagingError) -> Outcome:
        message = error.message or type(error).__name__
        if error.truncate:
            message = truncate(message)
        return Outcome.fail(message, status=error.status, **error.detail)

    def provider_failure(self, response: ProviderResponse) -> Outcome:
        fallback = f"{self.provider_label} API error: HTTP {response.status}"
        return self.failure(
            ProviderError(error_text(response.data, fallback), status=response.status)
        )


class SuccessFlagEncoder(BaseOutcomeEncoder):
    """Success is a truthy flag in the JSON payload: `ok`, `success` or `data.success`."""

    def __init__(
        self,
        flag: str,
        success: SuccessMessage,
        provider_label: str = "Provider",
        strict: bool = False,
    ):
        super().__init__(success, provider_label)
        self.flag = flag
        self.strict = strict

    def encode(
        self, response: ProviderResponse, req: ParsedRequest, cfg: AdapterConfig
    ) -> Outcome:
        value = lookup(response.data, self.flag)
        flagged = value is True if self.strict else bool(value)
        if response.is_2xx and flagged:
            return self._success(response, req, cfg)
        return self.provider_failure(response)


class StatusEncoder(BaseOutcomeEncoder):
    """Success is decided by HTTP status alone (webhooks)."""

    def __init__(
        self,
        success: SuccessMessage,
        provider_label: str = "Provider",
        accepted: Container[int] = range(200, 300),
    ):
        super().__init__(success, provider_label)
        self.accepted = accepted

    def encode(
        self, response: ProviderResponse, req: ParsedRequest, cfg: AdapterConfig
    ) -> Outcome:
        if response.status in self.accepted:
            return self._success(response, req, cfg)
        return self.provider_failure(response)


def sent_to(message: str) -> SuccessMessage:
    """Success outcome naming the recipient, e.g. "Message sent ... '201...'!"."""

    def build(response: ProviderResponse, req: ParsedRequest, cfg: AdapterConfig):
        detail: Dict[str, Any] = {"recipient": req.recipient}
        return Outcome.ok(message.format(recipient=req.recipient), **detail)

    return build


def fixed(message: str) -> SuccessMessage:
    def build(response: ProviderResponse, req: ParsedRequest, cfg: AdapterConfig):
        return Outcome.ok(message)

    return build
