from typing import Any, Dict, Optional

from messaging_nodes.enum.message import RejectionReason


class MessagingError(Exception):
    """
    Root of every error an adapter can turn into a failure outcome.
    `truncate` marks errors whose text comes from upstream and must be cut
    before it reaches the agent.
    """

    truncate: bool = False

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        detail: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.detail = detail or {}


class ConfigurationError(MessagingError):
    """Static configuration is missing or invalid; raised at construction."""


class ParseError(MessagingError):
    pass


class ValidationError(MessagingError):
    def __init__(
        self,
        message: str,
        reason: RejectionReason = RejectionReason.MISSING_FIELD,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.reason = reason


class TransportError(MessagingError):
    truncate = True


class ProviderError(MessagingError):
    """The HTTP exchange worked but the provider reported a failure."""

    truncate = True
