from abc import ABC, abstractmethod
from typing import Optional

from .errors import MessagingError
from .models import (
    AdapterConfig,
    MediaFile,
    Outcome,
    ParsedRequest,
    ProviderResponse,
    ValidationResult,
)


class InputParser(ABC):
    """Turns one opaque agent string into a ParsedRequest."""

    @abstractmethod
    def parse(self, raw: str) -> ParsedRequest:
        """Raise ParseError when neither JSON nor the text patterns match."""
        pass


class RequestValidator(ABC):
    @abstractmethod
    async def validate(
        self, req: ParsedRequest, cfg: AdapterConfig
    ) -> ValidationResult:
        pass


class ProviderInvoker(ABC):
    """
    Sends one request over one provider's wire contract.
    Must not implement business checks; those belong to the validator.
    """

    @abstractmethod
    async def send(
        self,
        req: ParsedRequest,
        cfg: AdapterConfig,
        media: Optional[MediaFile] = None,
    ) -> ProviderResponse:
        """Raise TransportError on network, DNS or timeout failure."""
        pass


class OutcomeEncoder(ABC):
    @abstractmethod
    def encode(
        self, response: ProviderResponse, req: ParsedRequest, cfg: AdapterConfig
    ) -> Outcome:
        pass

    @abstractmethod
    def failure(self, error: MessagingError) -> Outcome:
        pass
