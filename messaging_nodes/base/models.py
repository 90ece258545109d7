import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from messaging_nodes.enum.message import ContactKind, MessageKind, RejectionReason
from messaging_nodes.enum.tools import Provider


class AdapterConfig(BaseModel):
    """
    Per-instance configuration, resolved by the host and frozen at construction.
    Concurrent invocations share it read-only.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider: Provider
    name: str
    description: str = ""

    # credentials
    api_token: Optional[str] = Field(default=None, repr=False)
    instance_id: Optional[str] = None
    device_uuid: Optional[str] = Field(default=None, repr=False)
    device_name: Optional[str] = None

    # endpoints
    endpoint: str
    group_endpoint: Optional[str] = None

    # behaviour
    message_kind: MessageKind = MessageKind.TEXT
    contact_kind: ContactKind = ContactKind.NUMBERS
    media_path: Optional[str] = None
    time_to_send: Optional[str] = None
    timezone: Optional[str] = None
    timeout: Optional[float] = None


class ParsedRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipient: Optional[str] = None
    text: Optional[str] = None
    caption: Optional[str] = None
    media: Optional[str] = None
    group_picture: Optional[str] = None

    @property
    def recipients(self) -> list[str]:
        if not self.recipient:
            return []
        return [r.strip() for r in self.recipient.split(",") if r.strip()]


class MediaFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes = Field(repr=False)
    size: int
    content_type: str = "application/octet-stream"


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    reason: Optional[RejectionReason] = None
    message: str = ""
    media: Optional[MediaFile] = None

    @classmethod
    def passed(cls, media: Optional[MediaFile] = None) -> "ValidationResult":
        return cls(ok=True, media=media)

    @classmethod
    def rejected(cls, reason: RejectionReason, message: str) -> "ValidationResult":
        return cls(ok=False, reason=reason, message=message)


class ProviderResponse(BaseModel):
    status: int
    data: Any = None

    @property
    def is_2xx(self) -> bool:
        return 200 <= self.status < 300


class Outcome(BaseModel):
    """The single envelope an invocation hands back to the agent."""

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    status: Optional[int] = None
    detail: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, **detail: Any) -> "Outcome":
        return cls(success=True, message=message, detail=detail)

    @classmethod
    def fail(cls, error: str, status: Optional[int] = None, **detail: Any) -> "Outcome":
        return cls(success=False, error=error, status=status, detail=detail)

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success}
        if self.success:
            out["message"] = self.message
        else:
            out["error"] = self.error
        out.update({k: v for k, v in self.detail.items() if v is not None})
        if self.status is not None:
            out["status"] = self.status
        return out

    def to_agent_string(self) -> str:
        return json.dumps(self.as_dict(), ensure_ascii=False, default=str)
