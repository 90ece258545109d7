import re
from enum import Enum
from typing import Dict, Mapping, Optional

from messaging_nodes.base.adapter_base import RequestValidator
from messaging_nodes.base.errors import ValidationError
from messaging_nodes.base.models import AdapterConfig, ParsedRequest, ValidationResult
from messaging_nodes.config.logger import logging
from messaging_nodes.enum.message import ContactKind, MessageKind, RejectionReason
from messaging_nodes.helpers.file_util import MB, MediaPolicy, load_media

logger = logging.getLogger(__name__)

GROUP_ID_RE = re.compile(r"^\d{15,20}(?:-\d+)?@g\.us$")
TELEGRAM_CHAT_RE = re.compile(r"^(?:-?\d+|@[A-Za-z][\w]{4,})$")
NON_DIGITS_RE = re.compile(r"\D")

WHATSAPP_MAX_MEDIA = 16 * MB

IMAGE_POLICY = MediaPolicy(
    "image", frozenset({"jpg", "jpeg", "png", "webp", "gif"}), WHATSAPP_MAX_MEDIA
)
VIDEO_POLICY = MediaPolicy("video", frozenset({"mp4", "3gp", "avi"}), WHATSAPP_MAX_MEDIA)
DOCUMENT_POLICY = MediaPolicy(
    "document",
    frozenset({"pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "zip", "rar"}),
    WHATSAPP_MAX_MEDIA,
)

DEFAULT_MEDIA_POLICIES: Dict[MessageKind, MediaPolicy] = {
    MessageKind.IMAGE: IMAGE_POLICY,
    MessageKind.VIDEO: VIDEO_POLICY,
    MessageKind.DOCUMENT: DOCUMENT_POLICY,
}


class RecipientRule(Enum):
    NONE = "none"
    WHATSAPP = "whatsapp"
    TELEGRAM = "telegram"


def is_phone_number(value: str) -> bool:
    digits = NON_DIGITS_RE.sub("", value)
    return 10 <= len(digits) <= 15


def is_group_id(value: str) -> bool:
    return bool(GROUP_ID_RE.match(value))


class MessageValidator(RequestValidator):
    """
    Shared precondition checks. Everything here runs before the provider is
    contacted; remote media is fetched here so its size can be checked.
    """

    def __init__(
        self,
        recipient_rule: RecipientRule = RecipientRule.WHATSAPP,
        max_text_length: Optional[int] = None,
        media_policies: Optional[Mapping[MessageKind, MediaPolicy]] = None,
    ):
        self.recipient_rule = recipient_rule
        self.max_text_length = max_text_length
        self.media_policies = dict(DEFAULT_MEDIA_POLICIES)
        if media_policies:
            self.media_policies.update(media_policies)

    async def validate(
        self, req: ParsedRequest, cfg: AdapterConfig
    ) -> ValidationResult:
        try:
            self._check_recipients(req, cfg)
            self._check_text(req, cfg)
            self._check_schedule(cfg)
            media = await self._resolve_media(req, cfg)
        except ValidationError as e:
            logger.info("Validation rejected (%s): %s", e.reason.value, e.message)
            return ValidationResult.rejected(e.reason, e.message)
        return ValidationResult.passed(media)

    def _check_recipients(self, req: ParsedRequest, cfg: AdapterConfig) -> None:
        if self.recipient_rule is RecipientRule.NONE:
            return

        recipients = req.recipients
        if not recipients:
            raise ValidationError("Chat ID was not provided in the input!")

        if self.recipient_rule is RecipientRule.TELEGRAM:
            for chat_id in recipients:
                if not TELEGRAM_CHAT_RE.match(chat_id):
                    raise ValidationError(
                        f"Invalid Telegram chat ID: {chat_id}",
                        reason=RejectionReason.MALFORMED_RECIPIENT,
                    )
            return

        use_groups = (
            cfg.contact_kind is ContactKind.GROUP
            and cfg.message_kind is not MessageKind.CREATE_GROUP
        )
        for recipient in recipients:
            if use_groups and not is_group_id(recipient):
                raise ValidationError(
                    f"Invalid group ID: {recipient}. Expected something like 120363123456789012@g.us",
                    reason=RejectionReason.MALFORMED_RECIPIENT,
                )
            if not use_groups and not is_phone_number(recipient):
                raise ValidationError(
                    f"Invalid phone number: {recipient}. Expected 10 to 15 digits",
                    reason=RejectionReason.MALFORMED_RECIPIENT,
                )

    def _check_text(self, req: ParsedRequest, cfg: AdapterConfig) -> None:
        if cfg.message_kind is MessageKind.CREATE_GROUP and not req.text:
            raise ValidationError("Group subject was not provided in the input!")
        if cfg.message_kind is MessageKind.TEXT and not req.text:
            raise ValidationError("Message text was not provided in the input!")

        if self.max_text_length and req.text and len(req.text) > self.max_text_length:
            raise ValidationError(
                f"Message exceeds the maximum length of {self.max_text_length} characters. "
                f"Current length: {len(req.text)} characters.",
                reason=RejectionReason.TEXT_TOO_LONG,
            )

    def _check_schedule(self, cfg: AdapterConfig) -> None:
        if cfg.time_to_send and not cfg.timezone:
            raise ValidationError(
                "Timezone is required when scheduling is enabled",
                reason=RejectionReason.MISSING_TIMEZONE,
            )

    async def _resolve_media(self, req: ParsedRequest, cfg: AdapterConfig):
        policy = self.media_policies.get(cfg.message_kind)
        if policy is None:
            return None

        ref = req.media or cfg.media_path
        if not ref:
            raise ValidationError(
                f"{policy.label.capitalize()} path was not provided in the input!",
                reason=RejectionReason.MEDIA_NOT_FOUND,
            )
        return await load_media(ref, policy, timeout=cfg.timeout)
