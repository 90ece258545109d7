from typing import Any, Dict, Optional

from messaging_nodes.app.adapters.http import HttpProviderInvoker
from messaging_nodes.app.tool.adapter import ToolAdapter
from messaging_nodes.app.tool.descriptor import (
    AdapterDescriptor,
    CredentialRef,
    InputField,
    OptionItem,
)
from messaging_nodes.app.tool.encoding import SuccessFlagEncoder
from messaging_nodes.app.tool.parsing import (
    CHAT_NUMBER,
    GROUP_PICTURE,
    MESSAGE_WILL_BE,
    RECIPIENTS,
    TEXT_COLON,
    WITH_TEXT,
    FieldSpec,
    PatternInputParser,
)
from messaging_nodes.app.tool.validation import MessageValidator, RecipientRule
from messaging_nodes.base.errors import ConfigurationError
from messaging_nodes.base.models import (
    AdapterConfig,
    MediaFile,
    Outcome,
    ParsedRequest,
    ProviderResponse,
)
from messaging_nodes.config.settings import settings
from messaging_nodes.enum.field_type import FieldType
from messaging_nodes.enum.message import ContactKind, MessageKind
from messaging_nodes.enum.tools import Provider, Tools

from .credential import OCTOBOT_CREDENTIAL

TOOL_DESC = """Send WhatsApp messages or create groups via OctobotWapp API.
Input is a JSON string with:
- recipients: For messages: comma-separated numbers or group IDs. For group creation: comma-separated participant numbers
- text_message: For messages: the text to send. For group creation: the group name/subject
- group_picture_url (optional): URL of the group picture when creating groups"""

MEDIA_KINDS = (MessageKind.IMAGE, MessageKind.VIDEO, MessageKind.DOCUMENT)

_RECIPIENT_PATTERNS =(RECIPIENTS, CHAT_NUMBER)
_TEXT_PATTERNS = (MESSAGE_WILL_BE, WITH_TEXT, TEXT_COLON)
_USAGE = (
    'JSON structured like {"recipients": "201110076346,201110076347", '
    '"text_message": "message text"} or in natural language like '
    '"recipients: 201110076346 with text Hello there."'
)


def octobot_parser(kind: MessageKind) -> PatternInputParser:
    fields = [
        FieldSpec("recipient", ("recipients",), _RECIPIENT_PATTERNS),
        FieldSpec(
            "text",
            ("text_message",),
            _TEXT_PATTERNS,
            required=kind in (MessageKind.TEXT, MessageKind.CREATE_GROUP),
        ),
    ]
    if kind is MessageKind.CREATE_GROUP:
        fields.append(
            FieldSpec(
                "group_picture", ("group_picture_url",), (GROUP_PICTURE,), required=False
            )
        )
    return PatternInputParser(fields=tuple(fields), usage=_USAGE)


def _headers(cfg: AdapterConfig) -> Dict[str, str]:
    return {"accept": "application/json", "x-api-token": cfg.api_token or ""}


class OctobotMessageInvoker(HttpProviderInvoker):
    provider_label = "OctobotWapp"

    async def send(
        self,
        req: ParsedRequest,
        cfg: AdapterConfig,
        media: Optional[MediaFile] = None,
    ) -> ProviderResponse:
        fields = {
            "device_uuid": cfg.device_uuid,
            "type_message": cfg.message_kind.value,
            "type_contact": cfg.contact_kind.value,
            "ids": req.recipient,
        }
        if cfg.time_to_send:
            fields["time_to_send"] = cfg.time_to_send
            fields["timezone"] = cfg.timezone
        fields["text_message"] = req.text
        return await self.post_form(
            cfg.endpoint, fields, media=media, headers=_headers(cfg), timeout=cfg.timeout
        )


class OctobotGroupInvoker(HttpProviderInvoker):
    provider_label = "OctobotWapp"

    async def send(
        self,
        req: ParsedRequest,
        cfg: AdapterConfig,
        media: Optional[MediaFile] = None,
    ) -> ProviderResponse:
        fields = {
            "deviceUuid": cfg.device_uuid,
            "subject": req.text,
            "participants": req.recipient,
            "groupPicture": req.group_picture,
        }
        return await self.post_form(
            cfg.group_endpoint or settings.octobot_group_url,
            fields,
            headers=_headers(cfg),
            timeout=cfg.timeout,
        )


def message_sent(response: ProviderResponse, req: ParsedRequest, cfg: AdapterConfig):
    return Outcome.ok(f"{cfg.message_kind.value} sent", count=len(req.recipients))


def group_created(response: ProviderResponse, req: ParsedRequest, cfg: AdapterConfig):
    body = response.data if isinstance(response.data, dict) else {}
    group = body.get("data") if isinstance(body.get("data"), dict) else {}
    return Outcome.ok(
        body.get("msg") or f'Group "{req.text}" created successfully',
        groupId=group.get("groupId"),
        subject=group.get("subject"),
        participants=group.get("participants"),
        inviteCode=group.get("inviteCode"),
        inviteLink=group.get("inviteLink"),
        groupPicture=group.get("groupPicture"),
    )


def build_octobot(values: Dict[str, Any]) -> ToolAdapter:
    if not values.get("apiToken"):
        raise ConfigurationError("API Token is required in credentials")
    if not values.get("deviceUuid"):
        raise ConfigurationError("Device UUID is required in credentials")

    kind = MessageKind(values.get("type_message") or MessageKind.TEXT.value)
    if kind in MEDIA_KINDS and not values.get("media_path"):
        raise ConfigurationError(f"Media file path is required for {kind.value} messages")

    config = AdapterConfig(
        provider=Provider.OCTOBOT,
        name=values.get("toolName") or Tools.OCTOBOT.value,
        description=values.get("toolDesc") or TOOL_DESC,
        api_token=values["apiToken"],
        device_uuid=values["deviceUuid"],
        device_name=values.get("deviceName"),
        endpoint=values.get("apiUrl") or settings.octobot_api_url,
        group_endpoint=settings.octobot_group_url,
        message_kind=kind,
        contact_kind=ContactKind(values.get("type_contact") or ContactKind.NUMBERS.value),
        media_path=values.get("media_path"),
        time_to_send=values.get("time_to_send"),
        timezone=values.get("timezone"),
        timeout=settings.media_timeout,
    )

    if kind is MessageKind.CREATE_GROUP:
        invoker: HttpProviderInvoker = OctobotGroupInvoker()
        success = group_created
    else:
        invoker = OctobotMessageInvoker()
        success = message_sent

    return ToolAdapter(
        config,
        parser=octobot_parser(kind),
        validator=MessageValidator(RecipientRule.WHATSAPP),
        invoker=invoker,
        encoder=SuccessFlagEncoder("success", success, "OctobotWapp", strict=True),
    )


OCTOBOT_DESCRIPTOR = AdapterDescriptor(
    label="OctobotWapp DODGE",
    name="OctobotWapp",
    type="OctobotWapp",
    icon="OctobotWapp.svg",
    description="Send WhatsApp messages or create groups via OctobotWapp API",
    credential=CredentialRef(
        label="Connect Credential",
        credential_names=[OCTOBOT_CREDENTIAL.name],
        description="Select OctobotWapp credentials",
    ),
    credentials=[OCTOBOT_CREDENTIAL],
    inputs=[
        InputField(
            label="Tool Name",
            name="toolName",
            type=FieldType.STRING,
            description="Specify the name of the tool",
            default=Tools.OCTOBOT.value,
        ),
        InputField(
            label="Tool Description",
            name="toolDesc",
            type=FieldType.STRING,
            rows=4,
            description="Specify the description of the tool",
            default=TOOL_DESC,
        ),
        InputField(
            label="Message Type",
            name="type_message",
            type=FieldType.OPTIONS,
            options=[
                OptionItem(label="Text Message", name=MessageKind.TEXT.value),
                OptionItem(label="Image Message", name=MessageKind.IMAGE.value),
                OptionItem(label="Video Message", name=MessageKind.VIDEO.value),
                OptionItem(label="Document Message", name=MessageKind.DOCUMENT.value),
                OptionItem(label="Create Group", name=MessageKind.CREATE_GROUP.value),
            ],
            default=MessageKind.TEXT.value,
            description="Type of message to send or create group",
        ),
        InputField(
            label="Recipient Type",
            name="type_contact",
            type=FieldType.OPTIONS,
            options=[
                OptionItem(label="Phone Numbers", name=ContactKind.NUMBERS.value),
                OptionItem(label="Group IDs", name=ContactKind.GROUP.value),
            ],
            default=ContactKind.NUMBERS.value,
            description="Type of recipients",
        ),
        InputField(
            label="Media File Path",
            name="media_path",
            type=FieldType.STRING,
            description="Full path to media file (required for image/video/document messages)",
            placeholder="/path/to/file.jpg",
            optional=True,
            additional_params=True,
        ),
        InputField(
            label="Schedule Time",
            name="time_to_send",
            type=FieldType.STRING,
            description="Schedule time in format: YYYY-MM-DD HH:mm:ss (leave empty for immediate sending)",
            placeholder="e.g., 2025-05-20 11:33:00",
            optional=True,
            additional_params=True,
        ),
        InputField(
            label="Timezone",
            name="timezone",
            type=FieldType.STRING,
            description="Timezone for scheduled message (required if time_to_send is set)",
            placeholder="e.g., Asia/Riyadh",
            optional=True,
            additional_params=True,
        ),
    ],
    builder=build_octobot,
)
