from typing import Any, Dict

from messaging_nodes.app.tool.adapter import ToolAdapter
from messaging_nodes.app.tool.descriptor import AdapterDescriptor
from messaging_nodes.app.tool.encoding import SuccessFlagEncoder, sent_to
from messaging_nodes.app.tool.parsing import (
    CAPTION,
    CHAT_NUMBER,
    FILE_PATH,
    IMAGE_PATH,
    TEXT_COLON,
    WITH_TEXT,
    FieldSpec,
    PatternInputParser,
)
from messaging_nodes.app.tool.validation import (
    IMAGE_POLICY,
    MessageValidator,
    RecipientRule,
)
from messaging_nodes.base.models import AdapterConfig
from messaging_nodes.config.settings import settings
from messaging_nodes.enum.message import MessageKind
from messaging_nodes.enum.tools import Provider, Tools
from messaging_nodes.helpers.file_util import MB, MediaPolicy

from .gateway import (
    SEND_FILE,
    SEND_IMAGE,
    SEND_MESSAGE,
    WhatsappGatewayInvoker,
    gateway_credentials,
    gateway_inputs,
)

WACONNECT_MAX_TEXT = 4096
WACONNECT_IMAGE_POLICY = MediaPolicy("image", IMAGE_POLICY.extensions, 5 * MB)

_NODE_NOTE = (
    "apiToken and instance_id are inputs to the node, and you don't ask the user "
    "to input them in the chat.\nUser inputs can be in JSON format or natural language."
)
_OUTPUT_NOTE = 'The output is a JSON object with "success" and either "message" or "error".'

TEXT_DESCRIPTION = f"""Send text messages to Whatsapp chats.
{_NODE_NOTE}
A natural language string in the format:
   send message to chat Number : phone_number with text message_content.
   "chat_id" (string) refers to the phone number of the recipient.
   "text" (string) is the message content to send via WhatsApp.
{_OUTPUT_NOTE}"""

IMAGE_DESCRIPTION = f"""Send images to Whatsapp chats.
{_NODE_NOTE}
A natural language string in the format:
   here is the chat Number : phone_number and the image path is image_path with caption caption_text.
   "chat_id" (string) refers to the phone number of the recipient. Numbers starting with zero get the prefix '2' automatically.
   "image_path" (string) is the local path to the image file or a URL.
   "caption" (string) is an optional text caption for the image.
{_OUTPUT_NOTE}"""

FILE_DESCRIPTION = f"""Send document files to Whatsapp chats.
{_NODE_NOTE}
A natural language string in the format:
   here is the chat Number : phone_number and the file path is file_path with caption caption_text.
   "chat_id" (string) refers to the phone number of the recipient.
   "file_path" (string) is the local path to the file or a URL.
   "caption" (string) is an optional text caption for the file.
{_OUTPUT_NOTE}"""

TEXT_PARSER = PatternInputParser(
    fields=(
        FieldSpec("recipient", ("chat_id",), (CHAT_NUMBER,)),
        FieldSpec("text", ("text",), (WITH_TEXT, TEXT_COLON)),
    ),
    usage=(
        'JSON structured like {"chat_id": "number", "text": "message content"} or in '
        'natural language like "send message to chat Number: 12345 with text Hello there."'
    ),
)

IMAGE_PARSER = PatternInputParser(
    fields=(
        FieldSpec("media", ("image_path",), (IMAGE_PATH,)),
        FieldSpec("recipient", ("chat_id",), (CHAT_NUMBER,)),
        FieldSpec("caption", ("caption",), (CAPTION,), required=False),
    ),
    usage=(
        'JSON structured like {"image_path": "path/to/image.jpg", "chat_id": "number", '
        '"caption": "optional text"} or in natural language like "here is the chat '
        'Number: 12345 and the image path is path/to/image.jpg with caption This is my image."'
    ),
)

FILE_PARSER = PatternInputParser(
    fields=(
        FieldSpec("media", ("file_path",), (FILE_PATH,)),
        FieldSpec("recipient", ("chat_id",), (CHAT_NUMBER,)),
        FieldSpec("caption", ("caption",), (CAPTION,), required=False),
    ),
    usage=(
        'JSON structured like {"file_path": "path/to/file.pdf", "chat_id": "number", '
        '"caption": "optional text"} or in natural language like "here is the chat '
        'Number: 12345 and the file path is path/to/file.pdf with caption This is my document."'
    ),
)


def _waconnect_config(
    values: Dict[str, Any], tool: Tools, description: str, kind: MessageKind
) -> AdapterConfig:
    timeout = settings.request_timeout if kind is MessageKind.TEXT else settings.media_timeout
    return AdapterConfig(
        provider=Provider.WACONNECT,
        name=tool.value,
        description=description,
        endpoint=settings.waconnect_api_url,
        message_kind=kind,
        timeout=timeout,
        **gateway_credentials(values),
    )


def build_waconnect_text(values: Dict[str, Any]) -> ToolAdapter:
    return ToolAdapter(
        _waconnect_config(values, Tools.WACONNECT_TEXT, TEXT_DESCRIPTION, MessageKind.TEXT),
        parser=TEXT_PARSER,
        validator=MessageValidator(
            RecipientRule.WHATSAPP, max_text_length=WACONNECT_MAX_TEXT
        ),
        invoker=WhatsappGatewayInvoker(SEND_MESSAGE),
        encoder=SuccessFlagEncoder(
            "success",
            sent_to("Message sent successfully to this number '{recipient}'!"),
            "WhatsApp",
            strict=True,
        ),
    )


def build_waconnect_image(values: Dict[str, Any]) -> ToolAdapter:
    return ToolAdapter(
        _waconnect_config(
            values, Tools.WACONNECT_IMAGE, IMAGE_DESCRIPTION, MessageKind.IMAGE
        ),
        parser=IMAGE_PARSER,
        validator=MessageValidator(
            RecipientRule.WHATSAPP,
            media_policies={MessageKind.IMAGE: WACONNECT_IMAGE_POLICY},
        ),
        invoker=WhatsappGatewayInvoker(SEND_IMAGE),
        encoder=SuccessFlagEncoder(
            "ok",
            sent_to("Image sent successfully to this number '{recipient}'!"),
            "WhatsApp",
        ),
    )


def build_waconnect_file(values: Dict[str, Any]) -> ToolAdapter:
    return ToolAdapter(
        _waconnect_config(
            values, Tools.WACONNECT_FILE, FILE_DESCRIPTION, MessageKind.DOCUMENT
        ),
        parser=FILE_PARSER,
        validator=MessageValidator(RecipientRule.WHATSAPP),
        invoker=WhatsappGatewayInvoker(SEND_FILE),
        encoder=SuccessFlagEncoder(
            "ok",
            sent_to("File sent successfully to this number '{recipient}'!"),
            "WhatsApp",
        ),
    )


WACONNECT_TEXT_DESCRIPTOR = AdapterDescriptor(
    label="WaConnect Text",
    name="waconnectText",
    type="waconnectText",
    icon="Whatsapp-Icon.svg",
    description="Send text messages to phone number via WhatsApp",
    inputs=gateway_inputs(),
    builder=build_waconnect_text,
)

WACONNECT_IMAGE_DESCRIPTOR = AdapterDescriptor(
    label="WaConnect Image",
    name="waconnectImage",
    type="waconnectImage",
    icon="whatsapp-icon.svg",
    description="Send images to phone number via WhatsApp",
    inputs=gateway_inputs(),
    builder=build_waconnect_image,
)

WACONNECT_FILE_DESCRIPTOR = AdapterDescriptor(
    label="WaConnect File",
    name="waconnectFile",
    type="waconnectFile",
    icon="whatsapp-icon.svg",
    description="Send document files to phone number via WhatsApp",
    inputs=gateway_inputs(),
    builder=build_waconnect_file,
)
