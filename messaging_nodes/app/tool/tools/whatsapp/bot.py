from typing import Any, Dict

from messaging_nodes.app.tool.adapter import ToolAdapter
from messaging_nodes.app.tool.descriptor import AdapterDescriptor
from messaging_nodes.app.tool.encoding import SuccessFlagEncoder, sent_to
from messaging_nodes.app.tool.parsing import (
    CHAT_NUMBER,
    MESSAGE_WILL_BE,
    FieldSpec,
    PatternInputParser,
)
from messaging_nodes.app.tool.validation import MessageValidator, RecipientRule
from messaging_nodes.base.models import AdapterConfig
from messaging_nodes.config.settings import settings
from messaging_nodes.enum.tools import Provider, Tools

from .gateway import SEND_MESSAGE, WhatsappGatewayInvoker, gateway_credentials, gateway_inputs

DESCRIPTION = """Send messages to Whatsapp chats.
apiToken and instance_id are inputs to the node, and you don't ask the user to input them in the chat.
User inputs can be in JSON format or natural language.
A natural language string in the format:
   here is the chat Number : phone_number and the message will be message_text.
   "chat_id" (string) chatID = chat_id = phone Number = chat number all of them refer to the phone number of the chat.
   "text" (string) message_text = message = message text refers to the message that will be sent to the chat.
The output is a JSON object with "success" and either "message" or "error"."""

PARSER = PatternInputParser(
    fields=(
        FieldSpec("recipient", ("chat_id",), (CHAT_NUMBER,)),
        FieldSpec("text", ("text",), (MESSAGE_WILL_BE,)),
    ),
    usage=(
        'JSON structured like {"text": "message", "chat_id": "number"} or in natural '
        'language like "here is the chat Number: 12345 and the message will be ..."'
    ),
)


def build_whatsapp_bot(values: Dict[str, Any]) -> ToolAdapter:
    config = AdapterConfig(
        provider=Provider.WAPILOT,
        name=Tools.WHATSAPP_BOT.value,
        description=DESCRIPTION,
        endpoint=settings.wapilot_api_url,
        timeout=settings.request_timeout,
        **gateway_credentials(values),
    )
    return ToolAdapter(
        config,
        parser=PARSER,
        validator=MessageValidator(RecipientRule.WHATSAPP),
        invoker=WhatsappGatewayInvoker(SEND_MESSAGE),
        encoder=SuccessFlagEncoder(
            "ok",
            sent_to("Message sent successfully to this number '{recipient}'!"),
            "Whatsapp",
        ),
    )


WHATSAPP_BOT_DESCRIPTOR = AdapterDescriptor(
    label="Whatsapp Bot",
    name="whatsappBot",
    type="whatsappBot",
    icon="whatsapp-icon.svg",
    description="Send messages to phone number via whatsapp",
    inputs=gateway_inputs("Whatsapp"),
    builder=build_whatsapp_bot,
)
