from typing import Any, Dict, Optional

from messaging_nodes.app.adapters.http import HttpProviderInvoker
from messaging_nodes.app.tool.adapter import ToolAdapter
from messaging_nodes.app.tool.descriptor import AdapterDescriptor, InputField
from messaging_nodes.app.tool.encoding import SuccessFlagEncoder, fixed
from messaging_nodes.app.tool.parsing import (
    CHAT_NUMBER,
    MESSAGE_WILL_BE,
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
    ParsedRequest,
    ProviderResponse,
)
from messaging_nodes.config.settings import settings
from messaging_nodes.enum.field_type import FieldType
from messaging_nodes.enum.tools import Provider, Tools

TELEGRAM_MAX_TEXT = 4096

DESCRIPTION = """Send messages to Telegram chats.
Input should be a json string with two keys: "chat_id" and "text".
The value of "text" should be a string, and the value of "chat_id" is the numeric chat id.
Be careful to always use double quotes for strings in the json string.
Natural language also works: "send to chat Number : 123456 with text Hello there."
The output is a JSON object with "success" and either "message" or "error"."""

PARSER = PatternInputParser(
    fields=(
        FieldSpec("recipient", ("chat_id", "chatId"), (CHAT_NUMBER,)),
        FieldSpec(
            "text", ("text", "message"), (MESSAGE_WILL_BE, WITH_TEXT, TEXT_COLON)
        ),
    ),
    usage=(
        'JSON structured like {"chat_id": "number", "text": "message content"} '
        'or in natural language like "send to chat Number: 12345 with text Hello there."'
    ),
)


class TelegramInvoker(HttpProviderInvoker):
    provider_label = "Telegram"

    async def send(
        self,
        req: ParsedRequest,
        cfg: AdapterConfig,
        media: Optional[MediaFile] = None,
    ) -> ProviderResponse:
        url = f"{cfg.endpoint.rstrip('/')}/bot{cfg.api_token}/sendMessage"
        body = {"chat_id": req.recipient, "text": req.text}
        return await self.post_json(url, body, timeout=cfg.timeout)


def build_telegram(values: Dict[str, Any]) -> ToolAdapter:
    token = values.get("botToken")
    if not token:
        raise ConfigurationError("Bot Token not provided!")

    config = AdapterConfig(
        provider=Provider.TELEGRAM,
        name=Tools.TELEGRAM.value,
        description=DESCRIPTION,
        api_token=token,
        endpoint=settings.telegram_api_url,
        timeout=settings.request_timeout,
    )
    return ToolAdapter(
        config,
        parser=PARSER,
        validator=MessageValidator(
            RecipientRule.TELEGRAM, max_text_length=TELEGRAM_MAX_TEXT
        ),
        invoker=TelegramInvoker(),
        encoder=SuccessFlagEncoder(
            "ok", fixed("Message sent successfully to Telegram!"), "Telegram"
        ),
    )


TELEGRAM_DESCRIPTOR = AdapterDescriptor(
    label="Telegram Bot",
    name="telegramBot",
    type="TelegramBot",
    icon="telegram-icon.svg",
    description="Send messages to a Telegram chat",
    inputs=[
        InputField(
            label="Bot Token",
            name="botToken",
            type=FieldType.PASSWORD,
            description="Your Telegram Bot API Token",
        )
    ],
    builder=build_telegram,
)
