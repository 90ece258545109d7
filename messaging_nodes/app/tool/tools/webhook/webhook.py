from typing import Any, Dict, Optional

from messaging_nodes.app.adapters.http import HttpProviderInvoker
from messaging_nodes.app.tool.adapter import ToolAdapter
from messaging_nodes.app.tool.descriptor import AdapterDescriptor, InputField
from messaging_nodes.app.tool.encoding import StatusEncoder, fixed
from messaging_nodes.app.tool.parsing import WHOLE_INPUT, FieldSpec, PatternInputParser
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

DISCORD_MAX_CONTENT = 2000


class WebhookInvoker(HttpProviderInvoker):
    """POST {<body_key>: text} to the configured webhook URL."""

    def __init__(self, body_key: str, provider_label: str):
        self.body_key = body_key
        self.provider_label = provider_label

    async def send(
        self,
        req: ParsedRequest,
        cfg: AdapterConfig,
        media: Optional[MediaFile] = None,
    ) -> ProviderResponse:
        return await self.post_json(
            cfg.endpoint, {self.body_key: req.text}, timeout=cfg.timeout
        )


def _webhook_parser(body_key: str) -> PatternInputParser:
    # the whole input is the message unless it is JSON carrying the body key
    return PatternInputParser(
        fields=(FieldSpec("text", (body_key,), (WHOLE_INPUT,)),),
        usage=f'JSON structured like {{"{body_key}": "message"}} or the plain message text',
        normalize=False,
    )


def _webhook_url(values: Dict[str, Any]) -> str:
    url = values.get("webhookURL")
    if not url:
        raise ConfigurationError("Webhook URL is missing!")
    return url


def build_slack(values: Dict[str, Any]) -> ToolAdapter:
    config = AdapterConfig(
        provider=Provider.SLACK,
        name=Tools.SLACK.value,
        description=(
            "Send a message to a Slack. You may need to send this message and "
            "then use another tool"
        ),
        endpoint=_webhook_url(values),
        timeout=settings.request_timeout,
    )
    return ToolAdapter(
        config,
        parser=_webhook_parser("text"),
        validator=MessageValidator(RecipientRule.NONE),
        invoker=WebhookInvoker("text", "Slack"),
        encoder=StatusEncoder(
            fixed("Message sent successfully to Slack!"), "Slack", accepted={200}
        ),
    )


def build_discord(values: Dict[str, Any]) -> ToolAdapter:
    config = AdapterConfig(
        provider=Provider.DISCORD,
        name=Tools.DISCORD.value,
        description=(
            "Send a message to Discord. You may need to send this message and "
            "then use another tool"
        ),
        endpoint=_webhook_url(values),
        timeout=settings.request_timeout,
    )
    return ToolAdapter(
        config,
        parser=_webhook_parser("content"),
        validator=MessageValidator(
            RecipientRule.NONE, max_text_length=DISCORD_MAX_CONTENT
        ),
        invoker=WebhookInvoker("content", "Discord"),
        encoder=StatusEncoder(fixed("Message sent successfully to Discord!"), "Discord"),
    )


def _webhook_input(service: str) -> InputField:
    return InputField(
        label="Webhook URL",
        name="webhookURL",
        type=FieldType.PASSWORD,
        description=f"Your {service} webhook URL",
    )


SLACK_DESCRIPTOR = AdapterDescriptor(
    label="Slack Webhook",
    name="slackWebhook",
    type="SlackWebhook",
    icon="slack.svg",
    description="Send messages to Slack via Webhook",
    inputs=[_webhook_input("slack")],
    builder=build_slack,
)

DISCORD_DESCRIPTOR = AdapterDescriptor(
    label="Discord Webhook",
    name="discordWebhook",
    type="DiscordWebhook",
    icon="discord-icon.svg",
    description="Send messages to a Discord channel via Webhook",
    inputs=[_webhook_input("discord")],
    builder=build_discord,
)
