from .webhook import (
    DISCORD_DESCRIPTOR,
    SLACK_DESCRIPTOR,
    WebhookInvoker,
    build_discord,
    build_slack,
)

__all__ = [
    "DISCORD_DESCRIPTOR",
    "SLACK_DESCRIPTOR",
    "WebhookInvoker",
    "build_discord",
    "build_slack",
]
