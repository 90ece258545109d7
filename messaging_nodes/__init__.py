"""Messaging tool nodes (Telegram, Slack, Discord, WhatsApp gateways) for LLM agents."""

__version__ = "1.0.0"
