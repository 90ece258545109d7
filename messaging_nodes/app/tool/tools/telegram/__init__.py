from .telegram import TELEGRAM_DESCRIPTOR, TelegramInvoker, build_telegram

__all__ = ["TELEGRAM_DESCRIPTOR", "TelegramInvoker", "build_telegram"]
