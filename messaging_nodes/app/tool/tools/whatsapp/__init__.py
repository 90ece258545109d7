from .bot import WHATSAPP_BOT_DESCRIPTOR, build_whatsapp_bot
from .gateway import WhatsappGatewayInvoker
from .waconnect import (
    WACONNECT_FILE_DESCRIPTOR,
    WACONNECT_IMAGE_DESCRIPTOR,
    WACONNECT_TEXT_DESCRIPTOR,
    build_waconnect_file,
    build_waconnect_image,
    build_waconnect_text,
)

__all__ = [
    "WHATSAPP_BOT_DESCRIPTOR",
    "WACONNECT_FILE_DESCRIPTOR",
    "WACONNECT_IMAGE_DESCRIPTOR",
    "WACONNECT_TEXT_DESCRIPTOR",
    "WhatsappGatewayInvoker",
    "build_whatsapp_bot",
    "build_waconnect_file",
    "build_waconnect_image",
    "build_waconnect_text",
]
