from typing import Dict

from messaging_nodes.app.tool.descriptor import AdapterDescriptor

from .octobot import OCTOBOT_DESCRIPTOR
from .telegram import TELEGRAM_DESCRIPTOR
from .webhook import DISCORD_DESCRIPTOR, SLACK_DESCRIPTOR
from .whatsapp import (
    WACONNECT_FILE_DESCRIPTOR,
    WACONNECT_IMAGE_DESCRIPTOR,
    WACONNECT_TEXT_DESCRIPTOR,
    WHATSAPP_BOT_DESCRIPTOR,
)

"""
DESCRIPTORS: mapping node name -> descriptor the host uses to build the tool
"""
DESCRIPTORS: Dict[str, AdapterDescriptor] = {
    d.name: d
    for d in (
        TELEGRAM_DESCRIPTOR,
        SLACK_DESCRIPTOR,
        DISCORD_DESCRIPTOR,
        WHATSAPP_BOT_DESCRIPTOR,
        WACONNECT_TEXT_DESCRIPTOR,
        WACONNECT_IMAGE_DESCRIPTOR,
        WACONNECT_FILE_DESCRIPTOR,
        OCTOBOT_DESCRIPTOR,
    )
}
