from enum import Enum


class Tools(Enum):
    TELEGRAM = "telegram"
    SLACK = "Slack"
    DISCORD = "discord"
    WHATSAPP_BOT = "whatsappTool"
    WACONNECT_TEXT = "whatsappTextTool"
    WACONNECT_IMAGE = "whatsappImageTool"
    WACONNECT_FILE = "whatsappFileTool"
    OCTOBOT = "OctobotWappTool"
    HEALTH = "health"


class Provider(Enum):
    TELEGRAM = "telegram"
    SLACK = "slack"
    DISCORD = "discord"
    WAPILOT = "wapilot"
    WACONNECT = "waconnect"
    OCTOBOT = "octobot"
