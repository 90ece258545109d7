from .credential import OCTOBOT_CREDENTIAL
from .octobot import (
    OCTOBOT_DESCRIPTOR,
    OctobotGroupInvoker,
    OctobotMessageInvoker,
    build_octobot,
)

__all__ = [
    "OCTOBOT_CREDENTIAL",
    "OCTOBOT_DESCRIPTOR",
    "OctobotGroupInvoker",
    "OctobotMessageInvoker",
    "build_octobot",
]
