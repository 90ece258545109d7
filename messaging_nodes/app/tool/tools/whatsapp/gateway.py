from typing import Any, Dict, Optional

from messaging_nodes.app.adapters.http import HttpProviderInvoker
from messaging_nodes.app.tool.descriptor import InputField
from messaging_nodes.base.errors import ConfigurationError
from messaging_nodes.base.models import (
    AdapterConfig,
    MediaFile,
    ParsedRequest,
    ProviderResponse,
)
from messaging_nodes.enum.field_type import FieldType

SEND_MESSAGE = "send-message"
SEND_IMAGE = "send-image"
SEND_FILE = "send-file"


class WhatsappGatewayInvoker(HttpProviderInvoker):
    """
    Instance-scoped WhatsApp gateways (wapilot, WaConnect):
    POST {endpoint}/{instance_id}/{action}.
    Text goes as JSON with the token in the body, media as multipart.
    """

    provider_label = "WhatsApp"

    def __init__(self, action: str = SEND_MESSAGE):
        self.action = action

    def url_for(self, cfg: AdapterConfig) -> str:
        return f"{cfg.endpoint.rstrip('/')}/{cfg.instance_id}/{self.action}"

    async def send(
        self,
        req: ParsedRequest,
        cfg: AdapterConfig,
        media: Optional[MediaFile] = None,
    ) -> ProviderResponse:
        url = self.url_for(cfg)
        if media is None:
            body = {"token": cfg.api_token, "chat_id": req.recipient, "text": req.text}
            return await self.post_json(url, body, timeout=cfg.timeout)

        fields = {
            "token": cfg.api_token,
            "chat_id": req.recipient,
            "caption": req.caption,
        }
        return await self.post_form(url, fields, media=media, timeout=cfg.timeout)


def gateway_credentials(values: Dict[str, Any]) -> Dict[str, str]:
    token = values.get("apiToken")
    instance_id = values.get("instance_id")
    if not token:
        raise ConfigurationError("API Token is required but not provided!")
    if not instance_id:
        raise ConfigurationError("Instance ID is required but not provided!")
    return {"api_token": token, "instance_id": str(instance_id)}


def gateway_inputs(service: str = "WhatsApp") -> list[InputField]:
    return [
        InputField(
            label="Api Token",
            name="apiToken",
            type=FieldType.PASSWORD,
            description=f"Your {service} API Token",
        ),
        InputField(
            label="Instance ID",
            name="instance_id",
            type=FieldType.STRING,
            description=f"Your {service} instance ID",
        ),
    ]
