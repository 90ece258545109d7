from messaging_nodes.app.tool.descriptor import CredentialDescriptor, InputField
from messaging_nodes.config.settings import settings
from messaging_nodes.enum.field_type import FieldType

OCTOBOT_CREDENTIAL = CredentialDescriptor(
    label="OctobotWapp API",
    name="octobotWappApi",
    description="OctobotWapp API credentials for WhatsApp messaging",
    inputs=[
        InputField(
            label="Device Name",
            name="deviceName",
            type=FieldType.STRING,
            description="A friendly name to identify this WhatsApp device",
            placeholder="e.g., Sales Team Phone",
            optional=True,
        ),
        InputField(
            label="API Token",
            name="apiToken",
            type=FieldType.PASSWORD,
            description="Your OctobotWapp API Token",
            placeholder="Enter your API token",
        ),
        InputField(
            label="Device UUID",
            name="deviceUuid",
            type=FieldType.PASSWORD,
            description="UUID of the WhatsApp device to send from",
            placeholder="e.g., 123e4567-e89b-12d3-a456-426614174000",
        ),
        InputField(
            label="API URL",
            name="apiUrl",
            type=FieldType.STRING,
            description="OctobotWapp API endpoint URL",
            default=settings.octobot_api_url,
            optional=True,
        ),
    ],
)
