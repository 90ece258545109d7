from typing import Any, Callable, Dict, List, Mapping, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from messaging_nodes.base.errors import ConfigurationError
from messaging_nodes.enum.field_type import FieldType
from messaging_nodes.config.logger import logging

logger = logging.getLogger(__name__)


class OptionItem(BaseModel):
    label: str
    name: str


class InputField(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    label: str
    name: str
    type: FieldType
    description: str = ""
    default: Any = None
    placeholder: Optional[str] = None
    rows: Optional[int] = None
    options: List[OptionItem] = Field(default_factory=list)
    optional: bool = False
    additional_params: bool = False

    @property
    def required(self) -> bool:
        return not self.optional and self.default is None


class CredentialDescriptor(BaseModel):
    label: str
    name: str
    version: float = 1.0
    description: str = ""
    inputs: List[InputField]


class CredentialRef(BaseModel):
    label: str
    name: str = "credential"
    credential_names: List[str]
    description: str = ""


class AdapterDescriptor(BaseModel):
    """
    What the host registry reads to render a node's configuration, and the
    one `init` call it uses to turn resolved values into a ready tool.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    label: str
    name: str
    version: float = 1.0
    type: str
    icon: str = ""
    category: str = "Communication"
    description: str = ""
    inputs: List[InputField] = Field(default_factory=list)
    credential: Optional[CredentialRef] = None
    credentials: List[CredentialDescriptor] = Field(default_factory=list)
    builder: Callable[[Dict[str, Any]], Any] = Field(exclude=True)

    def all_fields(self) -> List[InputField]:
        fields = list(self.inputs)
        for cred in self.credentials:
            fields.extend(cred.inputs)
        return fields

    def resolve(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Apply defaults and reject unknown, missing or out-of-range values."""
        fields = {f.name: f for f in self.all_fields()}

        unknown = sorted(set(values) - set(fields))
        if unknown:
            raise ConfigurationError(
                f"{self.label}: unknown configuration field(s): {', '.join(unknown)}"
            )

        resolved: Dict[str, Any] = {}
        for name, f in fields.items():
            value = values.get(name)
            if value is None or value == "":
                value = f.default
            if value is None or value == "":
                if f.required:
                    raise ConfigurationError(f"{self.label}: {f.label} is required")
                continue
            if f.type == FieldType.OPTIONS.value and f.options:
                allowed = [o.name for o in f.options]
                if value not in allowed:
                    raise ConfigurationError(
                        f"{self.label}: {f.label} must be one of {', '.join(allowed)}"
                    )
            resolved[name] = value
        return resolved

    def init(self, values: Mapping[str, Any]):
        resolved = self.resolve(values)
        try:
            tool = self.builder(resolved)
        except pydantic.ValidationError as e:
            raise ConfigurationError(f"{self.label}: invalid configuration: {e}") from e
        logger.info("Initialized %s as tool '%s'", self.name, tool.name)
        return tool

    def metadata(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude={"builder"})
