from .adapter import ToolAdapter
from .descriptor import AdapterDescriptor, CredentialDescriptor, InputField

__all__ = ["ToolAdapter", "AdapterDescriptor", "CredentialDescriptor", "InputField"]
