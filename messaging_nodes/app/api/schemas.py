from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ToolInvocation(BaseModel):
    input: str


class ToolInfo(BaseModel):
    name: str
    description: str


class NodeInfo(BaseModel):
    name: str
    label: str
    version: float
    category: str
    inputs: List[Dict[str, Any]]
    credential: Optional[Dict[str, Any]] = None
