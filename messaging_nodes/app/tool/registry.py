from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from fastmcp import FastMCP

from messaging_nodes.app.tool.descriptor import AdapterDescriptor
from messaging_nodes.app.tool.tools import DESCRIPTORS
from messaging_nodes.base.base_tool import BaseTool
from messaging_nodes.config.logger import logging
from messaging_nodes.enum.tools import Tools

logger = logging.getLogger(__name__)


class Registry:
    """
    Host-side registry: knows every node descriptor, builds tools from
    resolved configuration and exposes them as MCP tools.
    """

    def __init__(
        self,
        name: str = "messaging-nodes",
        descriptors: Optional[Iterable[AdapterDescriptor]] = None,
    ):
        self.mcp = FastMCP(name=name)
        self.descriptors: Dict[str, AdapterDescriptor] = {}
        self.tools: Dict[str, Any] = {}
        self.instances: Dict[str, BaseTool] = {}
        for desc in descriptors or ():
            self.register_descriptor(desc)

        @self.mcp.tool(name=Tools.HEALTH.value, description="Basic health check")
        async def health_ping() -> dict:
            return {"status": "ok", "tools": sorted(self.instances)}

    def register_descriptor(self, descriptor: AdapterDescriptor) -> None:
        self.descriptors[descriptor.name] = descriptor

    def get(self, name: str) -> Optional[BaseTool]:
        return self.instances.get(name)

    def create(self, node: str, values: Mapping[str, Any]) -> BaseTool:
        """Build a tool from a node name and host-resolved values (fails fast)."""
        descriptor = self.descriptors.get(node)
        if descriptor is None:
            raise KeyError(f"Unknown node: {node}")
        return descriptor.init(values)

    def register_instance(
        self,
        instance: BaseTool,
        name: Optional[str] = None,
        **tool_kwargs,
    ) -> Callable:
        """
        Register a built tool. The MCP callable takes the single agent string
        and returns the tool's string outcome.
        """
        tool_name = name or instance.name
        if tool_name in self.instances:
            raise ValueError(f"Tool already registered: {tool_name}")

        async def _tool_entry(input: str) -> str:
            return await instance.invoke(input)

        decorated = self.mcp.tool(
            name=tool_name,
            description=instance.description,
            **tool_kwargs,
        )(_tool_entry)

        self.tools[tool_name] = decorated
        self.instances[tool_name] = instance
        logger.info("Registered tool %s", tool_name)
        return decorated

    def add(self, node: str, values: Mapping[str, Any], name: Optional[str] = None):
        instance = self.create(node, values)
        self.register_instance(instance, name=name)
        return instance

    def http_app(self):
        return self.mcp.http_app()

    def run(
        self, host: str = "0.0.0.0", port: int = 8000, transport: Optional[str] = None
    ):
        if transport:
            self.mcp.run(transport=transport, host=host, port=port)
        else:
            self.mcp.run()


def default_registry() -> Registry:
    return Registry(descriptors=DESCRIPTORS.values())


registry: Registry = default_registry()
