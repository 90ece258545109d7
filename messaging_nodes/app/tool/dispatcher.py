from typing import Any, Dict, Optional

from messaging_nodes.app.tool.registry import Registry, registry
from messaging_nodes.config.logger import logging

logger = logging.getLogger(__name__)


async def dispatch_tool(
    tool_name: str, args: Dict[str, Any] | str, reg: Optional[Registry] = None
) -> str:
    """
    Run a registered tool in-process.
    `args` is either the agent string, {"input": "..."} or a structured payload
    that the tool serializes back to JSON.
    """
    reg = reg or registry
    impl = reg.get(tool_name)
    if impl is None:
        raise ValueError(f"Unknown tool (no instance registered): {tool_name}")

    if isinstance(args, str):
        return await impl.invoke(args)

    payload = args or {}
    logger.debug("dispatch %s with keys %s", tool_name, sorted(payload))
    return await impl.run(payload)
