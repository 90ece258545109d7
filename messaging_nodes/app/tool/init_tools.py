import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from messaging_nodes.app.tool.registry import Registry
from messaging_nodes.base.errors import ConfigurationError
from messaging_nodes.config.logger import logging
from messaging_nodes.config.settings import settings

logger = logging.getLogger(__name__)


def load_tool_configs(path: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Read the host's resolved tool list: [{"node": "telegramBot", "inputs": {...}}].
    A missing file means no tools are configured.
    """
    config_path = Path(path or settings.tools_config_path)
    if not config_path.exists():
        logger.warning("Tools config not found at %s; no tools configured", config_path)
        return []

    with open(config_path, "r", encoding="utf-8") as f:
        entries = json.load(f)

    if not isinstance(entries, list):
        raise ConfigurationError(f"{config_path} must contain a JSON list")
    return entries


def init_tools(reg: Registry, entries: List[Dict[str, Any]]) -> List[str]:
    """
    Build and register every configured tool. A bad entry is a configuration
    error and stops startup; nothing is registered lazily.
    """
    names: List[str] = []
    for entry in entries:
        node = entry.get("node")
        if not node:
            raise ConfigurationError(f"Tool entry without 'node': {entry!r}")
        tool = reg.add(node, entry.get("inputs") or {}, name=entry.get("name"))
        names.append(entry.get("name") or tool.name)

    logger.info("Initialized %d tool(s): %s", len(names), ", ".join(names))
    return names
