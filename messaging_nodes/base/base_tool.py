import json
from abc import ABC, abstractmethod
from typing import Any, Dict


class BaseTool(ABC):
    """
    Abstract base class for all tools.
    Every tool must implement `name`, `description`, and `invoke`.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name of the tool (used by the agent)."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this tool does."""
        pass

    @abstractmethod
    async def invoke(self, raw_input: str) -> str:
        """Run once for one agent-generated string; always returns a string."""
        pass

    async def run(self, payload: Dict[str, Any]) -> str:
        """
        Registry entry point. Accepts {"input": "..."} (or {"args": {...}})
        and forwards a single string to `invoke`.
        """
        args = payload.get("args", payload) if isinstance(payload, dict) else payload
        if isinstance(args, dict) and isinstance(args.get("input"), str):
            return await self.invoke(args["input"])
        if isinstance(args, str):
            return await self.invoke(args)
        return await self.invoke(json.dumps(args))

    async def shutdown(self) -> None:
        """Optional cleanup hook."""
        return
