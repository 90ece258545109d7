import json
from typing import List, Optional

from fastapi import FastAPI, HTTPException

from messaging_nodes.app.tool.registry import Registry, registry
from messaging_nodes.enum.tools import Tools
from .schemas import NodeInfo, ToolInfo, ToolInvocation


def create_app(reg: Optional[Registry] = None) -> FastAPI:
    reg = reg or registry
    app = FastAPI(title="Messaging Nodes HTTP Shim")

    @app.get("/nodes", response_model=List[NodeInfo])
    async def list_nodes():
        return [NodeInfo(**d.metadata()) for d in reg.descriptors.values()]

    @app.get("/tools", response_model=List[ToolInfo])
    async def list_tools():
        return [
            ToolInfo(name=name, description=tool.description)
            for name, tool in reg.instances.items()
        ]

    @app.post("/tool/{name}")
    async def invoke_tool(name: str, payload: ToolInvocation):
        tool = reg.get(name)
        if tool is None:
            raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")
        # the adapter never raises; its string is always a JSON outcome
        return json.loads(await tool.invoke(payload.input))

    @app.get("/health")
    async def health():
        return {"status": "ok", "name": Tools.HEALTH.value, "tools": sorted(reg.instances)}

    return app


app = create_app()
