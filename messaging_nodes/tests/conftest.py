from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from messaging_nodes.base.adapter_base import ProviderInvoker
from messaging_nodes.base.models import (
    AdapterConfig,
    MediaFile,
    ParsedRequest,
    ProviderResponse,
)

MB = 1024 * 1024
PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class StubProvider:
    """In-process provider: records every POST and answers with a canned reply."""

    def __init__(self):
        self.status = 200
        self.body: Any = {"ok": True, "success": True}
        self.downloads: Dict[str, bytes] = {}
        self.streamed: Dict[str, bytes] = {}
        self.served: Dict[str, int] = {}
        self.requests: List[Dict[str, Any]] = []
        self.url = ""

    async def handle_post(self, request: web.Request) -> web.StreamResponse:
        record: Dict[str, Any] = {
            "path": request.path,
            "headers": {k.lower(): v for k, v in request.headers.items()},
            "json": None,
            "form": {},
            "files": {},
        }
        if request.content_type == "application/json":
            record["json"] = await request.json()
        else:
            form = await request.post()
            for key, value in form.items():
                if isinstance(value, web.FileField):
                    record["files"][key] = {
                        "filename": value.filename,
                        "content": value.file.read(),
                        "content_type": value.content_type,
                    }
                else:
                    record["form"][key] = value
        self.requests.append(record)

        if self.body is None:
            return web.Response(status=self.status)
        if isinstance(self.body, bytes):
            return web.Response(
                status=self.status, body=self.body, content_type="text/plain", charset="utf-8"
            )
        if isinstance(self.body, str):
            return web.Response(status=self.status, text=self.body)
        return web.json_response(self.body, status=self.status)

    async def handle_get(self, request: web.Request) -> web.StreamResponse:
        if request.path in self.streamed:
            return await self._stream(request, self.streamed[request.path])
        content = self.downloads.get(request.path)
        if content is None:
            return web.Response(status=404, text="not found")
        return web.Response(body=content)

    async def _stream(self, request: web.Request, content: bytes) -> web.StreamResponse:
        # chunked, so the client never sees a Content-Length
        resp = web.StreamResponse()
        resp.enable_chunked_encoding()
        await resp.prepare(request)
        self.served[request.path] = 0
        try:
            for start in range(0, len(content), 64 * 1024):
                chunk = content[start : start + 64 * 1024]
                await resp.write(chunk)
                self.served[request.path] += len(chunk)
            await resp.write_eof()
        except ConnectionResetError:
            pass
        return resp


@pytest_asyncio.fixture
async def stub_provider():
    stub = StubProvider()
    app = web.Application()
    app.router.add_route("POST", "/{tail:.*}", stub.handle_post)
    app.router.add_route("GET", "/{tail:.*}", stub.handle_get)
    async with TestServer(app) as server:
        stub.url = str(server.make_url("/")).rstrip("/")
        yield stub


class RecordingInvoker(ProviderInvoker):
    """Stands in for the network; counts calls and returns a fixed response."""

    def __init__(self, response: Optional[ProviderResponse] = None, error=None):
        self.response = response or ProviderResponse(status=200, data={"ok": True, "success": True})
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def send(
        self,
        req: ParsedRequest,
        cfg: AdapterConfig,
        media: Optional[MediaFile] = None,
    ) -> ProviderResponse:
        self.calls.append({"req": req, "media": media})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def recording_invoker():
    return RecordingInvoker()


def write_file(path, size: int, header: bytes = b"") -> str:
    with open(path, "wb") as f:
        f.write(header)
        f.write(b"\0" * max(size - len(header), 0))
    return str(path)


@pytest.fixture
def small_png(tmp_path):
    return write_file(tmp_path / "photo.png", 2048, PNG_HEADER)


@pytest.fixture
def large_png(tmp_path):
    return write_file(tmp_path / "big.png", 6 * MB, PNG_HEADER)


@pytest.fixture
def small_pdf(tmp_path):
    return write_file(tmp_path / "report.pdf", 4096, b"%PDF-1.4\n")
