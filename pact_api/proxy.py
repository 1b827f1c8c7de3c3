"""
Same-origin proxy for the browser client.

Forwards /api/proxy/<path> to the API, passing cookies and JSON bodies
through untouched and relaying status, body and Set-Cookie back.
"""

import json
import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pact_api.config import settings

logger = logging.getLogger(__name__)

PROXIED_METHODS = ["GET", "POST", "PATCH", "DELETE"]


def create_proxy_app(
    target_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the proxy application.

    Args:
        target_url: Upstream API base URL, defaults to PROXY_TARGET_URL
        transport: Optional httpx transport (tests pass a MockTransport)
    """
    base_url = (target_url or settings.PROXY_TARGET_URL).rstrip("/")
    proxy = FastAPI(title="PACT client proxy", openapi_url=None)

    @proxy.api_route("/", methods=PROXIED_METHODS)
    async def missing_path():
        return JSONResponse({"message": "Invalid path"}, status_code=400)

    @proxy.api_route("/{path:path}", methods=PROXIED_METHODS)
    async def forward(path: str, request: Request):
        if not path:
            return JSONResponse({"message": "Invalid path"}, status_code=400)

        url = f"{base_url}/{path}"
        query = request.url.query
        if query:
            url = f"{url}?{query}"

        body = None
        if request.method not in ("GET", "DELETE"):
            body = await request.body()

        headers = {
            "Content-Type": "application/json",
            "Cookie": request.headers.get("cookie", ""),
        }

        try:
            async with httpx.AsyncClient(transport=transport, timeout=30.0) as client:
                upstream = await client.request(request.method, url, content=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Proxy request to %s failed: %s", url, e)
            return JSONResponse({"message": "Proxy request failed"}, status_code=500)

        text = upstream.text
        try:
            data = json.loads(text) if text else {}
        except ValueError:
            data = text

        response = JSONResponse(data, status_code=upstream.status_code)
        for cookie in upstream.headers.get_list("set-cookie"):
            response.headers.append("set-cookie", cookie)
        return response

    return proxy


# ASGI entry point: uvicorn pact_api.proxy:app
app = FastAPI(title="PACT client", openapi_url=None)
app.mount("/api/proxy", create_proxy_app())
