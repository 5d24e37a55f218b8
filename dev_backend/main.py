"""
Dev stub of the Melodies API.

Answers every GET under /api/v1 with what it received so the MCP server can be
exercised without a real API key:

    uvicorn dev_backend.main:app --port 8080
    MELODIES_API_KEY=dev MELODIES_BASE_URL=http://127.0.0.1:8080 melodies-mcp-server
"""
from __future__ import annotations

import time
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI(title="Dev stub backend for the Melodies API")


@app.get("/api/v1/{path:path}")
async def handle(path: str, request: Request) -> Any:
    authorization = request.headers.get("authorization")
    if not authorization:
        return JSONResponse({"error": "Unauthorized"}, status_code=401)
    body: Dict[str, Any] = {
        "path": "/api/v1/" + path,
        "query": [[key, value] for key, value in request.query_params.multi_items()],
        "authorization": authorization,
        "timestamp": time.time(),
    }
    return body
