from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Dict

from mcp import ClientSession
from mcp.client.stdio import stdio_client

from list_tools import SERVER_PARAMS


async def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python scripts/call_tool.py <tool_name> ['<json-args>']")
        raise SystemExit(1)

    tool_name = sys.argv[1]
    raw_args = sys.argv[2] if len(sys.argv) > 2 else "{}"

    try:
        params: Dict[str, Any] = json.loads(raw_args)
    except Exception as exc:
        print("Failed to parse JSON arguments")
        print(repr(exc))
        raise SystemExit(1)

    async with stdio_client(SERVER_PARAMS) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            result = await session.call_tool(tool_name, params)
            if result.isError:
                print("Tool call failed:")
            for item in result.content:
                print(getattr(item, "text", item))


if __name__ == "__main__":
    asyncio.run(main())
