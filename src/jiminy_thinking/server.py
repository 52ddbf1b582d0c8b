# server.py
# MCP stdio host for the step dispatcher. Protocol plumbing only.
#
# Input-schema validation in the SDK is switched off so that malformed
# payloads reach validate_step and come back with its field-specific message.

from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from jiminy_thinking.dispatcher import StepDispatcher
from jiminy_thinking.tool import SERVER_NAME, SERVER_VERSION, tool_descriptor


def build_server(dispatcher: StepDispatcher) -> Server:
    server = Server(SERVER_NAME, version=SERVER_VERSION)
    tool = types.Tool(**tool_descriptor(dispatcher.categories))

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [tool]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        response = dispatcher.call_tool(name, arguments)
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=response.text)],
            isError=response.is_error,
        )

    return server


async def serve(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
