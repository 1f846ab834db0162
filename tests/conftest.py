"""Shared fixtures: local JSON-RPC servers standing in for real endpoints."""

import asyncio
import socket

import pytest
import pytest_asyncio
from aiohttp import web

BLOCK_NUMBER_RESPONSE = {"jsonrpc": "2.0", "id": 1, "result": "0x12a05f2"}


@pytest_asyncio.fixture
async def rpc_server():
    """Factory starting a JSON-RPC server with a fixed delay and status."""
    runners: list[web.AppRunner] = []

    async def start(delay: float = 0.0, status: int = 200) -> str:
        async def handle(request: web.Request) -> web.Response:
            await request.read()
            await asyncio.sleep(delay)
            return web.json_response(BLOCK_NUMBER_RESPONSE, status=status)

        app = web.Application()
        app.router.add_post("/", handle)
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        runners.append(runner)
        port = runner.addresses[0][1]
        return f"http://127.0.0.1:{port}/"

    yield start

    for runner in runners:
        await runner.cleanup()


@pytest.fixture
def unreachable_url() -> str:
    """URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/"
