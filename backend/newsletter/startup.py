"""Server Startup — binds the listening socket and serves the app with uvicorn.

Invariants:
    - The socket is bound in build(), before serving: port 0 resolves to a real port up front
    - run_until_stopped() always closes the socket, whether serving ends cleanly or not
    - stop() is safe to call from another thread
    - main() exits with STARTUP_FAILURE (3) instead of a traceback when it cannot start

Design Decisions:
    - Pre-bound socket handed to uvicorn.Server.serve(sockets=...): callers (tests) learn
      the OS-assigned port without racing the server
    - log_config=None: uvicorn loggers propagate to the handler installed by setup_logging
"""

import asyncio
import logging
import socket
import sys

import uvicorn

from newsletter.config import ServerSettings, Settings, get_settings
from newsletter.core.errors import NewsletterError
from newsletter.infrastructure.observability import setup_logging
from newsletter.main import create_app

logger = logging.getLogger(__name__)

STARTUP_FAILURE = 3


def bind_listener(server: ServerSettings) -> socket.socket:
    """Bind and listen on the configured TCP address."""
    sock = socket.create_server(server.socket_address())
    sock.set_inheritable(True)
    return sock


class Application:
    """A bound listener plus the uvicorn server that will serve on it."""

    def __init__(self, settings: Settings, sock: socket.socket):
        self.settings = settings
        self._socket = sock
        self.host, self.port = sock.getsockname()[:2]
        config = uvicorn.Config(
            create_app(settings),
            lifespan="on",
            log_config=None,
        )
        self._server = uvicorn.Server(config)

    @classmethod
    def build(cls, settings: Settings) -> "Application":
        return cls(settings, bind_listener(settings.server))

    @property
    def address(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def started(self) -> bool:
        return self._server.started

    async def run_until_stopped(self) -> None:
        logger.info("Listening", extra={"address": self.address})
        try:
            await self._server.serve(sockets=[self._socket])
        finally:
            self._socket.close()

    def serve_forever(self) -> None:
        asyncio.run(self.run_until_stopped())

    def stop(self) -> None:
        self._server.should_exit = True


def main() -> None:
    """Console entry point: load settings, serve until interrupted.

    Exits with STARTUP_FAILURE when settings are invalid, the address cannot be
    bound, or the lifespan refuses to start.
    """
    try:
        settings = get_settings()
        setup_logging(settings.application_name, settings.log_level, settings.log_format)
        application = Application.build(settings)
        application.serve_forever()
    except (NewsletterError, OSError):
        logger.critical("Newsletter API failed to start", exc_info=True)
        sys.exit(STARTUP_FAILURE)
    if not application.started:
        sys.exit(STARTUP_FAILURE)
