"""Launch the chat messages API with graceful shutdown."""

from __future__ import annotations

import argparse
import sys
from types import FrameType
from typing import Optional, Sequence, Tuple

import structlog
import uvicorn

from core.settings import SETTINGS, Settings
from infra.resources import Lifecycle

logger = structlog.get_logger("chat.server")

# Exit code uvicorn uses when the application fails to start.
STARTUP_FAILURE = 3


def parse_listen_addr(addr: str) -> Tuple[str, int]:
    """Split ``host:port``; an empty host binds every interface.

    >>> parse_listen_addr(":8080")
    ('0.0.0.0', 8080)
    >>> parse_listen_addr("[::1]:9000")
    ('::1', 9000)
    """
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid listen address {addr!r}, expected host:port")
    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)


class GracefulServer(uvicorn.Server):
    """uvicorn server that clears readiness as soon as a stop signal arrives.

    uvicorn itself then stops accepting connections, closes idle keep-alive
    connections and waits up to ``timeout_graceful_shutdown`` for in-flight
    requests before the application lifespan shuts down.
    """

    def __init__(self, config: uvicorn.Config, lifecycle: Lifecycle) -> None:
        super().__init__(config)
        self.lifecycle = lifecycle

    def handle_exit(self, sig: int, frame: Optional[FrameType]) -> None:
        self.lifecycle.begin_drain()
        if not self.should_exit:
            logger.info("server.shutdown.begin", signal=sig)
        super().handle_exit(sig, frame)


def build_config(app, host: str, port: int, settings: Settings) -> uvicorn.Config:
    return uvicorn.Config(
        app,
        host=host,
        port=port,
        lifespan="on",
        access_log=False,
        log_config=None,
        timeout_keep_alive=int(settings.SERVER.IDLE_TIMEOUT),
        timeout_graceful_shutdown=int(settings.SERVER.SHUTDOWN_GRACE_PERIOD),
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run the chat messages API.")
    parser.add_argument(
        "--listen-addr",
        type=str,
        default=SETTINGS.APP.LISTEN_ADDR,
        help="server listen address (default: :8080)",
    )
    args = parser.parse_args(argv)

    try:
        host, port = parse_listen_addr(args.listen_addr)
    except ValueError as e:
        parser.error(str(e))

    from api.main import app

    server = GracefulServer(
        build_config(app, host, port, SETTINGS),
        lifecycle=app.container.infrastructure.lifecycle(),
    )
    logger.info("server.starting", listen_addr=args.listen_addr)

    try:
        server.run()
    except Exception:
        logger.exception("server.crashed")
        sys.exit(1)

    if not server.started:
        logger.error("server.startup.failed", listen_addr=args.listen_addr)
        sys.exit(STARTUP_FAILURE)
    if server.lifecycle.shutdown_error is not None:
        logger.error(
            "server.shutdown.failed", error=str(server.lifecycle.shutdown_error)
        )
        sys.exit(1)
    logger.info("server.stopped")


if __name__ == "__main__":
    main()
