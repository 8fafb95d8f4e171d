# Standalone HTTP server for the Hello API.
# Run with: hello-api
#
# Host, port and the rest of the settings come from the environment (HOST, PORT, ...).
# PORT may also be a filesystem path, in which case the server listens on a Unix socket.
import errno
import socket
import sys
from typing import NoReturn

import uvicorn

from hello_api.app.config import Settings, get_settings
from hello_api.app.main import create_application
from hello_api.infrastructure.platform_manager import create_logger

logger = create_logger(logger_name="hello-api")


def describe_bind(port: int | str) -> str:
    return f"pipe {port}" if isinstance(port, str) else f"port {port}"


def create_server(settings: Settings) -> uvicorn.Server:
    """Create the uvicorn server around a freshly built application."""
    config = uvicorn.Config(
        create_application(settings),
        log_level=settings.log_level.lower(),
        lifespan="off",
    )
    return uvicorn.Server(config)


def bind_socket(host: str, port: int | str) -> socket.socket:
    """Bind and listen on a TCP port, or on a Unix socket when the port is a path."""
    if isinstance(port, str):
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        address: str | tuple[str, int] = port
    else:
        sock = socket.socket(socket.AF_INET6 if ":" in host else socket.AF_INET)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        address = (host, port)

    try:
        sock.bind(address)
        sock.listen()
    except OSError:
        sock.close()
        raise

    sock.set_inheritable(True)
    return sock


def on_bind_error(error: OSError, port: int | str) -> NoReturn:
    """Handle a failed bind: friendly exit for the known causes, otherwise fail loudly."""
    bind = describe_bind(port)

    if error.errno == errno.EACCES:
        logger.error(f"{bind} requires elevated privileges")
        sys.exit(1)
    if error.errno == errno.EADDRINUSE:
        logger.error(f"{bind} is already in use")
        sys.exit(1)
    raise error


def on_listening(sock: socket.socket) -> None:
    address = sock.getsockname()
    bind = f"pipe {address}" if isinstance(address, str) else f"port {address[1]}"
    logger.info(f"Listening on {bind}")


def serve(server: uvicorn.Server, sock: socket.socket) -> None:
    """Run the server on an already bound socket until it is told to stop."""
    server.run(sockets=[sock])


def shutdown(server: uvicorn.Server) -> None:
    """Ask a running server to finish in-flight requests and exit."""
    server.should_exit = True


def main() -> None:
    settings = get_settings()
    server = create_server(settings)

    try:
        sock = bind_socket(settings.host, settings.port)
    except OSError as e:
        on_bind_error(e, settings.port)

    on_listening(sock)
    try:
        serve(server, sock)
    finally:
        sock.close()


if __name__ == "__main__":
    main()
