from .config import DEFAULT_PORT, STATIC_ROOT, ServerConfig, resolve_port
from .static_server import StaticFileHandler, StaticHTTPServer, StaticServer

__all__ = [
    "DEFAULT_PORT",
    "STATIC_ROOT",
    "ServerConfig",
    "resolve_port",
    "StaticFileHandler",
    "StaticHTTPServer",
    "StaticServer",
]
