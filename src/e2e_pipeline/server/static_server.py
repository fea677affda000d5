import logging
import threading
from concurrent.futures import Future
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

from .config import ServerConfig

logger = logging.getLogger(__name__)


class StaticFileHandler(SimpleHTTPRequestHandler):
    """Read-only file handler that reports requests through logging."""

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class StaticHTTPServer(ThreadingHTTPServer):
    """Threaded listener that refuses to share its port."""

    allow_reuse_port = False
    daemon_threads = True


class StaticServer:
    """
    HTTP server that serves files from a single static root.

    The server owns its listener. Once the socket is bound the
    ``listening`` future resolves with the underlying ``StaticHTTPServer``,
    which makes the readiness notification one-shot: a Future can only be
    resolved once.
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Initialize the server without binding.

        Args:
            config: Server settings, defaults to ``ServerConfig.from_env()``
        """
        self.config = config if config is not None else ServerConfig.from_env()
        self.listening: Future = Future()
        self._httpd: Optional[StaticHTTPServer] = None
        self._thread: Optional[threading.Thread] = None
        self._closed = False

    @property
    def port(self) -> int:
        """Port actually bound, which differs from the config when it asks for 0."""
        if self._httpd is None:
            raise RuntimeError("Server not yet started")
        return self._httpd.server_address[1]

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}/"

    def _bind(self) -> StaticHTTPServer:
        if self._httpd is not None:
            raise RuntimeError("Server already started")

        handler = partial(StaticFileHandler, directory=str(self.config.static_root))
        # Bind failures (port in use) propagate unhandled
        self._httpd = StaticHTTPServer((self.config.host, self.config.port), handler)
        logger.info("Serving %s", self.config.static_root)
        return self._httpd

    def start(self) -> StaticHTTPServer:
        """
        Bind the listener and serve on a background thread.

        Returns:
            The bound listener, also delivered through ``listening``
        """
        httpd = self._bind()
        self._thread = threading.Thread(
            target=httpd.serve_forever, name="static-server", daemon=True
        )
        self._thread.start()

        logger.info("Listening on port %d!", self.port)
        self.listening.set_result(httpd)
        return httpd

    def serve_forever(self) -> None:
        """Bind and serve on the calling thread until interrupted."""
        httpd = self._bind()
        logger.info("Listening on port %d!", self.port)
        self.listening.set_result(httpd)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped")
        finally:
            self.close()

    def close(self) -> None:
        """Stop serving and release the listener. Safe to call more than once."""
        if self._closed or self._httpd is None:
            return
        self._closed = True

        if self._thread is not None:
            # shutdown() waits for serve_forever to exit, only valid off-thread
            self._httpd.shutdown()
            self._thread.join()
        self._httpd.server_close()
        logger.info("Closed listener on port %d", self.port)

    def __enter__(self) -> "StaticServer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
