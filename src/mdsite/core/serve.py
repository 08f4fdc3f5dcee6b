"""Local HTTP preview of a built site"""

import http.server
import logging
from functools import partial
from pathlib import Path


logger = logging.getLogger(__name__)


class _QuietHandler(http.server.SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(directory: Path, host: str = "127.0.0.1", port: int = 8000) -> http.server.ThreadingHTTPServer:
    """Bind an HTTP server rooted at directory; port 0 picks a free port."""
    handler = partial(_QuietHandler, directory=str(directory))
    return http.server.ThreadingHTTPServer((host, port), handler)


def serve(directory: Path, host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve directory until interrupted."""
    httpd = make_server(directory, host, port)
    logger.info("serving %s at http://%s:%d", directory, host, httpd.server_address[1])
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        httpd.server_close()
