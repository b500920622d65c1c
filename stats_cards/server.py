import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from . import config
from .router import dispatch

logger = logging.getLogger(__name__)


def respond(handler: BaseHTTPRequestHandler, cache=None, client=None):
    """Serve ``handler.path`` through the router and write the response."""
    response = dispatch(handler.command, handler.path, cache=cache, client=client)
    body = response.body.encode("utf-8")
    handler.send_response(response.status)
    for name, value in response.headers.items():
        handler.send_header(name, value)
    handler.send_header("Content-Length", str(len(body)))
    handler.end_headers()
    if handler.command != "HEAD":
        handler.wfile.write(body)


class CardRequestHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        respond(self)

    def do_HEAD(self):
        respond(self)

    def do_OPTIONS(self):
        respond(self)

    def do_POST(self):
        respond(self)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def serve(host="127.0.0.1", port=config.PORT):
    logging.basicConfig(level=config.LOG_LEVEL, format="[%(levelname)s] %(name)s: %(message)s")
    httpd = ThreadingHTTPServer((host, port), CardRequestHandler)
    logger.info("Serving on http://%s:%d", host, port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        httpd.server_close()
