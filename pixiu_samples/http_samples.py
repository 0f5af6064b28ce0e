"""Small HTTP backends used behind the gateway samples."""

from __future__ import annotations

import argparse
import base64
import logging
import urllib.parse
from collections.abc import Callable, Mapping
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

logger = logging.getLogger(__name__)

Query = Mapping[str, list[str]]
Handler = Callable[[Query], "str | bytes"]

MESSAGE_ROUTES = ("/user", "/user/pixiu", "/prefix", "/health")
CONTENT_TYPE = "text/plain; charset=utf-8"
NOT_FOUND_BODY = b"404 page not found\n"

_JWKS = (
    '{"keys":[{"kty":"RSA","e":"AQAB","kid":"ee8d626d","n":"gRda5b0pkgTytDuLrRnNSYhvfMIyM0ASq2ZggY4dVe12JV8N7lyXilyqLKleD-2lziivvzE8O8CdIC2vUf0tBD7VuMyldnZruSEZWCuKJPdgKgy9yPpShmD2NyhbwQIAbievGMJIp_JMwz8MkdY5pzhPECGNgCEtUAmsrrctP5V8HuxaxGt9bb-DdPXkYWXW3MPMSlVpGZ5GiIeTABxqYNG2MSoYeQ9x8O3y488jbassTqxExI_4w9MBQBJR9HIXjWrrrenCcDlMY71rzkbdj3mmcn9xMq2vB5OhfHyHTihbUPLSm83aFWSuW9lE7ogMc93XnrB8evIAk6VfsYlS9Q"},'
    '{"kty":"EC","crv":"P-256","kid":"711d48d1","x":"tfXCoBU-wXemeQCkME1gMZWK0-UECCHIkedASZR0t-Q","y":"9xzYtnKQdiQJHCtGwpZWF21eP1fy5x4wC822rCilmBw"},'
    '{"kty":"EC","crv":"P-384","kid":"d52c9829","x":"tFx6ev6eLs9sNfdyndn4OgbhV6gPFVn7Ul0VD5vwuplJLbIYeFLI6T42tTaE5_Q4","y":"A0gzB8TqxPX7xMzyHH_FXkYG2iROANH_kQxBovSeus6l_QSyqYlipWpBy9BhY9dz"},'
    '{"kty":"RSA","e":"AQAB","kid":"ecac72e5","n":"nLbnTvZAUxdmuAbDDUNAfha6mw0fri3UpV2w1PxilflBuSnXJhzo532-YQITogoanMjy_sQ8kHUhZYHVRR6vLZRBBbl-hP8XWiCe4wwioy7Ey3TiIUYfW-SD6I42XbLt5o-47IR0j5YDXxnX2UU7-UgR_kITBeLDfk0rSp4B0GUhPbP5IDItS0MHHDDS3lhvJomxgEfoNrp0K0Fz_s0K33hfOqc2hD1tSkX-3oDTQVRMF4Nxax3NNw8-ahw6HNMlXlwWfXodgRMvj9pcz8xUYa3C5IlPlZkMumeNCFx1qds6K_eYcU0ss91DdbhhE8amRX1FsnBJNMRUkA5i45xkOIx15rQN230zzh0p71jvtx7wYRr5pdMlwxV0T9Ck5PCmx-GzFazA2X6DJ0Xnn1-cXkRoZHFj_8Mba1dUrNz-NWEk83uW5KT-ZEbX7nzGXtayKWmGb873a8aYPqIsp6bQ_-eRBd8TDT2g9HuPyPr5VKa1p33xKaohz4DGy3t1Qpy3UWnbPXUlh5dLWPKz-TcS9FP5gFhWVo-ZhU03Pn6P34OxHmXGWyQao18dQGqzgD4e9vY3rLhfcjVZJYNlWY2InsNwbYS-DnienPf1ws-miLeXxNKG3tFydoQzHwyOxG6Wc-HBfzL_hOvxINKQamvPasaYWl1LWznMps6elKCgKDc"},'
    '{"kty":"EC","crv":"P-521","kid":"c570888f","x":"AHNpXq0J7rikNRlwhaMYDD8LGVAVJzNJ-jEPksUIn2LB2LCdNRzfAhgbxdQcWT9ktlc9M1EhmTLccEqfnWdGL9G1","y":"AfHPUW3GYzzqbTczcYR0nYMVMFVrYsUxv4uiuSNV_XRN3Jf8zeYbbOLJv4S3bUytO7qHY8bfZxPxR9nn3BBTf5ol"}]}'
)

# Sample name -> (server tag in the body, port)
SAMPLES: dict[str, tuple[str | None, int]] = {
    "csrf": (None, 1314),
    "jwt": (None, 1314),
    "traffic": (None, 1314),
    "prometheus": (None, 1314),
    "v1": ("v1", 1315),
    "v2": ("v2", 1316),
    "v3": ("v3", 1317),
}


def tokenize(secret: str, salt: str) -> str:
    """Return the URL-safe base64 encoding of "salt-secret"."""
    return base64.urlsafe_b64encode(f"{salt}-{secret}".encode()).decode("ascii")


def route_message(router: str) -> str:
    """Return the last path segment of a route."""
    return router[router.rfind("/") + 1:]


def message_body(message: str, server: str | None = None) -> str:
    """JSON body answered by the message routes, optionally tagged with a server."""
    if server is None:
        return f'{{"message":"{message}","status":200}}'
    return f'{{"server": "{server}","message":"{message}","status":200}}'


def _first(query: Query, key: str) -> str:
    values = query.get(key)
    return values[0] if values else ""


class Router:
    """Path multiplexer: exact patterns, and subtree patterns ending in "/".

    Exact patterns match only their own path; a pattern ending in "/" matches
    every path below it, the longest such pattern winning.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def handle(self, pattern: str, handler: Handler) -> None:
        """Register a handler for a pattern; patterns may be registered once."""
        if not pattern:
            raise ValueError("invalid pattern")
        if handler is None:
            raise ValueError("nil handler")
        if pattern in self._handlers:
            raise ValueError(f"multiple registrations for {pattern}")
        self._handlers[pattern] = handler

    def dispatch(
        self, path: str, query: str = ""
    ) -> tuple[int, dict[str, str], bytes]:
        """Route a request and return (status, headers, body)."""
        path = path or "/"
        handler = self._match(path)
        if handler is None:
            subtree = path + "/"
            if not path.endswith("/") and subtree in self._handlers:
                location = subtree + (f"?{query}" if query else "")
                return 301, {"Location": location}, b""
            return 404, {"Content-Type": CONTENT_TYPE}, NOT_FOUND_BODY
        params = urllib.parse.parse_qs(query, keep_blank_values=True)
        body = handler(params)
        if isinstance(body, str):
            body = body.encode()
        return 200, {"Content-Type": CONTENT_TYPE}, body

    def _match(self, path: str) -> Handler | None:
        exact = self._handlers.get(path)
        if exact is not None:
            return exact
        subtrees = [
            pattern
            for pattern in self._handlers
            if pattern.endswith("/") and path.startswith(pattern)
        ]
        if not subtrees:
            return None
        return self._handlers[max(subtrees, key=len)]


def build_message_router(server: str | None = None) -> Router:
    """Router answering each message route with its last segment."""
    router = Router()
    for route in MESSAGE_ROUTES:
        body = message_body(route_message(route), server)
        router.handle(route, lambda _query, body=body: body)
    return router


def build_csrf_router() -> Router:
    """Router that issues tokens on /login/ and answers success on /user/."""
    router = Router()
    router.handle(
        "/login/", lambda query: tokenize(_first(query, "secret"), _first(query, "key"))
    )
    router.handle("/user/", lambda _query: '{"message":"success","status":200}')
    return router


def build_jwt_router() -> Router:
    """Message router that also publishes a key set on /remote."""
    router = build_message_router()
    router.handle("/remote", lambda _query: _JWKS)
    return router


def make_server(
    router: Router, host: str = "", port: int = 1314
) -> ThreadingHTTPServer:
    """Create (but do not start) an HTTP server dispatching to the router."""

    class _RequestHandler(BaseHTTPRequestHandler):
        def _serve(self) -> None:
            length = int(self.headers.get("Content-Length") or 0)
            if length:
                self.rfile.read(length)
            parts = urllib.parse.urlsplit(self.path)
            status, headers, body = router.dispatch(parts.path, parts.query)
            self.send_response(status)
            for name, value in headers.items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            if self.command != "HEAD":
                self.wfile.write(body)

        do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = _serve
        do_OPTIONS = _serve

        def log_message(self, format: str, *args) -> None:  # noqa: A002
            logger.debug(format, *args)

    return ThreadingHTTPServer((host, port), _RequestHandler)


def _router_for(sample: str) -> Router:
    if sample == "csrf":
        return build_csrf_router()
    if sample == "jwt":
        return build_jwt_router()
    return build_message_router(SAMPLES[sample][0])


def main(argv: list[str] | None = None) -> int:
    """Run one of the sample HTTP backends until interrupted."""
    parser = argparse.ArgumentParser(description="Run a sample HTTP backend.")
    parser.add_argument("sample", nargs="?", default="traffic", choices=sorted(SAMPLES))
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    port = args.port if args.port is not None else SAMPLES[args.sample][1]
    server = make_server(_router_for(args.sample), args.host, port)
    logger.info("Starting sample server ...")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0