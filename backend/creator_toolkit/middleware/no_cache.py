from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class NoCacheMiddleware(BaseHTTPMiddleware):
    """``Cache-Control: no-store`` on everything except successful GETs under ``public_paths``.

    Quota counts and generated output are per-user; only the tool catalog is static.
    """

    def __init__(self, app, public_paths: tuple[str, ...] = (), max_age: int = 300):
        super().__init__(app)
        self.public_paths = public_paths
        self.max_age = max_age

    def _is_public(self, request: Request) -> bool:
        path = request.url.path
        return request.method == "GET" and any(path == p or path.startswith(p + "/") for p in self.public_paths)

    async def dispatch(self, request: Request, call_next):
        resp = await call_next(request)
        if resp.status_code == 200 and self._is_public(request):
            resp.headers.setdefault("Cache-Control", f"public, max-age={self.max_age}")
        else:
            resp.headers.setdefault("Cache-Control", "no-store")
        return resp
