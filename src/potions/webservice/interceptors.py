"""Ordered request interceptors run before any endpoint handler.

Each interceptor takes the incoming request and returns either ``None`` to let
it through or a response that ends the request right there.
"""

from typing import Callable, Iterable, List, Optional

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from potions.auth.tokens import TokenService
from potions.commons.exceptions import AuthenticationError
from potions.commons.potions_logger import PotionsLogger
from potions.configs import COOKIE_NAME

Interceptor = Callable[[Request], Optional[Response]]


def reject_operator_injection(request: Request) -> Optional[Response]:
    """Refuse query parameters whose key or value looks like a store operator."""
    for key, value in request.query_params.multi_items():
        if key.startswith("$") or value.startswith("$"):
            PotionsLogger().warning(f"Rejected operator-like query parameter on {request.url.path}: {key}")
            return JSONResponse(status_code=400, content={"detail": f"Invalid query parameter: {key}"})
    return None


class AuthGate:
    """Require a valid token cookie on every path under the protected prefixes."""

    def __init__(
        self,
        token_service: TokenService,
        protected_prefixes: Iterable[str] = ("/potions",),
        cookie_name: str = None,
    ):
        self.token_service = token_service
        self.protected_prefixes = tuple(protected_prefixes)
        self.cookie_name = cookie_name or COOKIE_NAME

    def is_protected(self, path: str) -> bool:
        return any(path == prefix or path.startswith(prefix + "/") for prefix in self.protected_prefixes)

    def __call__(self, request: Request) -> Optional[Response]:
        if not self.is_protected(request.url.path):
            return None
        try:
            request.state.user = self.token_service.verify(request.cookies.get(self.cookie_name))
        except AuthenticationError as e:
            return JSONResponse(status_code=e.status_code, content={"detail": str(e)})
        return None


class InterceptorChain:
    """HTTP middleware running interceptors in order, stopping at the first response."""

    def __init__(self, interceptors: List[Interceptor]):
        self.interceptors = list(interceptors)

    async def __call__(self, request: Request, call_next):
        for interceptor in self.interceptors:
            response = interceptor(request)
            if response is not None:
                return response
        return await call_next(request)
