"""FastAPI entrypoint for the potions webservice."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from potions import __version__
from potions.auth.tokens import TokenService
from potions.commons.exceptions import PotionsError
from potions.commons.potions_logger import PotionsLogger
from potions.configs import CORS_ORIGINS, WEBSERVER_HOST, WEBSERVER_PORT
from potions.webservice.interceptors import AuthGate, InterceptorChain, reject_operator_injection
from potions.webservice.routers.analytics import router as analytics_router
from potions.webservice.routers.auth import router as auth_router
from potions.webservice.routers.health import router as health_router
from potions.webservice.routers.potions import router as potions_router


def create_app(token_service: TokenService = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(
        title="Potions API",
        version=__version__,
        description=(
            "Read-only REST API over the potions collection, with grouped analytics. "
            "Potion endpoints require the session cookie set by /auth/login."
        ),
        openapi_url="/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.token_service = token_service or TokenService()

    @app.exception_handler(PotionsError)
    async def potions_error_handler(_: Request, exc: PotionsError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        messages = [f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()]
        return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})

    app.middleware("http")(
        InterceptorChain(
            [
                reject_operator_injection,
                AuthGate(app.state.token_service, protected_prefixes=("/potions",)),
            ]
        )
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["health"])
    def root() -> dict:
        return {
            "status": "up",
            "service": "potions-webservice",
            "host": WEBSERVER_HOST,
            "port": WEBSERVER_PORT,
        }

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(analytics_router)
    app.include_router(potions_router)

    return app


app = create_app()


def main() -> None:
    """Serve the app with uvicorn."""
    import uvicorn

    PotionsLogger().info(f"Starting potions webservice on http://{WEBSERVER_HOST}:{WEBSERVER_PORT}")
    uvicorn.run(app, host=WEBSERVER_HOST, port=WEBSERVER_PORT)


if __name__ == "__main__":
    main()
