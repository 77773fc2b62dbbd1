from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from projectboard.core.config import settings
from projectboard.core.i18n import negotiate_locale, with_locale
from projectboard.core.logging import bind_request, configure_logging, logger
from projectboard.api.router import api_router
from projectboard.db.session import engine
from projectboard.db.base import Base
from projectboard.services.seed import seed_demo

def create_app() -> FastAPI:
    configure_logging(settings.ENV)
    app = FastAPI(title="Projectboard", version="0.1.0")

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def locale_middleware(request: Request, call_next):
        locale = negotiate_locale(request.headers.get("accept-language"))
        bind_request(locale=locale, method=request.method, path=request.url.path)
        with with_locale(locale):
            response = await call_next(request)
        response.headers["Content-Language"] = locale
        return response

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.on_event("startup")
    def _startup():
        # Ensure tables exist for dev-only convenience; in prod rely on alembic
        if settings.ENV == "dev":
            Base.metadata.create_all(bind=engine)
        if settings.SEED_DEMO and settings.ENV == "dev":
            seed_demo()

    app.include_router(api_router)
    logger.info("app_started", env=settings.ENV)
    return app

app = create_app()
