from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from octobull.application import reset_session_state
from octobull.core.config import OctobullConfig
from octobull.core.logs import configure_logging
from octobull.infrastructure import (
    AppsScriptRowStoreClient,
    GeminiSummarizer,
    configure_row_store,
    configure_summarizer,
)
from octobull.routes import admin, auth, requests


def create_app(config: OctobullConfig | None = None) -> FastAPI:
    config = config or OctobullConfig.from_env()
    logger = configure_logging(config.log_level)

    app = FastAPI(title="Octobull Special Request API", version="0.1.0")

    if config.row_store.base_url:
        configure_row_store(AppsScriptRowStoreClient(config.row_store.base_url, timeout=config.row_store.timeout))
    else:
        logger.warning("OCTOBULL_ROW_STORE_URL not set; using the in-memory row store")

    if config.summary.api_key:
        configure_summarizer(
            GeminiSummarizer(
                config.summary.api_key,
                model=config.summary.model,
                api_base=config.summary.api_base,
                timeout=config.summary.timeout,
            )
        )

    reset_session_state()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router, prefix="/api")
    app.include_router(requests.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Octobull Special Request API",
                "docs": "/docs",
            }
        )

    return app


app = create_app()
