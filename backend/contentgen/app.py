import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .config import Settings, configure_logging, load_settings
from .routes.generate import router as generate_router
from .routes.health import router as health_router
from .services.generation import ContentGenerator, select_generator


def create_app(settings: Optional[Settings] = None, generator: Optional[ContentGenerator] = None) -> FastAPI:
    if settings is None:
        # Load environment variables from .env if present
        if os.getenv("DOTENV_DISABLED", "false").lower() not in {"1", "true", "yes"}:
            load_dotenv()
        settings = load_settings()

    configure_logging(settings.log_level)

    app = FastAPI(title="AI Content Generator API", version="0.3.0")
    app.state.settings = settings
    app.state.generator = generator or select_generator(settings)

    # CORS
    cors_origins = settings.cors_allow_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(health_router, prefix="/api")
    app.include_router(generate_router, prefix="/api")

    return app
