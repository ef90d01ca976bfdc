import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from backend.app.api.v1.router import api_router
from backend.app.core.config import Settings, get_settings
from backend.app.core.errors import MessagingError
from backend.app.core.logging import setup_logging
from backend.app.db.session import Database
from backend.app.security.authenticator import SessionAuthenticator
from backend.app.security.hashing import PasswordHasher
from backend.app.security.sessions import InMemorySessionStore, SessionCookieCodec, SessionStore
from backend.app.services.auth import AuthService
from backend.app.services.messages import MessageService
from backend.app.stores.credentials import CredentialStore
from backend.app.stores.messages import MessageStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, session_store: Optional[SessionStore] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    db = Database(settings)
    sessions = session_store or InMemorySessionStore(ttl=timedelta(days=settings.SESSION_TTL_DAYS))
    authenticator = SessionAuthenticator(
        sessions, SessionCookieCodec(settings.SECRET_KEY, settings.ALGORITHM), settings
    )
    credentials = CredentialStore(db)

    # Tables are created on startup, the engine is released on shutdown
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.create_all()
        yield
        await db.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = db
    app.state.session_store = sessions
    app.state.authenticator = authenticator
    app.state.auth_service = AuthService(
        credentials, sessions, authenticator, settings, PasswordHasher(settings)
    )
    app.state.message_service = MessageService(MessageStore(db, credentials), settings)

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(MessagingError)
    async def messaging_error_handler(request: Request, exc: MessagingError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Malformed bodies are user-correctable, same as missing fields
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def root():
        return {"message": f"{settings.PROJECT_NAME} backend is running"}

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()
