# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.database import SessionLocal, init_db
from app.core.errors import PortalError, portal_error_handler, request_validation_handler
from app.core.logger import logger
from app.core.storage import SqlKeyValueStore
from app.portal.routes import router as view_router
from app.portal.state import PortalState
from app.portal.view import ViewController
from app.ticket.routes import router as ticket_router
from app.user.routes import router as user_router

init_db()

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the portal state once at startup."""
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION}")
    app.state.portal = PortalState.load(SqlKeyValueStore(SessionLocal))
    app.state.view = ViewController()
    yield
    logger.info(f"{settings.APP_NAME} shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(PortalError, portal_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

# Routers
app.include_router(user_router)
app.include_router(ticket_router)
app.include_router(view_router)

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
