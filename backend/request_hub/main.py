"""FastAPI application entry point."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from request_hub.config import settings
from request_hub.database import Base, engine
from request_hub.logging_config import setup_logging

# Import routers
from request_hub.routers import auth, events, song_requests, dashboard

# Import all models so Base.metadata knows about them
from request_hub.models.user import User                    # noqa: F401
from request_hub.models.event import Event                  # noqa: F401
from request_hub.models.song_request import SongRequest     # noqa: F401
from request_hub.models.revoked_token import RevokedToken   # noqa: F401

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Request Hub",
    description="Song requests and tips for DJ events",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(song_requests.router, prefix="/api/requests", tags=["Requests"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
