import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from .config import settings
from .database import create_database
from .routers import property_router, reservation_router, user_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("lightbnb_main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Owns the connection pool: created once on startup, disposed on shutdown.
    """
    logger.info("LightBnB API starting up...")
    app.state.db = create_database()

    yield  # The application is now running

    logger.info("LightBnB API shutting down...")
    await app.state.db.dispose()


app = FastAPI(
    title="LightBnB API",
    description="Users, reservations and property listings for LightBnB.",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(user_router.router)
app.include_router(reservation_router.router)
app.include_router(property_router.router)


@app.get("/")
def read_root():
    return {"message": "Welcome to LightBnB"}
