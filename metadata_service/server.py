import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from metadata_service.core.config import settings
from metadata_service.routers.igdb import igdb

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with httpx.AsyncClient() as client:
        logger.info("IGDB metadata service startup")
        yield {"client": client}
    logger.info("IGDB metadata service shutdown")


app = FastAPI(
    title="IGDB Metadata API",
    description="Game search, details and recommendations normalized from IGDB",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    return {"message": "IGDB metadata service"}


app.include_router(igdb.router)
