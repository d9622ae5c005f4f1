from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from onigokko.config import settings
from onigokko.db import create_db_and_tables
from onigokko.errors import InvalidInputError
from onigokko.log import configure_logging
from onigokko.routers import captures, games, location, missions, zones


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.log_level)
    create_db_and_tables()
    logger.info('Onigokko server ready')
    yield


app = FastAPI(
    title='Onigokko',
    description='Location-based tag game server',
    version='0.1.0',
    lifespan=lifespan,
)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return JSONResponse(status_code=422, content={'detail': str(exc)})


app.include_router(games.router)
app.include_router(location.router)
app.include_router(zones.router)
app.include_router(missions.router)
app.include_router(captures.router)


@app.get('/')
async def root() -> dict[str, str]:
    return {'message': 'Hello, Onigokko!'}


@app.get('/health')
async def health() -> dict[str, str]:
    return {'status': 'ok'}
