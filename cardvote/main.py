# main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pymongo.errors import PyMongoError

from cardvote.config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT, SERVICE_NAME
from cardvote.database.connection import MongoConnector
from cardvote.routes.participant_routes import router as participant_router
from cardvote.routes.stats_routes import router as stats_router
from cardvote.routes.user_routes import auth_router
from cardvote.routes.user_routes import router as user_router
from cardvote.routes.vote_routes import vote_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{SERVICE_NAME} starting")
    yield
    MongoConnector.close()


app = FastAPI(title="CARD 2025 - 3 Minute Thesis Voting API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(user_router)
app.include_router(auth_router)
app.include_router(vote_router)
app.include_router(participant_router)
app.include_router(stats_router)


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Server error"})


@app.get("/", tags=["Root"])
def read_root():
    return {"message": "CARD 2025 - 3 Minute Thesis Voting Backend Connected"}


@app.get("/health", tags=["Root"])
def health_check():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc),
        "service": SERVICE_NAME,
    }


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=204)


if __name__ == "__main__":
    uvicorn.run("cardvote.main:app", host=HOST, port=PORT)
