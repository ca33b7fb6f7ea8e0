import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.auth.router import router as auth_router
from src.comment.router import router as comment_router
from src.common.exceptions import register_exception_handlers
from src.common.responses import api_response
from src.config import CORS_ORIGINS, LOG_LEVEL
from src.dashboard.router import router as dashboard_router
from src.database import Base, engine
from src.like.router import router as like_router
from src.playlist.router import router as playlist_router
from src.subscription.router import router as subscription_router
from src.tweet.router import router as tweet_router
from src.video.router import router as video_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="VidTube API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

Base.metadata.create_all(bind=engine)


@app.get("/healthcheck", tags=["Healthcheck"])
def healthcheck():
    return api_response(200, {"status": "OK"}, "Service is healthy")


app.include_router(auth_router)
app.include_router(video_router)
app.include_router(tweet_router)
app.include_router(comment_router)
app.include_router(like_router)
app.include_router(playlist_router)
app.include_router(subscription_router)
app.include_router(dashboard_router)

logger.info("VidTube API ready")
