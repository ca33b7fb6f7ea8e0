from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.auth.models import User
from src.auth.service import get_current_user
from src.common.responses import api_response
from src.dashboard import service
from src.database import get_db

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats")
def get_channel_stats(current_user: Annotated[User, Depends(get_current_user)], db: Session = Depends(get_db)):
    stats = service.get_channel_stats(current_user.id, db)
    return api_response(200, stats, "Channel stats fetched successfully")


@router.get("/videos")
def get_channel_videos(current_user: Annotated[User, Depends(get_current_user)], db: Session = Depends(get_db)):
    videos = service.get_channel_videos(current_user.id, db)
    return api_response(200, videos, "Channel videos fetched successfully")
