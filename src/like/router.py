from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.auth.models import User
from src.auth.service import get_current_user
from src.common.responses import api_response
from src.database import get_db
from src.like import service
from src.like.models import LikeTarget

router = APIRouter(prefix="/likes", tags=["Likes"])


@router.post("/toggle/v/{video_id}")
def toggle_video_like(
        video_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    is_liked = service.toggle_like(LikeTarget.video(video_id), current_user, db)
    return api_response(200, {"videoId": video_id, "isLiked": is_liked}, "Video like toggled")


@router.post("/toggle/c/{comment_id}")
def toggle_comment_like(
        comment_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    is_liked = service.toggle_like(LikeTarget.comment(comment_id), current_user, db)
    return api_response(200, {"commentId": comment_id, "isLiked": is_liked}, "Comment like toggled")


@router.post("/toggle/t/{tweet_id}")
def toggle_tweet_like(
        tweet_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    is_liked = service.toggle_like(LikeTarget.tweet(tweet_id), current_user, db)
    return api_response(200, {"tweetId": tweet_id, "isLiked": is_liked}, "Tweet like toggled")


@router.get("/videos")
def get_liked_videos(current_user: Annotated[User, Depends(get_current_user)], db: Session = Depends(get_db)):
    videos = service.get_liked_videos(current_user, db)
    return api_response(200, videos, "Liked videos fetched successfully")
