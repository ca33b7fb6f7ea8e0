from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from src.auth.models import User
from src.auth.service import get_current_user, get_optional_user
from src.common.responses import api_response
from src.database import get_db
from src.video import service
from src.video.schemas import PublishVideo, UpdateVideo

router = APIRouter(prefix="/videos", tags=["Videos"])


@router.get("")
def list_videos(
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
        query: Optional[str] = None,
        sort_by: str = Query("createdAt", alias="sortBy"),
        sort_type: str = Query("desc", alias="sortType"),
        user_id: Optional[int] = Query(None, alias="userId"),
        db: Session = Depends(get_db),
):
    videos = service.list_videos(db, page, limit, query, sort_by, sort_type, user_id)
    return api_response(200, videos, "Videos fetched successfully")


@router.post("")
def publish_video(
        data: PublishVideo,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    video = service.publish_video(current_user, data, db)
    return api_response(201, video.to_dict(), "Video published successfully")


@router.get("/{video_id}")
def get_video(
        video_id: int,
        viewer: Annotated[Optional[User], Depends(get_optional_user)],
        db: Session = Depends(get_db),
):
    video = service.get_video(video_id, viewer, db)
    return api_response(200, video, "Video fetched successfully")


@router.patch("/{video_id}")
def update_video(
        video_id: int,
        data: UpdateVideo,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    video = service.update_video(video_id, current_user, data, db)
    return api_response(200, video.to_dict(), "Video updated successfully")


@router.delete("/{video_id}")
def delete_video(
        video_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    service.delete_video(video_id, current_user, db)
    return api_response(200, {"videoId": video_id}, "Video deleted successfully")


@router.patch("/toggle/publish/{video_id}")
def toggle_publish_status(
        video_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    video = service.toggle_publish_status(video_id, current_user, db)
    return api_response(200, {"isPublished": video.is_published}, "Publish status toggled successfully")
