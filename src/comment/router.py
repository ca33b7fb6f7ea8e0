from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from src.auth.models import User
from src.auth.service import get_current_user, get_optional_user
from src.comment import service
from src.comment.schemas import CommentContent
from src.common.responses import api_response
from src.database import get_db

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get("/{video_id}")
def get_video_comments(
        video_id: int,
        viewer: Annotated[Optional[User], Depends(get_optional_user)],
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
        db: Session = Depends(get_db),
):
    comments = service.get_video_comments(video_id, viewer.id if viewer else None, db, page, limit)
    return api_response(200, comments, "Comments fetched successfully")


@router.post("/{video_id}")
def add_comment(
        video_id: int,
        data: CommentContent,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    comment = service.add_comment(video_id, current_user, data.content, db)
    return api_response(201, comment.to_dict(), "Comment added successfully")


@router.patch("/c/{comment_id}")
def update_comment(
        comment_id: int,
        data: CommentContent,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    comment = service.update_comment(comment_id, current_user, data.content, db)
    return api_response(200, comment.to_dict(), "Comment updated successfully")


@router.delete("/c/{comment_id}")
def delete_comment(
        comment_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    service.delete_comment(comment_id, current_user, db)
    return api_response(200, {"commentId": comment_id}, "Comment deleted successfully")
