import logging
from typing import Optional

from sqlalchemy.orm import Session

from src.auth.models import User
from src.comment.models import Comment
from src.common.exceptions import BadRequest
from src.common.ownership import assert_owner
from src.common.query import Aggregation
from src.like.models import LikeKind
from src.like.service import delete_likes_for
from src.video.visibility import get_visible_video

logger = logging.getLogger(__name__)


def _require_content(content: str) -> str:
    if not content or not content.strip():
        raise BadRequest("Content is required")
    return content.strip()


def get_video_comments(video_id: int, viewer_id: Optional[int], db: Session, page: int = 1, limit: int = 10) -> dict:
    get_visible_video(video_id, viewer_id, db)

    return (
        Aggregation(Comment)
        .match(Comment.video_id == video_id)
        .project(id=Comment.id, content=Comment.content, createdAt=Comment.created_at)
        .lookup_owner()
        .add_like_count(LikeKind.COMMENT)
        .add_is_liked(LikeKind.COMMENT, viewer_id)
        .sort(Comment.created_at.desc(), Comment.id.desc())
        .paginate(db, page, limit)
    )


def add_comment(video_id: int, owner: User, content: str, db: Session) -> Comment:
    content = _require_content(content)
    get_visible_video(video_id, owner.id, db)

    comment = Comment(content=content, video_id=video_id, owner_id=owner.id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("User %s commented %s on video %s", owner.id, comment.id, video_id)
    return comment


def update_comment(comment_id: int, caller: User, content: str, db: Session) -> Comment:
    content = _require_content(content)
    comment = assert_owner(db.get(Comment, comment_id), caller.id, "Comment")
    comment.content = content
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(comment_id: int, caller: User, db: Session):
    comment = assert_owner(db.get(Comment, comment_id), caller.id, "Comment")
    delete_likes_for(LikeKind.COMMENT, [comment.id], db)
    db.delete(comment)
    db.commit()
    logger.info("User %s deleted comment %s", caller.id, comment_id)
