import logging
from typing import Iterable

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.auth.models import User
from src.comment.models import Comment
from src.common.exceptions import NotFound
from src.common.query import Aggregation
from src.like.models import Like, LikeKind, LikeTarget
from src.tweet.models import Tweet
from src.video.models import Video
from src.video.visibility import get_visible_video

logger = logging.getLogger(__name__)

TARGET_MODELS = {
    LikeKind.VIDEO: Video,
    LikeKind.COMMENT: Comment,
    LikeKind.TWEET: Tweet,
}


def toggle_like(target: LikeTarget, user: User, db: Session) -> bool:
    """
    Flips the caller's like on ``target`` and returns the new state.

    The conditional delete and the unique (user, target) constraint make the
    flip safe under concurrent requests: whichever insert loses the race gets
    an IntegrityError, which means the like already exists.
    """
    model = TARGET_MODELS[target.kind]
    if target.kind is LikeKind.VIDEO:
        get_visible_video(target.id, user.id, db)
    elif db.get(model, target.id) is None:
        raise NotFound(f"{target.kind.value.capitalize()} not found")

    removed = db.execute(
        delete(Like).where(
            Like.liked_by == user.id,
            Like.target_type == target.kind.value,
            Like.target_id == target.id,
        )
    )
    if removed.rowcount:
        db.commit()
        logger.info("User %s unliked %s %s", user.id, target.kind.value, target.id)
        return False

    db.add(Like(liked_by=user.id, target_type=target.kind.value, target_id=target.id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Concurrent like on %s %s by user %s", target.kind.value, target.id, user.id)
        return True
    logger.info("User %s liked %s %s", user.id, target.kind.value, target.id)
    return True


def delete_likes_for(kind: LikeKind, target_ids: Iterable[int], db: Session):
    """Removes every like pointing at the given targets. Does not commit."""
    target_ids = list(target_ids)
    if not target_ids:
        return
    db.execute(
        delete(Like).where(Like.target_type == kind.value, Like.target_id.in_(target_ids))
    )


def get_liked_videos(user: User, db: Session) -> list:
    return (
        Aggregation(Video)
        .join(
            Like,
            (Like.target_type == LikeKind.VIDEO.value)
            & (Like.target_id == Video.id)
            & (Like.liked_by == user.id),
        )
        .project(
            id=Video.id,
            videoFile=Video.video_file,
            thumbnail=Video.thumbnail,
            title=Video.title,
            description=Video.description,
            views=Video.views,
            duration=Video.duration,
            isPublished=Video.is_published,
            createdAt=Video.created_at,
            likedAt=Like.created_at,
        )
        .lookup_owner("ownerDetails")
        .sort(Like.created_at.desc(), Like.id.desc())
        .all(db)
    )

