import logging
from typing import Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from src.auth.models import User
from src.comment.models import Comment
from src.common.exceptions import BadRequest
from src.common.ownership import assert_owner
from src.common.query import Aggregation
from src.like.models import LikeKind
from src.like.service import delete_likes_for
from src.playlist.models import playlist_videos
from src.video.models import Video
from src.video.schemas import PublishVideo, UpdateVideo
from src.video.visibility import get_visible_video

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "createdAt": Video.created_at,
    "views": Video.views,
    "duration": Video.duration,
    "title": Video.title,
}


def _video_columns() -> dict:
    return {
        "id": Video.id,
        "videoFile": Video.video_file,
        "thumbnail": Video.thumbnail,
        "title": Video.title,
        "description": Video.description,
        "duration": Video.duration,
        "views": Video.views,
        "isPublished": Video.is_published,
        "createdAt": Video.created_at,
    }


def list_videos(
        db: Session,
        page: int = 1,
        limit: int = 10,
        query: Optional[str] = None,
        sort_by: str = "createdAt",
        sort_type: str = "desc",
        user_id: Optional[int] = None,
) -> dict:
    if sort_by not in SORT_FIELDS:
        raise BadRequest(f"Cannot sort videos by '{sort_by}'")
    if sort_type not in ("asc", "desc"):
        raise BadRequest("sortType must be 'asc' or 'desc'")

    order = SORT_FIELDS[sort_by]
    order = order.asc() if sort_type == "asc" else order.desc()

    aggregation = Aggregation(Video).match(Video.is_published.is_(True))
    if user_id is not None:
        aggregation.match(Video.owner_id == user_id)
    if query:
        term = query.strip()
        aggregation.match(or_(
            Video.title.icontains(term, autoescape=True),
            Video.description.icontains(term, autoescape=True),
        ))

    return (
        aggregation
        .project(**_video_columns())
        .lookup_owner("ownerDetails")
        .add_like_count(LikeKind.VIDEO)
        .sort(order, Video.id.desc())
        .paginate(db, page, limit)
    )


def publish_video(owner: User, data: PublishVideo, db: Session) -> Video:
    if not data.title.strip() or not data.description.strip():
        raise BadRequest("Title and description are required")

    video = Video(
        owner_id=owner.id,
        title=data.title.strip(),
        description=data.description.strip(),
        video_file=data.video_file,
        thumbnail=data.thumbnail,
        duration=data.duration,
        is_published=True,
    )
    db.add(video)
    db.commit()
    db.refresh(video)
    logger.info("User %s published video %s", owner.id, video.id)
    return video


def get_video(video_id: int, viewer: Optional[User], db: Session) -> dict:
    viewer_id = viewer.id if viewer else None

    get_visible_video(video_id, viewer_id, db)

    db.execute(update(Video).where(Video.id == video_id).values(views=Video.views + 1))
    if viewer is not None:
        viewer.watching_video_id = video_id
    db.commit()

    return (
        Aggregation(Video)
        .match(Video.id == video_id)
        .project(**_video_columns())
        .lookup_owner()
        .add_like_count(LikeKind.VIDEO)
        .add_is_liked(LikeKind.VIDEO, viewer_id)
        .first(db)
    )


def update_video(video_id: int, caller: User, data: UpdateVideo, db: Session) -> Video:
    video = assert_owner(db.get(Video, video_id), caller.id, "Video")

    changes = {field: value for field, value in data.model_dump(exclude_none=True).items() if value.strip()}
    if not changes:
        raise BadRequest("Nothing to update")

    for field, value in changes.items():
        setattr(video, field, value.strip())
    db.commit()
    db.refresh(video)
    return video


def delete_video(video_id: int, caller: User, db: Session):
    video = assert_owner(db.get(Video, video_id), caller.id, "Video")

    comment_ids = db.scalars(select(Comment.id).where(Comment.video_id == video_id)).all()
    delete_likes_for(LikeKind.COMMENT, comment_ids, db)
    delete_likes_for(LikeKind.VIDEO, [video_id], db)
    db.execute(delete(playlist_videos).where(playlist_videos.c.video_id == video_id))
    db.execute(update(User).where(User.watching_video_id == video_id).values(watching_video_id=None))

    db.delete(video)
    db.commit()
    logger.info("User %s deleted video %s with %d comments", caller.id, video_id, len(comment_ids))


def toggle_publish_status(video_id: int, caller: User, db: Session) -> Video:
    video = assert_owner(db.get(Video, video_id), caller.id, "Video")
    video.is_published = not video.is_published
    db.commit()
    db.refresh(video)
    return video
