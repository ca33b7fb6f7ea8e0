"""Channel-owner aggregates. Everything is scoped by the owner id in the query itself."""
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from src.common.query import Aggregation
from src.like.models import Like, LikeKind
from src.subscription.models import Subscription
from src.video.models import Video


def get_total_subscribers(owner_id: int, db: Session) -> int:
    return db.scalar(select(func.count(Subscription.id)).where(Subscription.channel_id == owner_id)) or 0


def get_video_stats(owner_id: int, db: Session) -> dict:
    likes_per_video = (
        select(func.count(Like.id))
        .where(Like.target_type == LikeKind.VIDEO.value, Like.target_id == Video.id)
        .scalar_subquery()
    )
    per_video = (
        select(Video.views.label("views"), likes_per_video.label("likes"))
        .where(Video.owner_id == owner_id)
        .subquery()
    )
    row = db.execute(
        select(
            func.coalesce(func.sum(per_video.c.likes), 0).label("total_likes"),
            func.coalesce(func.sum(per_video.c.views), 0).label("total_views"),
            func.count().label("total_videos"),
        ).select_from(per_video)
    ).one()
    return {
        "totalLikes": int(row.total_likes or 0),
        "totalViews": int(row.total_views or 0),
        "totalVideoCount": int(row.total_videos or 0),
    }


def get_channel_stats(owner_id: int, db: Session) -> dict:
    stats = {"subscriberCount": get_total_subscribers(owner_id, db)}
    stats.update(get_video_stats(owner_id, db))
    return stats


def get_channel_videos(owner_id: int, db: Session) -> list:
    return (
        Aggregation(Video)
        .match(Video.owner_id == owner_id)
        .project(
            id=Video.id,
            videoFile=Video.video_file,
            thumbnail=Video.thumbnail,
            title=Video.title,
            description=Video.description,
            views=Video.views,
            isPublished=Video.is_published,
            createdAt=Video.created_at,
        )
        .add_like_count(LikeKind.VIDEO)
        .sort(Video.created_at.desc(), Video.id.desc())
        .all(db)
    )
