import logging

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.auth.models import User
from src.common.exceptions import BadRequest, NotFound
from src.common.ownership import assert_owner
from src.common.query import Aggregation
from src.playlist.models import Playlist, playlist_videos
from src.playlist.schemas import PlaylistDetails
from src.video.models import Video
from src.video.visibility import get_visible_video

logger = logging.getLogger(__name__)


def _require_details(data: PlaylistDetails):
    if not data.name.strip() or not data.description.strip():
        raise BadRequest("Name and description are required")
    return data.name.strip(), data.description.strip()


def _totals(published_only: bool):
    members = playlist_videos.join(Video, Video.id == playlist_videos.c.video_id)
    criteria = [playlist_videos.c.playlist_id == Playlist.id]
    if published_only:
        criteria.append(Video.is_published.is_(True))

    total_videos = select(func.count(Video.id)).select_from(members).where(*criteria).scalar_subquery()
    total_views = (
        select(func.coalesce(func.sum(Video.views), 0)).select_from(members).where(*criteria).scalar_subquery()
    )
    return total_videos, total_views


def create_playlist(owner: User, data: PlaylistDetails, db: Session) -> Playlist:
    name, description = _require_details(data)
    playlist = Playlist(name=name, description=description, owner_id=owner.id)
    db.add(playlist)
    db.commit()
    db.refresh(playlist)
    logger.info("User %s created playlist %s", owner.id, playlist.id)
    return playlist


def update_playlist(playlist_id: int, caller: User, data: PlaylistDetails, db: Session) -> Playlist:
    name, description = _require_details(data)
    playlist = assert_owner(db.get(Playlist, playlist_id), caller.id, "Playlist")
    playlist.name = name
    playlist.description = description
    db.commit()
    db.refresh(playlist)
    return playlist


def delete_playlist(playlist_id: int, caller: User, db: Session):
    playlist = assert_owner(db.get(Playlist, playlist_id), caller.id, "Playlist")
    db.delete(playlist)
    db.commit()
    logger.info("User %s deleted playlist %s", caller.id, playlist_id)


def _load_for_membership(playlist_id: int, video_id: int, caller: User, db: Session, adding: bool) -> Playlist:
    playlist = db.get(Playlist, playlist_id)
    if playlist is None:
        raise NotFound("Playlist not found")
    if adding:
        get_visible_video(video_id, caller.id, db)
    elif db.get(Video, video_id) is None:
        # hidden videos can still be taken out of a playlist
        raise NotFound("Video not found")
    return assert_owner(playlist, caller.id, "Playlist")


def add_video(playlist_id: int, video_id: int, caller: User, db: Session) -> Playlist:
    playlist = _load_for_membership(playlist_id, video_id, caller, db, adding=True)

    already = db.execute(
        select(playlist_videos.c.video_id).where(
            playlist_videos.c.playlist_id == playlist_id,
            playlist_videos.c.video_id == video_id,
        )
    ).first()
    if already is None:
        db.execute(insert(playlist_videos).values(playlist_id=playlist_id, video_id=video_id))
        try:
            db.commit()
        except IntegrityError:
            # added by a concurrent request
            db.rollback()
        else:
            logger.info("Video %s added to playlist %s", video_id, playlist_id)

    db.refresh(playlist)
    return playlist


def remove_video(playlist_id: int, video_id: int, caller: User, db: Session) -> Playlist:
    playlist = _load_for_membership(playlist_id, video_id, caller, db, adding=False)
    db.execute(
        delete(playlist_videos).where(
            playlist_videos.c.playlist_id == playlist_id,
            playlist_videos.c.video_id == video_id,
        )
    )
    db.commit()
    db.refresh(playlist)
    return playlist


def get_playlist(playlist_id: int, db: Session) -> dict:
    total_videos, total_views = _totals(published_only=True)
    playlist = (
        Aggregation(Playlist)
        .match(Playlist.id == playlist_id)
        .project(
            id=Playlist.id,
            name=Playlist.name,
            description=Playlist.description,
            createdAt=Playlist.created_at,
            updatedAt=Playlist.updated_at,
        )
        .add_field("totalVideos", total_videos)
        .add_field("totalViews", total_views)
        .lookup_owner()
        .first(db)
    )
    if playlist is None:
        raise NotFound("Playlist not found")

    playlist["videos"] = (
        Aggregation(Video)
        .join(
            playlist_videos,
            (playlist_videos.c.video_id == Video.id) & (playlist_videos.c.playlist_id == playlist_id),
        )
        .match(Video.is_published.is_(True))
        .project(
            id=Video.id,
            videoFile=Video.video_file,
            thumbnail=Video.thumbnail,
            title=Video.title,
            description=Video.description,
            duration=Video.duration,
            views=Video.views,
            createdAt=Video.created_at,
        )
        .sort(playlist_videos.c.added_at, Video.id)
        .all(db)
    )
    return playlist


def get_user_playlists(user_id: int, db: Session) -> list:
    if db.get(User, user_id) is None:
        raise NotFound("User not found")

    total_videos, total_views = _totals(published_only=False)
    return (
        Aggregation(Playlist)
        .match(Playlist.owner_id == user_id)
        .project(
            id=Playlist.id,
            name=Playlist.name,
            description=Playlist.description,
            createdAt=Playlist.created_at,
            updatedAt=Playlist.updated_at,
        )
        .add_field("totalVideos", total_videos)
        .add_field("totalViews", total_views)
        .sort(Playlist.created_at.desc(), Playlist.id.desc())
        .all(db)
    )
