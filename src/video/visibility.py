from typing import Optional

from sqlalchemy.orm import Session

from src.common.exceptions import NotFound
from src.video.models import Video


def get_visible_video(video_id: int, viewer_id: Optional[int], db: Session) -> Video:
    """Unpublished videos exist only for their owner; everyone else gets a 404."""
    video = db.get(Video, video_id)
    if video is None or (not video.is_published and video.owner_id != viewer_id):
        raise NotFound("Video not found")
    return video
