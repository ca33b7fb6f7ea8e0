import enum
from dataclasses import dataclass

from src.database import Base, utcnow
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint


class LikeKind(str, enum.Enum):
    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


@dataclass(frozen=True)
class LikeTarget:
    """The one thing a like points at: a video, a comment or a tweet."""

    kind: LikeKind
    id: int

    @classmethod
    def video(cls, video_id: int):
        return cls(LikeKind.VIDEO, video_id)

    @classmethod
    def comment(cls, comment_id: int):
        return cls(LikeKind.COMMENT, comment_id)

    @classmethod
    def tweet(cls, tweet_id: int):
        return cls(LikeKind.TWEET, tweet_id)


class Like(Base):
    __tablename__ = "likes"

    id = Column(Integer, primary_key=True, index=True)
    liked_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    target_type = Column(String(16), nullable=False)
    target_id = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        UniqueConstraint("liked_by", "target_type", "target_id", name="uq_likes_user_target"),
        CheckConstraint(
            target_type.in_([kind.value for kind in LikeKind]),
            name="check_like_target_type",
        ),
    )

    @property
    def target(self) -> LikeTarget:
        return LikeTarget(LikeKind(self.target_type), self.target_id)
