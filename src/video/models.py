from src.database import Base, utcnow
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship


class Video(Base):
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    video_file = Column(Text, nullable=False)
    thumbnail = Column(Text, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    duration = Column(Float, nullable=False, default=0)
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="videos")
    comments = relationship("Comment", back_populates="video", cascade="all, delete")

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner_id,
            "videoFile": self.video_file,
            "thumbnail": self.thumbnail,
            "title": self.title,
            "description": self.description,
            "duration": self.duration,
            "views": self.views,
            "isPublished": self.is_published,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
