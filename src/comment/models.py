from src.database import Base, utcnow
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    video_id = Column(Integer, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    owner = relationship("User")
    video = relationship("Video", back_populates="comments")

    def to_dict(self):
        return {
            "id": self.id,
            "content": self.content,
            "video": self.video_id,
            "owner": self.owner_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
