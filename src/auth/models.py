from src.database import Base, utcnow
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    full_name = Column(String, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)

    avatar = Column(String, nullable=False)
    cover_image = Column(String, nullable=True)

    refresh_token_hash = Column(String, nullable=True)
    # plain column: videos.owner_id already points the other way
    watching_video_id = Column(Integer, nullable=True, index=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    videos = relationship("Video", back_populates="owner", cascade="all, delete")
    tweets = relationship("Tweet", back_populates="owner", cascade="all, delete")
    playlists = relationship("Playlist", back_populates="owner", cascade="all, delete")

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "fullName": self.full_name,
            "avatar": self.avatar,
            "coverImage": self.cover_image,
            "watchingVideoId": self.watching_video_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
