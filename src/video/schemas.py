from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PublishVideo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    video_file: str = Field(alias="videoFile", min_length=1)
    thumbnail: str = Field(min_length=1)
    duration: float = Field(default=0, ge=0)


class UpdateVideo(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
