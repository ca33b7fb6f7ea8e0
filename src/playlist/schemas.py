from pydantic import BaseModel


class PlaylistDetails(BaseModel):
    name: str
    description: str
