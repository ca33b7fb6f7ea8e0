from pydantic import BaseModel


class TweetContent(BaseModel):
    content: str
