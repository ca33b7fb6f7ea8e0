from pydantic import BaseModel


class CommentContent(BaseModel):
    content: str
