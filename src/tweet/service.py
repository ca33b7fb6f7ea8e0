import logging
from typing import Optional

from sqlalchemy.orm import Session

from src.auth.models import User
from src.common.exceptions import BadRequest, NotFound
from src.common.ownership import assert_owner
from src.common.query import Aggregation
from src.like.models import LikeKind
from src.like.service import delete_likes_for
from src.tweet.models import Tweet

logger = logging.getLogger(__name__)


def _require_content(content: str) -> str:
    if not content or not content.strip():
        raise BadRequest("Content is required")
    return content.strip()


def create_tweet(owner: User, content: str, db: Session) -> Tweet:
    tweet = Tweet(content=_require_content(content), owner_id=owner.id)
    db.add(tweet)
    db.commit()
    db.refresh(tweet)
    logger.info("User %s created tweet %s", owner.id, tweet.id)
    return tweet


def update_tweet(tweet_id: int, caller: User, content: str, db: Session) -> Tweet:
    content = _require_content(content)
    tweet = assert_owner(db.get(Tweet, tweet_id), caller.id, "Tweet")
    tweet.content = content
    db.commit()
    db.refresh(tweet)
    return tweet


def delete_tweet(tweet_id: int, caller: User, db: Session):
    tweet = assert_owner(db.get(Tweet, tweet_id), caller.id, "Tweet")
    delete_likes_for(LikeKind.TWEET, [tweet.id], db)
    db.delete(tweet)
    db.commit()
    logger.info("User %s deleted tweet %s", caller.id, tweet_id)


def get_user_tweets(user_id: int, viewer_id: Optional[int], db: Session) -> list:
    if db.get(User, user_id) is None:
        raise NotFound("User not found")

    return (
        Aggregation(Tweet)
        .match(Tweet.owner_id == user_id)
        .project(id=Tweet.id, content=Tweet.content, createdAt=Tweet.created_at)
        .lookup_owner("ownerDetails", fields=("username", "avatar"))
        .add_like_count(LikeKind.TWEET)
        .add_is_liked(LikeKind.TWEET, viewer_id)
        .sort(Tweet.created_at.desc(), Tweet.id.desc())
        .all(db)
    )
