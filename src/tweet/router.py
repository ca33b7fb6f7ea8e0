from typing import Annotated, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.auth.models import User
from src.auth.service import get_current_user, get_optional_user
from src.common.responses import api_response
from src.database import get_db
from src.tweet import service
from src.tweet.schemas import TweetContent

router = APIRouter(prefix="/tweets", tags=["Tweets"])


@router.post("")
def create_tweet(
        data: TweetContent,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    tweet = service.create_tweet(current_user, data.content, db)
    return api_response(201, tweet.to_dict(), "Tweet created successfully")


@router.get("/user/{user_id}")
def get_user_tweets(
        user_id: int,
        viewer: Annotated[Optional[User], Depends(get_optional_user)],
        db: Session = Depends(get_db),
):
    tweets = service.get_user_tweets(user_id, viewer.id if viewer else None, db)
    return api_response(200, tweets, "Tweets fetched successfully")


@router.patch("/{tweet_id}")
def update_tweet(
        tweet_id: int,
        data: TweetContent,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    tweet = service.update_tweet(tweet_id, current_user, data.content, db)
    return api_response(200, tweet.to_dict(), "Tweet updated successfully")


@router.delete("/{tweet_id}")
def delete_tweet(
        tweet_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    service.delete_tweet(tweet_id, current_user, db)
    return api_response(200, {"tweetId": tweet_id}, "Tweet deleted successfully")
