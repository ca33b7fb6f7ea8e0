from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.auth.models import User
from src.auth.service import get_current_user
from src.common.responses import api_response
from src.database import get_db
from src.subscription import service

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("/c/{channel_id}")
def toggle_subscription(
        channel_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    is_subscribed = service.toggle_subscription(channel_id, current_user, db)
    return api_response(200, {"channelId": channel_id, "isSubscribed": is_subscribed}, "Subscription toggled")


@router.get("/c/{channel_id}")
def get_channel_subscribers(channel_id: int, db: Session = Depends(get_db)):
    subscribers = service.get_channel_subscribers(channel_id, db)
    return api_response(200, subscribers, "Subscribers fetched successfully")


@router.get("/u/{subscriber_id}")
def get_subscribed_channels(subscriber_id: int, db: Session = Depends(get_db)):
    channels = service.get_subscribed_channels(subscriber_id, db)
    return api_response(200, channels, "Subscribed channels fetched successfully")
