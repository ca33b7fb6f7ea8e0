import logging

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.auth.models import User
from src.common.exceptions import BadRequest, NotFound
from src.common.query import Aggregation, OWNER_FIELDS
from src.subscription.models import Subscription

logger = logging.getLogger(__name__)


def _require_user(user_id: int, db: Session, name: str = "Channel") -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound(f"{name} not found")
    return user


def toggle_subscription(channel_id: int, subscriber: User, db: Session) -> bool:
    """Subscribes or unsubscribes; returns whether the caller is now subscribed."""
    if channel_id == subscriber.id:
        raise BadRequest("You cannot subscribe to your own channel")
    _require_user(channel_id, db)

    removed = db.execute(
        delete(Subscription).where(
            Subscription.subscriber_id == subscriber.id,
            Subscription.channel_id == channel_id,
        )
    )
    if removed.rowcount:
        db.commit()
        logger.info("User %s unsubscribed from %s", subscriber.id, channel_id)
        return False

    db.add(Subscription(subscriber_id=subscriber.id, channel_id=channel_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return True
    logger.info("User %s subscribed to %s", subscriber.id, channel_id)
    return True


def get_channel_subscribers(channel_id: int, db: Session) -> list:
    _require_user(channel_id, db)
    return (
        Aggregation(Subscription)
        .match(Subscription.channel_id == channel_id)
        .project(subscribedAt=Subscription.created_at)
        .lookup("subscriber", User, Subscription.subscriber_id, OWNER_FIELDS)
        .sort(Subscription.created_at.desc(), Subscription.id.desc())
        .all(db)
    )


def get_subscribed_channels(subscriber_id: int, db: Session) -> list:
    _require_user(subscriber_id, db, "Subscriber")
    return (
        Aggregation(Subscription)
        .match(Subscription.subscriber_id == subscriber_id)
        .project(subscribedAt=Subscription.created_at)
        .lookup("channel", User, Subscription.channel_id, OWNER_FIELDS)
        .sort(Subscription.created_at.desc(), Subscription.id.desc())
        .all(db)
    )
