import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.auth.models import User
from src.auth.schemas import ChangePassword, CreateUser, LoginUser, TokenPair, UpdateAccount
from src.common.exceptions import BadRequest, Conflict, NotFound, Unauthorized
from src.common.query import Aggregation
from src.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    REFRESH_SECRET_KEY,
    REFRESH_TOKEN_EXPIRE_MINUTES,
    SECRET_KEY,
)
from src.database import get_db
from src.subscription.models import Subscription
from src.video.models import Video

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_bearer = OAuth2PasswordBearer(tokenUrl="/users/login", auto_error=False)

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


def hash_password(password: str):
    return pwd_context.hash(password)


def verify_password(plain, hashed):
    return pwd_context.verify(plain, hashed)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def create_access_token(user: User, expires_delta: timedelta = None):
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "username": user.username,
        "fullName": user.full_name,
        "type": "access",
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_refresh_token(user: User, expires_delta: timedelta = None):
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=REFRESH_TOKEN_EXPIRE_MINUTES))
    # jti keeps two tokens issued within the same second distinct
    to_encode = {"sub": str(user.id), "type": "refresh", "jti": secrets.token_hex(8), "exp": expire}
    return jwt.encode(to_encode, REFRESH_SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str, secret: str, token_type: str) -> Optional[int]:
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != token_type:
        return None
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None


def current_identity(request: Request, token: Optional[str] = None) -> Optional[int]:
    """User id carried by the access token (bearer header first, then cookie)."""
    token = token or request.cookies.get(ACCESS_COOKIE)
    if not token:
        return None
    return decode_token(token, SECRET_KEY, "access")


def get_current_user(
        request: Request,
        token: Annotated[Optional[str], Depends(oauth2_bearer)],
        db: Session = Depends(get_db),
) -> User:
    user_id = current_identity(request, token)
    if user_id is None:
        raise Unauthorized("Invalid or missing access token")

    user = db.get(User, user_id)
    if not user:
        logger.warning("Access token for unknown user %s", user_id)
        raise Unauthorized("Invalid access token")
    return user


def get_optional_user(
        request: Request,
        token: Annotated[Optional[str], Depends(oauth2_bearer)],
        db: Session = Depends(get_db),
) -> Optional[User]:
    user_id = current_identity(request, token)
    if user_id is None:
        return None
    return db.get(User, user_id)


def _blank(*values) -> bool:
    return any(value is None or not value.strip() for value in values)


def register(data: CreateUser, db: Session) -> User:
    if _blank(data.username, data.full_name, data.password, data.avatar):
        raise BadRequest("All fields are required")

    username = data.username.strip().lower()
    email = data.email.strip().lower()

    if db.query(User).filter(or_(User.username == username, User.email == email)).first():
        raise Conflict("User with email or username already exists")

    new_user = User(
        username=username,
        email=email,
        full_name=data.full_name.strip(),
        avatar=data.avatar,
        cover_image=data.cover_image or "",
        hashed_password=hash_password(data.password),
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("User with email or username already exists")
    db.refresh(new_user)
    logger.info("Registered user %s (%s)", new_user.id, new_user.username)
    return new_user


def issue_tokens(user: User, db: Session) -> TokenPair:
    access_token = create_access_token(user)
    refresh_token = create_refresh_token(user)
    user.refresh_token_hash = hash_token(refresh_token)
    db.commit()
    return TokenPair(access_token=access_token, refresh_token=refresh_token)


def authenticate(data: LoginUser, db: Session) -> tuple[User, TokenPair]:
    if not data.username and not data.email:
        raise BadRequest("Username or email is required")

    criteria = []
    if data.username:
        criteria.append(User.username == data.username.strip().lower())
    if data.email:
        criteria.append(User.email == data.email.strip().lower())

    user = db.query(User).filter(or_(*criteria)).first()
    if not user:
        raise NotFound("User does not exist")
    if not verify_password(data.password, user.hashed_password):
        logger.warning("Failed login for user %s", user.id)
        raise Unauthorized("Invalid user credentials")

    tokens = issue_tokens(user, db)
    logger.info("User %s logged in", user.id)
    return user, tokens


def logout(user: User, db: Session):
    user.refresh_token_hash = None
    db.commit()
    logger.info("User %s logged out", user.id)


def refresh_session(refresh_token: Optional[str], db: Session) -> TokenPair:
    if not refresh_token:
        raise Unauthorized("Refresh token is required")

    user_id = decode_token(refresh_token, REFRESH_SECRET_KEY, "refresh")
    if user_id is None:
        raise Unauthorized("Invalid refresh token")

    user = db.get(User, user_id)
    if not user:
        raise Unauthorized("Invalid refresh token")
    if user.refresh_token_hash != hash_token(refresh_token):
        logger.warning("Stale refresh token presented for user %s", user.id)
        raise Unauthorized("Refresh token is expired or used")

    return issue_tokens(user, db)


def change_password(user: User, data: ChangePassword, db: Session):
    if not verify_password(data.old_password, user.hashed_password):
        raise BadRequest("Invalid old password")
    user.hashed_password = hash_password(data.new_password)
    db.commit()
    logger.info("User %s changed password", user.id)


def update_account(user: User, data: UpdateAccount, db: Session) -> User:
    if _blank(data.full_name):
        raise BadRequest("All fields are required")

    email = data.email.strip().lower()
    taken = db.query(User).filter(User.email == email, User.id != user.id).first()
    if taken:
        raise Conflict("Email is already in use")

    user.full_name = data.full_name.strip()
    user.email = email
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Email is already in use")
    db.refresh(user)
    return user


def get_channel_profile(username: str, viewer_id: Optional[int], db: Session) -> dict:
    subscribers = (
        select(func.count(Subscription.id))
        .where(Subscription.channel_id == User.id)
        .scalar_subquery()
    )
    subscribed_to = (
        select(func.count(Subscription.id))
        .where(Subscription.subscriber_id == User.id)
        .scalar_subquery()
    )
    is_subscribed = None
    if viewer_id is not None:
        is_subscribed = (
            select(Subscription.id)
            .where(Subscription.channel_id == User.id, Subscription.subscriber_id == viewer_id)
            .exists()
        )

    channel = (
        Aggregation(User)
        .match(User.username == username.strip().lower())
        .project(
            id=User.id,
            username=User.username,
            fullName=User.full_name,
            email=User.email,
            avatar=User.avatar,
            coverImage=User.cover_image,
            createdAt=User.created_at,
        )
        .add_field("subscribersCount", subscribers)
        .add_field("channelsSubscribedToCount", subscribed_to)
        .add_flag("isSubscribed", is_subscribed)
        .first(db)
    )
    if channel is None:
        raise NotFound("Channel does not exist")
    return channel


def get_watch_history(user: User, db: Session) -> Optional[dict]:
    if user.watching_video_id is None:
        return None
    return (
        Aggregation(Video)
        .match(Video.id == user.watching_video_id)
        .project(
            id=Video.id,
            videoFile=Video.video_file,
            thumbnail=Video.thumbnail,
            title=Video.title,
            description=Video.description,
            duration=Video.duration,
            views=Video.views,
            createdAt=Video.created_at,
        )
        .lookup_owner()
        .first(db)
    )
