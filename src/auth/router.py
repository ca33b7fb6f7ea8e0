from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from src.auth import service
from src.auth.models import User
from src.auth.schemas import ChangePassword, CreateUser, LoginUser, RefreshToken, UpdateAccount
from src.auth.service import ACCESS_COOKIE, REFRESH_COOKIE, get_current_user, get_optional_user
from src.common.responses import api_response
from src.config import COOKIE_SECURE
from src.database import get_db

router = APIRouter(
    prefix="/users",
    tags=["Users"]
)


def _with_session_cookies(response, tokens):
    response.set_cookie(ACCESS_COOKIE, tokens.access_token, httponly=True, secure=COOKIE_SECURE)
    response.set_cookie(REFRESH_COOKIE, tokens.refresh_token, httponly=True, secure=COOKIE_SECURE)
    return response


@router.post("/register")
def register(user: CreateUser, db: Session = Depends(get_db)):
    new_user = service.register(user, db)
    return api_response(201, new_user.to_dict(), "User registered successfully")


@router.post("/login")
def login(credentials: LoginUser, db: Session = Depends(get_db)):
    user, tokens = service.authenticate(credentials, db)
    response = api_response(
        200,
        {"user": user.to_dict(), "accessToken": tokens.access_token, "refreshToken": tokens.refresh_token},
        "User logged in successfully",
    )
    return _with_session_cookies(response, tokens)


@router.post("/logout")
def logout(current_user: Annotated[User, Depends(get_current_user)], db: Session = Depends(get_db)):
    service.logout(current_user, db)
    response = api_response(200, {}, "User logged out")
    response.delete_cookie(ACCESS_COOKIE, httponly=True, secure=COOKIE_SECURE)
    response.delete_cookie(REFRESH_COOKIE, httponly=True, secure=COOKIE_SECURE)
    return response


@router.post("/refresh-token")
def refresh_token(request: Request, body: Optional[RefreshToken] = None, db: Session = Depends(get_db)):
    incoming = request.cookies.get(REFRESH_COOKIE) or (body.refresh_token if body else None)
    tokens = service.refresh_session(incoming, db)
    response = api_response(
        200,
        {"accessToken": tokens.access_token, "refreshToken": tokens.refresh_token},
        "Access token refreshed",
    )
    return _with_session_cookies(response, tokens)


@router.get("/current-user")
def read_current_user(current_user: Annotated[User, Depends(get_current_user)]):
    return api_response(200, current_user.to_dict(), "Current user fetched successfully")


@router.patch("/update-account")
def update_account(
        data: UpdateAccount,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    user = service.update_account(current_user, data, db)
    return api_response(200, user.to_dict(), "Account details updated successfully")


@router.post("/change-password")
def change_password(
        data: ChangePassword,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    service.change_password(current_user, data, db)
    return api_response(200, {}, "Password changed successfully")


@router.get("/c/{username}")
def get_channel_profile(
        username: str,
        viewer: Annotated[Optional[User], Depends(get_optional_user)],
        db: Session = Depends(get_db),
):
    channel = service.get_channel_profile(username, viewer.id if viewer else None, db)
    return api_response(200, channel, "User channel fetched successfully")


@router.get("/history")
def get_watch_history(current_user: Annotated[User, Depends(get_current_user)], db: Session = Depends(get_db)):
    video = service.get_watch_history(current_user, db)
    return api_response(200, video, "Watch history fetched successfully")
