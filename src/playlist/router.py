from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.auth.models import User
from src.auth.service import get_current_user
from src.common.responses import api_response
from src.database import get_db
from src.playlist import service
from src.playlist.schemas import PlaylistDetails

router = APIRouter(prefix="/playlists", tags=["Playlists"])


@router.post("")
def create_playlist(
        data: PlaylistDetails,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    playlist = service.create_playlist(current_user, data, db)
    return api_response(201, playlist.to_dict(), "Playlist created successfully")


@router.get("/user/{user_id}")
def get_user_playlists(user_id: int, db: Session = Depends(get_db)):
    playlists = service.get_user_playlists(user_id, db)
    return api_response(200, playlists, "User playlists fetched successfully")


@router.get("/{playlist_id}")
def get_playlist(playlist_id: int, db: Session = Depends(get_db)):
    playlist = service.get_playlist(playlist_id, db)
    return api_response(200, playlist, "Playlist fetched successfully")


@router.patch("/add/{video_id}/{playlist_id}")
def add_video_to_playlist(
        video_id: int,
        playlist_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    playlist = service.add_video(playlist_id, video_id, current_user, db)
    return api_response(200, playlist.to_dict(), "Video added to playlist successfully")


@router.patch("/remove/{video_id}/{playlist_id}")
def remove_video_from_playlist(
        video_id: int,
        playlist_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    playlist = service.remove_video(playlist_id, video_id, current_user, db)
    return api_response(200, playlist.to_dict(), "Video removed from playlist successfully")


@router.patch("/{playlist_id}")
def update_playlist(
        playlist_id: int,
        data: PlaylistDetails,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    playlist = service.update_playlist(playlist_id, current_user, data, db)
    return api_response(200, playlist.to_dict(), "Playlist updated successfully")


@router.delete("/{playlist_id}")
def delete_playlist(
        playlist_id: int,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    service.delete_playlist(playlist_id, current_user, db)
    return api_response(200, {"playlistId": playlist_id}, "Playlist deleted successfully")
