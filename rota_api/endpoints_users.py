"""API endpoints for the user resource."""
from typing import Any

from fastapi import APIRouter, Body, Depends

from rota_api.auth import get_current_user_id
from rota_api.deps import get_user_service, respond
from rota_api.schemas_users import StartShiftIn
from rota_api.services_users import UserService

router = APIRouter(prefix="/users", tags=["users"])  # Will become /api/users via main.py registration


@router.post("")
def create_user(
    body: Any = Body(None),
    service: UserService = Depends(get_user_service)
):
    """Create new user"""
    return respond(service.create_record(body))


@router.post("/login")
def login_user(
    body: Any = Body(None),
    service: UserService = Depends(get_user_service)
):
    """Password login; payload carries the JWT in `token`"""
    return respond(service.login_user(body))


@router.put("/period/start-shift")
def start_shift(
    payload: StartShiftIn | None = None,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Start the caller's shift for today (bearer token required)"""
    shift_hours = payload.shift_hours if payload else None
    return respond(service.start_shift(user_id, shift_hours))


@router.get("")
def list_users(service: UserService = Depends(get_user_service)):
    """List active users"""
    return respond(service.read_records())


@router.get("/{user_id}")
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Get user by ID"""
    return respond(service.read_record_by_id(user_id))


@router.put("/{user_id}")
def update_user(
    user_id: int,
    body: Any = Body(None),
    service: UserService = Depends(get_user_service)
):
    """Update user (partial update)"""
    return respond(service.update_record_by_id(user_id, body))


@router.delete("/{user_id}")
def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Soft delete user"""
    return respond(service.delete_record_by_id(user_id))
