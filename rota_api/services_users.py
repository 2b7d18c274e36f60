"""User business logic: accounts, login and shift start."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict
from zoneinfo import ZoneInfo

from rota_api.auth import create_access_token, hash_password, verify_password
from rota_api.config import settings
from rota_api.errors import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ServiceResult,
    ValidationError,
)
from rota_api.record_store import RecordStore
from rota_api.schemas_users import LoginIn, UserCreateIn, UserUpdateIn
from rota_api.services_root import RootService
from rota_api.shift_policy import Invalid, Reject, decide
from rota_api.utils.audit import record_metric

logger = logging.getLogger(__name__)


def shift_outcome(result: ServiceResult) -> str:
    """Metric outcome for a start_shift result."""
    if result.is_ok:
        return "accepted"
    if isinstance(result.error, ValidationError):
        return "invalid"
    if isinstance(result.error, DomainError):
        return "rejected"
    return "failed"


class UserService(RootService):
    """User records plus the start-shift workflow.

    The record store is injected; nothing is resolved from module globals.
    """

    service_name = "UserService"
    hidden_fields = ("password",)
    create_schema = UserCreateIn
    update_schema = UserUpdateIn

    def __init__(self, store: RecordStore, tz: str | None = None):
        super().__init__(store)
        self.tz = ZoneInfo(tz or settings.TZ)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def _ensure_email_free(self, email: str, record_id: int | None = None) -> None:
        owners = self.check_store(self.store.read_records({"email": email}))
        if any(owner["id"] != record_id for owner in owners):
            raise ConflictError(f"User with email {email} already exists")

    def prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self._ensure_email_free(data["email"])
        return {**data, "password": hash_password(data["password"])}

    def prepare_update(self, record_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        if "email" in data:
            self._ensure_email_free(data["email"], record_id)
        if "password" in data:
            data = {**data, "password": hash_password(data["password"])}
        return data

    def login_user(self, body: Any) -> ServiceResult:
        try:
            credentials = self.validate(LoginIn, body)
            users = self.check_store(self.store.read_records({
                "email": credentials.email, "is_active": True, "is_deleted": False,
            }))
            if not users:
                raise NotFoundError("User does not exist.")

            user = users[0]
            if not verify_password(credentials.password, user["password"]):
                raise AuthenticationError("Incorrect Email or Password combination.")

            token = create_access_token(user["id"])
            logger.info(f"User {user['id']} logged in")
            return ServiceResult.ok({**self.public(user), "token": token})
        except Exception as e:
            return self.format_error(e, "login_user")

    def start_shift(self, caller_id: int, shift_hours: Any, now: datetime | None = None) -> ServiceResult:
        """Start the caller's shift in the requested band.

        One read, one policy decision, and on acceptance one conditional write.
        The write is guarded by the shift_start_date seen at read time; if another
        request started a shift in between, nothing matches and a ConflictError
        is returned instead of overwriting it.

        Args:
            caller_id: Authenticated user id.
            shift_hours: Requested band ("0-8", "8-16", "16-24"), unvalidated.
            now: Current time (defaults to now in the configured TZ).

        Returns:
            ServiceResult with the update acknowledgment, or a ValidationError,
            DomainError, NotFoundError, ConflictError or ControllerError.
        """
        try:
            conditions = self.live(caller_id)
            users = self.check_store(self.store.read_records(conditions))
            if not users:
                raise NotFoundError("User does not exist.")
            user = users[0]

            decision = decide(now or self.now(), user, shift_hours)
            if isinstance(decision, Invalid):
                raise ValidationError(decision.message, field=decision.field)
            if isinstance(decision, Reject):
                raise DomainError(decision.reason)

            guard = {**conditions, "shift_start_date": user.get("shift_start_date")}
            ack = self.check_store(self.store.update_records(guard, decision.to_update()))
            if not ack.matched_count:
                raise ConflictError("Shift was changed by another request, try again.")

            logger.info(
                f"User {caller_id} started shift "
                f"{decision.shift_start_time}-{decision.shift_end_time}"
            )
            result = ServiceResult.ok(ack.to_dict())
        except Exception as e:
            result = self.format_error(e, "start_shift")

        record_metric("shift.start", {"user_id": caller_id}, outcome=shift_outcome(result))
        return result
