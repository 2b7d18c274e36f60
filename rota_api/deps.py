"""FastAPI dependencies wiring services to the record store, plus the envelope response."""
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from rota_api.db import SessionLocal
from rota_api.errors import ServiceResult
from rota_api.models import Sample, User
from rota_api.record_store import RecordStore
from rota_api.services_samples import SampleService
from rota_api.services_users import UserService


def get_user_service() -> UserService:
    return UserService(RecordStore(User, SessionLocal))


def get_sample_service() -> SampleService:
    return SampleService(RecordStore(Sample, SessionLocal))


def respond(result: ServiceResult) -> JSONResponse:
    """Serialize a service result as the uniform envelope."""
    return JSONResponse(
        status_code=result.status,
        content=jsonable_encoder(result.to_response()),
    )
