"""API endpoints for the sample resource."""
from typing import Any

from fastapi import APIRouter, Body, Depends

from rota_api.deps import get_sample_service, respond
from rota_api.services_samples import SampleService

router = APIRouter(prefix="/samples", tags=["samples"])


@router.post("")
def create_sample(body: Any = Body(None), service: SampleService = Depends(get_sample_service)):
    return respond(service.create_record(body))


@router.get("")
def list_samples(service: SampleService = Depends(get_sample_service)):
    return respond(service.read_records())


@router.get("/{sample_id}")
def get_sample(sample_id: int, service: SampleService = Depends(get_sample_service)):
    return respond(service.read_record_by_id(sample_id))


@router.put("/{sample_id}")
def update_sample(
    sample_id: int,
    body: Any = Body(None),
    service: SampleService = Depends(get_sample_service)
):
    return respond(service.update_record_by_id(sample_id, body))


@router.delete("/{sample_id}")
def delete_sample(sample_id: int, service: SampleService = Depends(get_sample_service)):
    return respond(service.delete_record_by_id(sample_id))
