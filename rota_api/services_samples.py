"""Sample business logic (plain record CRUD)."""
from rota_api.schemas_samples import SampleCreateIn, SampleUpdateIn
from rota_api.services_root import RootService


class SampleService(RootService):
    service_name = "SampleService"
    create_schema = SampleCreateIn
    update_schema = SampleUpdateIn
