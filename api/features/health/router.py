"""Router for the readiness probe."""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from di.container import ApplicationContainer as DependencyContainer
from api.shared.dtos import StatusResponse
from api.shared.exceptions import ServiceUnavailableError
from api.shared.response import JSONAPIResponse
from infra.resources import Lifecycle

router = APIRouter()


@router.api_route("/healthz", methods=["GET", "HEAD"])
@inject
async def healthz(
    lifecycle: Lifecycle = Depends(
        Provide[DependencyContainer.infrastructure.lifecycle]
    ),
):
    # Reflects process state only; storage health is not checked.
    if not lifecycle.is_ready():
        raise ServiceUnavailableError("Unhealthy", {"state": lifecycle.state.value})
    return JSONAPIResponse(StatusResponse(status="OK").model_dump())
