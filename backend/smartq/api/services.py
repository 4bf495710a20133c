from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from smartq.api.dependencies.users import require_provider
from smartq.db.database import get_db_session
from smartq.models.user import User
from smartq.schemas.service import (
    ServiceCreate,
    ServiceDetail,
    ServiceListResponse,
    ServiceRead,
    ServiceResponse,
)
from smartq.services.service_catalog import ServiceCatalogService

router = APIRouter()


def get_service_catalog(db: AsyncSession = Depends(get_db_session)) -> ServiceCatalogService:
    return ServiceCatalogService(db)


@router.post("/", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def register_service(
    service_in: ServiceCreate,
    catalog: ServiceCatalogService = Depends(get_service_catalog),
    current_user: User = Depends(require_provider),
):
    """
    Creates a service owned by the calling provider.
    """
    service = await catalog.create_service(
        provider_id=current_user.id,
        name=service_in.name,
        location=service_in.location,
    )
    return ServiceResponse(message="Service successfully created", service=ServiceDetail.model_validate(service))


@router.get("/", response_model=ServiceListResponse)
async def fetch_all_services(catalog: ServiceCatalogService = Depends(get_service_catalog)):
    services = await catalog.list_services()
    return ServiceListResponse(
        message="Services successfully fetched",
        services=[ServiceRead.model_validate(s) for s in services],
    )


@router.get("/{service_id}", response_model=ServiceResponse)
async def fetch_service_detail(
    service_id: uuid.UUID,
    catalog: ServiceCatalogService = Depends(get_service_catalog),
):
    service = await catalog.get_service(service_id)
    return ServiceResponse(message="Service fetched successfully", service=ServiceDetail.model_validate(service))
