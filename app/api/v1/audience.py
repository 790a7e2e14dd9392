"""Filter-audience API endpoints."""

from fastapi import APIRouter, Depends, status

from app.audience import active_criteria
from app.audience.catalog import filter_sections
from app.dependencies import CurrentShop, SavedListRepo, SettingsDep, ShopifyClient
from app.schemas.audience import (
    FilterSectionResponse,
    GenerateSegmentRequest,
    GenerateSegmentResponse,
)
from app.schemas.saved_list import SavedListCreate, SavedListResponse
from app.services.audience_service import AudienceService
from app.utils.audit import audit_logged
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

NO_FILTERS_MESSAGE = "Please select at least one filter to generate a segment."
NO_MATCHES_MESSAGE = "No customers matched the selected filters."


@router.post("/generate-segment", response_model=GenerateSegmentResponse)
async def generate_segment(
    data: GenerateSegmentRequest,
    client: ShopifyClient,
    settings: SettingsDep,
) -> GenerateSegmentResponse:
    """Run the filter compiler against the shop's customers.

    Access denials surface as 403 and other upstream failures as 502 through
    the application exception handlers.
    """
    if not active_criteria(data.filters):
        return GenerateSegmentResponse(
            match_count=0, filters=data.filters, customers=[], message=NO_FILTERS_MESSAGE
        )

    result = await AudienceService(client, settings).filter_customers(data.filters)
    return GenerateSegmentResponse(
        match_count=result.total,
        filters=data.filters,
        customers=result.customers,
        message=None if result.total else NO_MATCHES_MESSAGE,
    )


@router.get("/options", response_model=list[FilterSectionResponse])
async def list_filter_options() -> list[FilterSectionResponse]:
    """Static catalog of filter sections and their options."""
    return filter_sections()


@router.post(
    "/save-list",
    response_model=SavedListResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(audit_logged("save_list"))],
)
async def save_list(
    data: SavedListCreate,
    repo: SavedListRepo,
    shop: CurrentShop,
) -> SavedListResponse:
    """Persist a generated segment as a saved list. Duplicate names give 409."""
    saved = await repo.create(shop, data)
    logger.info("Saved list %s with %d customers", saved.id, len(data.customer_ids))
    return SavedListResponse.model_validate(saved)
