"""Saved customer list API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi_filter import FilterDepends

from app.dependencies import CurrentShop, SavedListRepo
from app.filters.saved_list import SavedListFilter
from app.schemas.saved_list import SavedListListResponse, SavedListResponse, SavedListUpdate
from app.utils.audit import audit_logged

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Saved list not found",
    )


@router.get("", response_model=SavedListListResponse)
async def list_saved_lists(
    repo: SavedListRepo,
    shop: CurrentShop,
    filters: SavedListFilter = FilterDepends(SavedListFilter),
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
) -> SavedListListResponse:
    """List the shop's saved lists with optional filtering and pagination."""
    lists, total = await repo.get_all(shop, filters, page=page, size=size)
    return SavedListListResponse.paginate(
        items=[SavedListResponse.model_validate(s) for s in lists],
        total=total,
        page=page,
        size=size,
    )


@router.get("/{list_id}", response_model=SavedListResponse)
async def get_saved_list(
    list_id: str,
    repo: SavedListRepo,
    shop: CurrentShop,
) -> SavedListResponse:
    saved = await repo.get_by_id(shop, list_id)
    if not saved:
        raise _not_found()
    return SavedListResponse.model_validate(saved)


@router.patch(
    "/{list_id}",
    response_model=SavedListResponse,
    dependencies=[Depends(audit_logged("update_saved_list"))],
)
async def update_saved_list(
    list_id: str,
    data: SavedListUpdate,
    repo: SavedListRepo,
    shop: CurrentShop,
) -> SavedListResponse:
    """Rename or archive a saved list."""
    saved = await repo.update(shop, list_id, data)
    if not saved:
        raise _not_found()
    return SavedListResponse.model_validate(saved)


@router.delete(
    "/{list_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(audit_logged("delete_saved_list"))],
)
async def delete_saved_list(
    list_id: str,
    repo: SavedListRepo,
    shop: CurrentShop,
) -> Response:
    if not await repo.delete(shop, list_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
