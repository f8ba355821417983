import logging
from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError

from pos_inventory.core.errors import InternalError, InvalidRequest, InventoryServiceError
from pos_inventory.core.identity import AuthenticatedUser, require_user
from pos_inventory.schemas.inventory import (
    DecrementResult,
    InventoryItemResponse,
    MenuItemStockStatusResponse,
    ReduceInventoryRequest,
    ReduceInventoryResponse,
    SkippedIngredientResponse,
)
from pos_inventory.services.inventory_service import ConsumptionSource, ReductionOutcome, reduce_inventory
from pos_inventory.services.stock_status import (
    get_inventory_item,
    is_below_minimum,
    is_out_of_stock,
    menu_item_stock_status,
)
from pos_inventory.store.base import InventoryStore
from pos_inventory.store.tortoise_store import TortoiseInventoryStore

log = logging.getLogger("uvicorn")

router = APIRouter()

FALLBACK_MESSAGE = "Inventory updated using default quantities"

# The body is parsed by hand after authentication; this keeps it in the OpenAPI docs
REDUCE_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": ReduceInventoryRequest.model_json_schema()}},
    }
}


def get_inventory_store() -> InventoryStore:
    """Store client for the request; overridden in tests."""
    return TortoiseInventoryStore()


async def parse_reduce_request(request: Request) -> ReduceInventoryRequest:
    """Reads the sale from the body. Called after the token check so a bad body never masks a 401."""
    try:
        return ReduceInventoryRequest.model_validate_json(await request.body())
    except ValidationError as e:
        log.info(f"Rejected reduce-inventory body: {e.errors()}")
        raise InvalidRequest()


def build_reduce_response(outcome: ReductionOutcome) -> ReduceInventoryResponse:
    with_reduction = outcome.source == ConsumptionSource.RECIPE
    results = [
        DecrementResult(
            inventory_item_id=r.inventory_item_id,
            previous_stock=float(r.previous_stock),
            new_stock=float(r.new_stock),
            reduction=float(r.reduction) if with_reduction else None,
        )
        for r in outcome.results
    ]
    skipped = [SkippedIngredientResponse(inventory_item_id=s.inventory_item_id, reason=s.reason) for s in outcome.skipped]

    if with_reduction:
        return ReduceInventoryResponse(product_type=outcome.product_type, results=results, skipped=skipped)
    return ReduceInventoryResponse(message=FALLBACK_MESSAGE, results=results, skipped=skipped)


@router.post(
    "/reduce",
    status_code=status.HTTP_200_OK,
    response_model=ReduceInventoryResponse,
    response_model_exclude_none=True,
    openapi_extra=REDUCE_REQUEST_BODY,
)
async def reduce_inventory_endpoint(
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
    store: InventoryStore = Depends(get_inventory_store),
):
    """
    Applies a sale of `quantity` units of `product_id` to ingredient stock.
    Ingredients that cannot be read or written are reported under `skipped`.
    """
    request_data = await parse_reduce_request(request)
    try:
        outcome = await reduce_inventory(store, request_data.product_id, request_data.quantity)
    except InventoryServiceError as e:
        log.error(f"Inventory reduction for {request_data.product_id} failed: {e.message}")
        raise
    except Exception as e:
        log.error(f"Unexpected error reducing inventory for {request_data.product_id}: {e}")
        raise InternalError()

    log.info(f"User {user.id} reduced inventory for product {request_data.product_id} x{request_data.quantity}")
    return build_reduce_response(outcome)


@router.get("/items/{item_id}", response_model=InventoryItemResponse)
async def get_inventory_item_endpoint(
    item_id: str,
    user: AuthenticatedUser = Depends(require_user),
    store: InventoryStore = Depends(get_inventory_store),
):
    """Fetches the current stock of an inventory item."""
    item = await get_inventory_item(store, item_id)
    return InventoryItemResponse(
        id=item.id,
        current_stock=float(item.current_stock),
        quantity=float(item.quantity),
        stock_actual=float(item.stock_actual) if item.stock_actual is not None else None,
        min_stock_level=float(item.min_stock_level),
        cost_per_unit=float(item.cost_per_unit),
        inventory_value=float(item.inventory_value),
        is_out_of_stock=is_out_of_stock(item),
        is_low_stock=is_below_minimum(item),
    )


@router.get("/menu-items/{menu_item_id}/stock-status", response_model=MenuItemStockStatusResponse)
async def get_menu_item_stock_status_endpoint(
    menu_item_id: str,
    user: AuthenticatedUser = Depends(require_user),
    store: InventoryStore = Depends(get_inventory_store),
):
    """Classifies a menu item as out, low or normal from its ingredient stock."""
    stock_status = await menu_item_stock_status(store, menu_item_id)
    return MenuItemStockStatusResponse(menu_item_id=menu_item_id, stock_status=stock_status.value)
