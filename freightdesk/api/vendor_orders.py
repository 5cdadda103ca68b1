from fastapi import APIRouter, Depends
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.core.workflow import ensure_can
from freightdesk.db.memory import get_record, rows, update_record
from freightdesk.schemas.vendor import VendorOrder, VendorOrderStatus

router = APIRouter(tags=["vendor orders"])
logger = logging.getLogger(__name__)


def move_order(order_id: str, action: str, status: VendorOrderStatus, actor: str) -> VendorOrder:
    def change(o: VendorOrder):
        ensure_can("vendor order", o.id, action, o.status)
        return {"status": status}

    with domain_errors():
        order = update_record("vendor_orders", order_id, "Vendor order", change)
    logger.info(f"Vendor order {order.id} -> {order.status.value} by {actor}")
    return order


@router.get("/vendor-orders", response_model=List[VendorOrder])
async def list_vendor_orders(q: Optional[str] = None, status: Optional[VendorOrderStatus] = None):
    return [
        o for o in rows("vendor_orders")
        if search_matches(q, o.id, o.vendor_name, o.ref, o.service)
        and equals_or_any(o.status, status)
    ]


@router.get("/vendor-orders/{order_id}", response_model=VendorOrder)
async def get_vendor_order(order_id: str):
    with domain_errors():
        return get_record("vendor_orders", order_id, "Vendor order")


@router.post("/vendor-orders/{order_id}/start", response_model=VendorOrder)
async def start_order(order_id: str, actor: str = Depends(get_actor)):
    return move_order(order_id, "start", VendorOrderStatus.IN_PROGRESS, actor)


@router.post("/vendor-orders/{order_id}/complete", response_model=VendorOrder)
async def complete_order(order_id: str, actor: str = Depends(get_actor)):
    return move_order(order_id, "complete", VendorOrderStatus.COMPLETED, actor)


@router.post("/vendor-orders/{order_id}/cancel", response_model=VendorOrder)
async def cancel_order(order_id: str, actor: str = Depends(get_actor)):
    return move_order(order_id, "cancel", VendorOrderStatus.CANCELED, actor)
