from fastapi import APIRouter, Depends
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.core.workflow import ensure_can
from freightdesk.db.memory import STATE_LOCK, add_record, get_record, next_id, rows, update_record
from freightdesk.schemas.vendor import Vendor, VendorCreate, VendorStatus

router = APIRouter(tags=["vendors"])
logger = logging.getLogger(__name__)


def decide_vendor(vendor_id: str, action: str, status: VendorStatus, actor: str) -> Vendor:
    def change(v: Vendor):
        ensure_can("vendor", v.id, action, v.status)
        return {"status": status}

    vendor = update_record("vendors", vendor_id, "Vendor", change)
    logger.info(f"Vendor {vendor.id} ({vendor.name}) -> {vendor.status.value} by {actor}")
    return vendor


@router.get("/vendors", response_model=List[Vendor])
async def list_vendors(q: Optional[str] = None, status: Optional[VendorStatus] = None):
    return [
        v for v in rows("vendors")
        if search_matches(q, v.id, v.name, v.category, v.contact, v.email, v.gstin)
        and equals_or_any(v.status, status)
    ]


@router.post("/vendors", response_model=Vendor, status_code=201)
async def register_vendor(payload: VendorCreate):
    with STATE_LOCK:
        vendor = Vendor(id=next_id("vendors", "VND", width=4), **payload.model_dump())
        add_record("vendors", vendor, front=False)
    logger.info(f"Vendor {vendor.id} registered: {vendor.name} ({vendor.category})")
    return vendor


@router.get("/vendors/{vendor_id}", response_model=Vendor)
async def get_vendor(vendor_id: str):
    with domain_errors():
        return get_record("vendors", vendor_id, "Vendor")


@router.post("/vendors/{vendor_id}/approve", response_model=Vendor)
async def approve_vendor(vendor_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        return decide_vendor(vendor_id, "approve", VendorStatus.APPROVED, actor)


@router.post("/vendors/{vendor_id}/reject", response_model=Vendor)
async def reject_vendor(vendor_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        return decide_vendor(vendor_id, "reject", VendorStatus.REJECTED, actor)
