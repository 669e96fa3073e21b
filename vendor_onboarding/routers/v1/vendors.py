"""Vendor registration and read endpoints.

Pattern:
  1. Inject the service via Depends
  2. Call service methods
  3. Wrap the result in the response envelope (errors are enveloped by the
     exception handlers in vendor_onboarding.core.exceptions)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from vendor_onboarding.core.exceptions import ValidationError
from vendor_onboarding.core.response import SuccessEnvelope, success
from vendor_onboarding.routers.dependencies import get_vendor_service
from vendor_onboarding.schemas.vendor import VendorCreated, VendorCreateRequest, VendorOut
from vendor_onboarding.services.vendor import VendorService

router = APIRouter(tags=["Vendors"])


@router.post("/vendor", response_model=SuccessEnvelope[VendorCreated])
async def create_vendor(
    request: Request,
    body: VendorCreateRequest,
    service: VendorService = Depends(get_vendor_service),
):
    """Register a vendor with its banking, identification, verification,
    custom-field and document rows in a single transaction."""
    if not body.data:
        raise ValidationError("No data provided")
    created = await service.create_vendor(body.data)
    return success(request, created, "Vendor created successfully")


@router.get("/vendors", response_model=SuccessEnvelope[list[VendorOut]])
async def list_vendors(
    request: Request,
    service: VendorService = Depends(get_vendor_service),
):
    vendors = await service.list_vendors()
    return success(request, vendors, f"Fetched {len(vendors)} vendor(s)")


@router.get("/vendor/{vendor_id}", response_model=SuccessEnvelope[VendorOut])
async def get_vendor(
    request: Request,
    vendor_id: str,
    service: VendorService = Depends(get_vendor_service),
):
    vendor = await service.get_vendor(vendor_id)
    return success(request, vendor, "Vendor fetched successfully")
