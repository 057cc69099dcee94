"""
Access API Routes
Visitor-facing email check, document listing and first-access recording
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from docgate.api.dependencies import get_admin_service, get_access_service
from docgate.core.logging import get_logger
from docgate.models.access import (
    AccessResponse,
    CheckAccessRequest,
    MarkAccessedRequest,
    MarkAccessedResponse,
)
from docgate.models.common import CountResponse, ErrorResponse
from docgate.services.access import AccessService, AdminService

logger = get_logger(__name__)
router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Invalid email or document id"},
        503: {"model": ErrorResponse, "description": "Permission store unavailable"},
    }
)


@router.post("/check", response_model=AccessResponse)
async def check_access(
    request: CheckAccessRequest,
    service: AccessService = Depends(get_access_service),
):
    """
    Check whether an email has access to any document

    Returns the accessible documents alongside the has_access flag.
    """
    result = await service.check_access(request.email)
    return AccessResponse.from_result(result)


@router.get("/documents", response_model=AccessResponse)
async def list_documents(
    email: Optional[str] = Query(None, description="Visitor email address"),
    service: AccessService = Depends(get_access_service),
):
    """List the documents an email may open, expired grants excluded"""
    result = await service.check_access(email)
    return AccessResponse.from_result(result)


@router.post("/mark-accessed", response_model=MarkAccessedResponse)
async def mark_accessed(
    request: MarkAccessedRequest,
    service: AccessService = Depends(get_access_service),
):
    """
    Record that an email opened a document

    The first call for a grant sends the thank-you email; later calls
    are no-ops. Email delivery failures never fail this request.
    """
    record = await service.record_access(request.email, request.document_id)
    return MarkAccessedResponse.from_record(record)


@router.get("/permissions-count", response_model=CountResponse)
async def permissions_count(
    service: AdminService = Depends(get_admin_service),
):
    """Total number of grants, shown on the landing page"""
    return CountResponse(count=await service.count_permissions())
