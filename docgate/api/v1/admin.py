"""
Admin API Routes
Admin session, document management, grants and stats
"""

from fastapi import APIRouter, Depends, Response, status

from docgate.api.dependencies import get_admin_service, get_settings, require_admin
from docgate.core.config import Settings
from docgate.core.exceptions import AuthenticationException
from docgate.core.logging import get_logger
from docgate.core.security import create_admin_token, verify_admin_password
from docgate.models.auth import AdminLoginRequest, StatsResponse
from docgate.models.common import ErrorResponse, SuccessResponse
from docgate.models.document import (
    DocumentCreateRequest,
    DocumentEnvelope,
    DocumentListResponse,
    DocumentResponse,
    DocumentUpdateRequest,
)
from docgate.models.permission import (
    GrantPermissionRequest,
    PermissionEnvelope,
    PermissionListResponse,
    PermissionResponse,
)
from docgate.services.access import AdminService

logger = get_logger(__name__)
router = APIRouter(responses={401: {"model": ErrorResponse, "description": "Missing or invalid admin session"}})
protected = APIRouter(dependencies=[Depends(require_admin)])


# ============================================================================
# Session
# ============================================================================

@router.post("/login", response_model=SuccessResponse)
async def login(
    request: AdminLoginRequest,
    response: Response,
    config: Settings = Depends(get_settings),
):
    """Exchange the admin password for a session cookie"""
    if not verify_admin_password(request.password, config):
        logger.warning("Rejected admin login attempt")
        raise AuthenticationException(message="Password error")

    response.set_cookie(
        key=config.ADMIN_COOKIE_NAME,
        value=create_admin_token(config),
        max_age=config.ADMIN_SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=config.ENVIRONMENT == "production",
        samesite="lax",
    )
    logger.info("Admin logged in")
    return SuccessResponse()


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    response: Response,
    config: Settings = Depends(get_settings),
):
    response.delete_cookie(config.ADMIN_COOKIE_NAME)
    return SuccessResponse()


# ============================================================================
# Documents
# ============================================================================

@protected.get("/documents", response_model=DocumentListResponse)
async def list_documents(service: AdminService = Depends(get_admin_service)):
    """List all documents, newest first"""
    documents = await service.list_documents()
    return DocumentListResponse(
        documents=[DocumentResponse.from_record(doc) for doc in documents]
    )


@protected.post("/documents", response_model=DocumentEnvelope, status_code=status.HTTP_201_CREATED)
async def create_document(
    request: DocumentCreateRequest,
    service: AdminService = Depends(get_admin_service),
):
    """Create a document; title, introduction and link are required"""
    document = await service.create_document(
        title=request.title,
        introduction=request.introduction,
        link=request.link,
        thank_you_content=request.thank_you_content,
    )
    return DocumentEnvelope(document=DocumentResponse.from_record(document))


@protected.get("/documents/{document_id}", response_model=DocumentEnvelope)
async def get_document(
    document_id: str,
    service: AdminService = Depends(get_admin_service),
):
    document = await service.get_document(document_id)
    return DocumentEnvelope(document=DocumentResponse.from_record(document))


@protected.put("/documents/{document_id}", response_model=DocumentEnvelope)
async def update_document(
    document_id: str,
    request: DocumentUpdateRequest,
    service: AdminService = Depends(get_admin_service),
):
    """Update the supplied document fields"""
    document = await service.update_document(
        document_id,
        request.model_dump(exclude_unset=True),
    )
    return DocumentEnvelope(document=DocumentResponse.from_record(document))


@protected.delete("/documents/{document_id}", response_model=SuccessResponse)
async def delete_document(
    document_id: str,
    service: AdminService = Depends(get_admin_service),
):
    """Delete a document and every permission granted on it"""
    await service.delete_document(document_id)
    return SuccessResponse()


# ============================================================================
# Permissions
# ============================================================================

@protected.get("/permissions", response_model=PermissionListResponse)
async def list_permissions(service: AdminService = Depends(get_admin_service)):
    """List all grants with their document titles, newest first"""
    permissions = await service.list_permissions()
    return PermissionListResponse(
        permissions=[PermissionResponse.from_record(p, with_title=True) for p in permissions]
    )


@protected.post("/permissions", response_model=PermissionEnvelope, status_code=status.HTTP_201_CREATED)
async def grant_permission(
    request: GrantPermissionRequest,
    service: AdminService = Depends(get_admin_service),
):
    """
    Grant a document to an email

    Returns 409 already_granted when the pair already exists.
    """
    permission = await service.grant_permission(
        email=request.email,
        document_id=request.document_id,
        deadline=request.deadline,
    )
    return PermissionEnvelope(permission=PermissionResponse.from_record(permission))


@protected.delete("/permissions/{permission_id}", response_model=SuccessResponse)
async def revoke_permission(
    permission_id: str,
    service: AdminService = Depends(get_admin_service),
):
    await service.revoke_permission(permission_id)
    return SuccessResponse()


# ============================================================================
# Stats
# ============================================================================

@protected.get("/stats", response_model=StatsResponse)
async def get_stats(service: AdminService = Depends(get_admin_service)):
    """Aggregate document and grant counts"""
    stats = await service.get_stats()
    return StatsResponse(**stats.model_dump())


router.include_router(protected)
