"""
Public sharing API endpoints.

None of these routes require an account: public links, shared folders,
the explore page and anonymous uploads.
"""

from fastapi import APIRouter, Depends, Query, Request, Response

from api.dependencies import get_session_service, get_sharing_service
from shared.config import get_settings
from modules.sessions.interfaces import ISessionService

from .interfaces import ISharingService
from .models import (
    AnonymousUploadRequest,
    AnonymousUploadResponse,
    ExploreItem,
    SharedFolderFile,
    SharedFolderListing,
    SharedItemView,
)

router = APIRouter()

SESSION_COOKIE = "sid"


@router.get("/share/by-slug/{slug}", response_model=SharedItemView)
async def open_by_slug(
    slug: str,
    service: ISharingService = Depends(get_sharing_service),
) -> SharedItemView:
    return SharedItemView.from_item(await service.open_by_slug(slug))


@router.get("/share/{share_code}", response_model=SharedItemView)
async def open_by_code(
    share_code: str,
    service: ISharingService = Depends(get_sharing_service),
) -> SharedItemView:
    """Read a shared file or folder by its share code."""
    return SharedItemView.from_item(await service.open_by_code(share_code))


@router.get("/shared-folder/{folder_id}/contents", response_model=SharedFolderListing)
async def shared_folder_contents(
    folder_id: str,
    path: str = Query(default="/", description="Path relative to the shared folder"),
    service: ISharingService = Depends(get_sharing_service),
) -> SharedFolderListing:
    return await service.list_shared_folder(folder_id, path)


@router.get("/shared-folder/{folder_id}/file/{file_id}", response_model=SharedFolderFile)
async def shared_folder_file(
    folder_id: str,
    file_id: str,
    service: ISharingService = Depends(get_sharing_service),
) -> SharedFolderFile:
    """
    Read a file through a shared folder.

    The file must sit below the folder and belong to the folder's owner.
    """
    return await service.read_shared_folder_file(folder_id, file_id)


@router.get("/explore", response_model=list[ExploreItem])
async def explore(
    sort: str = Query(default="recent", description="recent, popular or name"),
    limit: int = Query(default=50, description="Clamped to 1..100"),
    service: ISharingService = Depends(get_sharing_service),
) -> list[ExploreItem]:
    return await service.explore(sort, limit)


@router.post("/anonymous/files", response_model=AnonymousUploadResponse)
async def anonymous_upload(
    request: AnonymousUploadRequest,
    http_request: Request,
    response: Response,
    service: ISharingService = Depends(get_sharing_service),
    sessions: ISessionService = Depends(get_session_service),
) -> AnonymousUploadResponse:
    """
    Upload a file without an account.

    The upload is remembered in the visitor's anonymous session.
    """
    item = await service.create_anonymous(request)
    session = await sessions.resolve(http_request.cookies.get(SESSION_COOKIE))

    uploads = list(session.data.get("anonymous_files", []))
    uploads.append(item.id)
    await sessions.record(session, {"anonymous_files": uploads})

    settings = get_settings()
    response.set_cookie(
        SESSION_COOKIE,
        session.session_id,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=60 * 60 * settings.session_ttl_hours,
    )
    return AnonymousUploadResponse(
        id=item.id,
        name=item.name,
        share_code=item.share_code,
        expires_at=item.expires_at,
    )
