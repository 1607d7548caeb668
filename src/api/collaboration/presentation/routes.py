"""Space collaborator routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from collaboration.application.services import CollaboratorService
from collaboration.application.value_objects import RequestContext
from collaboration.dependencies.authentication import get_request_context
from collaboration.dependencies.collaborator import get_collaborator_service
from collaboration.domain.value_objects import SpaceId
from collaboration.ports.exceptions import (
    BadRequestError,
    CollaborationError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)
from collaboration.presentation.models import (
    CollaboratorListMeta,
    CollaboratorListResponse,
    IdentityResource,
    UpdateUserIdsRequest,
)
from collaboration.presentation.paging import build_paging_links, parse_page_param

router = APIRouter(
    prefix="/spaces/{space_id}/collaborators",
    tags=["collaborators"],
)

_MUTATION_RESPONSES: dict[int | str, dict[str, str]] = {
    200: {"description": "Collaborators updated (or already in the requested state)"},
    400: {"description": "Invalid identity ID, or the space owner was targeted"},
    401: {"description": "Caller may not manage this space's collaborators"},
    404: {"description": "Space or identity not found"},
    500: {"description": "Authorization server failure or corrupt policy"},
}


def _parse_space_id(space_id: str) -> SpaceId:
    try:
        return SpaceId.from_string(space_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid space ID format",
        )


def _to_http_exception(error: CollaborationError) -> HTTPException:
    """Map a collaboration error to its HTTP response."""
    if isinstance(error, BadRequestError):
        return HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, UnauthorizedError):
        return HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            detail=str(error),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, InternalError):
        return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
    return HTTPException(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Failed to process collaborators",
    )


@router.get(
    "",
    response_model=CollaboratorListResponse,
    summary="List space collaborators",
    description="""
List one page of the identities allowed to act on a space.

The list is public. `page[offset]` defaults to 0 and `page[limit]` to 20
(capped at 100). `meta.totalCount` counts every collaborator regardless of
paging.
""",
    response_description="One page of collaborators with paging links",
    responses={
        200: {"description": "Collaborators listed"},
        400: {"description": "Invalid space ID"},
        404: {"description": "Space not found"},
        500: {"description": "Authorization server failure or corrupt policy"},
    },
)
async def list_collaborators(
    space_id: str,
    request: Request,
    service: Annotated[CollaboratorService, Depends(get_collaborator_service)],
    page_offset: Annotated[str | None, Query(alias="page[offset]")] = None,
    page_limit: Annotated[str | None, Query(alias="page[limit]")] = None,
) -> CollaboratorListResponse:
    """List a space's collaborators."""
    parsed_space_id = _parse_space_id(space_id)

    try:
        page = await service.list_collaborators(
            space_id=parsed_space_id,
            page_offset=parse_page_param(page_offset),
            page_limit=parse_page_param(page_limit),
        )
    except CollaborationError as e:
        raise _to_http_exception(e)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list collaborators",
        )

    links = build_paging_links(
        path=str(request.url.replace(query="")),
        result_length=len(page.items),
        offset=page.offset,
        limit=page.limit,
        count=page.total_count,
    )
    return CollaboratorListResponse(
        data=[IdentityResource.from_domain(identity) for identity in page.items],
        links=links,
        meta=CollaboratorListMeta(total_count=page.total_count),
    )


@router.post(
    "/{identity_id}",
    status_code=status.HTTP_200_OK,
    summary="Add a collaborator",
    description="Add one identity to the space's collaborators. Adding an existing "
    "collaborator succeeds without changing anything.",
    responses=_MUTATION_RESPONSES,
)
async def add_collaborator(
    space_id: str,
    identity_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[CollaboratorService, Depends(get_collaborator_service)],
) -> None:
    """Add a single collaborator."""
    parsed_space_id = _parse_space_id(space_id)

    try:
        await service.add_collaborator(context, parsed_space_id, identity_id)
    except CollaborationError as e:
        raise _to_http_exception(e)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add collaborator",
        )


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    summary="Add collaborators",
    description="Add several identities at once. The batch is all-or-nothing; "
    "null entries are skipped and a null `data` member is a no-op.",
    responses=_MUTATION_RESPONSES,
)
async def add_collaborators(
    space_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[CollaboratorService, Depends(get_collaborator_service)],
    payload: UpdateUserIdsRequest | None = None,
) -> None:
    """Add a batch of collaborators."""
    parsed_space_id = _parse_space_id(space_id)
    if payload is None:
        return

    try:
        await service.add_collaborators(
            context, parsed_space_id, payload.identity_ids()
        )
    except CollaborationError as e:
        raise _to_http_exception(e)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add collaborators",
        )


@router.delete(
    "/{identity_id}",
    status_code=status.HTTP_200_OK,
    summary="Remove a collaborator",
    description="Remove one identity from the space's collaborators. The space "
    "owner cannot be removed.",
    responses=_MUTATION_RESPONSES,
)
async def remove_collaborator(
    space_id: str,
    identity_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[CollaboratorService, Depends(get_collaborator_service)],
) -> None:
    """Remove a single collaborator."""
    parsed_space_id = _parse_space_id(space_id)

    try:
        await service.remove_collaborator(context, parsed_space_id, identity_id)
    except CollaborationError as e:
        raise _to_http_exception(e)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove collaborator",
        )


@router.delete(
    "",
    status_code=status.HTTP_200_OK,
    summary="Remove collaborators",
    description="Remove several identities at once. If any of them owns the space "
    "the whole batch is rejected.",
    responses=_MUTATION_RESPONSES,
)
async def remove_collaborators(
    space_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[CollaboratorService, Depends(get_collaborator_service)],
    payload: UpdateUserIdsRequest | None = None,
) -> None:
    """Remove a batch of collaborators."""
    parsed_space_id = _parse_space_id(space_id)
    if payload is None:
        return

    try:
        await service.remove_collaborators(
            context, parsed_space_id, payload.identity_ids()
        )
    except CollaborationError as e:
        raise _to_http_exception(e)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove collaborators",
        )
