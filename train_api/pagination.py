from typing import Dict, Optional
from urllib.parse import urlencode

from fastapi import Query, Request
from pydantic import BaseModel

from train_api.config import settings
from train_api.validation import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT


class PaginationParams(BaseModel):
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationLinks(BaseModel):
    self: str
    next: Optional[str] = None
    prev: Optional[str] = None


def pagination_params(
    page: int = Query(DEFAULT_PAGE, ge=1, description="Page number, starting at 1"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Items per page"),
) -> PaginationParams:
    return PaginationParams(page=page, limit=limit)


def build_pagination_links(
    base_url: str,
    page: int,
    limit: int,
    total: int,
    extra_params: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Compute self/next/prev links for a page of ``total`` items"""

    def link(target_page: int) -> str:
        params = {"page": target_page, "limit": limit}
        if extra_params:
            params.update(extra_params)
        return f"{base_url}?{urlencode(params)}"

    offset = (page - 1) * limit
    links = {"self": link(page)}
    if offset + limit < total:
        links["next"] = link(page + 1)
    if page > 1:
        links["prev"] = link(page - 1)
    return links


def api_url(request: Request, path: str) -> str:
    """Absolute URL of an API resource, e.g. ``api_url(request, "/bookings/<id>")``"""
    return f"{str(request.base_url).rstrip('/')}{settings.API_PREFIX}{path}"


def collection_url(request: Request) -> str:
    """Absolute URL of the current collection endpoint without its query string"""
    return f"{str(request.base_url).rstrip('/')}{request.url.path}"
