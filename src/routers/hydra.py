"""Hydra collection responses with page links."""
from typing import List, Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from schemas import HydraCollection, PartialCollectionView

LD_JSON = "application/ld+json"
DEFAULT_PAGE = 0
DEFAULT_SIZE = 10


def _base_path(request: Request) -> str:
    settings = getattr(request.app.state, "settings", None)
    api_path = getattr(settings, "api_path", None)
    return api_path or request.url.path


def _view(request: Request, page: int, size: int, total_items: int) -> PartialCollectionView:
    query = dict(request.query_params)
    query.setdefault("size", str(size))
    last_page = max((total_items - 1) // size, 0)
    base = _base_path(request)

    def page_url(p: int) -> Optional[str]:
        if p < 0 or p > last_page:
            return None
        return f"{base}?{urlencode(sorted({**query, 'page': str(p)}.items()))}"

    request_uri = request.url.path
    if request.url.query:
        request_uri += "?" + request.url.query

    return PartialCollectionView(
        id=request_uri,
        first=page_url(0),
        previous=page_url(page - 1),
        next=page_url(page + 1),
        last=page_url(last_page),
    )


def ld_json(content: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, media_type=LD_JSON)


def collection_response(
    request: Request,
    members: List[BaseModel],
    total_items: int,
    page: Optional[int] = None,
    size: Optional[int] = None,
) -> JSONResponse:
    """Wrap members in a hydra:Collection. Without page and size no view is added."""
    view = None
    if page is not None and size is not None:
        view = _view(request, page, size, total_items)

    collection = HydraCollection(
        id=request.url.path,
        total_items=total_items,
        member=[m.model_dump(by_alias=True, exclude_none=True, mode="json") for m in members],
        view=view,
    )
    return ld_json(collection.model_dump(by_alias=True, exclude_none=True, mode="json"))
