"""
Content API endpoints - Read-only views of the published snapshot.

Every handler reads the SnapshotStore once and never waits on a sync.
Unknown ids resolve to empty results; a missing ``id`` query parameter is
the only client error.
"""

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from tyto.engine.store import SnapshotStore
from tyto.services.renderer import highlight_css

router = APIRouter()

INVALID_QUERY = {"error": "invalid query parameter"}


def get_store(request: Request) -> SnapshotStore:
    return request.app.state.store


@router.get("/categories")
async def get_categories(request: Request):
    """List categories sorted by name"""
    return {"data": get_store(request).categories()}


@router.get("/categoryTree")
async def get_category_tree(request: Request, id: str | None = None):
    """Directories and documents of one category, sorted by title"""
    if id is None:
        return JSONResponse(status_code=400, content=INVALID_QUERY)
    return {"data": get_store(request).category_tree(id)}


@router.get("/file")
async def get_content(request: Request, id: str | None = None):
    """Rendered HTML of one document"""
    if id is None:
        return JSONResponse(status_code=400, content=INVALID_QUERY)
    return {"data": get_store(request).content(id)}


@router.get("/highlight.css")
async def get_highlight_css():
    """Stylesheet for highlighted code blocks in rendered documents"""
    return Response(content=highlight_css(), media_type="text/css")
