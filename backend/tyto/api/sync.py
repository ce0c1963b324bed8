"""
Sync status endpoint
"""

from fastapi import APIRouter, Request

from tyto.models.sync import SyncStatus

router = APIRouter()


@router.get("/status", response_model=SyncStatus)
async def get_sync_status(request: Request):
    """Progress of the background sync worker"""
    return request.app.state.orchestrator.status()
