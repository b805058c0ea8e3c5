# pageimages/routers/admin.py
# Responsibility: Administration endpoints for the denylist cache and the job queue.

from fastapi import APIRouter, Depends, HTTPException

from pageimages.routers.page_images import get_queue_client
from pageimages.services.page_images_service import PageImagesService, get_page_images_service
from pageimages.workers.queue_client import PageImagesQueueClient

router = APIRouter(
    prefix="/admin",
    tags=["Admin"]
)

@router.delete("/denylist")
def purge_denylist_endpoint(
    service: PageImagesService = Depends(get_page_images_service)
):
    """
    Drops the cached denylist; the next selection rebuilds it from its sources.
    """
    try:
        service.resolver.purge()
    except Exception as e:
        print(f"[API] Failed to purge denylist: {e}")
        raise HTTPException(status_code=503, detail="Cache service unavailable")
    return {"status": "purged"}

@router.get("/queue/status")
def get_queue_status_endpoint(
    client: PageImagesQueueClient = Depends(get_queue_client)
):
    """
    Retrieves the current status of the page images job queue.
    """
    try:
        return client.get_queue_info()
    except Exception:
        raise HTTPException(status_code=503, detail="Could not retrieve queue info")
