# pageimages/routers/page_images.py
# Responsibility: Page image selection endpoints. Validates input and formats output.

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from pageimages.errors import ConfigurationError
from pageimages.scoring.candidate import ImageCandidate
from pageimages.services.page_images_service import PageImagesService, get_page_images_service
from pageimages.workers.queue_client import PageImagesQueueClient

router = APIRouter(
    prefix="/pageimages",
    tags=["PageImages"]
)

# --- Pydantic Models ---
class SelectRequest(BaseModel):
    candidates: List[ImageCandidate]

class SelectResponse(BaseModel):
    best_overall: Optional[str] = None
    best_free: Optional[str] = None
    properties: Dict[str, str]

class EnqueueResponse(BaseModel):
    page_id: int
    job_id: str

class DenylistResponse(BaseModel):
    count: int
    files: List[str]

# --- Dependency Injection ---
def get_queue_client() -> PageImagesQueueClient:
    """Provider for PageImagesQueueClient."""
    return PageImagesQueueClient()

# --- Endpoints ---
@router.post("/select", response_model=SelectResponse)
def select_endpoint(
    req: SelectRequest,
    service: PageImagesService = Depends(get_page_images_service)
):
    """
    Scores the given candidates and returns the winners without storing them.
    """
    try:
        result = service.select(req.candidates)
    except ConfigurationError as e:
        print(f"[API] Broken denylist configuration: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")

    return SelectResponse(
        best_overall=result.best_overall,
        best_free=result.best_free,
        properties=service.page_properties(result)
    )

@router.post("/pages/{page_id}", response_model=EnqueueResponse)
def enqueue_page_endpoint(
    page_id: int,
    req: SelectRequest,
    client: PageImagesQueueClient = Depends(get_queue_client)
):
    """
    Queues a page for selection and storage of its page images.
    """
    candidates = [c.model_dump() for c in req.candidates]
    try:
        job_id = client.enqueue_page(page_id, candidates)
    except Exception as e:
        print(f"[API] Failed to enqueue page {page_id}: {e}")
        raise HTTPException(status_code=503, detail="Queue service unavailable")

    return EnqueueResponse(page_id=page_id, job_id=job_id)

@router.get("/denylist", response_model=DenylistResponse)
def denylist_endpoint(
    service: PageImagesService = Depends(get_page_images_service)
):
    """
    Returns the current (possibly cached) denylist.
    """
    try:
        files = sorted(service.get_denylist())
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")

    return DenylistResponse(count=len(files), files=files)
