# pageimages/workers/job.py
# Responsibility: Defines the page image task executed by RQ workers.

from typing import Any, Dict, List

from pageimages.services.page_images_service import get_page_images_service


def perform_page_images_job(page_id: int, candidates: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Recomputes and stores the page images of one page.
    Errors propagate so RQ records the job as failed and its retry policy applies.

    Args:
        page_id (int): The page whose properties are replaced.
        candidates (List[Dict]): Image candidates in page order.
    """
    print(f"[Worker] Starting page images job for page {page_id} ({len(candidates)} candidates)")

    service = get_page_images_service()
    result = service.process_page(page_id, candidates)

    print(f"[Worker] Finished page {page_id}. Free: {result.best_free}, overall: {result.best_overall}")
    return result.model_dump()
