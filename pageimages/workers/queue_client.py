# pageimages/workers/queue_client.py
# Responsibility: Client interface for enqueueing page image jobs to Redis Queue (RQ).

from typing import Any, Dict, List

import redis
from rq import Queue

from pageimages.config.settings import settings
from pageimages.workers.job import perform_page_images_job


class PageImagesQueueClient:
    """
    Facade for the page images job queue.
    Abstracts away the details of Redis/RQ connection.
    """

    def __init__(self):
        self.redis_conn = redis.from_url(settings.REDIS.URL)
        self.queue = Queue(settings.REDIS.QUEUE_NAME, connection=self.redis_conn)

    def enqueue_page(self, page_id: int, candidates: List[Dict[str, Any]]) -> str:
        job = self.queue.enqueue(
            perform_page_images_job,
            page_id,
            candidates,
            job_timeout=settings.REDIS.JOB_TIMEOUT
        )
        return job.get_id()

    def get_queue_info(self) -> Dict[str, Any]:
        return {
            "queue_name": self.queue.name,
            "job_count": self.queue.count,
            "is_empty": self.queue.is_empty(),
            "connection_status": "connected" if self.redis_conn.ping() else "disconnected"
        }
