# pageimages/workers/page_images_worker.py
# Responsibility: Runs the RQ worker that processes page image jobs.

import sys

import redis
from rq import Queue, Worker

from pageimages.config.settings import settings


def start_worker():
    redis_url = settings.REDIS.URL
    queue_name = settings.REDIS.QUEUE_NAME

    try:
        conn = redis.from_url(redis_url)
        queue = Queue(queue_name, connection=conn)
        print(f"[Worker] Starting worker on queue: '{queue_name}'")
        worker = Worker([queue], connection=conn)
        worker.work()
    except Exception as e:
        print(f"[Worker] Fatal error: {e}")
        sys.exit(1)

if __name__ == '__main__':
    start_worker()
