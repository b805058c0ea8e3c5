# pageimages/main.py
# Responsibility: Application entry point. Configures and launches the FastAPI app.

import uvicorn
from fastapi import FastAPI

from pageimages.config.settings import settings
from pageimages.routers import admin, page_images


def create_app() -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.
    """
    app = FastAPI(
        title="PageImages",
        description="Lead image selection for content pages.",
        version="1.0.0",
        debug=settings.SERVER.DEBUG
    )

    app.include_router(page_images.router)
    app.include_router(admin.router)

    @app.get("/health", tags=["System"])
    def health_check():
        return {"status": "ok", "version": "1.0.0"}

    return app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "pageimages.main:app",
        host=settings.SERVER.HOST,
        port=settings.SERVER.PORT,
        reload=settings.SERVER.DEBUG
    )
