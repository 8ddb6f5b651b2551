import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from jobcrawler.core.config import settings
from jobcrawler.routes import crawler_routes, job_routes

# Configure only if not already configured
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.PROJECT_NAME} starting (renderer: {settings.RENDERER})")
    yield
    # A crawl cut short by shutdown may leave the browser running
    crawler_routes.orchestrator.renderer.close()


app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)

app.include_router(crawler_routes.router, prefix="/api", tags=["Crawler"])
app.include_router(job_routes.router, prefix="/api", tags=["Jobs"])


@app.get("/")
def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


def run():
    """Serve the API with uvicorn (`jobcrawler` console script)."""
    uvicorn.run(
        "jobcrawler.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
