from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
import uvicorn

from commitvalidator.config import Config
from commitvalidator.github_client import GitHubClient
from commitvalidator.validation import PRValidator
from commitvalidator.webhooks import router as webhook_router


logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not Config.GITHUB_TOKEN:
        logger.warning("GITHUB_TOKEN is not set, GitHub API calls will be anonymous")

    app.state.github_client = GitHubClient(
        token=Config.GITHUB_TOKEN,
        base_url=Config.GITHUB_API_URL,
        timeout=Config.GITHUB_TIMEOUT,
        status_context=Config.STATUS_CONTEXT,
    )
    app.state.validator = PRValidator(
        forbidden_names=Config.FORBIDDEN_FILES,
        default_outcome=Config.VALIDATION_DEFAULT == "pass",
    )
    logger.info(
        f"Validating PR actions {sorted(Config.ACCEPTED_ACTIONS)} "
        f"against forbidden files {sorted(Config.FORBIDDEN_FILES)}"
    )

    yield

    logger.info("Shutting down")


app = FastAPI(title="commitvalidator", lifespan=lifespan)

@app.get("/")
def ping():
    return {"message": "commitvalidator"}

@app.get("/health")
def health():
    return {"status": "healthy"}

app.include_router(webhook_router)


def run():
    logger.info(f"Server listening on port {Config.PORT}")
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)


if __name__ == "__main__":
    run()
