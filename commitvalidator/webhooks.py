from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
import logging

from .config import Config
from .github_client import GitHubAPIError, GitHubClient
from .models import PullRequestEvent
from .validation import PRValidator

logger = logging.getLogger(__name__)

router = APIRouter()

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def get_github_client(request: Request) -> GitHubClient:
    return request.app.state.github_client


def get_validator(request: Request) -> PRValidator:
    return request.app.state.validator


@router.post("/webhook", response_class=PlainTextResponse)
async def handle_pr_webhook(
    request: Request,
    github: GitHubClient = Depends(get_github_client),
    validator: PRValidator = Depends(get_validator),
):
    # Always answer 200 so GitHub never marks the hook as failing and redelivers
    payload = await read_payload(request)

    try:
        event = PullRequestEvent.model_validate_json(payload)
    except ValidationError as e:
        logger.warning(f"Could not parse PR event: {e}")
        logger.warning(f"Raw payload: {payload!r}")
        return PlainTextResponse("Webhook received, but could not parse PR event")

    if event.action not in Config.ACCEPTED_ACTIONS:
        logger.info(f"Ignoring PR event with action: {event.action}")
        return PlainTextResponse(f"Ignoring PR event with action: {event.action}")

    pr_number = event.pr_number
    if pr_number == 0:
        logger.warning("No PR number found in event")
        return PlainTextResponse("No PR number found")

    logger.info(f"PR #{pr_number} {event.action} for repo {event.owner}/{event.repo}")

    try:
        body = await process_pr_event(event.owner, event.repo, pr_number, github, validator)
    except Exception as e:
        logger.error(f"Failed to process PR #{pr_number}: {e}", exc_info=True)
        return PlainTextResponse("Error processing PR event")

    return PlainTextResponse(body)


async def read_payload(request: Request) -> bytes:
    """Raw JSON body, or the `payload` field of a form-encoded delivery"""
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != FORM_CONTENT_TYPE:
        return await request.body()

    try:
        form = await request.form()
    except Exception as e:
        logger.warning(f"Could not parse form body: {e}")
        return b""

    payload = form.get("payload")
    if not isinstance(payload, str):
        logger.warning("Form body has no payload field")
        return b""
    return payload.encode("utf-8")


async def process_pr_event(
    owner: str,
    repo: str,
    pr_number: int,
    github: GitHubClient,
    validator: PRValidator,
) -> str:
    """Fetch, validate, report and (on failure) close. Returns the response text."""
    try:
        files = await github.fetch_pr_files(owner, repo, pr_number)
    except GitHubAPIError as e:
        logger.error(f"Error fetching PR files: {e}")
        return "Error fetching PR files"

    logger.info(f"Changed files in PR #{pr_number}:")
    for f in files:
        logger.info(f"- {f.summary_line()}")

    result = validator.validate(files)

    try:
        await github.update_pr_status(owner, repo, pr_number, result.state, result.description)
    except GitHubAPIError as e:
        logger.error(f"Error updating PR status: {e}")

    if not result.passed and Config.CLOSE_ON_FAILURE:
        try:
            await github.close_pull_request(owner, repo, pr_number)
        except GitHubAPIError as e:
            logger.error(f"Error closing PR: {e}")
        else:
            logger.info(f"PR #{pr_number} closed due to failed validation.")

    lines = [
        f"PR #{pr_number} validation complete. Status: {result.state}",
        "Files changed in PR:",
    ]
    lines.extend(f"- {f.summary_line()}" for f in files)
    return "\n".join(lines) + "\n"
