import os
from dotenv import load_dotenv

load_dotenv()


def _csv(value: str) -> frozenset[str]:
    return frozenset(item.strip() for item in value.split(",") if item.strip())


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
    GITHUB_API_URL = os.getenv("GITHUB_API_URL") or "https://api.github.com"
    GITHUB_TIMEOUT = int(os.getenv("GITHUB_TIMEOUT") or "30")

    STATUS_CONTEXT = os.getenv("STATUS_CONTEXT") or "commitvalidator"

    # Validation rules
    ACCEPTED_ACTIONS = _csv(os.getenv("ACCEPTED_ACTIONS") or "opened")
    FORBIDDEN_FILES = _csv(os.getenv("FORBIDDEN_FILES") or "forbidden.txt")
    VALIDATION_DEFAULT = (os.getenv("VALIDATION_DEFAULT") or "pass").strip().lower()
    CLOSE_ON_FAILURE = _flag(os.getenv("CLOSE_ON_FAILURE") or "true")

    HOST = os.getenv("HOST") or "0.0.0.0"
    PORT = int(os.getenv("PORT") or "8080")
    LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()

    if VALIDATION_DEFAULT not in ("pass", "fail"):
        raise ValueError("VALIDATION_DEFAULT must be 'pass' or 'fail'")
