import logging
from typing import Iterable, Optional

from .models import ChangedFile, ValidationResult

logger = logging.getLogger(__name__)

DEFAULT_FORBIDDEN_FILES = frozenset({"forbidden.txt"})


def validate_pr(
    files: Iterable[ChangedFile],
    forbidden_names: Iterable[str] = DEFAULT_FORBIDDEN_FILES,
    default: bool = True,
) -> bool:
    """
    Run the validation rule over the files changed in a PR.

    Returns False as soon as a filename exactly matches a forbidden name,
    otherwise `default`.
    """
    forbidden = set(forbidden_names)
    for f in files:
        if f.filename in forbidden:
            return False
    return default


class PRValidator:
    """Validation rule set, configured once at startup"""

    def __init__(self, forbidden_names: Optional[Iterable[str]] = None, default_outcome: bool = True) -> None:
        if forbidden_names is None:
            forbidden_names = DEFAULT_FORBIDDEN_FILES
        self.forbidden_names = frozenset(forbidden_names)
        self.default_outcome = default_outcome

    def validate(self, files: list[ChangedFile]) -> ValidationResult:
        offending = [f.filename for f in files if f.filename in self.forbidden_names]
        passed = validate_pr(files, self.forbidden_names, self.default_outcome)

        if offending:
            logger.info(f"Forbidden files in PR: {', '.join(offending)}")
        elif not passed:
            logger.info("No forbidden files found, failing by default")

        return ValidationResult(passed=passed, forbidden_files=offending)
