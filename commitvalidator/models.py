from pydantic import BaseModel, Field, model_validator
from typing import Any, Optional


class WebhookModel(BaseModel):
    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """JSON null means absent: a null body or field decodes to the defaults"""
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class PullRequestRef(WebhookModel):
    number: int = 0


class RepositoryOwner(WebhookModel):
    login: str = ""


class Repository(WebhookModel):
    name: str = ""
    owner: RepositoryOwner = Field(default_factory=RepositoryOwner)


class PullRequestEvent(WebhookModel):
    """Subset of a GitHub `pull_request` webhook payload.

    Every field is optional so that partial payloads still decode; the
    handler decides what is missing.
    """
    action: str = ""
    number: int = 0
    pull_request: Optional[PullRequestRef] = None
    repository: Optional[Repository] = None

    @property
    def pr_number(self) -> int:
        """PR number from `pull_request.number`, else top-level `number`. 0 means not found."""
        if self.pull_request and self.pull_request.number:
            return self.pull_request.number
        return self.number

    @property
    def owner(self) -> str:
        return self.repository.owner.login if self.repository else ""

    @property
    def repo(self) -> str:
        return self.repository.name if self.repository else ""


class ChangedFile(BaseModel):
    """A file changed in a PR, as returned by the list PR files endpoint"""
    filename: str
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    status: str = ""  # 'added', 'modified', 'removed', 'renamed'
    raw_url: Optional[str] = None
    blob_url: Optional[str] = None
    patch: Optional[str] = None  # missing for binary files

    def summary_line(self) -> str:
        return (
            f"{self.filename} (additions: {self.additions}, "
            f"deletions: {self.deletions}, changes: {self.changes})"
        )


class CommitStatus(BaseModel):
    state: str
    description: str
    context: str = "commitvalidator"


class ValidationResult(BaseModel):
    passed: bool
    forbidden_files: list[str] = Field(default_factory=list)

    @property
    def state(self) -> str:
        return "success" if self.passed else "failure"

    @property
    def description(self) -> str:
        return "PR validation passed." if self.passed else "PR validation failed."
