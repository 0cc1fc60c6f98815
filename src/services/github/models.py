from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SUPPORTED_ACTIONS = ("opened", "synchronize")


class User(BaseModel):
    """GitHub user information."""

    model_config = ConfigDict(extra="ignore")

    login: str


class Repository(BaseModel):
    """GitHub repository information."""

    model_config = ConfigDict(extra="ignore")

    name: str
    owner: User


class PullRequest(BaseModel):
    """Pull request information from GitHub."""

    model_config = ConfigDict(populate_by_name=True)

    number: int
    title: str = ""
    body: str | None = None


class PullRequestContext(BaseModel):
    """Read-only pull request context threaded into every prompt."""

    owner: str
    repo: str
    pull_number: int
    title: str = ""
    description: str = ""

    @classmethod
    def from_pull_request(cls, owner: str, repo: str, pr: PullRequest) -> "PullRequestContext":
        return cls(
            owner=owner,
            repo=repo,
            pull_number=pr.number,
            title=pr.title or "",
            description=pr.body or "",
        )


class ReviewComment(BaseModel):
    """A review comment to post on a PR."""

    path: str
    line: int
    body: str


class Review(BaseModel):
    """A complete review to submit."""

    event: Literal["COMMENT"] = "COMMENT"
    comments: list[ReviewComment] = Field(default_factory=list)


class PullRequestEvent(BaseModel):
    """Trigger payload of a `pull_request` workflow run."""

    model_config = ConfigDict(extra="ignore")

    action: str
    number: int
    repository: Repository
    before: str | None = None
    after: str | None = None

    @property
    def owner(self) -> str:
        return self.repository.owner.login

    @property
    def repo(self) -> str:
        return self.repository.name

    @property
    def is_supported(self) -> bool:
        return self.action in SUPPORTED_ACTIONS
