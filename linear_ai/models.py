"""Shared pydantic models — the contract between providers, the extractor and main.py."""

from pydantic import BaseModel, ConfigDict


class IssueProposal(BaseModel):
    """A title/description pair extracted by the model, not yet created."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    description: str


class IssueProposals(BaseModel):
    # Envelope the model is asked to return
    model_config = ConfigDict(frozen=True)

    issues: list[IssueProposal]


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    key: str | None = None  # Linear team key, e.g. ENG


class CreatedIssue(BaseModel):
    """Returned by create_issue — minimal, just what the caller needs."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    title: str
    url: str
