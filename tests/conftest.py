"""Shared test fixtures."""

from pathlib import Path

import pytest

from linear_ai.models import CreatedIssue, IssueProposal, Team
from linear_ai.settings import CONFIG_FILE, CredentialStore, Credentials


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the credential store at a temp dir for every test."""
    config_dir = tmp_path / ".linear-ai-cli"
    monkeypatch.setenv("LINEAR_AI_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("LINEAR_AI_MODEL", raising=False)
    return config_dir


@pytest.fixture
def credentials_path(isolated_config: Path) -> Path:
    return isolated_config / CONFIG_FILE


@pytest.fixture
def stored_credentials(credentials_path: Path) -> Credentials:
    credentials = Credentials(openai_api_key="sk-test-openai", linear_api_key="lin_api_test")
    CredentialStore(credentials_path).save(credentials)
    return credentials


@pytest.fixture
def proposals() -> list[IssueProposal]:
    return [
        IssueProposal(title="Fix login bug", description="Users cannot log in with SSO."),
        IssueProposal(title="Add dark mode", description="Support a dark color scheme."),
    ]


@pytest.fixture
def sample_team() -> Team:
    return Team(id="team_eng", name="Engineering", key="ENG")


@pytest.fixture
def created_issue() -> CreatedIssue:
    return CreatedIssue(
        identifier="ENG-456",
        title="New issue",
        url="https://linear.app/team/issue/ENG-456",
    )
