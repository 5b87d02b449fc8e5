"""Linear GraphQL API provider."""

import logging

import httpx

from linear_ai.models import CreatedIssue, Team
from linear_ai.providers.base import TrackerProvider

logger = logging.getLogger(__name__)

ENDPOINT = "https://api.linear.app/graphql"

_LIST_TEAMS = """
query ListTeams {
  teams {
    nodes {
      id
      name
      key
    }
  }
}
"""

_CREATE_ISSUE = """
mutation CreateIssue($title: String!, $description: String, $teamId: String!) {
  issueCreate(input: {
    title: $title
    description: $description
    teamId: $teamId
  }) {
    success
    issue {
      id
      identifier
      title
      url
    }
  }
}
"""


class LinearProvider(TrackerProvider):
    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise RuntimeError("Linear API key is required")
        self._api_key = api_key

    def _gql(self, query: str, variables: dict | None = None) -> dict:
        response = httpx.post(
            ENDPOINT,
            json={"query": query, "variables": variables or {}},
            headers={
                "Authorization": self._api_key,
                "Content-Type": "application/json",
            },
            timeout=30,
        )
        if response.status_code == 401:
            raise RuntimeError("Linear API returned 401. Run linear-ai-cli init to update your API keys.")
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as exc:
            raise RuntimeError("Linear API returned an unexpected response") from exc
        if not isinstance(data, dict):
            raise RuntimeError("Linear API returned an unexpected response")
        if "errors" in data:
            raise RuntimeError(f"Linear API error: {data['errors']}")
        if not data.get("data"):
            raise RuntimeError("Linear API returned an unexpected response")
        return data["data"]

    def list_teams(self) -> list[Team]:
        data = self._gql(_LIST_TEAMS)
        teams = [Team(id=n["id"], name=n["name"], key=n.get("key")) for n in data["teams"]["nodes"]]
        logger.debug("Fetched %d team(s) from Linear", len(teams))
        return teams

    def create_issue(
        self,
        title: str,
        description: str | None,
        team_id: str,
    ) -> CreatedIssue:
        data = self._gql(
            _CREATE_ISSUE,
            {
                "title": title,
                "description": description,
                "teamId": team_id,
            },
        )
        result = data["issueCreate"]
        if not result["success"]:
            raise RuntimeError("Linear issueCreate returned success=false")
        issue = result["issue"]
        logger.debug("Created Linear issue %s", issue["identifier"])
        return CreatedIssue(
            identifier=issue["identifier"],
            title=issue["title"],
            url=issue["url"],
        )
