"""Abstract base class for issue tracker providers."""

from abc import ABC, abstractmethod

from linear_ai.models import CreatedIssue, Team


class TrackerProvider(ABC):
    @abstractmethod
    def list_teams(self) -> list[Team]: ...

    @abstractmethod
    def create_issue(
        self,
        title: str,
        description: str | None,
        team_id: str,
    ) -> CreatedIssue: ...
