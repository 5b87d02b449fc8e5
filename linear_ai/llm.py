"""OpenAI-backed extraction of issue proposals from free-form text."""

import logging

from openai import OpenAI
from pydantic import ValidationError

from linear_ai.models import IssueProposal, IssueProposals
from linear_ai.settings import DEFAULT_MODEL

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = "Convert the following text to linear issues: {text}"

# Strict structured-output schema: every property required, nothing extra
ISSUES_SCHEMA = {
    "type": "object",
    "properties": {
        "issues": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "description": {"type": "string"},
                },
                "required": ["title", "description"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["issues"],
    "additionalProperties": False,
}


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=text)


class IssueExtractor:
    """Turns text into IssueProposals with a single structured completion."""

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL) -> None:
        if not api_key:
            raise RuntimeError("OpenAI API key is required")
        self._client = OpenAI(api_key=api_key)
        self.model = model

    def extract(self, text: str) -> list[IssueProposal]:
        """Ask the model for issue proposals describing ``text``.

        Raises:
            openai.OpenAIError: the API call failed.
            RuntimeError: the model returned content that does not match the schema.
        """
        logger.debug("Requesting issue proposals from %s (%d chars of input)", self.model, len(text))
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": build_prompt(text)}],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "issue_proposals",
                    "strict": True,
                    "schema": ISSUES_SCHEMA,
                },
            },
        )
        content = response.choices[0].message.content or ""
        try:
            proposals = IssueProposals.model_validate_json(content).issues
        except ValidationError as exc:
            raise RuntimeError(f"Model returned malformed issue proposals: {exc}") from exc
        logger.debug("Model proposed %d issue(s)", len(proposals))
        return proposals
