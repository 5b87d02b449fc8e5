"""Application settings and the on-disk credential store."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".linear-ai-cli"
CONFIG_FILE = "api-keys.json"
DEFAULT_MODEL = "gpt-4o"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LINEAR_AI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_dir: Path = CONFIG_DIR
    model: str = DEFAULT_MODEL

    @property
    def credentials_path(self) -> Path:
        return self.config_dir / CONFIG_FILE


class Credentials(BaseModel):
    """The two stored API keys, serialized as openAiKey / linearKey."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    openai_api_key: SecretStr | None = Field(default=None, alias="openAiKey")
    linear_api_key: SecretStr | None = Field(default=None, alias="linearKey")

    @property
    def is_configured(self) -> bool:
        return bool(
            self.openai_api_key
            and self.openai_api_key.get_secret_value()
            and self.linear_api_key
            and self.linear_api_key.get_secret_value()
        )


class CredentialStore:
    """Single-record JSON store for Credentials at a fixed path."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Credentials:
        """Read the credential file.

        A missing file yields empty credentials. A file that is not a JSON
        object, is unreadable, or whose fields are not strings, raises RuntimeError.
        """
        if not self.path.exists():
            logger.debug("No credential file at %s", self.path)
            return Credentials()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RuntimeError(f"{self.path} is not valid JSON: {exc}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise RuntimeError(f"{self.path} could not be read: {exc}") from exc
        if not isinstance(data, dict):
            raise RuntimeError(f"{self.path} must contain a JSON object")
        try:
            return Credentials.model_validate(data)
        except ValidationError as exc:
            raise RuntimeError(f"{self.path} has malformed API keys: {exc}") from exc

    def save(self, credentials: Credentials) -> None:
        """Overwrite the credential file with both keys, creating its directory."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "openAiKey": _reveal(credentials.openai_api_key),
            "linearKey": _reveal(credentials.linear_api_key),
        }
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.debug("Wrote credential file %s", self.path)


def _reveal(secret: SecretStr | None) -> str | None:
    return secret.get_secret_value() if secret is not None else None


def get_settings() -> AppSettings:
    return AppSettings()


def get_store(settings: AppSettings | None = None) -> CredentialStore:
    settings = settings or get_settings()
    return CredentialStore(settings.credentials_path)
