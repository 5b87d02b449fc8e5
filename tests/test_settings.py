"""Tests for linear_ai.settings — settings resolution and the credential store."""

import json
from pathlib import Path

import pytest

from linear_ai.settings import (
    CONFIG_DIR,
    DEFAULT_MODEL,
    AppSettings,
    CredentialStore,
    Credentials,
    get_settings,
    get_store,
)


class TestAppSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LINEAR_AI_CONFIG_DIR", raising=False)
        s = AppSettings(_env_file=None)  # type: ignore[call-arg]
        assert s.config_dir == CONFIG_DIR
        assert s.model == DEFAULT_MODEL == "gpt-4o"
        assert s.credentials_path == Path.home() / ".linear-ai-cli" / "api-keys.json"

    def test_env_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINEAR_AI_CONFIG_DIR", str(tmp_path))
        monkeypatch.setenv("LINEAR_AI_MODEL", "gpt-4o-mini")
        s = get_settings()
        assert s.config_dir == tmp_path
        assert s.model == "gpt-4o-mini"

    def test_get_store_uses_config_dir(self, credentials_path: Path) -> None:
        assert get_store().path == credentials_path


class TestCredentials:
    def test_configured_when_both_present(self) -> None:
        assert Credentials(openai_api_key="sk", linear_api_key="lin").is_configured

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"openAiKey": "sk"},
            {"linearKey": "lin"},
            {"openAiKey": "", "linearKey": "lin"},
        ],
    )
    def test_not_configured_when_field_missing(self, data: dict) -> None:
        assert not Credentials.model_validate(data).is_configured

    def test_secrets_not_in_repr(self) -> None:
        creds = Credentials(openai_api_key="sk-secret", linear_api_key="lin_api_secret")
        assert "sk-secret" not in repr(creds)


class TestCredentialStore:
    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        creds = CredentialStore(tmp_path / "nope.json").load()
        assert creds.openai_api_key is None
        assert creds.linear_api_key is None
        assert not creds.is_configured

    def test_save_creates_directory_and_round_trips(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "api-keys.json"
        store = CredentialStore(path)
        store.save(Credentials(openai_api_key="sk-abc", linear_api_key="lin_api_xyz"))

        loaded = store.load()
        assert loaded.openai_api_key is not None
        assert loaded.openai_api_key.get_secret_value() == "sk-abc"
        assert loaded.linear_api_key is not None
        assert loaded.linear_api_key.get_secret_value() == "lin_api_xyz"

    def test_file_format(self, tmp_path: Path) -> None:
        path = tmp_path / "api-keys.json"
        CredentialStore(path).save(Credentials(openai_api_key="sk", linear_api_key="lin"))
        assert path.read_text() == '{\n  "openAiKey": "sk",\n  "linearKey": "lin"\n}'

    def test_save_overwrites_wholesale(self, tmp_path: Path) -> None:
        path = tmp_path / "api-keys.json"
        path.write_text(json.dumps({"openAiKey": "old", "linearKey": "old", "extra": 1}))
        CredentialStore(path).save(Credentials(openai_api_key="new-sk", linear_api_key="new-lin"))
        assert json.loads(path.read_text()) == {"openAiKey": "new-sk", "linearKey": "new-lin"}

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "api-keys.json"
        path.write_text("{not json")
        with pytest.raises(RuntimeError, match="not valid JSON"):
            CredentialStore(path).load()

    def test_non_object_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "api-keys.json"
        path.write_text("[1, 2]")
        with pytest.raises(RuntimeError, match="JSON object"):
            CredentialStore(path).load()

    def test_non_string_key_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "api-keys.json"
        path.write_text(json.dumps({"openAiKey": 123, "linearKey": "lin"}))
        with pytest.raises(RuntimeError, match="malformed"):
            CredentialStore(path).load()

    def test_invalid_utf8_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "api-keys.json"
        path.write_bytes(b'{"openAiKey": "\xff\xfe"}')
        with pytest.raises(RuntimeError, match="could not be read"):
            CredentialStore(path).load()

    def test_directory_in_place_of_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "api-keys.json"
        path.mkdir()
        with pytest.raises(RuntimeError, match="could not be read"):
            CredentialStore(path).load()
