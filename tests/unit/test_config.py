"""Unit tests for GatewayConfig and ClientConfig.

Tests configuration validation and environment loading.
"""

import pytest
from pydantic import ValidationError

from yuno.chat.config import ClientConfig, get_client_config
from yuno.gateway.config import (
    DEFAULT_GATEWAY_URL,
    DEFAULT_MODEL,
    GatewayConfig,
    get_gateway_config,
)


class TestGatewayConfig:
    """Tests for GatewayConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts explicit values for all fields."""
        config = GatewayConfig(
            api_key="gw-key-12345",
            base_url="https://example.test/v1/chat/completions",
            model_name="openai/gpt-4o-mini",
            vision_model="openai/gpt-4o",
        )

        assert config.api_key == "gw-key-12345"
        assert config.base_url == "https://example.test/v1/chat/completions"
        assert config.model_name == "openai/gpt-4o-mini"
        assert config.vision_model == "openai/gpt-4o"

    def test_config_with_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults apply when only the API key is provided."""
        for name in ("LLM_GATEWAY_URL", "LLM_MODEL", "LLM_VISION_MODEL"):
            monkeypatch.delenv(name, raising=False)

        config = GatewayConfig(api_key="gw-key")

        assert config.base_url == DEFAULT_GATEWAY_URL
        assert config.model_name == DEFAULT_MODEL
        assert config.vision_model == DEFAULT_MODEL

    def test_vision_model_follows_model_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LLM_VISION_MODEL", raising=False)

        config = GatewayConfig(api_key="gw-key", model_name="custom/model")

        assert config.vision_model == "custom/model"

    def test_config_fails_with_missing_api_key(self) -> None:
        """Config raises when API key is missing."""
        with pytest.raises(ValidationError) as exc_info:
            GatewayConfig(api_key="")

        assert "LLM_API_KEY is not configured" in str(exc_info.value)

    def test_config_fails_with_whitespace_api_key(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GatewayConfig(api_key="   ")

        assert "LLM_API_KEY is not configured" in str(exc_info.value)

    def test_config_strips_api_key_whitespace(self) -> None:
        config = GatewayConfig(api_key="  gw-key  ")

        assert config.api_key == "gw-key"

    def test_get_config_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_gateway_config reads the environment at call time."""
        monkeypatch.setenv("LLM_API_KEY", "gw-env-key")
        monkeypatch.setenv("LLM_MODEL", "env/model")
        monkeypatch.delenv("LLM_VISION_MODEL", raising=False)

        config = get_gateway_config()

        assert config.api_key == "gw-env-key"
        assert config.model_name == "env/model"
        assert config.vision_model == "env/model"

    def test_get_config_fails_without_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LLM_API_KEY", raising=False)

        with pytest.raises(ValidationError) as exc_info:
            get_gateway_config()

        assert "LLM_API_KEY is not configured" in str(exc_info.value)

    def test_environment_api_key_is_stripped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_API_KEY", "  gw-env-key \n")

        assert get_gateway_config().api_key == "gw-env-key"

    def test_blank_environment_api_key_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_API_KEY", "   ")

        with pytest.raises(ValidationError):
            get_gateway_config()


class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("YUNO_CHAT_URL", "YUNO_PUBLISHABLE_KEY", "YUNO_DATABASE_URL"):
            monkeypatch.delenv(name, raising=False)

        config = get_client_config()

        assert config.chat_url == "http://localhost:8000/chat"
        assert config.api_key == ""
        assert config.database_url == "sqlite:///data/yuno.db"
        assert config.request_timeout == 120.0

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("YUNO_CHAT_URL", " https://api.yuno.test/chat ")
        monkeypatch.setenv("YUNO_PUBLISHABLE_KEY", " pk-live ")

        config = ClientConfig()

        assert config.chat_url == "https://api.yuno.test/chat"
        assert config.api_key == "pk-live"

    def test_rejects_non_http_url(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(chat_url="ftp://example.test/chat")

        assert "YUNO_CHAT_URL" in str(exc_info.value)

    def test_rejects_non_http_url_from_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("YUNO_CHAT_URL", "localhost:8000/chat")

        with pytest.raises(ValidationError) as exc_info:
            get_client_config()

        assert "YUNO_CHAT_URL" in str(exc_info.value)

    @pytest.mark.parametrize("timeout", [0.0, -1.0, 601.0])
    def test_rejects_out_of_range_timeout(self, timeout: float) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(request_timeout=timeout)

        assert "request_timeout" in str(exc_info.value)
