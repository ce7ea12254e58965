"""Tests for configuration loading and validation."""

import os
from unittest.mock import patch

import pytest

from shared_config import NAMESPACE, TEMPERATURE, TOP_K, load_config
from pdf_chat.errors import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every test where no config.yaml exists."""
    monkeypatch.chdir(tmp_path)


class TestRequiredSettings:
    """Test the four required environment variables."""

    def test_loads_defaults_from_complete_env(self, env) -> None:
        config = load_config(env=env)

        assert config.google_api_key == "test-key"
        assert config.milvus.uri == "http://localhost:19530"
        assert config.milvus.token == "test-token"
        assert config.milvus.collection_name == "test_docs"
        assert config.milvus.namespace == NAMESPACE == "pdf_docs"
        assert config.chunking.chunk_size == 1000
        assert config.chunking.chunk_overlap == 20
        assert config.chunking.strategy == "fixed"
        assert config.llm.temperature == TEMPERATURE == 0
        assert config.top_k == TOP_K == 4

    def test_missing_settings_are_all_named(self, env) -> None:
        """Should list every missing variable in one error."""
        del env["GOOGLE_API_KEY"]
        env["MILVUS_URI"] = "   "

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(env=env)

        assert exc_info.value.missing == ["GOOGLE_API_KEY", "MILVUS_URI"]
        assert "GOOGLE_API_KEY" in str(exc_info.value)
        assert "MILVUS_URI" in str(exc_info.value)

    def test_reads_dotenv_file(self, tmp_path) -> None:
        """Should load .env from the working directory when no env is given."""
        (tmp_path / ".env").write_text(
            "GOOGLE_API_KEY=from-dotenv\n"
            "MILVUS_TOKEN=tok\n"
            "MILVUS_COLLECTION=docs\n"
            "MILVUS_URI=http://milvus:19530\n"
        )

        with patch.dict(os.environ, {}, clear=True):
            config = load_config()

        assert config.google_api_key == "from-dotenv"
        assert config.milvus.collection_name == "docs"


class TestYamlConfig:
    """Test the optional YAML layer."""

    def test_overrides_from_default_config_file(self, tmp_path, env) -> None:
        (tmp_path / "config.yaml").write_text(
            "chunking:\n"
            "  chunk_size: 500\n"
            "  chunk_overlap: 50\n"
            "  strategy: recursive\n"
            "embedding:\n"
            "  batch_size: 25\n"
            "llm:\n"
            "  model: gemini-2.5-flash\n"
        )

        config = load_config(env=env)

        assert config.chunking.chunk_size == 500
        assert config.chunking.chunk_overlap == 50
        assert config.chunking.strategy == "recursive"
        assert config.embedding.batch_size == 25
        assert config.llm.model == "gemini-2.5-flash"
        assert config.llm.temperature == 0

    def test_config_path_from_environment(self, tmp_path, env) -> None:
        custom = tmp_path / "custom.yaml"
        custom.write_text("chunking:\n  chunk_size: 800\n")
        env["CONFIG_PATH"] = str(custom)

        assert load_config(env=env).chunking.chunk_size == 800

    def test_explicit_missing_file_raises(self, env) -> None:
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config("does-not-exist.yaml", env=env)

    def test_empty_file_uses_defaults(self, tmp_path, env) -> None:
        (tmp_path / "config.yaml").write_text("")

        assert load_config(env=env).chunking.chunk_size == 1000

    @pytest.mark.parametrize("content", [
        "chunking:\n  chunk_size: 100\n  chunk_overlap: 100\n",
        "chunking:\n  chunk_overlap: -1\n",
        "chunking:\n  strategy: semantic\n",
        "chunking:\n  chunk_size: big\n",
        "embedding:\n  batch_size: 0\n",
        "embedding:\n  model:\n",
        "llm:\n  model:\n",
        "llm:\n  model: \"  \"\n",
        "- just\n- a list\n",
    ])
    def test_invalid_values_raise(self, tmp_path, env, content) -> None:
        (tmp_path / "config.yaml").write_text(content)

        with pytest.raises(ConfigurationError):
            load_config(env=env)

    def test_blank_model_error_names_the_setting(self, tmp_path, env) -> None:
        """Should name the llm.model setting when it is left blank."""
        (tmp_path / "config.yaml").write_text("llm:\n  model:\n")

        with pytest.raises(ConfigurationError, match="llm.model must be a non-empty string"):
            load_config(env=env)
