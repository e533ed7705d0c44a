from cognition.config import CognitionSettings, load_config_file, object_by_path, string_by_path
from cognition.secrets import default_secrets_dir, get_secret


def test_object_by_path_walks_nested_mappings():
    config = {"models": {"openai": {"api_key": "sk-1", "params": {"top_p": 1}}}}

    assert object_by_path(config, "models.openai.params") == {"top_p": 1}
    assert string_by_path(config, "models.openai.api_key") == "sk-1"
    assert object_by_path(config, "models.textgen.server") is None
    assert object_by_path(config, "models.openai.api_key.deeper") is None
    # non-string leaves are not returned as strings
    assert string_by_path(config, "models.openai.params") is None


def test_load_config_file(tmp_path):
    path = tmp_path / "cognition.yaml"
    path.write_text("models:\n  openai:\n    api_key: from-file\n", encoding="utf-8")

    assert string_by_path(load_config_file(path), "models.openai.api_key") == "from-file"
    assert load_config_file(tmp_path / "missing.yaml") == {}
    assert load_config_file(None) == {}


def test_settings_from_env(monkeypatch, tmp_path, tmp_secrets_dir):
    config_path = tmp_path / "cognition.yaml"
    config_path.write_text(
        "models:\n  openai:\n    api_key: from-file\n  textgen:\n    server: http://gpu:7860\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("WOLFRAM_APP_ID", raising=False)
    monkeypatch.delenv("TEXTGEN_SERVER", raising=False)
    monkeypatch.setenv("COGNITION_CONFIG", str(config_path))
    monkeypatch.setenv("COGNITION_BACKEND", "TextGen")
    monkeypatch.setenv("COGNITION_STRICT_GRAPH", "yes")
    monkeypatch.setenv("COGNITION_TIMEOUT_S", "7.5")
    (tmp_secrets_dir / "WOLFRAM_APP_ID").write_text("APP-1\n", encoding="utf-8")

    settings = CognitionSettings.from_env()

    assert settings.backend == "textgen"
    assert settings.strict_graph is True
    assert settings.timeout_s == 7.5
    assert settings.textgen_server == "http://gpu:7860"
    assert settings.openai_api_key == "from-file"
    assert settings.wolfram_app_id == "APP-1"
    assert settings.agent_name == "Agent"


def test_secret_env_wins_over_files(monkeypatch, tmp_secrets_dir):
    (tmp_secrets_dir / "OPENAI_API_KEY").write_text("from-file", encoding="utf-8")
    monkeypatch.setenv("OPENAI_API_KEY", "from-env")

    assert get_secret("OPENAI_API_KEY") == "from-env"


def test_secret_dotenv_file(monkeypatch, tmp_secrets_dir):
    monkeypatch.delenv("WOLFRAM_APP_ID", raising=False)
    (tmp_secrets_dir / ".env").write_text("WOLFRAM_APP_ID=from-dotenv\n", encoding="utf-8")

    assert get_secret("WOLFRAM_APP_ID") == "from-dotenv"


def test_blank_env_secret_falls_through_to_file(monkeypatch, tmp_secrets_dir):
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    (tmp_secrets_dir / "OPENAI_API_KEY").write_text("sk-file\n", encoding="utf-8")

    assert get_secret("OPENAI_API_KEY") == "sk-file"
    assert get_secret("NOT_CONFIGURED_ANYWHERE") is None


def test_secrets_dir_defaults_next_to_config_file(monkeypatch, tmp_path):
    monkeypatch.delenv("COGNITION_SECRETS_DIR", raising=False)
    monkeypatch.delenv("WOLFRAM_APP_ID", raising=False)
    config_dir = tmp_path / "conf"
    (config_dir / "secrets").mkdir(parents=True)
    (config_dir / "secrets" / "WOLFRAM_APP_ID").write_text("APP-CONF", encoding="utf-8")
    monkeypatch.setenv("COGNITION_CONFIG", str(config_dir / "cognition.yaml"))

    assert default_secrets_dir() == config_dir / "secrets"
    assert get_secret("WOLFRAM_APP_ID") == "APP-CONF"


def test_secrets_dir_defaults_to_working_directory(monkeypatch, tmp_path):
    monkeypatch.delenv("COGNITION_SECRETS_DIR", raising=False)
    monkeypatch.delenv("COGNITION_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)

    assert default_secrets_dir() == tmp_path / "secrets"
