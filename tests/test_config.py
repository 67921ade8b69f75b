import pytest
from pydantic import ValidationError

from config import (
    PROFILES,
    EnvOverrides,
    get_env_var,
    is_ci,
    is_headless,
    resolve_config,
)


NUMERIC_FIELDS = ("timeout", "retries", "slow_mo")


@pytest.mark.parametrize("env_name", sorted(PROFILES))
def test_profiles_resolve_to_non_negative_integers(env_name):
    config = resolve_config(env_name, overrides={})

    assert config.environment == env_name
    for field in NUMERIC_FIELDS:
        value = getattr(config, field)
        assert isinstance(value, int) and value >= 0
    assert config.viewport.width > 0 and config.viewport.height > 0
    assert config.base_url.startswith(("http://", "https://"))
    assert not config.base_url.endswith("/")


def test_unknown_environment_falls_back_to_development():
    config = resolve_config("qa-lab", overrides={})
    assert config.environment == "development"
    assert config.base_url == PROFILES["development"]["BASE_URL"]


def test_node_env_selects_profile_when_no_name_given():
    config = resolve_config(overrides={"NODE_ENV": "staging"})
    assert config.environment == "staging"


def test_overrides_win_over_profile_literals():
    config = resolve_config("development", overrides={
        "BASE_URL": "http://localhost:8080/",
        "TIMEOUT": "5000",
        "RETRIES": " 4 ",
        "VIEWPORT_WIDTH": "375",
        "VALID_USERNAME": "someone",
    })
    assert config.base_url == "http://localhost:8080"
    assert config.timeout == 5000
    assert config.retries == 4
    assert config.viewport.width == 375
    assert config.viewport.height == 720
    assert config.test_data.valid_user.username == "someone"
    assert config.test_data.valid_user.password == "123"


@pytest.mark.parametrize("raw", ["abc", "12.5", "1e3", "-1", "0x10"])
def test_unparseable_numeric_override_falls_back_to_default(raw):
    config = resolve_config("development", overrides={"TIMEOUT": raw, "SLOW_MO": raw})
    assert config.timeout == 30000
    assert config.slow_mo == 0


def test_empty_override_is_ignored():
    config = resolve_config("development", overrides={"BASE_URL": "", "TIMEOUT": ""})
    assert config.base_url == "https://www.demoblaze.com"
    assert config.timeout == 30000


def test_development_is_headed_unless_headless_is_true():
    assert resolve_config("development", overrides={}).headless is False
    assert resolve_config("development", overrides={"HEADLESS": "yes"}).headless is False
    assert resolve_config("development", overrides={"HEADLESS": "true"}).headless is True


def test_staging_is_headless_unless_headless_is_false():
    assert resolve_config("staging", overrides={}).headless is True
    assert resolve_config("staging", overrides={"HEADLESS": "0"}).headless is True
    assert resolve_config("staging", overrides={"HEADLESS": "false"}).headless is False


def test_production_ignores_headless_and_slow_mo_overrides():
    config = resolve_config("production", overrides={"HEADLESS": "false", "SLOW_MO": "500"})
    assert config.headless is True
    assert config.slow_mo == 0


def test_default_valid_user_matches_shop_account():
    user = resolve_config("production", overrides={}).test_data.valid_user
    assert (user.username, user.password) == ("joaquinprueba123", "123")


def test_empty_search_policy():
    assert resolve_config(overrides={}).empty_search == "noop"
    assert resolve_config(overrides={"EMPTY_SEARCH": "ERROR"}).empty_search == "error"
    assert resolve_config(overrides={"EMPTY_SEARCH": "explode"}).empty_search == "noop"


def test_config_is_immutable():
    config = resolve_config(overrides={})
    with pytest.raises(ValidationError):
        config.timeout = 1
    with pytest.raises(ValidationError):
        config.viewport.width = 1


def test_reads_process_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NODE_ENV", "staging")
    monkeypatch.setenv("TIMEOUT", "12000")
    monkeypatch.setenv("CI", "1")

    assert EnvOverrides().as_mapping()["TIMEOUT"] == "12000"
    config = resolve_config()
    assert config.environment == "staging"
    assert config.timeout == 12000
    assert config.ci is True


def test_reads_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RETRIES", raising=False)
    (tmp_path / ".env").write_text("RETRIES=5\n")

    assert resolve_config("development").retries == 5


def test_env_helpers(monkeypatch):
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("HEADLESS", raising=False)
    monkeypatch.setenv("SOME_KEY", "value")

    assert get_env_var("SOME_KEY") == "value"
    assert get_env_var("MISSING_KEY", "fallback") == "fallback"
    assert is_ci() is False
    assert is_headless() is False

    monkeypatch.setenv("CI", "true")
    assert is_ci() is True
    assert is_headless() is True


def test_is_headless_honours_ci_flag_in_config():
    config = resolve_config("development", overrides={"CI": "1"})
    assert config.headless is False
    assert is_headless(config) is True
