import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils import logger


DEFAULT_ENVIRONMENT = "development"
EMPTY_SEARCH_POLICIES = ("noop", "error")


class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    password: str
    email: str = ""


class ScenarioUsers(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid_user: Credentials
    invalid_user: Credentials


class EnvironmentConfig(BaseModel):
    """Resolved settings for one run. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    environment: str
    base_url: str
    api_url: str

    # Timeouts (ms)
    timeout: int = Field(ge=0)
    retries: int = Field(ge=0)

    # Playwright
    headless: bool
    slow_mo: int = Field(ge=0)
    viewport: Viewport

    user: Credentials
    test_data: ScenarioUsers

    ci: bool = False
    empty_search: str = "noop"


class EnvOverrides(BaseSettings):
    """Raw override strings, read from the process environment or `.env`."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    node_env: Optional[str] = None
    base_url: Optional[str] = None
    api_url: Optional[str] = None
    timeout: Optional[str] = None
    retries: Optional[str] = None
    headless: Optional[str] = None
    slow_mo: Optional[str] = None
    viewport_width: Optional[str] = None
    viewport_height: Optional[str] = None
    test_username: Optional[str] = None
    test_password: Optional[str] = None
    test_email: Optional[str] = None
    valid_username: Optional[str] = None
    valid_password: Optional[str] = None
    valid_email: Optional[str] = None
    invalid_username: Optional[str] = None
    invalid_password: Optional[str] = None
    ci: Optional[str] = None
    empty_search: Optional[str] = None

    def as_mapping(self) -> dict:
        return {
            name.upper(): value
            for name, value in self.model_dump(exclude_none=True).items()
        }


# Literal defaults per environment. Keys mirror the environment variables.
PROFILES = {
    "development": {
        "BASE_URL": "https://www.demoblaze.com",
        "API_URL": "https://api.demoblaze.com",
        "TIMEOUT": 30000,
        "RETRIES": 2,
        "HEADLESS": False,
        "SLOW_MO": 0,
        "VIEWPORT_WIDTH": 1280,
        "VIEWPORT_HEIGHT": 720,
        "TEST_USERNAME": "testuser",
        "TEST_PASSWORD": "testpass123",
        "TEST_EMAIL": "test@example.com",
        "VALID_USERNAME": "joaquinprueba123",
        "VALID_PASSWORD": "123",
        "VALID_EMAIL": "valid@example.com",
        "INVALID_USERNAME": "invaliduser",
        "INVALID_PASSWORD": "invalidpass",
    },
    "staging": {
        "BASE_URL": "https://staging.demoblaze.com",
        "API_URL": "https://api.staging.demoblaze.com",
        "TIMEOUT": 30000,
        "RETRIES": 2,
        "HEADLESS": True,
        "SLOW_MO": 0,
        "VIEWPORT_WIDTH": 1280,
        "VIEWPORT_HEIGHT": 720,
        "TEST_USERNAME": "staginguser",
        "TEST_PASSWORD": "stagingpass123",
        "TEST_EMAIL": "staging@example.com",
        "VALID_USERNAME": "stagingvaliduser",
        "VALID_PASSWORD": "stagingvalidpass123",
        "VALID_EMAIL": "stagingvalid@example.com",
        "INVALID_USERNAME": "staginginvaliduser",
        "INVALID_PASSWORD": "staginginvalidpass",
    },
    "production": {
        "BASE_URL": "https://www.demoblaze.com",
        "API_URL": "https://api.demoblaze.com",
        "TIMEOUT": 30000,
        "RETRIES": 2,
        "HEADLESS": True,
        "SLOW_MO": 0,
        "VIEWPORT_WIDTH": 1280,
        "VIEWPORT_HEIGHT": 720,
        "TEST_USERNAME": "produser",
        "TEST_PASSWORD": "prodpass123",
        "TEST_EMAIL": "prod@example.com",
        "VALID_USERNAME": "joaquinprueba123",
        "VALID_PASSWORD": "123",
        "VALID_EMAIL": "prodvalid@example.com",
        "INVALID_USERNAME": "prodinvaliduser",
        "INVALID_PASSWORD": "prodinvalidpass",
    },
}

# Production never runs headed or slowed down, whatever the environment says.
LOCKED_KEYS = {
    "production": ("HEADLESS", "SLOW_MO"),
}


def _string(overrides: Mapping[str, str], key: str, default: str) -> str:
    value = overrides.get(key)
    if value is None or not str(value).strip():
        return default
    return str(value).strip()


def _integer(overrides: Mapping[str, str], key: str, default: int) -> int:
    raw = overrides.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        value = int(str(raw).strip(), 10)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", key, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r: negative, using %d", key, raw, default)
        return default
    return value


def _headless(overrides: Mapping[str, str], default: bool) -> bool:
    raw = overrides.get("HEADLESS")
    if raw is None:
        return default
    # A headed profile only flips on an explicit "true", a headless one on "false".
    if default:
        return raw != "false"
    return raw == "true"


def _empty_search(overrides: Mapping[str, str]) -> str:
    raw = _string(overrides, "EMPTY_SEARCH", "noop").lower()
    if raw not in EMPTY_SEARCH_POLICIES:
        logger.warning("Ignoring EMPTY_SEARCH=%r, using 'noop'", raw)
        return "noop"
    return raw


def resolve_config(
    env_name: Optional[str] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> EnvironmentConfig:
    """Resolve the named environment profile, applying overrides.

    ``overrides`` is keyed by environment variable name (``BASE_URL``,
    ``TIMEOUT``...). When omitted it is read once from the process
    environment and the optional ``.env`` file. Unknown environment names
    fall back to the development profile, and unusable override values fall
    back to the profile literal; neither raises.
    """
    if overrides is None:
        overrides = EnvOverrides().as_mapping()

    name = env_name or _string(overrides, "NODE_ENV", DEFAULT_ENVIRONMENT)
    if name not in PROFILES:
        logger.warning("Unknown environment %r, falling back to %r", name, DEFAULT_ENVIRONMENT)
        name = DEFAULT_ENVIRONMENT
    profile = PROFILES[name]

    locked = LOCKED_KEYS.get(name, ())
    effective = {k: v for k, v in overrides.items() if k not in locked}

    def text(key):
        return _string(effective, key, profile[key])

    def number(key):
        return _integer(effective, key, profile[key])

    return EnvironmentConfig(
        environment=name,
        base_url=text("BASE_URL").rstrip("/"),
        api_url=text("API_URL").rstrip("/"),
        timeout=number("TIMEOUT"),
        retries=number("RETRIES"),
        headless=_headless(effective, profile["HEADLESS"]),
        slow_mo=number("SLOW_MO"),
        viewport=Viewport(width=number("VIEWPORT_WIDTH"), height=number("VIEWPORT_HEIGHT")),
        user=Credentials(
            username=text("TEST_USERNAME"),
            password=text("TEST_PASSWORD"),
            email=text("TEST_EMAIL"),
        ),
        test_data=ScenarioUsers(
            valid_user=Credentials(
                username=text("VALID_USERNAME"),
                password=text("VALID_PASSWORD"),
                email=text("VALID_EMAIL"),
            ),
            invalid_user=Credentials(
                username=text("INVALID_USERNAME"),
                password=text("INVALID_PASSWORD"),
            ),
        ),
        ci=bool(_string(overrides, "CI", "")),
        empty_search=_empty_search(overrides),
    )


def get_env_var(key: str, default: str = "") -> str:
    return os.environ.get(key) or default


def is_ci() -> bool:
    return bool(os.environ.get("CI"))


def is_headless(config: Optional[EnvironmentConfig] = None) -> bool:
    if config is not None:
        return config.headless or config.ci
    return os.environ.get("HEADLESS") == "true" or is_ci()
