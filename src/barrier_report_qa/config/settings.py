"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from barrier_report_qa.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.app.language)
    'en'
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from barrier_report_qa.constants import BASE_URL, TIMEOUTS
from barrier_report_qa.exceptions import ConfigurationError


class AppSettings(BaseModel):
    """
    Target application settings.

    Attributes:
        base_url: Landing page of the web application
        email: Login e-mail
        password: Login password
        language: Interface language to switch to after login
    """
    base_url: str = BASE_URL
    email: Optional[str] = None
    password: Optional[SecretStr] = None
    language: Literal["ru", "en", "ro"] = "en"


class BrowserSettings(BaseModel):
    """
    Browser automation settings.

    Attributes:
        headless: Run browser in headless mode
        browser_type: Playwright browser to launch
        channel: Branded browser channel (chrome, msedge), None for bundled
        slow_mo: Slow down operations by this amount (ms) - useful for debugging
        action_timeout_ms: Default timeout for clicks, fills and waits
        navigation_timeout_ms: Default timeout for page navigations
    """
    headless: bool = True
    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    channel: Optional[str] = None
    slow_mo: int = Field(default=0, ge=0, le=5000)
    viewport_width: int = Field(default=1280, ge=320, le=3840)
    viewport_height: int = Field(default=720, ge=240, le=2160)
    action_timeout_ms: int = Field(default=TIMEOUTS["long"], ge=1000, le=300000)
    navigation_timeout_ms: int = Field(default=TIMEOUTS["navigation"], ge=1000, le=300000)


class PollingSettings(BaseModel):
    """
    Waiting and polling budgets for the resilient selector.

    Attributes:
        interval_ms: Spacing between polling rounds
        stability_timeout_ms: Budget for an option list to settle
        min_stable_rounds: Consecutive unchanged rounds required
        resolve_timeout_ms: Budget for resolving a field through its strategies
        overlay_timeout_ms: Budget for a dropdown overlay to close after a pick
        loading_timeout_ms: Budget for the loading panel to disappear
    """
    interval_ms: int = Field(default=250, ge=10, le=5000)
    stability_timeout_ms: int = Field(default=TIMEOUTS["medium"], ge=100, le=120000)
    min_stable_rounds: int = Field(default=2, ge=1, le=20)
    resolve_timeout_ms: int = Field(default=TIMEOUTS["medium"], ge=100, le=120000)
    overlay_timeout_ms: int = Field(default=TIMEOUTS["short"], ge=100, le=120000)
    loading_timeout_ms: int = Field(default=TIMEOUTS["medium"], ge=100, le=120000)


class ReportingSettings(BaseModel):
    """
    Run artifact settings.

    Attributes:
        output_dir: Directory for screenshots, traces and step logs
        screenshot_on_failure: Capture a screenshot when a step fails
        trace: Record a Playwright trace for the run
    """
    output_dir: str = "./output"
    screenshot_on_failure: bool = True
    trace: bool = False


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with BARRIER_QA__)
    3. Default values

    ConfigLoader passes the YAML file's values to the constructor, so for
    the same key the config file wins over a BARRIER_QA__ variable.

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(browser=BrowserSettings(headless=False))  # Override
    """

    model_config = SettingsConfigDict(
        env_prefix="BARRIER_QA__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    polling: PollingSettings = Field(default_factory=PollingSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()

        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base

        merged = deep_merge(current, overrides)
        return Settings(**merged)

    def missing_credentials(self) -> List[str]:
        """Names of the credential environment variables that are unset."""
        missing = []
        if not self.app.email:
            missing.append("EMAIL")
        if self.app.password is None or not self.app.password.get_secret_value():
            missing.append("PASSWORD")
        return missing

    def require_credentials(self) -> None:
        """
        Ensure login credentials are configured.

        Raises:
            ConfigurationError: If EMAIL or PASSWORD is missing
        """
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please create a .env file with the required variables.",
                {"missing": missing},
            )
