"""Library settings read from CONFIGOR_* environment variables."""
import logging
import re
import sys
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT = "development"
TEST_ENVIRONMENT = "test"
DEFAULT_ENV_PREFIX = "configor"
DISABLE_PREFIX = "-"

# Matches invocation paths of the pytest runner (pytest, py.test, python -m pytest)
TEST_RUNNER_PATTERN = re.compile(r"(^|[/\\])(py\.?test(-script\.py|\.exe)?|_?pytest[/\\].*)$")


class ConfigorSettings(BaseSettings):
    """Settings that control how configurations are located and bound.

    Read from CONFIGOR_ENV and CONFIGOR_ENV_PREFIX. Empty values count as unset.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFIGOR_",
        extra="ignore",
    )

    env: str = Field(
        default="",
        description="Environment name used to pick name.<env>.ext files"
    )
    env_prefix: str = Field(
        default="",
        description="Leading segment of derived env var names ('-' disables it)"
    )

    def current_environment(self, argv0: Optional[str] = None) -> str:
        """Resolve the environment name.

        Args:
            argv0: Invocation path to test against the test-runner pattern
                (defaults to sys.argv[0])

        Returns:
            CONFIGOR_ENV if set, "test" under a test runner, else "development"
        """
        if self.env:
            return self.env

        if argv0 is None:
            argv0 = sys.argv[0] if sys.argv else ""
        if TEST_RUNNER_PATTERN.search(argv0):
            return TEST_ENVIRONMENT

        return DEFAULT_ENVIRONMENT

    def prefix_segments(self) -> List[str]:
        """Initial path prefix for derived environment variable names."""
        return resolve_prefix(self.env_prefix or None)


def resolve_prefix(env_prefix: Optional[str]) -> List[str]:
    """Turn a configured prefix into the initial list of name segments.

    None falls back to the default token, the "-" sentinel disables prefixing.
    """
    if env_prefix is None or env_prefix == "":
        return [DEFAULT_ENV_PREFIX]
    if env_prefix == DISABLE_PREFIX:
        return []
    return [env_prefix]


def current_environment() -> str:
    """Return the environment name from the process environment."""
    environment = ConfigorSettings().current_environment()
    logger.debug("Resolved environment", extra={"environment": environment})
    return environment
