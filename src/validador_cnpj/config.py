"""
Configuration management for the CNPJ Validator.

Provides dataclasses for registry access and result reporting
with support for environment variable overrides.
"""

import os
from dataclasses import dataclass, field
from typing import Tuple

from validador_cnpj import __version__


def _positive_float(name: str, value: str) -> float:
    """Parse a positive number from an environment variable."""
    try:
        parsed = float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return parsed


@dataclass
class RegistryConfig:
    """Configuration for company lookups on the ReceitaWS public API.

    Lookup URL format:
    https://www.receitaws.com.br/v1/cnpj/{14-digit CNPJ}

    The API is public: no authentication, no request body. Each lookup is a
    single GET bounded by a connect timeout and a read timeout.
    """

    base_url: str = "https://www.receitaws.com.br/v1/cnpj"
    connect_timeout: float = 10.0
    read_timeout: float = 10.0
    user_agent: str = f"validador-cnpj/{__version__}"

    def __post_init__(self):
        """Override from environment variables if present."""
        if env_url := os.getenv("CNPJ_REGISTRY_URL"):
            self.base_url = env_url
        if env_connect := os.getenv("CNPJ_CONNECT_TIMEOUT"):
            self.connect_timeout = _positive_float("CNPJ_CONNECT_TIMEOUT", env_connect)
        if env_read := os.getenv("CNPJ_READ_TIMEOUT"):
            self.read_timeout = _positive_float("CNPJ_READ_TIMEOUT", env_read)

        if self.connect_timeout <= 0 or self.read_timeout <= 0:
            raise ValueError(
                f"Timeouts must be positive: connect={self.connect_timeout}, "
                f"read={self.read_timeout}"
            )

        self.base_url = self.base_url.rstrip("/")

    @property
    def timeout(self) -> Tuple[float, float]:
        """(connect, read) tuple in the form requests expects."""
        return (self.connect_timeout, self.read_timeout)

    def get_lookup_url(self, cnpj: str) -> str:
        """
        Build the ReceitaWS lookup URL.

        Args:
            cnpj: 14-digit CNPJ without punctuation

        Returns:
            Complete lookup URL for the CNPJ
        """
        return f"{self.base_url}/{cnpj}"


@dataclass
class ReportConfig:
    """Configuration for running validations and rendering their results."""

    registry_name: str = "ReceitaWS"
    max_workers: int = 4  # Concurrent validations in run_many()

    def __post_init__(self):
        """Override from environment variables."""
        if env_workers := os.getenv("CNPJ_MAX_WORKERS"):
            try:
                self.max_workers = int(env_workers)
            except ValueError:
                raise ValueError(
                    f"CNPJ_MAX_WORKERS must be an integer, got {env_workers!r}"
                )

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")


@dataclass
class GlobalConfig:
    """Global configuration combining all config components."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    @classmethod
    def from_env(cls) -> "GlobalConfig":
        """Create configuration from environment variables."""
        return cls(
            registry=RegistryConfig(),
            report=ReportConfig()
        )
