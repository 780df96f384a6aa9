"""
Platewise Configuration

Default policy, batch pacing and logging settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from platewise.schemas import ValidationPolicy, resolve_policy


@dataclass
class PlatewiseConfig:
    """Configuration for detection processing"""

    # Validation
    default_policy: ValidationPolicy = ValidationPolicy.STRICT

    # Delay between batch items, keeps the vision API under its rate limit
    batch_pacing_seconds: float = 1.0

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        self.default_policy = resolve_policy(self.default_policy)
        if self.batch_pacing_seconds < 0:
            raise ValueError(
                f"Batch pacing must be >= 0, got {self.batch_pacing_seconds}"
            )

    @classmethod
    def from_env(cls) -> "PlatewiseConfig":
        """Create config from environment variables (and a .env file)"""
        load_dotenv()
        return cls(
            default_policy=os.getenv("PLATEWISE_POLICY", "strict"),
            batch_pacing_seconds=float(
                os.getenv("PLATEWISE_PACING_SECONDS", "1.0")
            ),
            log_level=os.getenv("PLATEWISE_LOG_LEVEL", "INFO").upper(),
        )


# Global default config
DEFAULT_CONFIG = PlatewiseConfig.from_env()
