"""
alnscore Configuration Module

Centralized configuration for the alignment scoring tools.
Supports environment variables and sensible defaults.

Configuration Priority (highest to lowest):
1. Overrides passed to Config.scoring_parameters() / command-line options
2. Environment variables, applied when a Config is constructed (they
   replace values passed to the constructor)
3. Built-in defaults (DNA scoring scheme)

Environment Variables:
    ALNSCORE_MATCH_SCORE    - Score added for a matching column (default: 2)
    ALNSCORE_MISMATCH_SCORE - Score added for a mismatching column (default: -1)
    ALNSCORE_GAP_OPEN       - Penalty for opening a gap run (default: -2)
    ALNSCORE_GAP_EXTEND     - Penalty for extending a gap run (default: -0.5)
    ALNSCORE_DATA_DIR       - Root directory with one folder per method (default: ./data)
    ALNSCORE_METHODS        - Comma-separated method folder names
    ALNSCORE_THREADS        - Default number of worker threads
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from alnscore.scoring.batch import DEFAULT_METHODS
from alnscore.scoring.models import ScoringParameters

logger = logging.getLogger(__name__)

# Singleton config instance
_config_instance: Optional["Config"] = None

_SCORING_ENV = {
    "match_score": "ALNSCORE_MATCH_SCORE",
    "mismatch_score": "ALNSCORE_MISMATCH_SCORE",
    "gap_open_penalty": "ALNSCORE_GAP_OPEN",
    "gap_extension_penalty": "ALNSCORE_GAP_EXTEND",
}


@dataclass
class Config:
    """
    alnscore configuration container.

    Attributes:
        match_score: Score added for each matching column
        mismatch_score: Score added for each mismatching column
        gap_open_penalty: Score added for the first column of a gap run
        gap_extension_penalty: Score added for each further gap column
        data_dir: Root directory holding one sub-directory per method
        methods: Method names compared side by side
        threads: Default number of worker threads for batch scoring
    """

    # Scoring scheme
    match_score: float = 2
    mismatch_score: float = -1
    gap_open_penalty: float = -2
    gap_extension_penalty: float = -0.5

    # Alignment sources
    data_dir: Optional[Path] = None
    methods: List[str] = field(default_factory=lambda: list(DEFAULT_METHODS))

    # Resources
    threads: int = 4

    # Internal state
    _initialized: bool = field(default=False, repr=False)

    def __post_init__(self):
        """Initialize configuration from environment and defaults."""
        if not self._initialized:
            self._load_from_environment()
            if not self.data_dir:
                self.data_dir = Path.cwd() / "data"
            self._initialized = True

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables."""

        # Scoring scheme
        for attr, var in _SCORING_ENV.items():
            if os.environ.get(var):
                try:
                    setattr(self, attr, float(os.environ[var]))
                except ValueError:
                    logger.warning("Ignoring non-numeric %s=%r", var, os.environ[var])

        # Alignment sources
        if os.environ.get("ALNSCORE_DATA_DIR"):
            self.data_dir = Path(os.environ["ALNSCORE_DATA_DIR"])

        if os.environ.get("ALNSCORE_METHODS"):
            methods = [m.strip() for m in os.environ["ALNSCORE_METHODS"].split(",")]
            self.methods = [m for m in methods if m]

        # Resources
        if os.environ.get("ALNSCORE_THREADS"):
            try:
                self.threads = int(os.environ["ALNSCORE_THREADS"])
            except ValueError:
                logger.warning("Ignoring non-integer ALNSCORE_THREADS=%r", os.environ["ALNSCORE_THREADS"])

    def scoring_parameters(self, **overrides: Optional[float]) -> ScoringParameters:
        """Return an immutable scoring snapshot, with optional overrides."""
        params = ScoringParameters(
            match_score=self.match_score,
            mismatch_score=self.mismatch_score,
            gap_open_penalty=self.gap_open_penalty,
            gap_extension_penalty=self.gap_extension_penalty,
        )
        return params.merge(**overrides)

    def validate(self, require_data: bool = False) -> tuple[bool, list[str]]:
        """
        Validate configuration.

        Args:
            require_data: Whether the data directory must exist

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = []

        if not self.methods:
            errors.append("No methods configured. Set ALNSCORE_METHODS.")

        if self.threads < 1:
            errors.append(f"ALNSCORE_THREADS must be at least 1, got {self.threads}")

        if require_data:
            if not self.data_dir:
                errors.append("ALNSCORE_DATA_DIR not configured.")
            elif not self.data_dir.is_dir():
                errors.append(f"Data directory not found: {self.data_dir}")

        return len(errors) == 0, errors

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "match_score": self.match_score,
            "mismatch_score": self.mismatch_score,
            "gap_open_penalty": self.gap_open_penalty,
            "gap_extension_penalty": self.gap_extension_penalty,
            "data_dir": str(self.data_dir) if self.data_dir else None,
            "methods": list(self.methods),
            "threads": self.threads,
        }

    def print_status(self) -> None:
        """Print configuration status to stdout."""
        print("alnscore Configuration Status")
        print("=" * 50)

        if self.data_dir is None:
            data_status = "[ ] Not configured"
        elif self.data_dir.is_dir():
            data_status = f"[✓] {self.data_dir}"
        else:
            data_status = f"[✗] {self.data_dir} (NOT FOUND)"

        print(f"Match score:     {self.match_score}")
        print(f"Mismatch score:  {self.mismatch_score}")
        print(f"Gap open:        {self.gap_open_penalty}")
        print(f"Gap extension:   {self.gap_extension_penalty}")
        print(f"Data directory:  {data_status}")
        print(f"Methods:         {', '.join(self.methods)}")
        print(f"Threads:         {self.threads}")
        print("=" * 50)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config: The singleton configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Reset the global configuration instance (useful for testing)."""
    global _config_instance
    _config_instance = None
