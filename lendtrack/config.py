"""Configuration management for lendtrack."""

from dataclasses import dataclass, field
from pathlib import Path

from lendtrack.exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")


@dataclass
class OutputConfig:
    """Export output configuration."""

    export_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = True


@dataclass
class SampleConfig:
    """Sample loan book generation configuration."""

    num_loans: int = 20
    locale: str = "en_IN"
    seed: int | None = None


@dataclass
class LendTrackConfig:
    """Main configuration for lendtrack."""

    output: OutputConfig = field(default_factory=OutputConfig)
    sample: SampleConfig = field(default_factory=SampleConfig)
    recent_limit: int = 5
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LendTrackConfig":
        """Create config from environment variables."""
        import os

        output = OutputConfig(
            export_dir=Path(os.getenv("LENDTRACK_EXPORT_DIR", "output")),
            pretty_json=os.getenv("LENDTRACK_PRETTY_JSON", "true").lower() == "true",
        )

        seed = os.getenv("LENDTRACK_SEED")
        sample = SampleConfig(
            num_loans=_env_int("LENDTRACK_SAMPLE_LOANS", "20"),
            locale=os.getenv("LENDTRACK_LOCALE", "en_IN"),
            seed=_env_int("LENDTRACK_SEED", seed) if seed else None,
        )

        log_format = os.getenv("LOG_FORMAT", "standard").lower()
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}"
            )

        return cls(
            output=output,
            sample=sample,
            recent_limit=_env_int("LENDTRACK_RECENT_LIMIT", "5"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )


def _env_int(name: str, default: str) -> int:
    """Read an integer environment variable."""
    import os

    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
