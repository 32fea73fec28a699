"""Configuration management for cashpilot."""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

from cashpilot.exceptions import ConfigurationError

DEFAULT_GRADE_THRESHOLDS: dict[str, int] = {"A": 90, "B": 80, "C": 70, "D": 60}


@dataclass
class GradeScale:
    """Letter-grade cut points for health scores.

    A score earns the first grade whose minimum it reaches, checked from the
    highest minimum down; anything below every minimum is an ``F``.
    """

    thresholds: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_GRADE_THRESHOLDS))
    fallback: str = "F"

    def __post_init__(self) -> None:
        for grade, minimum in self.thresholds.items():
            if not 0 <= minimum <= 100:
                raise ConfigurationError(f"Grade {grade} threshold {minimum} is outside 0-100")

    def grade_for(self, score: float) -> str:
        """Map a 0-100 score to its letter grade."""
        for grade, minimum in sorted(self.thresholds.items(), key=lambda item: item[1], reverse=True):
            if score >= minimum:
                return grade
        return self.fallback


@dataclass
class AnalysisConfig:
    """Tunables for the analytics pipeline.

    ``as_of`` is the reference date for "current period" calculations
    (new, active and churned customers, recency). ``None`` means today.
    """

    grade_scale: GradeScale = field(default_factory=GradeScale)
    churn_inactive_months: int = 3
    active_customer_days: int = 30
    as_of: date | None = None

    def reference_date(self) -> date:
        """Get the effective reference date."""
        return self.as_of or date.today()


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class ScenarioConfig:
    """Configuration for synthetic scenario execution."""

    name: str
    months: int = 6
    start_date: datetime | None = None
    num_customers: int = 25
    seed: int | None = None


@dataclass
class CashPilotConfig:
    """Main configuration for cashpilot."""

    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "CashPilotConfig":
        """Create config from environment variables."""
        import json
        import os

        grade_thresholds_str = os.getenv("GRADE_THRESHOLDS")
        if grade_thresholds_str:
            try:
                thresholds = {str(k): int(v) for k, v in json.loads(grade_thresholds_str).items()}
            except (ValueError, AttributeError) as exc:
                raise ConfigurationError(f"Invalid GRADE_THRESHOLDS: {grade_thresholds_str}") from exc
            grade_scale = GradeScale(thresholds=thresholds)
        else:
            grade_scale = GradeScale()

        as_of_str = os.getenv("AS_OF_DATE")
        try:
            as_of = date.fromisoformat(as_of_str) if as_of_str else None
            churn_months = int(os.getenv("CHURN_INACTIVE_MONTHS", "3"))
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid configuration value: {exc}") from exc

        analysis = AnalysisConfig(
            grade_scale=grade_scale,
            churn_inactive_months=churn_months,
            as_of=as_of,
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            analysis=analysis,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
