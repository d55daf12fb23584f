from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bottleneckiq.models.policy import (
    AnalysisPolicy,
    ForecastPolicy,
    ScoringPolicy,
    SimulationPolicy,
    ThresholdPolicy,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    # Application
    log_level: str = "INFO"  # DEBUG for development

    # Policy overrides, e.g. SCORING__QUEUE_REFERENCE_MINUTES=40
    # or THRESHOLDS='{"idle_time_multiplier": 2.0}'
    scoring: ScoringPolicy = Field(default_factory=ScoringPolicy)
    thresholds: ThresholdPolicy = Field(default_factory=ThresholdPolicy)
    forecast: ForecastPolicy = Field(default_factory=ForecastPolicy)
    simulation: SimulationPolicy = Field(default_factory=SimulationPolicy)

    def get_policy(self) -> AnalysisPolicy:
        """Bundle the configured policies for passing into the analytics core.

        Returns:
            AnalysisPolicy built from the current settings.
        """
        return AnalysisPolicy(
            scoring=self.scoring,
            thresholds=self.thresholds,
            forecast=self.forecast,
            simulation=self.simulation,
        )


settings = Settings()
