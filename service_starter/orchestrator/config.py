"""
Orchestrator Configuration Module.

Construction-time configuration for an orchestrator. Fixed for the
orchestrator's lifetime.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OrchestratorConfig(BaseSettings):
    """
    Configuration for a BaseOrchestrator.

    Defaults can be overridden via environment variables with the
    ORCHESTRATOR_ prefix; explicit constructor arguments take precedence.

    Example:
        # Via environment variables:
        ORCHESTRATOR_TIMEOUT_MS=10000
        ORCHESTRATOR_ENABLE_METRICS=false

    Attributes:
        name: Metrics ``service`` label and prefix of error messages
        timeout_ms: Whole-pipeline timeout in milliseconds (default: 30000)
        enable_metrics: Emit metrics and record stage durations (default: True)
        log_errors: Log pipeline and non-critical stage failures (default: True)
    """

    model_config = SettingsConfigDict(
        env_prefix="ORCHESTRATOR_",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    name: str = Field(..., min_length=1, description="Orchestrator name")
    timeout_ms: float = Field(default=30000, gt=0, description="Pipeline timeout (ms)")
    enable_metrics: bool = Field(default=True, description="Record metrics")
    log_errors: bool = Field(default=True, description="Log failures")
