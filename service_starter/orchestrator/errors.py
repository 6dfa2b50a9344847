"""
Orchestrator Errors.

Terminal causes reported in a failed OrchestratorResult.
"""


class OrchestratorError(Exception):
    """
    Pipeline-level failure.

    Attributes:
        stage: Name of the failing stage ("pipeline" for whole-pipeline failures)
        original_error: Underlying cause, if any
    """

    def __init__(
        self,
        message: str,
        stage: str,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.original_error = original_error


class CriticalStageError(OrchestratorError):
    """A critical stage failed and the pipeline was aborted at that stage."""

    def __init__(self, stage: str, original_error: BaseException) -> None:
        super().__init__(
            f"Critical stage '{stage}' failed: {original_error}",
            stage=stage,
            original_error=original_error,
        )


class StageTimeoutError(OrchestratorError):
    """A stage did not complete within its own timeout."""

    def __init__(self, stage: str, timeout_ms: float) -> None:
        super().__init__(f"Stage '{stage}' timeout after {timeout_ms:g}ms", stage=stage)
        self.timeout_ms = timeout_ms


class PipelineTimeoutError(OrchestratorError):
    """The whole stage loop did not finish within the pipeline timeout."""

    def __init__(self, orchestrator: str, timeout_ms: float) -> None:
        super().__init__(
            f"Pipeline timeout after {timeout_ms:g}ms in orchestrator: {orchestrator}",
            stage="pipeline",
        )
        self.orchestrator = orchestrator
        self.timeout_ms = timeout_ms
