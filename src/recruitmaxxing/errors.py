"""Error taxonomy for the analysis pipeline."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for every error an analysis run can end with."""

    def __init__(self, message: str = "", *, stage: str | None = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        self.stage = stage

    def __str__(self) -> str:
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class InputEmpty(PipelineError):
    """Job description is empty or whitespace only."""


class RunInProgress(PipelineError):
    """Another run is already in flight on the same orchestrator."""


class NormalizationError(PipelineError):
    pass


class NoJsonFound(NormalizationError):
    """Model text contains no '{' ... '}' pair."""


class RepairError(PipelineError):
    pass


class UnrepairableStructure(RepairError):
    """Repair heuristics could not produce a parseable JSON object."""


class ValidationError(PipelineError):
    pass


class MissingRequiredField(ValidationError):
    """A root-level key is absent or the document does not fit its schema."""


class GatewayError(PipelineError):
    pass


class TransportError(GatewayError):
    """Network failure, timeout or non-2xx response."""

    def __init__(self, message: str = "", *, status_code: int | None = None, stage: str | None = None):
        super().__init__(message, stage=stage)
        self.status_code = status_code


class MalformedResponse(GatewayError):
    """Response body lacks the completion text path."""
