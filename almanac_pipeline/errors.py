from __future__ import annotations


class PipelineError(ValueError):
    """Base class for every error raised by the almanac pipeline."""


class MalformedRule(PipelineError):
    pass


class MalformedInterval(PipelineError):
    pass


class EmptyInput(PipelineError):
    """Raised when the minimum of an empty value set is requested."""


class EmptyStageList(PipelineError):
    pass


class BruteForceLimitExceeded(PipelineError):
    pass


class InvalidAlmanac(PipelineError):
    """Raised by the text parser; message carries the offending line."""
