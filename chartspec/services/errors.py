from __future__ import annotations


class SpecBuildError(RuntimeError):
    """Base error for spec compilation."""


class MalformedSpecError(SpecBuildError):
    """Raised when a finalized document is structurally broken."""


class BuilderClosedError(SpecBuildError):
    """Raised when a finalized builder is mutated again."""
