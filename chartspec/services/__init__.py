from .context import BuildContext
from .errors import BuilderClosedError, MalformedSpecError, SpecBuildError
from .spec_builder import SpecBuilder, SpecDocument, build_axes, compile_axes
from .spec_validator import validate_spec_document

__all__ = [
    "BuildContext",
    "BuilderClosedError",
    "MalformedSpecError",
    "SpecBuildError",
    "SpecBuilder",
    "SpecDocument",
    "build_axes",
    "compile_axes",
    "validate_spec_document",
]
