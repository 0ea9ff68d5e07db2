from __future__ import annotations

from typing import Any, Dict, Iterable

from .errors import MalformedSpecError

_REQUIRED_LISTS = ("scales", "axes", "marks", "signals", "data")
_ORIENTS = {"top", "bottom", "left", "right"}


def _ensure(condition: bool, message: str) -> None:
    if not condition:
        raise MalformedSpecError(message)


def _ensure_unique_names(items: Iterable[Dict[str, Any]], kind: str) -> None:
    seen = set()
    for idx, item in enumerate(items):
        name = item.get("name")
        _ensure(isinstance(name, str) and bool(name), f"{kind}[{idx}] must have a name")
        _ensure(name not in seen, f"duplicate {kind} name '{name}'")
        seen.add(name)


def _validate_axes(axes: Iterable[Dict[str, Any]], where: str) -> None:
    for idx, axis in enumerate(axes):
        _ensure(isinstance(axis, dict), f"{where}[{idx}] must be object")
        _ensure(isinstance(axis.get("scale"), str) and bool(axis["scale"]), f"{where}[{idx}] missing scale")
        _ensure(axis.get("orient") in _ORIENTS, f"{where}[{idx}] has invalid orient {axis.get('orient')!r}")
        labels = axis.get("encode", {}).get("labels", {})
        text = labels.get("update", {}).get("text")
        if text is not None:
            _ensure(isinstance(text, (list, dict)), f"{where}[{idx}] label text must be a rule or rule list")


def _validate_marks(marks: Iterable[Dict[str, Any]], where: str) -> None:
    for idx, mark in enumerate(marks):
        _ensure(isinstance(mark, dict), f"{where}[{idx}] must be object")
        _ensure(isinstance(mark.get("type"), str), f"{where}[{idx}] missing type")
        if mark["type"] == "group":
            _validate_axes(mark.get("axes", []), f"{where}[{idx}].axes")
            _validate_marks(mark.get("marks", []), f"{where}[{idx}].marks")


def validate_spec_document(spec: Dict[str, Any]) -> Dict[str, Any]:
    """Check the structure of a compiled document and return it unchanged.

    Rendering concerns are out of reach here; only shape is checked.
    """

    _ensure(isinstance(spec, dict), "spec must be object")
    for key in _REQUIRED_LISTS:
        _ensure(isinstance(spec.get(key), list), f"{key} must be a list")

    for idx, scale in enumerate(spec["scales"]):
        _ensure(isinstance(scale, dict), f"scales[{idx}] must be object")
    _ensure_unique_names(spec["scales"], "scale")
    _ensure_unique_names(spec["signals"], "signal")
    _ensure_unique_names(spec["data"], "data")
    _validate_axes(spec["axes"], "axes")
    _validate_marks(spec["marks"], "marks")
    return spec
