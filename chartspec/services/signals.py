from __future__ import annotations

from typing import Any, Dict


def get_generic_value_signal(name: str, value: Any = None) -> Dict[str, Any]:
    return {"name": name, "value": value}


def get_generic_update_signal(name: str, update: str) -> Dict[str, Any]:
    return {"name": name, "update": update}
