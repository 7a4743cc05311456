from __future__ import annotations

import importlib
from typing import Any

from ghreminder.core.errors import AdapterError


def load_adapter(dotted_path: str) -> type:
    """Resolve a "package.module:ClassName" path to the adapter class."""
    module_path, sep, class_name = dotted_path.partition(":")
    if not sep or not module_path or not class_name:
        raise AdapterError(f"Adapter path must look like 'module:Class': {dotted_path}")
    try:
        module = importlib.import_module(module_path)
        return getattr(module, class_name)
    except (ImportError, AttributeError) as exc:
        raise AdapterError(f"Unable to load adapter: {dotted_path}") from exc


def build_adapter(dotted_path: str, **kwargs: Any) -> Any:
    adapter_cls = load_adapter(dotted_path)
    try:
        return adapter_cls(**kwargs)
    except TypeError as exc:
        raise AdapterError(f"Unable to construct adapter {dotted_path}: {exc}") from exc
