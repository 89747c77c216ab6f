"""Registered pipeline stages, one module per stage."""

from __future__ import annotations

import importlib
import pkgutil


def load_stages() -> None:
    """Import every stage module so the @stage decorators fire."""
    for _, module_name, _ in pkgutil.iter_modules(__path__):
        importlib.import_module(f"{__name__}.{module_name}")
