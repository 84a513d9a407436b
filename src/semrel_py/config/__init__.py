"""Configuration management for semrel-py."""

from __future__ import annotations

from semrel_py.config.loader import load_config
from semrel_py.config.models import SemrelConfig, Severity, TypeConfig, UrlTemplates

__all__ = [
    "SemrelConfig",
    "Severity",
    "TypeConfig",
    "UrlTemplates",
    "load_config",
]
