"""TallyBook: personal income/expense tracking and statistics."""

from __future__ import annotations

from .config import BaseConfig, TestConfig
from .context import create_app_context

__all__ = ["BaseConfig", "TestConfig", "create_app_context"]

__version__ = "0.1.0"
