"""Environment driven settings.

Read once by the entry point and handed to the GUI; nothing else in the
package looks at the environment.
"""

import os
import logging
import importlib

from dataclasses import dataclass, field
from typing import Callable, Any

from lanshare.constants import BACKEND_MAX_WAIT

logger = logging.getLogger(__name__)

def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)

    if raw is None:
        return default

    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, not a number, using %s", name, raw, default)
        return default

@dataclass
class Settings:
    # Change to WARNING (or lower) for debugging
    log_level: str = field(default_factory=lambda: os.getenv("LANSHARE_LOG_LEVEL", "CRITICAL"))
    backend_ref: str | None = field(default_factory=lambda: os.getenv("LANSHARE_BACKEND") or None)
    backend_max_wait: float = field(default_factory=lambda: _env_float("LANSHARE_BACKEND_MAX_WAIT", BACKEND_MAX_WAIT))

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.CRITICAL

    def load_backend_factory(self) -> Callable[..., Any] | None:
        # Format: "package.module:factory", the factory is called with the bridge EventChannel
        if not self.backend_ref:
            return None

        module_name, _, attr = self.backend_ref.partition(":")

        if not module_name or not attr:
            raise ValueError(f"LANSHARE_BACKEND must look like 'module:factory', got '{self.backend_ref}'")

        module = importlib.import_module(module_name)
        return getattr(module, attr)
