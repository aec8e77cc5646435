"""Session context threaded through a single CLI invocation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class SessionContext:
    """
    Mutable state for one CLI invocation.

    Attributes:
        cwd: Working directory (process cwd when unset)
        options: CLI flag name -> value
        service_dir: Active service directory, if any
        configuration_filename: Configuration file path relative to service_dir
        configuration: Parsed (and variable-resolved) service configuration
    """

    cwd: Path | None = None
    options: dict[str, Any] = field(default_factory=dict)
    service_dir: Path | None = None
    configuration_filename: str | None = None
    configuration: dict[str, Any] | None = None

    @property
    def working_dir(self) -> Path:
        """Resolved working directory."""
        return Path(self.cwd) if self.cwd else Path(os.getcwd())
