"""Base classes for day-summary data sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourcePaths:
    """Root directory searched for day-summary files."""

    root: Path


class DataSource(ABC):
    """Abstract day-summary file source."""

    def __init__(self, paths: SourcePaths) -> None:
        self._paths = paths

    @property
    def root(self) -> Path:
        return self._paths.root

    @abstractmethod
    def validate(self) -> None:
        """Check that the root directory exists.

        Raises:
            FileNotFoundError: If it does not.
        """

    @abstractmethod
    def day_summary_files(self) -> list[Path]:
        """Return the day-summary CSV files to aggregate, in a stable order."""
