"""Location of GGIR part5 day-summary files for a BOOST subject."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from report_builder.sources.base import DataSource, SourcePaths

TARGET_FILENAME = "part5_daysummary_MM_L44.8M100.6V428.8_T5A5.csv"
GGIR_VERSION_DIR = "GGIR-3.2.6"

# First digit of the subject number -> (study, dataset).
_STUDIES: dict[str, tuple[str, str]] = {
    "7": ("ObservationalStudy", "act-obs-final-test-2"),
    "8": ("InterventionStudy", "act-int-final-test-2"),
    "9": ("InterventionStudy", "act-int-final-test-2"),
}


def validate_subject_number(value: str) -> str:
    """Return the trimmed subject number.

    Raises:
        ValueError: Unless it is four digits starting with 7, 8 or 9.
    """
    subject = value.strip()
    if not subject:
        raise ValueError("A subject number is required.")
    if len(subject) != 4 or not all(c in "0123456789" for c in subject):
        raise ValueError("Subject numbers must be a four-digit integer.")
    if subject[0] not in _STUDIES:
        raise ValueError("Subject numbers must start with 7, 8, or 9.")
    return subject


def build_subject_directory(share_path: Path, subject: str) -> Path:
    """Path of the subject's GGIR accelerometer output under the share."""
    subject = validate_subject_number(subject)
    study, dataset = _STUDIES[subject[0]]
    return (
        share_path
        / "Projects"
        / "BOOST"
        / study
        / "3-experiment"
        / "data"
        / dataset
        / "derivatives"
        / GGIR_VERSION_DIR
        / f"sub-{subject}"
        / "accel"
    )


@dataclass(frozen=True)
class GGIRPaths(SourcePaths):
    """Paths for one subject's GGIR output."""

    # root: .../GGIR-3.2.6/sub-NNNN/accel


class GGIRSource(DataSource):
    """GGIR day-summary file finder."""

    def validate(self) -> None:
        """Validate that the subject directory exists."""
        if not self._paths.root.exists():
            raise FileNotFoundError(
                f"Subject directory does not exist: {self._paths.root}"
            )

    def day_summary_files(self) -> list[Path]:
        """Return every TARGET_FILENAME below root (case-insensitive), sorted.

        Symlinks, to files or directories, are not followed.
        """
        target = TARGET_FILENAME.lower()
        matches = [
            Path(dirpath) / name
            for dirpath, _dirnames, filenames in os.walk(self._paths.root)
            for name in filenames
            if name.lower() == target
            and not (Path(dirpath) / name).is_symlink()
        ]
        return sorted(matches)
