"""Batch job files.

A batch file is a JSON list of jobs::

    [
        {"name": "texas-hawaii", "source": "M0 0 ...", "destination": "M5 5 ..."}
    ]

Results are written back as a JSON list with either ``start``/``end`` path
strings or an ``error`` message per job.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from regionmorph.exceptions import BatchError


@dataclass(frozen=True)
class MorphJob:
    """One shape pair to morph.

    Attributes:
        name: Label for logs and output
        source: Source path data (single outline)
        destination: Destination path data (one or more subpaths)
    """

    name: str
    source: str
    destination: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"name": self.name, "source": self.source, "destination": self.destination}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MorphJob":
        """Deserialize from dictionary."""
        return cls(name=data["name"], source=data["source"], destination=data["destination"])


def load_jobs(path: Path) -> list[MorphJob]:
    """Read morph jobs from a JSON file.

    Jobs without a name are named after their position.

    Raises:
        BatchError: If the file is missing, not JSON, or not a list of jobs
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise BatchError(str(path), f"cannot read file: {e}") from e
    except json.JSONDecodeError as e:
        raise BatchError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(raw, list):
        raise BatchError(str(path), "expected a list of jobs")

    jobs: list[MorphJob] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise BatchError(str(path), f"job {index} is not an object")
        missing = [key for key in ("source", "destination") if key not in entry]
        if missing:
            raise BatchError(str(path), f"job {index} is missing {', '.join(missing)}")
        jobs.append(
            MorphJob(
                name=str(entry.get("name", f"job-{index}")),
                source=str(entry["source"]),
                destination=str(entry["destination"]),
            )
        )
    return jobs


def write_results(path: Path, results: list[dict[str, Any]]) -> None:
    """Write morph results as JSON.

    Raises:
        BatchError: If the file cannot be written
    """
    try:
        path.write_text(json.dumps(results, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise BatchError(str(path), f"cannot write file: {e}") from e
