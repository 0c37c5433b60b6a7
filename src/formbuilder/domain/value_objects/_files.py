"""In-memory file metadata stored as the value of file fields."""

from __future__ import annotations

import json
from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedFile:
    """Metadata of one uploaded file. No file content is ever kept."""

    name: str
    size_mb: float = 0.0

    @property
    def extension(self) -> str:
        """Lowercased extension without the dot, empty when there is none."""
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[1].lower()


def parse_files(value: str) -> list[UploadedFile]:
    """Decode the string value of a file field.

    The canonical encoding is a JSON list of ``{"name": ..., "sizeMB": ...}``
    objects. Anything that does not decode to that shape is treated as a
    single file named by the raw string, with size 0.

    Args:
        value: Stored string value of the field.

    Returns:
        List of uploaded file descriptions, empty for a blank value.
    """
    if not value or not value.strip():
        return []
    try:
        data = json.loads(value)
    except json.JSONDecodeError:
        return [UploadedFile(name=value.strip())]

    if not isinstance(data, list):
        return [UploadedFile(name=value.strip())]

    files: list[UploadedFile] = []
    for entry in data:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            return [UploadedFile(name=value.strip())]
        size = entry.get("sizeMB", 0)
        if isinstance(size, bool) or not isinstance(size, (int, float)):
            size = 0
        files.append(UploadedFile(name=entry["name"], size_mb=float(size)))
    return files


def serialize_files(files: list[UploadedFile]) -> str:
    """Encode file metadata as the string value of a file field."""
    if not files:
        return ""
    return json.dumps([{"name": f.name, "sizeMB": f.size_mb} for f in files])
