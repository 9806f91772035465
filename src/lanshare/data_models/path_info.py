from dataclasses import dataclass
from typing import Any, Mapping

@dataclass(frozen=True)
class PathInfo:
    name: str
    is_directory: bool
    size_display: str
    error: str | None = None

    @classmethod
    def from_backend(cls, data: Mapping[str, Any]) -> "PathInfo":
        return cls(
            name=str(data.get("name") or ""),
            is_directory=bool(data.get("isDirectory", False)),
            size_display=str(data.get("sizeDisplay") or ""),
            error=data.get("error") or None,
        )
