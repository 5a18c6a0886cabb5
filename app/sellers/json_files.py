"""
Whole-file JSON reads and writes shared by the pipeline stages.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from app.sellers.errors import FileIOError, JsonParseError


def read_json_file(path: str | Path) -> Any:
    """
    Read a UTF-8 JSON file and return the parsed document.
    """

    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileIOError(f"Failed to read {file_path}: {exc}", path=str(file_path)) from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise JsonParseError(f"Invalid JSON in {file_path}: {exc}") from exc


def write_json_file(path: str | Path, payload: Any) -> None:
    """
    Write ``payload`` as 2-space indented JSON, replacing any existing file.

    The document is written to a temporary sibling first and renamed into
    place, so readers never observe a partially written file.
    """

    file_path = Path(path)
    content = json.dumps(payload, indent=2, ensure_ascii=False)

    tmp_path = file_path.with_suffix(f"{file_path.suffix}.tmp")
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with tmp_path.open("w", encoding="utf-8") as handle:
            handle.write(content)
        tmp_path.replace(file_path)
    except OSError as exc:
        raise FileIOError(f"Failed to write {file_path}: {exc}", path=str(file_path)) from exc
    finally:
        if tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass
