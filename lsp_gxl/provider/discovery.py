"""Glob-based file discovery and the ignore filter shared with the reference mapper."""

from __future__ import annotations

import fnmatch
from pathlib import Path


def is_ignored(path: Path, root_path: Path, patterns: list[str]) -> bool:
    if not patterns:
        return False
    candidates = [path.as_posix()]
    try:
        candidates.append(path.relative_to(root_path).as_posix())
    except ValueError:
        pass
    for pattern in patterns:
        variants = [pattern]
        if pattern.startswith("**/"):
            variants.append(pattern[3:])
        for candidate in candidates:
            for variant in variants:
                if fnmatch.fnmatch(candidate, variant):
                    return True
    return False


def discover_files(root_path: Path, pattern: str, ignore: list[str] | None = None) -> list[Path]:
    """Files under ``root_path`` matching ``pattern``, minus ignored ones, sorted."""
    ignore = ignore or []
    files: list[Path] = []
    for path in sorted(root_path.glob(pattern)):
        if not path.is_file():
            continue
        if is_ignored(path, root_path, ignore):
            continue
        files.append(path)
    return files
