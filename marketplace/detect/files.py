"""Small file probes shared by the detectors."""

from pathlib import Path


def has_any(root: Path, *names: str) -> bool:
    """Check if any of the named regular files exists under root."""
    return any((root / name).is_file() for name in names)


def read_text(path: Path) -> str:
    """Read a file, treating a missing or unreadable file as empty."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def contains(path: Path, needle: str, ignore_case: bool = False) -> bool:
    """Substring search in a file; missing files never match."""
    text = read_text(path)
    if ignore_case:
        return needle.lower() in text.lower()
    return needle in text
