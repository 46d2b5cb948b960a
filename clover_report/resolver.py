"""Map paths reported in a coverage file to files in the project tree.

Coverage reports are often produced inside a container or CI workspace, so
the recorded path may be absolute, may carry a doubled ``app/app/`` prefix,
or may be relative to a different root. Resolution tries a fixed list of
candidates first and falls back to a search by file name.
"""

import os
import re
from pathlib import Path

_DOUBLED_APP_RE = re.compile(r"^app/app/")


def candidate_paths(cov_path: str, project_root: str | Path) -> list[Path]:
    """Return the ordered, duplicate-free candidate locations for *cov_path*."""
    root = str(project_root).rstrip("/") or "/"
    rel = cov_path[1:] if cov_path.startswith("/") else cov_path
    parts = rel.split("/")

    candidates = [f"{root}/{rel}"]
    if len(parts) > 1 and parts[0] == "app" and parts[1] == "app":
        candidates.append(f"{root}/" + "/".join(parts[1:]))
    if parts[0] == "app":
        candidates.append(f"{root}/" + "/".join(parts[1:]))
    candidates.append(f"{root}/app/{rel}")
    candidates.append(f"{root}/" + cov_path.lstrip("/"))

    # Several heuristics can land on the same file; keep the first occurrence.
    return list(dict.fromkeys(Path(c) for c in candidates))


def find_by_basename(name: str, project_root: str | Path) -> Path | None:
    """Return the first file named *name* below *project_root*, or None.

    Hidden files and directories are skipped. Directories are visited in
    sorted order so the first match does not depend on the filesystem.
    """
    if not name:
        return None
    for dirpath, dirnames, filenames in os.walk(project_root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        if name in filenames and not name.startswith("."):
            return Path(dirpath) / name
    return None


def resolve(cov_path: str, project_root: str | Path) -> Path | None:
    """Return the file on disk that *cov_path* refers to, or None."""
    for candidate in candidate_paths(cov_path, project_root):
        if candidate.is_file():
            return candidate
    return find_by_basename(os.path.basename(cov_path), project_root)


def display_path(cov_path: str, resolved: Path | None, project_root: str | Path) -> str:
    """Short path shown in the report header for a file."""
    if resolved is not None:
        try:
            return str(Path(resolved).relative_to(Path(project_root)))
        except ValueError:
            return str(resolved)
    return _DOUBLED_APP_RE.sub("app/", cov_path.lstrip("/"))
