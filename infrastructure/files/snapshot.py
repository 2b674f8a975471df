from __future__ import annotations

import logging
import os
import shutil
import tempfile
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)


def read_snapshot(path: str) -> List[Tuple[int, str]]:
    """
    Return (line number, text) pairs of a snapshot file, or an empty list
    if it does not exist.

    Lines are split on "\\n" only and decoded one at a time, so a line that
    is not valid UTF-8 is skipped without affecting the others.
    """

    if not os.path.exists(path):
        return []
    with open(path, "rb") as f:
        data = f.read()

    raw_lines = data.split(b"\n")
    if raw_lines and raw_lines[-1] == b"":
        raw_lines.pop()

    lines: List[Tuple[int, str]] = []
    for lineno, raw in enumerate(raw_lines, start=1):
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        try:
            lines.append((lineno, raw.decode("utf-8")))
        except UnicodeDecodeError as exc:
            logger.debug("Skipping %s:%d: %s", path, lineno, exc)
    return lines


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_snapshot(path: str, lines: Iterable[str]) -> None:
    """
    Overwrite `path` with `lines`, one per line.

    The content is written to a temporary file in the same directory and
    then moved over the target, so readers see either the old snapshot or
    the new one, never a partial write. The target keeps its permission
    bits; a new file gets the usual umask-based mode.
    """

    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".snapshot-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line)
                f.write("\n")
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
