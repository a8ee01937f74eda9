from __future__ import annotations

import os
from pathlib import Path

__all__ = ["atomic_write_text"]


def atomic_write_text(path: Path, content: str) -> None:
    """Replace `path` with `content`; readers see the old file or the new one."""
    staging = path.with_name(f".{path.name}.relflow-tmp")
    try:
        staging.write_text(content, encoding="utf-8", newline="")
        os.replace(staging, path)
    except BaseException:
        staging.unlink(missing_ok=True)
        raise
