from __future__ import annotations

from pathlib import Path

from relflow.platform.files import atomic_write_text


def test_replaces_content_and_leaves_no_staging_file(tmp_path: Path) -> None:
    target = tmp_path / "CHANGELOG.md"
    target.write_text("old\n", encoding="utf-8")

    atomic_write_text(target, "new\r\nline\n")

    assert target.read_bytes() == b"new\r\nline\n"
    assert [p.name for p in tmp_path.iterdir()] == ["CHANGELOG.md"]
