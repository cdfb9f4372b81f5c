"""Static checks on the project metadata in ``pyproject.toml``.

The file is scanned as text so the check runs without a TOML parser or an
installed distribution.
"""

from __future__ import annotations

import re
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent


def _project_field(name: str) -> str:
    text = (REPO_ROOT / "pyproject.toml").read_text(encoding="utf-8")
    match = re.search(rf'^{name}\s*=\s*"([^"]+)"', text, flags=re.MULTILINE)
    assert match is not None, f"pyproject.toml has no {name} field"  # nosec B101
    return match.group(1)


def test_readme_is_the_user_facing_readme() -> None:
    readme = _project_field("readme")
    assert readme == "README.md"  # nosec B101
    body = (REPO_ROOT / readme).read_text(encoding="utf-8")
    assert body.startswith("# promptlab-providers")  # nosec B101
    assert "promptlab-chat" in body  # nosec B101
