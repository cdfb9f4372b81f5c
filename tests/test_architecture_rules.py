"""Architecture enforcement tests for the provider layering.

This module provides lightweight, repository-local invariants to ensure
that the layers of ``promptlab_providers`` depend inward only. It focuses on
import boundaries and is designed to fail fast if a forbidden dependency is
introduced.

Rules validated here:
1) ``base`` must not import vendor packages (``openai``, ``anthropic``,
   ``gemini``) or the ``service`` layer. The factory reaches vendor adapters
   through module path strings only.
2) Vendor packages and ``config`` must not import the ``service`` layer.
3) Vendor packages must not import each other.
4) ``config`` must not import ``base``.

These tests are intentionally static-file scans to avoid import-time side
effects, and they emit clear failure messages for quick remediation.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Sequence

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "promptlab_providers"
VENDOR_PACKAGES = ("openai", "anthropic", "gemini")


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under a root directory.

    Parameters
    ----------
    root: Path
        The directory to scan recursively.

    Yields
    ------
    Path
        Paths to ``.py`` files under the provided root, skipping bytecode
        caches and test modules.
    """

    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts or "tests" in path.parts:
            continue
        yield path


def _import_pattern(targets: Sequence[str]) -> re.Pattern:
    """Match absolute or relative import statements naming any of ``targets``."""
    names = "|".join(re.escape(t) for t in targets)
    return re.compile(rf"^\s*(?:from|import)\s+(?:promptlab_providers\.|\.+)(?:{names})\b", re.MULTILINE)


def _offenders(root: Path, targets: Sequence[str]) -> List[str]:
    pattern = _import_pattern(targets)
    found: List[str] = []
    for py in _iter_python_files(root):
        src = py.read_text(encoding="utf-8", errors="replace")
        found.extend(f"{py.relative_to(PACKAGE_ROOT)}: {m.group(0).strip()}" for m in pattern.finditer(src))
    return found


@pytest.fixture(scope="module", autouse=True)
def _require_package() -> None:
    if not PACKAGE_ROOT.is_dir():
        pytest.skip("promptlab_providers package not found; skipping boundary checks")


def test_base_does_not_import_vendors_or_service() -> None:
    offenders = _offenders(PACKAGE_ROOT / "base", (*VENDOR_PACKAGES, "service"))
    if offenders:
        pytest.fail("base must not import vendor packages or the service layer.\n" + "\n".join(offenders))


@pytest.mark.parametrize("layer", (*VENDOR_PACKAGES, "config"))
def test_inner_layers_do_not_import_service(layer: str) -> None:
    offenders = _offenders(PACKAGE_ROOT / layer, ("service",))
    if offenders:
        pytest.fail(f"{layer} must not import the service layer.\n" + "\n".join(offenders))


@pytest.mark.parametrize("vendor", VENDOR_PACKAGES)
def test_vendor_packages_are_independent(vendor: str) -> None:
    others = tuple(v for v in VENDOR_PACKAGES if v != vendor)
    offenders = _offenders(PACKAGE_ROOT / vendor, others)
    if offenders:
        pytest.fail(f"{vendor} must not import sibling vendor packages.\n" + "\n".join(offenders))


def test_config_does_not_import_base() -> None:
    offenders = _offenders(PACKAGE_ROOT / "config", ("base",))
    if offenders:
        pytest.fail("config must stay independent of base.\n" + "\n".join(offenders))
