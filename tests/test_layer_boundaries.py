"""Dependency rules between the pure, runtime, application and cli layers."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

_PACKAGE = Path(__file__).resolve().parents[1] / "freshkeeper"

# Pure code parses text and classifies dates; it never does I/O or talks HTTP.
_PURE_PACKAGES = ("domain", "label")
_PURE_FORBIDDEN = (
    "freshkeeper.runtime",
    "freshkeeper.application",
    "freshkeeper.cli",
    "httpx",
    "fastapi",
    "uvicorn",
)
_APPLICATION_FORBIDDEN = ("freshkeeper.cli", "fastapi", "uvicorn")


def _imported_modules(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    imports: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            imports.append(node.module)
    return imports


def _violations(files: list[Path], forbidden: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for path in files:
        for module in _imported_modules(path):
            if any(module == prefix or module.startswith(prefix + ".") for prefix in forbidden):
                found.append(f"{path.relative_to(_PACKAGE.parent)} imports {module}")
    return found


@pytest.mark.parametrize("package", _PURE_PACKAGES)
def test_pure_packages_stay_pure(package: str) -> None:
    files = sorted((_PACKAGE / package).rglob("*.py"))

    assert files
    assert _violations(files, _PURE_FORBIDDEN) == []


def test_application_does_not_depend_on_cli_or_server() -> None:
    files = sorted((_PACKAGE / "application").rglob("*.py"))

    assert _violations(files, _APPLICATION_FORBIDDEN) == []
