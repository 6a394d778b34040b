from __future__ import annotations

import ast
import os
from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def require_arch_checks_enabled() -> None:
    if os.getenv("BF_ARCH_CHECKS") != "1":
        pytest.skip("architecture checks are opt-in; set BF_ARCH_CHECKS=1 to enable")


def bf_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_python_files(base: Path) -> list[Path]:
    root = bf_root()
    files: list[Path] = []
    for path in sorted(base.rglob("*.py")):
        rel = path.relative_to(root)
        if any(part.startswith(".") or part == "__pycache__" for part in rel.parts):
            continue
        if rel.parts[0] == "test":
            continue
        files.append(path)
    return files


def parse_imports(path: Path) -> list[ImportRef]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    imports: list[ImportRef] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(ImportRef(module=alias.name, line=node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and not node.level and node.module is not None:
            imports.append(ImportRef(module=node.module, line=node.lineno))
    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def _offenders(package: str, forbidden: tuple[str, ...]) -> list[str]:
    root = bf_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root / package):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")
    return offenders


@pytest.mark.parametrize(
    ("package", "forbidden"),
    [
        ("core", ("bf.platform", "bf.flow", "bf.actions", "bf.plugins", "bf.services", "bf.cli")),
        ("platform", ("bf.flow", "bf.actions", "bf.plugins", "bf.services", "bf.cli")),
        ("flow", ("bf.actions", "bf.plugins", "bf.services", "bf.cli")),
        ("actions", ("bf.plugins", "bf.services", "bf.cli")),
        ("plugins", ("bf.actions", "bf.services", "bf.cli")),
        ("services", ("bf.cli",)),
    ],
)
def test_layers_only_import_downwards(package: str, forbidden: tuple[str, ...]) -> None:
    require_arch_checks_enabled()

    offenders = _offenders(package, forbidden)

    assert not offenders, f"{package} dependency violations:\n" + "\n".join(offenders)


def test_direct_rich_imports_are_limited_to_console() -> None:
    require_arch_checks_enabled()

    root = bf_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root):
        rel = file_path.relative_to(root)
        if rel.as_posix() == "output/console.py":
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "rich"):
                offenders.append(f"{rel}:{item.line}: direct rich import '{item.module}'")

    assert not offenders, "Direct rich usage policy violations:\n" + "\n".join(offenders)


def test_subprocess_is_confined_to_process_module() -> None:
    require_arch_checks_enabled()

    root = bf_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root):
        rel = file_path.relative_to(root)
        if rel.as_posix() == "platform/process.py":
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "subprocess"):
                offenders.append(f"{rel}:{item.line}: direct subprocess import")

    assert not offenders, "subprocess usage policy violations:\n" + "\n".join(offenders)
