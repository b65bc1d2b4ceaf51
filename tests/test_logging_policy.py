from __future__ import annotations

import ast
from pathlib import Path


ALLOWED_BASICCONFIG_PATHS: tuple[str, ...] = ()


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _is_basic_config_call(node: ast.Call) -> bool:
    func = node.func
    if isinstance(func, ast.Attribute):
        return func.attr == "basicConfig"
    if isinstance(func, ast.Name):
        return func.id == "basicConfig"
    return False


def test_logging_policy() -> None:
    repo_root = _repo_root()
    src_root = repo_root / "src" / "mocma"
    violations: list[str] = []

    for path in src_root.rglob("*.py"):
        rel_path = path.relative_to(repo_root).as_posix()
        if rel_path in ALLOWED_BASICCONFIG_PATHS:
            continue

        tree = ast.parse(path.read_text(encoding="utf-8-sig"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Call) and _is_basic_config_call(node):
                violations.append(f"{rel_path}:{getattr(node, 'lineno', '?')}: logging.basicConfig")

    if violations:
        msg = ["logging.basicConfig is forbidden in library modules:"]
        msg.extend(f"- {item}" for item in sorted(violations))
        raise AssertionError("\n".join(msg))


def test_library_loggers_live_under_package_namespace() -> None:
    repo_root = _repo_root()
    offenders: list[str] = []
    for path in (repo_root / "src" / "mocma").rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8-sig"))
        for node in ast.walk(tree):
            if not isinstance(node, ast.Call):
                continue
            func = node.func
            if isinstance(func, ast.Attribute) and func.attr == "getLogger" and node.args:
                arg = node.args[0]
                if isinstance(arg, ast.Constant) and isinstance(arg.value, str) and not arg.value.startswith("mocma"):
                    offenders.append(f"{path.relative_to(repo_root).as_posix()}:{node.lineno}")
    assert not offenders, f"Loggers outside the 'mocma' namespace: {offenders}"
