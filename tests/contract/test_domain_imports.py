import ast
import pathlib

import pytest

SRC = pathlib.Path(__file__).resolve().parents[2] / "src"
FORBIDDEN = (
    "devkit.application",
    "devkit.infrastructure",
    "devkit.http",
    "devkit.logging",
    "customers.application",
    "customers.infrastructure",
    "structlog",
    "starlette",
    "pydantic",
)


def _imports(path):
    tree = ast.parse(path.read_text(encoding="utf-8"))
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            yield node.module
        elif isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name


@pytest.mark.parametrize("layer", ["devkit/domain", "customers/domain"])
def test_domain_layers_stay_pure(layer):
    files = list((SRC / layer).glob("**/*.py"))
    assert files
    for path in files:
        for module in _imports(path):
            if module.startswith(FORBIDDEN):
                raise AssertionError(f"Forbidden import in domain file: {path} -> {module}")


def test_no_infrastructure_imports_in_customers_application():
    for path in (SRC / "customers" / "application").glob("**/*.py"):
        for module in _imports(path):
            if module.startswith("customers.infrastructure"):
                raise AssertionError(f"Infrastructure import in application file: {path} -> {module}")
