"""Pre-commit helper enforcing that query code never writes.

Routes and query services only read; session calls that stage or persist
changes are rejected. The bootstrap service is the one allowed writer.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path


WRITE_ATTRS = {"add", "add_all", "delete", "merge", "flush", "commit", "rollback"}
ALLOWED_WRITERS = {"bootstrap_service.py"}


def find_write_calls(paths: list[Path]) -> list[str]:
    violations: list[str] = []
    for path in paths:
        if path.suffix != ".py" or path.name in ALLOWED_WRITERS:
            continue
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        for node in ast.walk(tree):
            if not isinstance(node, ast.Call):
                continue
            func = node.func
            if not isinstance(func, ast.Attribute):
                continue
            if func.attr not in WRITE_ATTRS:
                continue
            violations.append(f"{path}:{node.lineno} .{func.attr}()")
    return violations


def main(argv: list[str]) -> int:
    paths = [Path(arg) for arg in argv[1:]]
    if not paths:
        return 0

    violations = find_write_calls(paths)
    if not violations:
        return 0

    sys.stderr.write(
        "\n".join(
            [
                "Query routes/services are read-only; session write calls"
                " (add/delete/merge/flush/commit/rollback) are forbidden.",
                "",
                "Violations:",
                *sorted(violations),
                "",
            ]
        )
    )
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
