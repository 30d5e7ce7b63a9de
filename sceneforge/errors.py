"""Error taxonomy shared by the CLI and the HTTP API.

Each error carries the process exit code the command surface uses for it:

- UsageError        missing or malformed arguments (argparse already exits 2)
- ResourceError     unreadable file, unparsable document, missing motif
- SchemaViolation   document shape problems, all collected in one pass
- GeometryViolation visual-lint failure, reported at the first failing rule
"""

from __future__ import annotations

EXIT_OK = 0
EXIT_VALIDATION = 1
EXIT_USAGE = 2
EXIT_RESOURCE = 3


class SceneForgeError(Exception):
    exit_code = 1


class UsageError(SceneForgeError):
    exit_code = EXIT_USAGE


class ResourceError(SceneForgeError):
    exit_code = EXIT_RESOURCE


class SchemaViolation(SceneForgeError):
    exit_code = EXIT_VALIDATION

    def __init__(self, issues: list[str]) -> None:
        self.issues = list(issues)
        super().__init__(f"{len(self.issues)} schema issue(s): " + "; ".join(self.issues))


class GeometryViolation(SceneForgeError):
    exit_code = EXIT_VALIDATION

    def __init__(self, violations: list) -> None:
        self.violations = list(violations)
        first = self.violations[0].message if self.violations else "geometry violation"
        super().__init__(first)
