"""Record of the fields and lines dropped during a parse."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class IssueSeverity(Enum):
    """Severity level of a parse issue."""

    WARNING = "warning"
    INFO = "info"


class IssueCodes:
    """Codes of the issues a parse can report."""

    W001_UNKNOWN_KKEY = "W001"
    W002_CONVERSION_FAILED = "W002"
    W003_INVALID_LINE = "W003"
    W004_UNKNOWN_LEVEL = "W004"
    W005_UNSUPPORTED_HIERARCHY_KEY = "W005"


@dataclass(frozen=True)
class ParseIssue:
    """A single dropped field or line."""

    code: str
    """Issue code from :class:`IssueCodes`."""

    message: str
    """Human-readable description."""

    severity: IssueSeverity = IssueSeverity.WARNING

    line: int | None = None
    """1-based line number in the parsed content."""

    kkey: str | None = None
    """K-key of the dropped field, if any."""

    def __str__(self) -> str:
        parts = [f"[{self.code}]", self.severity.value.upper()]
        if self.line is not None:
            parts.append(f"line {self.line}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ParseReport:
    """All issues found while parsing one file."""

    issues: list[ParseIssue] = field(default_factory=list)

    @property
    def warnings(self) -> list[ParseIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]

    @property
    def is_clean(self) -> bool:
        """Check if nothing was dropped."""
        return not self.issues

    def add(self, issue: ParseIssue) -> None:
        self.issues.append(issue)

    def add_warning(
        self, code: str, message: str, line: int | None = None, kkey: object = None
    ) -> None:
        """Add a warning issue."""
        self.add(
            ParseIssue(
                code=code,
                message=message,
                severity=IssueSeverity.WARNING,
                line=line,
                kkey=None if kkey is None else str(kkey),
            )
        )

    def by_code(self, code: str) -> list[ParseIssue]:
        return [i for i in self.issues if i.code == code]

    def __len__(self) -> int:
        return len(self.issues)
