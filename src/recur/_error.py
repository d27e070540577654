from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from ._validate import Violation


RecurErrorKind = Literal["rule", "validation"]


class RecurError(Exception):
    kind: RecurErrorKind
    violations: tuple[Violation, ...]

    def __init__(
        self,
        kind: RecurErrorKind,
        message: str,
        violations: Iterable[Violation] = (),
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.violations = tuple(violations)

    @classmethod
    def rule(cls, message: str) -> RecurError:
        return cls("rule", message)

    @classmethod
    def validation(cls, violations: Iterable[Violation]) -> RecurError:
        violations = tuple(violations)
        noun = "violation" if len(violations) == 1 else "violations"
        return cls("validation", f"invalid recurrence rule ({len(violations)} {noun})", violations)

    def display_rich(self) -> str:
        out = f"error: {self}"
        for violation in self.violations:
            out += f"\n  {violation.field}: {violation.message}"
        return out
