"""Composable validation rules with severity levels.

A rule is any object exposing ``name``, ``description`` and
``validate(document) -> list[ValidationIssue]``.  Rules are pure and
independent, so the :class:`Validator` simply runs every rule against
every document and concatenates the results.  No issue is ever dropped.

Strict mode is not known here: callers decide whether warnings fail a run.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from adrscope.domain.document import Document
    from adrscope.domain.graph import DanglingReference

DEFAULT_REQUIRED_FIELDS: tuple[str, ...] = ("title", "status")
DEFAULT_RECOMMENDED_FIELDS: tuple[str, ...] = ("description", "created", "category")


class Severity(StrEnum):
    """Blocking (``error``) or advisory (``warning``)."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """A single finding produced by a rule."""

    rule: str
    severity: Severity
    message: str
    field: str | None = None
    document_id: str | None = None
    path: str | None = None

    def __str__(self) -> str:
        location = self.path or self.document_id or "?"
        return f"{self.severity}: {location}: {self.message} [{self.rule}]"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "rule": self.rule,
            "severity": str(self.severity),
            "message": self.message,
        }
        if self.field is not None:
            data["field"] = self.field
        if self.document_id is not None:
            data["document_id"] = self.document_id
        if self.path is not None:
            data["path"] = self.path
        return data


def issue_for(
    document: Document,
    rule: str,
    severity: Severity,
    message: str,
    *,
    field_name: str | None = None,
) -> ValidationIssue:
    """Build an issue located at *document*."""
    return ValidationIssue(
        rule=rule,
        severity=severity,
        message=message,
        field=field_name,
        document_id=document.id,
        path=str(document.source_path) if document.source_path else document.filename,
    )


@dataclass(frozen=True)
class ValidationReport:
    """Ordered, immutable collection of issues for one document or a whole set."""

    issues: tuple[ValidationIssue, ...] = ()

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self) -> Iterator[ValidationIssue]:
        return iter(self.issues)

    def by_severity(self, severity: Severity) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == severity]

    @property
    def errors(self) -> list[ValidationIssue]:
        return self.by_severity(Severity.ERROR)

    @property
    def warnings(self) -> list[ValidationIssue]:
        return self.by_severity(Severity.WARNING)

    def has_errors(self) -> bool:
        return any(i.severity == Severity.ERROR for i in self.issues)

    def has_warnings(self) -> bool:
        return any(i.severity == Severity.WARNING for i in self.issues)

    def is_valid(self) -> bool:
        """True when no error-severity issue is present."""
        return not self.has_errors()

    def is_empty(self) -> bool:
        return not self.issues

    def counts(self) -> dict[str, int]:
        return {
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "total": len(self.issues),
        }

    def for_document(self, document_id: str) -> ValidationReport:
        return ValidationReport(tuple(i for i in self.issues if i.document_id == document_id))

    def merge(self, *others: ValidationReport) -> ValidationReport:
        """Return a new report with the issues of *others* appended in order."""
        issues = list(self.issues)
        for other in others:
            issues.extend(other.issues)
        return ValidationReport(tuple(issues))


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


@runtime_checkable
class ValidationRule(Protocol):
    """Capability interface implemented by every rule."""

    name: str
    description: str

    def validate(self, document: Document) -> list[ValidationIssue]: ...


@dataclass(frozen=True)
class RequiredFieldsRule:
    """One error per missing required field."""

    fields: tuple[str, ...] = DEFAULT_REQUIRED_FIELDS
    name: str = "required-fields"
    description: str = "Required frontmatter fields must be present and non-empty"

    def validate(self, document: Document) -> list[ValidationIssue]:
        return [
            issue_for(
                document,
                self.name,
                Severity.ERROR,
                f"missing required field '{f}'",
                field_name=f,
            )
            for f in self.fields
            if not document.frontmatter.has_value(f)
        ]


@dataclass(frozen=True)
class RecommendedFieldsRule:
    """One warning per missing recommended field."""

    fields: tuple[str, ...] = DEFAULT_RECOMMENDED_FIELDS
    name: str = "recommended-fields"
    description: str = "Recommended frontmatter fields should be present"

    def validate(self, document: Document) -> list[ValidationIssue]:
        return [
            issue_for(
                document,
                self.name,
                Severity.WARNING,
                f"missing recommended field '{f}'",
                field_name=f,
            )
            for f in self.fields
            if not document.frontmatter.has_value(f)
        ]


@dataclass(frozen=True)
class RelationshipIntegrityRule:
    """Opt-in rule: one warning per ``related`` entry with no matching document.

    Consumes the dangling-reference diagnostics of a built relationship
    graph rather than resolving references itself.
    """

    dangling: dict[str, tuple[str, ...]] = field(default_factory=dict)
    name: str = "relationship-integrity"
    description: str = "Related documents must exist in the collection"

    @classmethod
    def from_dangling(cls, references: Iterable[DanglingReference]) -> RelationshipIntegrityRule:
        grouped: dict[str, list[str]] = {}
        for ref in references:
            grouped.setdefault(ref.source, []).append(ref.reference)
        return cls(dangling={k: tuple(v) for k, v in grouped.items()})

    def validate(self, document: Document) -> list[ValidationIssue]:
        return [
            issue_for(
                document,
                self.name,
                Severity.WARNING,
                f"related document '{ref}' does not exist",
                field_name="related",
            )
            for ref in self.dangling.get(document.id, ())
        ]


def default_rules(
    *,
    required: Sequence[str] = DEFAULT_REQUIRED_FIELDS,
    recommended: Sequence[str] = DEFAULT_RECOMMENDED_FIELDS,
) -> list[ValidationRule]:
    """The two built-in rules, optionally reconfigured."""
    return [
        RequiredFieldsRule(fields=tuple(required)),
        RecommendedFieldsRule(fields=tuple(recommended)),
    ]


class Validator:
    """Runs an ordered list of rules over documents."""

    def __init__(self, rules: Iterable[ValidationRule] | None = None) -> None:
        self._rules: list[ValidationRule] = list(rules) if rules is not None else default_rules()

    @property
    def rules(self) -> tuple[ValidationRule, ...]:
        return tuple(self._rules)

    def rule_names(self) -> list[str]:
        return [r.name for r in self._rules]

    def add_rule(self, rule: ValidationRule) -> None:
        self._rules.append(rule)

    def remove_rule(self, name: str) -> bool:
        """Remove every rule called *name*; return whether any was removed."""
        before = len(self._rules)
        self._rules = [r for r in self._rules if r.name != name]
        return len(self._rules) != before

    def replace_rule(self, rule: ValidationRule) -> None:
        """Swap in *rule* for the rule with the same name (appends if absent)."""
        for idx, existing in enumerate(self._rules):
            if existing.name == rule.name:
                self._rules[idx] = rule
                return
        self._rules.append(rule)

    def validate(self, document: Document) -> ValidationReport:
        issues: list[ValidationIssue] = []
        for rule in self._rules:
            issues.extend(rule.validate(document))
        return ValidationReport(tuple(issues))

    def validate_all(self, documents: Iterable[Document]) -> ValidationReport:
        issues: list[ValidationIssue] = []
        for document in documents:
            issues.extend(self.validate(document).issues)
        return ValidationReport(tuple(issues))
