"""ValidateService — run the rule set over every document.

A run passes when there are no error-severity issues and no parse
failures.  Strict mode additionally fails on any warning.
"""

from __future__ import annotations

from adrscope.domain.graph import build_graph
from adrscope.domain.validation import (
    RelationshipIntegrityRule,
    ValidationReport,
    ValidationRule,
    Validator,
    default_rules,
)
from adrscope.services.base import BaseService, LoadedCollection
from adrscope.services.result import ServiceResult
from adrscope.services.telemetry import trace_span, traced


class ValidateService(BaseService):
    """Validate a decision record collection."""

    def build_validator(
        self,
        loaded: LoadedCollection,
        *,
        check_relationships: bool,
        warnings: list[str],
    ) -> Validator:
        """Built-in rules from config, optional relationship rule, then plugin rules."""
        cfg = self._settings.validation
        rules: list[ValidationRule] = default_rules(
            required=cfg.required_fields,
            recommended=cfg.recommended_fields,
        )
        if check_relationships:
            graph = build_graph(loaded.documents)
            rules.append(RelationshipIntegrityRule.from_dangling(graph.dangling))
        if self._plugins is not None:
            plugin_rules, plugin_warnings = self._plugins.collect_validation_rules()
            rules.extend(plugin_rules)
            warnings.extend(plugin_warnings)
        return Validator(rules)

    @traced
    def validate(
        self,
        *,
        input_dir: str | None = None,
        pattern: str | None = None,
        strict: bool | None = None,
        check_relationships: bool | None = None,
    ) -> ServiceResult:
        """Validate every document; unset flags fall back to ``[validation]``."""
        op = "validate"
        cfg = self._settings.validation
        strict = cfg.strict if strict is None else strict
        if check_relationships is None:
            check_relationships = cfg.check_relationships

        loaded = self._load_documents(op, input_dir, pattern)
        if isinstance(loaded, ServiceResult):
            return loaded
        warnings = list(loaded.warnings)

        validator = self.build_validator(
            loaded, check_relationships=check_relationships, warnings=warnings
        )
        with trace_span("rules") as span:
            report = validator.validate_all(loaded.documents)
            if span:
                span.annotate("rules", len(validator.rules))
                span.annotate("issues", len(report))

        passed = self.passed(report, parse_errors=len(loaded.parse_errors), strict=strict)
        counts = report.counts()
        self._dispatch_event(
            "post_validate",
            {"errors": counts["errors"], "warnings": counts["warnings"], "passed": passed},
            warnings,
        )

        data = {
            "passed": passed,
            "strict": strict,
            "document_count": len(loaded.documents),
            "rules": validator.rule_names(),
            "error_count": counts["errors"],
            "warning_count": counts["warnings"],
            "issues": [issue.to_dict() for issue in report],
            "parse_errors": loaded.parse_error_dicts(),
        }
        if passed:
            return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

        return ServiceResult.failure(
            op,
            "VALIDATION_FAILED",
            self.failure_message(report, parse_errors=len(loaded.parse_errors), strict=strict),
            detail={
                "error_count": counts["errors"],
                "warning_count": counts["warnings"],
                "parse_error_count": len(loaded.parse_errors),
            },
            warnings=warnings,
            data=data,
        )

    @staticmethod
    def passed(report: ValidationReport, *, parse_errors: int, strict: bool) -> bool:
        if report.has_errors() or parse_errors:
            return False
        return not (strict and report.has_warnings())

    @staticmethod
    def failure_message(report: ValidationReport, *, parse_errors: int, strict: bool) -> str:
        counts = report.counts()
        parts = [f"{counts['errors']} error(s)", f"{counts['warnings']} warning(s)"]
        if parse_errors:
            parts.append(f"{parse_errors} unparseable file(s)")
        suffix = " (strict mode)" if strict and not report.has_errors() and not parse_errors else ""
        return "Validation failed: " + ", ".join(parts) + suffix
