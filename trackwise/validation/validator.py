"""
Two-Stage Form Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Type checking
- Required field presence
- Length, range and format rules (see forms.py)

STAGE 2 - SEMANTIC VALIDATION (only if stage 1 passes):
- Dates in the future
- References to categories or members that do not exist
- A second budget goal for the same category
These produce warnings. The user may still save.

IMPORTANT: Validation never raises and never fixes input silently.
It returns a FormResult: either a typed draft, or the issues found.
"""

from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from trackwise.config import get_settings
from trackwise.models.entities import FormResult, ValidationIssue
from trackwise.state.facade import AppState
from trackwise.validation.forms import (
    BudgetGoalForm,
    CategoryForm,
    ContributionForm,
    ExpenseForm,
    FormSchema,
    MemberForm,
    ShoppingListItemForm,
)

logger = structlog.get_logger(__name__)


class FormValidator:
    """
    Validates form submissions through a two-stage pipeline.

    Stage 1: Schema validation (runs without state)
    Stage 2: Semantic validation (needs state for reference checks)
    """

    def __init__(
        self,
        state: Optional[AppState] = None,
        future_date_tolerance_days: Optional[int] = None,
    ):
        """
        Args:
            state: App state used for reference checks.
                   If None, reference checks are skipped.
            future_date_tolerance_days: Override for the app setting.
        """
        self._state = state
        if future_date_tolerance_days is None:
            future_date_tolerance_days = get_settings().app.future_date_tolerance_days
        self._future_tolerance = timedelta(days=future_date_tolerance_days)

    def _validate_schema(
        self,
        form_cls: type[FormSchema],
        data: Mapping[str, Any],
    ) -> tuple[Optional[FormSchema], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (parsed_form_or_None, list_of_issues)
        """
        try:
            return form_cls.model_validate(dict(data)), []
        except ValidationError as e:
            issues = []
            seen_fields = set()
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "form"
                # One message per field is enough for a form
                if field in seen_fields:
                    continue
                seen_fields.add(field)
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="missing" if error["type"] == "missing" else error["type"],
                    message=form_cls.messages.get(field, error["msg"]),
                    severity="error",
                ))
            return None, issues

    def _check_date(self, value: date, field: str = "date") -> list[ValidationIssue]:
        """Warn on dates beyond today plus the tolerance."""
        if hasattr(value, "date"):
            value = value.date()
        if value > date.today() + self._future_tolerance:
            return [ValidationIssue(
                field=field,
                issue_type="future_date",
                message=f"Date ({value.isoformat()}) is in the future",
                severity="warning",
            )]
        return []

    def _check_category(self, category_id: str) -> list[ValidationIssue]:
        if self._state is None or self._state.get_category_by_id(category_id):
            return []
        return [ValidationIssue(
            field="category_id",
            issue_type="unknown_reference",
            message=f"Category '{category_id}' does not exist",
            severity="warning",
        )]

    def _check_member(self, member_id: str) -> list[ValidationIssue]:
        if self._state is None or self._state.get_member_by_id(member_id):
            return []
        return [ValidationIssue(
            field="member_id",
            issue_type="unknown_reference",
            message=f"Member '{member_id}' does not exist",
            severity="warning",
        )]

    def _validate_semantic(self, form: FormSchema) -> list[ValidationIssue]:
        """Stage 2: Semantic validation. Warnings only."""
        issues: list[ValidationIssue] = []

        if isinstance(form, ExpenseForm):
            issues.extend(self._check_date(form.date))
            issues.extend(self._check_category(form.category_id))

        elif isinstance(form, ContributionForm):
            issues.extend(self._check_date(form.date))
            issues.extend(self._check_member(form.member_id))

        elif isinstance(form, BudgetGoalForm):
            issues.extend(self._check_category(form.category_id))
            if self._state is not None and any(
                goal.category_id == form.category_id
                for goal in self._state.budget_goals
            ):
                issues.append(ValidationIssue(
                    field="category_id",
                    issue_type="duplicate_goal",
                    message="A budget goal for this category already exists",
                    severity="warning",
                ))

        return issues

    def validate(
        self,
        form_cls: type[FormSchema],
        data: Mapping[str, Any],
    ) -> FormResult:
        """
        Run the full pipeline for one form.

        Args:
            form_cls: Form schema to apply
            data: Raw field values as submitted

        Returns:
            FormResult with a draft when there are no errors
        """
        form, issues = self._validate_schema(form_cls, data)

        if form is None:
            logger.debug(
                "form_rejected",
                form=form_cls.form_name,
                fields=[issue.field for issue in issues],
            )
            return FormResult(form=form_cls.form_name, issues=issues)

        issues.extend(self._validate_semantic(form))
        return FormResult(form=form_cls.form_name, draft=form.to_draft(), issues=issues)

    def validate_expense(self, data: Mapping[str, Any]) -> FormResult:
        return self.validate(ExpenseForm, data)

    def validate_budget_goal(self, data: Mapping[str, Any]) -> FormResult:
        return self.validate(BudgetGoalForm, data)

    def validate_category(self, data: Mapping[str, Any]) -> FormResult:
        return self.validate(CategoryForm, data)

    def validate_member(self, data: Mapping[str, Any]) -> FormResult:
        return self.validate(MemberForm, data)

    def validate_contribution(self, data: Mapping[str, Any]) -> FormResult:
        return self.validate(ContributionForm, data)

    def validate_shopping_list_item(self, data: Mapping[str, Any]) -> FormResult:
        return self.validate(ShoppingListItemForm, data)

    def get_user_friendly_summary(self, result: FormResult) -> str:
        """Short text for the UI to show above a form."""
        if result.is_valid and not result.warnings:
            return "✅ Looks good!"

        lines = []
        if result.has_errors:
            lines.append("❌ Please fix the following:")
            for issue in result.errors:
                lines.append(f"   • {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please double-check:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
