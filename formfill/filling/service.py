"""Fill planning: decide which controls get which profile values.

The planner never touches a page. It receives plain FormField descriptions
and returns a FillReport; whoever owns the page applies the values.
"""

import logging
from typing import Iterable, Optional
from uuid import uuid4

from formfill.domain.models import FormField
from formfill.logging import get_logger
from formfill.logging.context import log_context
from formfill.matching.engine import FieldMatcher

from .candidates import field_candidates, has_existing_value, is_fillable
from .models import FieldFill, FieldSkip, FillReport, SkipReason
from .options import select_option

logger = get_logger(__name__, component="filling")


class FormFiller:
    """Plans fills for a page of controls using one FieldMatcher.

    The enabled flag and confidence threshold are fixed per instance; the
    counts of a run live in the returned FillReport.
    """

    def __init__(
        self,
        matcher: FieldMatcher,
        enabled: bool = True,
        min_confidence: int = 0,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize FormFiller.

        Args:
            matcher: Matcher built from the current profile snapshot
            enabled: Snapshot of the user's auto-fill toggle
            min_confidence: Matches below this confidence are skipped
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.matcher = matcher
        self.enabled = enabled
        self.min_confidence = min_confidence
        self.logger = logger_instance or logger

    def plan(self, fields: Iterable[FormField]) -> FillReport:
        """Decide the fill for every control of a page.

        Args:
            fields: Control descriptions in page order

        Returns:
            FillReport with the fills to apply and the skipped controls
        """
        if not self.enabled:
            self.logger.info(
                "Auto-fill is disabled",
                extra={"event": "filling.plan.disabled"},
            )
            return FillReport(enabled=False)

        if not self.matcher.profile:
            self.logger.info(
                "No profile data stored",
                extra={"event": "filling.plan.empty_profile"},
            )
            return FillReport()

        report = FillReport()

        with log_context(fill_run_id=uuid4().hex):
            for form_field in fields:
                if not is_fillable(form_field):
                    continue

                report.found += 1
                outcome = self.plan_field(form_field)
                if isinstance(outcome, FieldFill):
                    report.fills.append(outcome)
                else:
                    report.skips.append(outcome)

            self.logger.info(
                report.summary,
                extra={
                    "event": "filling.plan.completed",
                    "fields_found": report.found,
                    "fields_filled": report.filled,
                },
            )

        return report

    def plan_field(self, form_field: FormField):
        """Decide the fill for one fillable control.

        Returns:
            FieldFill when the control should be filled, FieldSkip otherwise
        """
        candidates = field_candidates(form_field)
        if not candidates:
            return FieldSkip(field_label=None, reason=SkipReason.NO_CANDIDATES)

        primary = candidates[0]
        match = self.matcher.find_match(primary, candidates[1:])
        if match is None:
            return FieldSkip(field_label=primary, reason=SkipReason.NO_MATCH)

        if match.confidence < self.min_confidence:
            return FieldSkip(primary, SkipReason.LOW_CONFIDENCE, match.stored_key)

        value = self.matcher.get_value(match.stored_key)
        if not value:
            return FieldSkip(primary, SkipReason.EMPTY_VALUE, match.stored_key)

        if has_existing_value(form_field.value):
            return FieldSkip(primary, SkipReason.HAS_VALUE, match.stored_key)

        option_text = None
        if form_field.tag == "select":
            option = select_option(form_field.options, value)
            if option is None:
                self.logger.debug(
                    f"No option of '{primary}' fits the stored value",
                    extra={
                        "event": "filling.field.no_option",
                        "stored_key": match.stored_key,
                        "option_count": len(form_field.options),
                    },
                )
                return FieldSkip(primary, SkipReason.NO_OPTION, match.stored_key)
            value = option.value
            option_text = option.text

        return FieldFill(
            field_label=primary,
            stored_key=match.stored_key,
            value=value,
            confidence=match.confidence,
            match_type=match.match_type.value,
            option_text=option_text,
        )
