"""
Record Mapping

Builds scoring records from raw database rows. Blank strings, empty lists
and zero placeholders become ``None`` so an absent field is always a
distinct state for the factors.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from app.domain.scoring.interfaces import (
    InstitutionProfile,
    InstitutionRecord,
    Scholarship,
    StudentCandidate,
    StudentProfile,
)
from app.infrastructure.exceptions import ValidationError


logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _text_list(value: Any) -> Optional[List[str]]:
    if not value:
        return None
    if isinstance(value, str):
        value = [value]
    items = [str(item).strip() for item in value if item and str(item).strip()]
    return items or None


def _number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _positive_number(value: Any) -> Optional[float]:
    number = _number(value)
    return number if number else None


def _integer(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def parse_date(value: Any) -> Optional[date]:
    """Accept ``date``, ``datetime`` or ISO-8601 strings."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}", original_error=e)


def _nonzero_integer(value: Any) -> Optional[int]:
    return _integer(value) or None


STUDENT_FIELDS: Dict[str, Callable[[Any], Any]] = {
    "field_of_study": _text,
    "current_education_level": _text,
    "gpa": _positive_number,
    "nationality": _text,
    "languages_spoken": _text_list,
    "preferred_study_countries": _text_list,
    "preferred_study_fields": _text_list,
    "financial_need_level": _nonzero_integer,
    "academic_achievements": _text,
    "work_experience": _text,
    "date_of_birth": parse_date,
}

INSTITUTION_PROFILE_FIELDS: Dict[str, Callable[[Any], Any]] = {
    "institution_type": _text,
    "country": _text,
    "focus_areas": _text_list,
    "ranking_global": _nonzero_integer,
    "total_students": _integer,
    "scholarship_budget_annual": _number,
}


def _read_fields(
    row: Mapping[str, Any],
    parsers: Dict[str, Callable[[Any], Any]],
    record_id: str,
    lenient: bool = False,
) -> Dict[str, Any]:
    """
    Parse the optional columns of a row.

    With ``lenient`` an unreadable value is logged and read as missing;
    otherwise the error propagates and the caller drops the row.
    """
    fields = {}
    for name, parser in parsers.items():
        value = row.get(name)
        try:
            fields[name] = parser(value)
        except (TypeError, ValueError, ValidationError):
            if not lenient:
                raise
            logger.warning("Ignoring unreadable %s on %s: %r", name, record_id, value)
            fields[name] = None
    return fields


def student_profile_from_row(subject_id: str, row: Mapping[str, Any]) -> StudentProfile:
    """
    Build the scholarship-direction subject from a ``student_profiles`` row.

    The subject is never dropped: unreadable columns count as not filled in.
    """
    return StudentProfile(
        id=subject_id,
        **_read_fields(row, STUDENT_FIELDS, subject_id, lenient=True),
    )


def student_candidate_from_row(row: Mapping[str, Any]) -> StudentCandidate:
    """
    Build a candidate from a ``student_profiles`` row joined with ``profiles``.

    Identity fields come from the joined profile when present.
    """
    profile: Dict[str, Any] = dict(row.get("profiles") or {})
    candidate_id = profile.get("id") or row.get("profile_id") or row.get("id")
    if not candidate_id:
        raise ValidationError("Student candidate row has no identifier")

    return StudentCandidate(
        id=str(candidate_id),
        full_name=_text(profile.get("full_name", row.get("full_name"))),
        email=_text(profile.get("email", row.get("email"))),
        bio=_text(profile.get("bio", row.get("bio"))),
        **_read_fields(row, STUDENT_FIELDS, str(candidate_id)),
    )


def scholarship_from_row(row: Mapping[str, Any]) -> Scholarship:
    deadline = parse_date(row.get("application_deadline"))
    if deadline is None:
        raise ValidationError(f"Scholarship {row.get('id')} has no application deadline")

    return Scholarship(
        id=str(row["id"]),
        title=_text(row.get("title")) or "",
        application_deadline=deadline,
        study_fields=_text_list(row.get("study_fields")) or [],
        description=_text(row.get("description")) or "",
        amount=_positive_number(row.get("amount")),
        currency=_text(row.get("currency")),
        study_level=_text(row.get("study_level")),
        target_countries=_text_list(row.get("target_countries")),
        target_nationalities=_text_list(row.get("target_nationalities")),
        min_gpa=_positive_number(row.get("min_gpa")),
        min_age=_integer(row.get("min_age")) or None,
        max_age=_integer(row.get("max_age")) or None,
        required_languages=_text_list(row.get("required_languages")),
        eligibility_criteria=_text(row.get("eligibility_criteria")),
        scholarship_type=_text(row.get("scholarship_type")),
        renewable=bool(row.get("renewable")),
        is_featured=bool(row.get("is_featured")),
        is_active=bool(row.get("is_active", True)),
        institution_id=_text(row.get("institution_id")),
    )


def institution_profile_from_row(subject_id: str, row: Mapping[str, Any]) -> InstitutionProfile:
    return InstitutionProfile(
        id=subject_id,
        institution_name=_text(row.get("institution_name")) or "",
        **_read_fields(row, INSTITUTION_PROFILE_FIELDS, subject_id, lenient=True),
    )


def institution_record_from_row(row: Mapping[str, Any]) -> InstitutionRecord:
    return InstitutionRecord(
        id=str(row["id"]),
        ranking_global=_integer(row.get("ranking_global")) or None,
        ranking_national=_integer(row.get("ranking_national")) or None,
        established_year=_integer(row.get("established_year")) or None,
    )


class InstitutionDirectory:
    """In-memory ``InstitutionLookup`` over preloaded institution records."""

    def __init__(self, institutions: Optional[List[InstitutionRecord]] = None):
        self._by_id = {inst.id: inst for inst in institutions or []}

    def get_institution(self, institution_id: str) -> Optional[InstitutionRecord]:
        return self._by_id.get(institution_id)

    def __len__(self) -> int:
        return len(self._by_id)
