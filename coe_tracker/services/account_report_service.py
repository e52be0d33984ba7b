"""
Per-account activity report.

Each category is described by an ``ActivityProjection``: how to derive the
activity title, date and status, and which source fields to copy in the
summary and detailed profiles. One generic projector applies them and the
merged activity list is sorted newest first.

The legacy training catalogue has no owner and is left out of per-account
reports.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coe_tracker.models.user import User
from coe_tracker.services.access import Caller
from coe_tracker.services.category_registry import owned_categories
from coe_tracker.services.exceptions import ForbiddenError, InternalError, NotFoundError
from coe_tracker.services.record_repository import RecordRepository, field_name

logger = logging.getLogger(__name__)

# Activity keys that would clash with the activity's own ``type``
ACTIVITY_FIELD_NAMES = {
    "type": "eventType",
    "participants_of_event": "participants",
}

# Summary names the account report has always used
SUMMARY_KEYS = {
    "commercializationProjects": "projects",
}


def _first(*attrs: str) -> Callable[[Any], Any]:
    def pick(record):
        for attr in attrs:
            value = getattr(record, attr, None)
            if value not in (None, ""):
                return value
        return None
    return pick


def _text(*attrs: str, prefix: str = "") -> Callable[[Any], str]:
    pick = _first(*attrs)

    def title(record):
        value = pick(record)
        return f"{prefix}{value}" if value is not None else "N/A"
    return title


def _jan_first(attr: str) -> Callable[[Any], Optional[datetime]]:
    def to_date(record):
        try:
            return datetime(int(getattr(record, attr)), 1, 1)
        except (TypeError, ValueError):
            return None
    return to_date


def _year_or(attr: str, *fallbacks: str) -> Callable[[Any], Optional[datetime]]:
    from_year = _jan_first(attr)
    pick = _first(*fallbacks)
    return lambda record: from_year(record) or pick(record)


def _fixed(label: str) -> Callable[[Any], str]:
    return lambda record: label


def _status(attr: str, default: str) -> Callable[[Any], str]:
    return lambda record: getattr(record, attr, None) or default


def _event_role(record) -> dict[str, Any]:
    role = record.other_role if record.role == "other" else record.role
    return {"role": role}


@dataclass(frozen=True)
class ActivityProjection:
    type: str
    title: Callable[[Any], Any]
    date: Callable[[Any], Optional[datetime]]
    status: Callable[[Any], str]
    summary_fields: tuple[str, ...] = ()
    # Added on top of summary_fields for detailed reports
    detailed_fields: tuple[str, ...] = ()
    derived: Optional[Callable[[Any], Mapping[str, Any]]] = None

    def fields(self, detailed: bool) -> tuple[str, ...]:
        return self.summary_fields + self.detailed_fields if detailed else self.summary_fields


_COLLABORATION_DETAIL = (
    "type_of_collaboration", "duration_start", "duration_end", "current_status",
    "key_outcomes", "details_of_outcome",
)

PROJECTIONS: dict[str, ActivityProjection] = {
    "commercializationProjects": ActivityProjection(
        type="Industry/Commercial Project",
        title=_text("project_title"),
        date=_first("date_of_contract_sign"),
        status=_fixed("Active"),
        summary_fields=("client_company", "team_lead"),
        detailed_fields=(
            "rnd_team", "amount_in_pkrm", "adv_payment_percentage", "date_of_deployment_as_per_contract",
            "actual_date_of_deployment", "tax_paid_by", "target_sdg", "remarks",
        ),
    ),
    "publications": ActivityProjection(
        type="Publication",
        title=_text("title", "author"),
        date=_year_or("year", "date_of_publication"),
        status=_fixed("Published"),
        summary_fields=("author", "type_of_publication", "hec_category"),
        detailed_fields=("publication_details", "last_known_impact_factor", "date_of_publication", "year", "target_sdg"),
    ),
    "events": ActivityProjection(
        type="Event",
        title=_text("activity"),
        date=_first("date"),
        status=_fixed("Attended"),
        summary_fields=("organizer", "type"),
        detailed_fields=("resource_person", "participants_of_event", "name_of_attendee"),
        derived=_event_role,
    ),
    "collaborations": ActivityProjection(
        type="Collaboration",
        title=_text("member_of_coe"),
        date=_first("duration_start"),
        status=_status("current_status", "Active"),
        summary_fields=("collaborating_foreign_researcher", "foreign_collaborating_institute", "collaboration_scope"),
        detailed_fields=("collaborating_country", "other_type_description") + _COLLABORATION_DETAIL,
    ),
    "localCollaborations": ActivityProjection(
        type="Local Collaboration",
        title=_text("member_of_coe"),
        date=_first("duration_start"),
        status=_status("current_status", "Active"),
        summary_fields=("collaborating_local_researcher", "local_collaborating_institute"),
        detailed_fields=_COLLABORATION_DETAIL,
    ),
    "patents": ActivityProjection(
        type="Patent",
        title=_text("title"),
        date=_first("date_of_submission"),
        status=_fixed("Filed"),
        summary_fields=("inventor", "patent_org", "patent_number"),
        detailed_fields=(
            "co_inventor", "affiliation_of_co_inventor", "date_of_submission", "scope",
            "directory_number", "date_of_approval", "target_sdg",
        ),
    ),
    "fundings": ActivityProjection(
        type="Funding",
        title=_text("project_title"),
        date=_first("start_date", "date_of_submission"),
        status=_status("status", "Active"),
        summary_fields=("pi", "funding_source", "pkr"),
        detailed_fields=(
            "co_pi", "research_team", "team", "date_of_submission", "date_of_approval",
            "closing_date", "amount_pkr", "target_sdg",
        ),
    ),
    "fundingProposals": ActivityProjection(
        type="Funding Proposal",
        title=_text("project_title"),
        date=_first("date_of_submission"),
        status=_status("status", "Submitted"),
        summary_fields=("pi", "funding_source", "pkr"),
        detailed_fields=("research_team", "team", "date_of_submission", "amount_pkr", "target_sdg"),
    ),
    "achievements": ActivityProjection(
        type="Achievement",
        title=_text("event"),
        date=_first("date"),
        status=_fixed("Achieved"),
        summary_fields=("organizer", "participant_of_event"),
        detailed_fields=("participant_from_coeai", "role_of_participant_from_coeai", "details_of_achievement"),
    ),
    "trainingsConducted": ActivityProjection(
        type="Training Conducted",
        title=_text("organizer", prefix="Organizer: "),
        date=_first("date"),
        status=_fixed("Conducted"),
        summary_fields=("organizer", "number_of_attendees"),
        detailed_fields=("attendees", "resource_persons", "target_sdg", "total_revenue_generated"),
    ),
    "internships": ActivityProjection(
        type="Internship",
        title=_text("applicant_name", prefix="Applicant: "),
        date=_jan_first("year"),
        status=_fixed("Active"),
        summary_fields=("applicant_name", "year", "duration", "supervisor"),
        detailed_fields=(
            "certificate_number", "official_email", "contact_number", "affiliation",
            "center_name", "tasks_completed",
        ),
    ),
    "talkTrainingConference": ActivityProjection(
        type="TalkTrainingConference",
        title=_text("title"),
        date=_first("date"),
        status=_fixed("Attended"),
        summary_fields=("type", "mode", "resource_person"),
        detailed_fields=("participants", "agenda", "follow_up_activity", "target_sdg"),
    ),
    "competitions": ActivityProjection(
        type="Competition",
        title=_text("title"),
        date=_first("date"),
        status=_fixed("Participated"),
        summary_fields=("organizer", "scope", "prize_money"),
        detailed_fields=("participants", "scope_other", "participants_from_bu", "details"),
    ),
}


def _iso(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value


def resolve_date(projection: ActivityProjection, record) -> Optional[datetime]:
    return projection.date(record) or record.created_at


def project_record(projection: ActivityProjection, record, detailed: bool = False) -> dict[str, Any]:
    """Map one record onto the common activity shape."""
    activity: dict[str, Any] = {
        "type": projection.type,
        "title": projection.title(record),
        "date": resolve_date(projection, record),
        "status": projection.status(record),
    }
    for column in projection.fields(detailed):
        key = ACTIVITY_FIELD_NAMES.get(column) or field_name(column)
        activity[key] = _iso(getattr(record, column))
    if projection.derived:
        activity.update(projection.derived(record))
    if detailed:
        activity["id"] = str(record.id)
        activity["fileLink"] = record.file_link
    return activity


def sort_activities(activities: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Newest first; activities without a date go last."""
    return sorted(activities, key=lambda a: a["date"] or datetime.min, reverse=True)


class AccountReportService:
    def __init__(self, db: Session):
        self.db = db

    def _get_account(self, account_id: str) -> User:
        try:
            account_uuid = uuid.UUID(str(account_id))
        except ValueError:
            raise NotFoundError("Account not found")
        user = self.db.query(User).filter(User.id == account_uuid).first()
        if not user:
            raise NotFoundError("Account not found")
        return user

    def build_account_report(self, account_id: str, detailed: bool = False) -> dict[str, Any]:
        return self._build(self._get_account(account_id), detailed)

    def _build(self, user: User, detailed: bool) -> dict[str, Any]:
        owner_id = str(user.id)
        categories = [c for c in owned_categories() if c.key in PROJECTIONS]

        try:
            # Counting pass, independent of the activity projection below
            summary: dict[str, int] = {
                SUMMARY_KEYS.get(c.key, c.key): RecordRepository(self.db, c).count(owner_id=owner_id)
                for c in categories
            }

            activities: list[dict[str, Any]] = []
            for category in categories:
                projection = PROJECTIONS[category.key]
                for record in RecordRepository(self.db, category).list(owner_id=owner_id):
                    activities.append(project_record(projection, record, detailed))
        except SQLAlchemyError as e:
            logger.error(f"Account report failed for {owner_id}: {e}", exc_info=True)
            raise InternalError(f"Failed to generate account report: {e}") from e

        activities = sort_activities(activities)
        for activity in activities:
            activity["date"] = _iso(activity["date"])

        logger.info(f"Account report for {user.email}: {len(activities)} activities (detailed={detailed})")
        return {
            "account": {
                "id": owner_id,
                "firstName": user.first_name,
                "lastName": user.last_name,
                "email": user.email,
                "role": user.role,
                "uid": user.uid,
                "joinDate": _iso(user.join_date),
            },
            "summary": {"totalActivities": sum(summary.values()), **summary},
            "allActivities": activities,
        }

    def generate_for_caller(self, caller: Caller, account_id: str, detailed: bool = False) -> dict[str, Any]:
        """Directors may report on any account, everyone else only on their own."""
        user = self._get_account(account_id)
        if not caller.is_director and str(user.id) != caller.id:
            raise ForbiddenError("Access denied")
        return self._build(user, detailed)
