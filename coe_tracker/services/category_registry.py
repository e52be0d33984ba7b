"""
The one registry of record categories.

Analytics, account reports, saved reports and the generic records API all
iterate ``CATEGORIES``; add a category here and it shows up everywhere.
"""
from dataclasses import dataclass
from typing import Optional

from coe_tracker.models.categories import (
    Achievement,
    Collaboration,
    CommercializationProject,
    Competition,
    Event,
    Funding,
    FundingProposal,
    Internship,
    LocalCollaboration,
    Patent,
    Publication,
    TalkTrainingConference,
    Training,
    TrainingsConducted,
)
from coe_tracker.services.exceptions import InvalidArgumentError, NotFoundError


@dataclass(frozen=True)
class Category:
    key: str
    display_name: str
    model: type
    owner_field_present: bool = True
    # Name accepted by saved reports; None when the category cannot back a report
    source_type: Optional[str] = None


CATEGORIES: tuple[Category, ...] = (
    Category("internships", "Internships", Internship, source_type="Internships"),
    Category("talkTrainingConference", "Talks/Training Conference", TalkTrainingConference,
             source_type="TalksTrainingsAttended"),
    Category("fundings", "Fundings", Funding, source_type="Fundings"),
    Category("fundingProposals", "Funding Proposals", FundingProposal, source_type="FundingProposals"),
    Category("patents", "Patents", Patent, source_type="Patents"),
    Category("publications", "Publications", Publication, source_type="Publications"),
    Category("events", "Events", Event, source_type="Events"),
    Category("achievements", "Achievements", Achievement, source_type="Achievements"),
    Category("competitions", "Competitions", Competition, source_type="Competitions"),
    Category("collaborations", "Collaborations", Collaboration, source_type="Collaborations"),
    Category("localCollaborations", "Local Collaborations", LocalCollaboration,
             source_type="LocalCollaborations"),
    Category("commercializationProjects", "Commercialization Projects", CommercializationProject,
             source_type="CommercializationProjects"),
    Category("trainingsConducted", "Trainings Conducted", TrainingsConducted, source_type="Trainings"),
    Category("trainings", "Trainings (legacy)", Training, owner_field_present=False),
)

_BY_KEY = {category.key: category for category in CATEGORIES}
_BY_SOURCE_TYPE = {category.source_type: category for category in CATEGORIES if category.source_type}

SOURCE_TYPES: tuple[str, ...] = tuple(_BY_SOURCE_TYPE)


def owned_categories() -> tuple[Category, ...]:
    return tuple(category for category in CATEGORIES if category.owner_field_present)


def find_category(key: str) -> Optional[Category]:
    return _BY_KEY.get(key)


def get_category(key: str) -> Category:
    category = _BY_KEY.get(key)
    if category is None:
        raise NotFoundError("Table not found")
    return category


def get_category_by_source_type(source_type: str) -> Category:
    category = _BY_SOURCE_TYPE.get(source_type)
    if category is None:
        raise InvalidArgumentError("Invalid source type")
    return category
