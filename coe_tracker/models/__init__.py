from coe_tracker.models.user import User
from coe_tracker.models.owner import OwnerRef
from coe_tracker.models.report import CustomReport
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

__all__ = [
    "User",
    "OwnerRef",
    "CustomReport",
    "Achievement",
    "Collaboration",
    "CommercializationProject",
    "Competition",
    "Event",
    "Funding",
    "FundingProposal",
    "Internship",
    "LocalCollaboration",
    "Patent",
    "Publication",
    "TalkTrainingConference",
    "Training",
    "TrainingsConducted",
]
