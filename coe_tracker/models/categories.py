from sqlalchemy import Column, String, DateTime, Text, Integer, Float, JSON
from coe_tracker.db.session import Base
from coe_tracker.models.owner import RecordMixin, OwnedRecordMixin


class CommercializationProject(OwnedRecordMixin, Base):
    __tablename__ = "commercialization_projects"

    project_title = Column(String, nullable=True)
    team_lead = Column(String, nullable=True)
    rnd_team = Column(JSON, nullable=True)  # list of names
    client_company = Column(String, nullable=True)
    date_of_contract_sign = Column(DateTime, nullable=True)
    date_of_deployment_as_per_contract = Column(DateTime, nullable=True)
    amount_in_pkrm = Column(Float, nullable=True)
    adv_payment_percentage = Column(Float, nullable=True)
    date_of_receiving_advance_payment = Column(DateTime, nullable=True)
    actual_date_of_deployment = Column(DateTime, nullable=True)
    date_of_receiving_complete_payment = Column(DateTime, nullable=True)
    tax_paid_by = Column(String, nullable=True)  # BU, Client
    target_sdg = Column(JSON, nullable=True)
    remarks = Column(Text, nullable=True)

    def __repr__(self):
        return f"<CommercializationProject {self.project_title}>"


class Publication(OwnedRecordMixin, Base):
    __tablename__ = "publications"

    title = Column(String, nullable=True)
    author = Column(String, nullable=True)
    publication_details = Column(Text, nullable=True)
    type_of_publication = Column(String, nullable=True)
    last_known_impact_factor = Column(Float, nullable=True)
    date_of_publication = Column(DateTime, nullable=True)
    year = Column(Integer, nullable=True)
    hec_category = Column(String, nullable=True)  # W, X, Y, Z
    target_sdg = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<Publication {self.title or self.author}>"


class Event(OwnedRecordMixin, Base):
    __tablename__ = "events"

    activity = Column(String, nullable=True)
    organizer = Column(String, nullable=True)
    resource_person = Column(String, nullable=True)
    role = Column(String, nullable=True)
    other_role = Column(String, nullable=True)  # used when role == "other"
    type = Column(String, nullable=True)
    participants_of_event = Column(String, nullable=True)
    name_of_attendee = Column(String, nullable=True)
    date = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Event {self.activity}>"


class Collaboration(OwnedRecordMixin, Base):
    __tablename__ = "collaborations"

    member_of_coe = Column(String, nullable=True)
    collaborating_foreign_researcher = Column(String, nullable=True)
    foreign_collaborating_institute = Column(String, nullable=True)
    collaborating_country = Column(String, nullable=True)
    collaboration_scope = Column(String, nullable=True, default="local")  # local, foreign
    type_of_collaboration = Column(String, nullable=True)
    other_type_description = Column(String, nullable=True)
    duration_start = Column(DateTime, nullable=True)
    duration_end = Column(DateTime, nullable=True)
    current_status = Column(String, nullable=True)  # Ongoing, Completed, Submitted, Under Review
    key_outcomes = Column(Text, nullable=True)
    details_of_outcome = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Collaboration {self.member_of_coe}>"


class LocalCollaboration(OwnedRecordMixin, Base):
    __tablename__ = "local_collaborations"

    member_of_coe = Column(String, nullable=True)
    collaborating_local_researcher = Column(String, nullable=True)
    local_collaborating_institute = Column(String, nullable=True)
    type_of_collaboration = Column(String, nullable=True)
    duration_start = Column(DateTime, nullable=True)
    duration_end = Column(DateTime, nullable=True)
    current_status = Column(String, nullable=True)
    key_outcomes = Column(Text, nullable=True)
    details_of_outcome = Column(Text, nullable=True)

    def __repr__(self):
        return f"<LocalCollaboration {self.member_of_coe}>"


class Patent(OwnedRecordMixin, Base):
    __tablename__ = "patents"

    title = Column(String, nullable=True)
    inventor = Column(String, nullable=True)
    co_inventor = Column(JSON, nullable=True)
    patent_org = Column(String, nullable=True)
    affiliation_of_co_inventor = Column(String, nullable=True)
    date_of_submission = Column(DateTime, nullable=True)
    scope = Column(String, nullable=True)
    directory_number = Column(String, nullable=True)
    patent_number = Column(String, nullable=True)
    date_of_approval = Column(DateTime, nullable=True)
    target_sdg = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<Patent {self.title}>"


class Funding(OwnedRecordMixin, Base):
    __tablename__ = "fundings"

    s_no = Column(Integer, nullable=True)
    project_title = Column(String, nullable=True)
    pi = Column(String, nullable=True)
    co_pi = Column(String, nullable=True)
    research_team = Column(String, nullable=True)
    date_of_submission = Column(DateTime, nullable=True)
    date_of_approval = Column(DateTime, nullable=True)
    start_date = Column(DateTime, nullable=True)
    funding_source = Column(String, nullable=True)
    pkr = Column(Float, nullable=True)
    team = Column(String, nullable=True)
    status = Column(String, nullable=True)
    closing_date = Column(DateTime, nullable=True)
    amount_pkr = Column(Float, nullable=True)
    target_sdg = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<Funding {self.project_title}>"


class FundingProposal(OwnedRecordMixin, Base):
    __tablename__ = "funding_proposals"

    s_no = Column(Integer, nullable=True)
    project_title = Column(String, nullable=True)
    pi = Column(String, nullable=True)
    research_team = Column(String, nullable=True)
    date_of_submission = Column(DateTime, nullable=True)
    funding_source = Column(String, nullable=True)
    pkr = Column(Float, nullable=True)
    team = Column(String, nullable=True)
    status = Column(String, nullable=True)
    amount_pkr = Column(Float, nullable=True)
    target_sdg = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<FundingProposal {self.project_title}>"


class Achievement(OwnedRecordMixin, Base):
    __tablename__ = "achievements"

    event = Column(String, nullable=True)
    organizer = Column(String, nullable=True)
    date = Column(DateTime, nullable=True)
    participant_of_event = Column(String, nullable=True)
    participant_from_coeai = Column(String, nullable=True)
    role_of_participant_from_coeai = Column(String, nullable=True)
    details_of_achievement = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Achievement {self.event}>"


class TrainingsConducted(OwnedRecordMixin, Base):
    __tablename__ = "trainings_conducted"

    attendees = Column(String, nullable=True)
    number_of_attendees = Column(Integer, nullable=True)
    organizer = Column(String, nullable=True)
    resource_persons = Column(String, nullable=True)
    date = Column(DateTime, nullable=True)
    target_sdg = Column(JSON, nullable=True)
    total_revenue_generated = Column(Float, nullable=True)

    def __repr__(self):
        return f"<TrainingsConducted {self.organizer}>"


class Internship(OwnedRecordMixin, Base):
    __tablename__ = "internships"

    year = Column(Integer, nullable=True)
    duration = Column(String, nullable=True)
    certificate_number = Column(String, nullable=True)
    applicant_name = Column(String, nullable=True)
    official_email = Column(String, nullable=True)
    contact_number = Column(String, nullable=True)
    affiliation = Column(String, nullable=True)
    center_name = Column(String, nullable=True)
    supervisor = Column(String, nullable=True)
    tasks_completed = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Internship {self.applicant_name}>"


class TalkTrainingConference(OwnedRecordMixin, Base):
    __tablename__ = "talk_training_conferences"

    type = Column(String, nullable=True)  # Talk, Training, Conference
    title = Column(String, nullable=True)
    participants = Column(String, nullable=True)
    mode = Column(String, nullable=True)
    date = Column(DateTime, nullable=True)
    agenda = Column(Text, nullable=True)
    follow_up_activity = Column(Text, nullable=True)
    resource_person = Column(String, nullable=True)
    target_sdg = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<TalkTrainingConference {self.title}>"


class Competition(OwnedRecordMixin, Base):
    __tablename__ = "competitions"

    organizer = Column(String, nullable=True)
    title = Column(String, nullable=True)
    date = Column(DateTime, nullable=True)
    participants = Column(String, nullable=True)
    scope = Column(String, nullable=True)
    scope_other = Column(String, nullable=True)
    participants_from_bu = Column(String, nullable=True)
    prize_money = Column(Float, nullable=True)
    details = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Competition {self.title}>"


class Training(RecordMixin, Base):
    """Legacy training catalogue; rows have no owner and are system-wide."""
    __tablename__ = "trainings"

    title = Column(String, nullable=True)
    organizer = Column(String, nullable=True)
    date = Column(DateTime, nullable=True)
    description = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Training {self.title}>"
