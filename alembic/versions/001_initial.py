"""Initial migration

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19 10:00:00

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

OWNED_TABLES = (
    'commercialization_projects', 'publications', 'events', 'collaborations',
    'local_collaborations', 'patents', 'fundings', 'funding_proposals', 'achievements',
    'trainings_conducted', 'internships', 'talk_training_conferences', 'competitions',
)


def _record_columns(owned=True):
    columns = [
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('file_link', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]
    if owned:
        columns += [
            sa.Column('created_by_id', sa.String(), nullable=False),
            sa.Column('created_by_name', sa.String(), nullable=True),
            sa.Column('created_by_email', sa.String(), nullable=True),
        ]
    return columns


def _create_owned_table(name, *columns):
    op.create_table(name, *_record_columns(), *columns, sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f(f'ix_{name}_created_by_id'), name, ['created_by_id'], unique=False)


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('uid', sa.String(), nullable=True),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('contact_number', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('date_of_birth', sa.DateTime(), nullable=True),
        sa.Column('join_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('uid')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    _create_owned_table(
        'commercialization_projects',
        sa.Column('project_title', sa.String(), nullable=True),
        sa.Column('team_lead', sa.String(), nullable=True),
        sa.Column('rnd_team', sa.JSON(), nullable=True),
        sa.Column('client_company', sa.String(), nullable=True),
        sa.Column('date_of_contract_sign', sa.DateTime(), nullable=True),
        sa.Column('date_of_deployment_as_per_contract', sa.DateTime(), nullable=True),
        sa.Column('amount_in_pkrm', sa.Float(), nullable=True),
        sa.Column('adv_payment_percentage', sa.Float(), nullable=True),
        sa.Column('date_of_receiving_advance_payment', sa.DateTime(), nullable=True),
        sa.Column('actual_date_of_deployment', sa.DateTime(), nullable=True),
        sa.Column('date_of_receiving_complete_payment', sa.DateTime(), nullable=True),
        sa.Column('tax_paid_by', sa.String(), nullable=True),
        sa.Column('target_sdg', sa.JSON(), nullable=True),
        sa.Column('remarks', sa.Text(), nullable=True),
    )
    _create_owned_table(
        'publications',
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('author', sa.String(), nullable=True),
        sa.Column('publication_details', sa.Text(), nullable=True),
        sa.Column('type_of_publication', sa.String(), nullable=True),
        sa.Column('last_known_impact_factor', sa.Float(), nullable=True),
        sa.Column('date_of_publication', sa.DateTime(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('hec_category', sa.String(), nullable=True),
        sa.Column('target_sdg', sa.JSON(), nullable=True),
    )
    _create_owned_table(
        'events',
        sa.Column('activity', sa.String(), nullable=True),
        sa.Column('organizer', sa.String(), nullable=True),
        sa.Column('resource_person', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=True),
        sa.Column('other_role', sa.String(), nullable=True),
        sa.Column('type', sa.String(), nullable=True),
        sa.Column('participants_of_event', sa.String(), nullable=True),
        sa.Column('name_of_attendee', sa.String(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=True),
    )
    _create_owned_table(
        'collaborations',
        sa.Column('member_of_coe', sa.String(), nullable=True),
        sa.Column('collaborating_foreign_researcher', sa.String(), nullable=True),
        sa.Column('foreign_collaborating_institute', sa.String(), nullable=True),
        sa.Column('collaborating_country', sa.String(), nullable=True),
        sa.Column('collaboration_scope', sa.String(), nullable=True),
        sa.Column('type_of_collaboration', sa.String(), nullable=True),
        sa.Column('other_type_description', sa.String(), nullable=True),
        sa.Column('duration_start', sa.DateTime(), nullable=True),
        sa.Column('duration_end', sa.DateTime(), nullable=True),
        sa.Column('current_status', sa.String(), nullable=True),
        sa.Column('key_outcomes', sa.Text(), nullable=True),
        sa.Column('details_of_outcome', sa.Text(), nullable=True),
    )
    _create_owned_table(
        'local_collaborations',
        sa.Column('member_of_coe', sa.String(), nullable=True),
        sa.Column('collaborating_local_researcher', sa.String(), nullable=True),
        sa.Column('local_collaborating_institute', sa.String(), nullable=True),
        sa.Column('type_of_collaboration', sa.String(), nullable=True),
        sa.Column('duration_start', sa.DateTime(), nullable=True),
        sa.Column('duration_end', sa.DateTime(), nullable=True),
        sa.Column('current_status', sa.String(), nullable=True),
        sa.Column('key_outcomes', sa.Text(), nullable=True),
        sa.Column('details_of_outcome', sa.Text(), nullable=True),
    )
    _create_owned_table(
        'patents',
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('inventor', sa.String(), nullable=True),
        sa.Column('co_inventor', sa.JSON(), nullable=True),
        sa.Column('patent_org', sa.String(), nullable=True),
        sa.Column('affiliation_of_co_inventor', sa.String(), nullable=True),
        sa.Column('date_of_submission', sa.DateTime(), nullable=True),
        sa.Column('scope', sa.String(), nullable=True),
        sa.Column('directory_number', sa.String(), nullable=True),
        sa.Column('patent_number', sa.String(), nullable=True),
        sa.Column('date_of_approval', sa.DateTime(), nullable=True),
        sa.Column('target_sdg', sa.JSON(), nullable=True),
    )
    _create_owned_table(
        'fundings',
        sa.Column('s_no', sa.Integer(), nullable=True),
        sa.Column('project_title', sa.String(), nullable=True),
        sa.Column('pi', sa.String(), nullable=True),
        sa.Column('co_pi', sa.String(), nullable=True),
        sa.Column('research_team', sa.String(), nullable=True),
        sa.Column('date_of_submission', sa.DateTime(), nullable=True),
        sa.Column('date_of_approval', sa.DateTime(), nullable=True),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('funding_source', sa.String(), nullable=True),
        sa.Column('pkr', sa.Float(), nullable=True),
        sa.Column('team', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('closing_date', sa.DateTime(), nullable=True),
        sa.Column('amount_pkr', sa.Float(), nullable=True),
        sa.Column('target_sdg', sa.JSON(), nullable=True),
    )
    _create_owned_table(
        'funding_proposals',
        sa.Column('s_no', sa.Integer(), nullable=True),
        sa.Column('project_title', sa.String(), nullable=True),
        sa.Column('pi', sa.String(), nullable=True),
        sa.Column('research_team', sa.String(), nullable=True),
        sa.Column('date_of_submission', sa.DateTime(), nullable=True),
        sa.Column('funding_source', sa.String(), nullable=True),
        sa.Column('pkr', sa.Float(), nullable=True),
        sa.Column('team', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('amount_pkr', sa.Float(), nullable=True),
        sa.Column('target_sdg', sa.JSON(), nullable=True),
    )
    _create_owned_table(
        'achievements',
        sa.Column('event', sa.String(), nullable=True),
        sa.Column('organizer', sa.String(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=True),
        sa.Column('participant_of_event', sa.String(), nullable=True),
        sa.Column('participant_from_coeai', sa.String(), nullable=True),
        sa.Column('role_of_participant_from_coeai', sa.String(), nullable=True),
        sa.Column('details_of_achievement', sa.Text(), nullable=True),
    )
    _create_owned_table(
        'trainings_conducted',
        sa.Column('attendees', sa.String(), nullable=True),
        sa.Column('number_of_attendees', sa.Integer(), nullable=True),
        sa.Column('organizer', sa.String(), nullable=True),
        sa.Column('resource_persons', sa.String(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=True),
        sa.Column('target_sdg', sa.JSON(), nullable=True),
        sa.Column('total_revenue_generated', sa.Float(), nullable=True),
    )
    _create_owned_table(
        'internships',
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('duration', sa.String(), nullable=True),
        sa.Column('certificate_number', sa.String(), nullable=True),
        sa.Column('applicant_name', sa.String(), nullable=True),
        sa.Column('official_email', sa.String(), nullable=True),
        sa.Column('contact_number', sa.String(), nullable=True),
        sa.Column('affiliation', sa.String(), nullable=True),
        sa.Column('center_name', sa.String(), nullable=True),
        sa.Column('supervisor', sa.String(), nullable=True),
        sa.Column('tasks_completed', sa.Text(), nullable=True),
    )
    _create_owned_table(
        'talk_training_conferences',
        sa.Column('type', sa.String(), nullable=True),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('participants', sa.String(), nullable=True),
        sa.Column('mode', sa.String(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=True),
        sa.Column('agenda', sa.Text(), nullable=True),
        sa.Column('follow_up_activity', sa.Text(), nullable=True),
        sa.Column('resource_person', sa.String(), nullable=True),
        sa.Column('target_sdg', sa.JSON(), nullable=True),
    )
    _create_owned_table(
        'competitions',
        sa.Column('organizer', sa.String(), nullable=True),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=True),
        sa.Column('participants', sa.String(), nullable=True),
        sa.Column('scope', sa.String(), nullable=True),
        sa.Column('scope_other', sa.String(), nullable=True),
        sa.Column('participants_from_bu', sa.String(), nullable=True),
        sa.Column('prize_money', sa.Float(), nullable=True),
        sa.Column('details', sa.Text(), nullable=True),
    )

    # Legacy training catalogue, no owner
    op.create_table(
        'trainings',
        *_record_columns(owned=False),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('organizer', sa.String(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # Create custom_reports table
    op.create_table(
        'custom_reports',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('created_by_id', sa.String(), nullable=False),
        sa.Column('source_type', sa.String(), nullable=False),
        sa.Column('filter_criteria', sa.JSON(), nullable=False),
        sa.Column('report_data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_custom_reports_created_by_id'), 'custom_reports', ['created_by_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_custom_reports_created_by_id'), table_name='custom_reports')
    op.drop_table('custom_reports')
    op.drop_table('trainings')
    for name in reversed(OWNED_TABLES):
        op.drop_index(op.f(f'ix_{name}_created_by_id'), table_name=name)
        op.drop_table(name)
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
