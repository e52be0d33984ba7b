"""
Generic per-category repository: writes, owner filtering, filters and
serialization.
"""
import uuid
from datetime import datetime

import pytest

from coe_tracker.models.categories import Publication
from coe_tracker.models.owner import OwnerRef
from coe_tracker.services.category_registry import get_category
from coe_tracker.services.exceptions import InvalidArgumentError
from coe_tracker.services.record_repository import (
    RecordRepository,
    build_conditions,
    field_name,
    resolve_column,
    serialize_record,
)


class TestFieldNames:
    def test_camel_case_and_aliases(self):
        assert field_name('hec_category') == 'hecCategory'
        assert field_name('member_of_coe') == 'memberOfCoE'
        assert field_name('target_sdg') == 'targetSDG'

    def test_resolve_column_accepts_both_forms_case_insensitively(self):
        assert resolve_column(Publication, 'hecCategory') == 'hec_category'
        assert resolve_column(Publication, 'HEC_CATEGORY') == 'hec_category'
        assert resolve_column(Publication, 'targetSdg') == 'target_sdg'
        assert resolve_column(Publication, 'createdBy') == 'created_by_id'
        assert resolve_column(Publication, 'nope') is None


class TestCreate:
    """Writes coerce values and attach the owner"""

    def test_create_coerces_and_drops_unknown_keys(self, db, alice):
        repo = RecordRepository(db, get_category('publications'))
        record = repo.create(
            {
                'title': 'Deep Learning',
                'hecCategory': 'W',
                'year': '2023',
                'targetSDG': ['SDG 4'],
                'dateOfPublication': '2023-05-01T10:00:00Z',
                'unknownField': 'ignored',
                'createdBy': 'someone-else',
            },
            owner=OwnerRef.from_user(alice),
        )
        assert record.year == 2023
        assert record.hec_category == 'W'
        assert record.target_sdg == ['SDG 4']
        assert record.date_of_publication == datetime(2023, 5, 1, 10, 0)
        assert record.created_by_id == str(alice.id)
        assert not hasattr(record, 'unknown_field')

    def test_numbers_are_stored_as_text_in_text_fields(self, db, alice, make_record):
        record = make_record('publications', alice, hecCategory=5)
        assert record.hec_category == '5'

    def test_owned_category_requires_owner(self, db):
        repo = RecordRepository(db, get_category('patents'))
        with pytest.raises(InvalidArgumentError):
            repo.create({'title': 'Orphan'})

    def test_invalid_value_is_rejected(self, db, alice, make_record):
        with pytest.raises(InvalidArgumentError):
            make_record('publications', alice, year='not-a-year')

    def test_legacy_table_needs_no_owner(self, db, make_record):
        record = make_record('trainings', title='Orientation')
        assert record.title == 'Orientation'
        assert not hasattr(record, 'created_by_id')


class TestQueries:
    """Owner filter, exact-match and range filters"""

    def test_owner_filter(self, db, alice, bob, make_record):
        make_record('publications', alice, title='A1')
        make_record('publications', alice, title='A2')
        make_record('publications', bob, title='B1')
        repo = RecordRepository(db, get_category('publications'))

        assert len(repo.list()) == 3
        assert {r.title for r in repo.list(owner_id=str(alice.id))} == {'A1', 'A2'}
        assert repo.count(owner_id=str(bob.id)) == 1

    def test_owner_filter_ignored_for_legacy_table(self, db, alice, make_record):
        make_record('trainings', title='Orientation')
        repo = RecordRepository(db, get_category('trainings'))
        assert len(repo.list(owner_id=str(alice.id))) == 1

    def test_list_is_newest_first(self, db, alice, make_record, set_created_at):
        old = make_record('events', alice, activity='Old')
        new = make_record('events', alice, activity='New')
        set_created_at(old, datetime(2023, 1, 1))
        set_created_at(new, datetime(2024, 1, 1))
        repo = RecordRepository(db, get_category('events'))
        assert [r.activity for r in repo.list()] == ['New', 'Old']

    def test_exact_match_filter(self, db, alice, make_record):
        make_record('publications', alice, title='W paper', hec_category='W')
        make_record('publications', alice, title='X paper', hec_category='X')
        repo = RecordRepository(db, get_category('publications'))
        assert [r.title for r in repo.list(filters={'hecCategory': 'W'})] == ['W paper']

    def test_filter_by_owner_field(self, db, alice, bob, make_record):
        make_record('publications', alice, title='A1')
        make_record('publications', bob, title='B1')
        repo = RecordRepository(db, get_category('publications'))
        assert [r.title for r in repo.list(filters={'createdBy': str(bob.id)})] == ['B1']

    def test_range_filter(self, db, alice, make_record):
        make_record('events', alice, activity='January', date=datetime(2024, 1, 10))
        make_record('events', alice, activity='March', date=datetime(2024, 3, 1))
        repo = RecordRepository(db, get_category('events'))
        found = repo.list(filters={'date': {'$gte': '2024-02-01T00:00:00'}})
        assert [r.activity for r in found] == ['March']

    def test_unknown_filter_field(self):
        with pytest.raises(InvalidArgumentError, match='Unknown filter field'):
            build_conditions(Publication, {'colour': 'blue'})

    def test_malformed_range_filter(self):
        with pytest.raises(InvalidArgumentError):
            build_conditions(Publication, {'year': {'$regex': '20'}})

    def test_get_validates_id(self, db):
        repo = RecordRepository(db, get_category('patents'))
        with pytest.raises(InvalidArgumentError):
            repo.get('not-a-uuid')
        assert repo.get(str(uuid.uuid4())) is None


class TestWrites:
    def test_update_keeps_owner_and_ignores_read_only_fields(self, db, alice, make_record):
        record = make_record('patents', alice, title='Sensor')
        original_id = record.id
        repo = RecordRepository(db, get_category('patents'))

        repo.update(record, {'title': 'Better Sensor', 'id': str(uuid.uuid4()), 'createdBy': 'x'})

        assert record.title == 'Better Sensor'
        assert record.id == original_id
        assert record.created_by_id == str(alice.id)

    def test_delete(self, db, alice, make_record):
        record = make_record('patents', alice, title='Sensor')
        repo = RecordRepository(db, get_category('patents'))
        repo.delete(record)
        assert repo.count() == 0


class TestSerialize:
    def test_serialized_shape(self, db, alice, make_record):
        record = make_record('collaborations', alice, member_of_coe='Dr. Ali',
                             duration_start=datetime(2024, 2, 1))
        data = serialize_record(record)

        assert data['id'] == str(record.id)
        assert data['memberOfCoE'] == 'Dr. Ali'
        assert data['durationStart'] == '2024-02-01T00:00:00'
        assert data['createdBy'] == {'id': str(alice.id), 'name': 'Alice Khan', 'email': 'alice@example.com'}
        assert 'createdById' not in data

    def test_legacy_record_has_no_owner_key(self, db, make_record):
        data = serialize_record(make_record('trainings', title='Orientation'))
        assert 'createdBy' not in data


class TestCreateOverrides:
    def test_timestamps_can_be_set_on_create(self, db, alice):
        repo = RecordRepository(db, get_category('patents'))
        record = repo.create({'title': 'Old'}, owner=OwnerRef.from_user(alice),
                             overrides={'created_at': '2019-05-01T00:00:00Z'})
        assert record.created_at == datetime(2019, 5, 1)

    def test_owner_columns_cannot_be_overridden(self, db, alice):
        repo = RecordRepository(db, get_category('patents'))
        with pytest.raises(InvalidArgumentError):
            repo.create({'title': 'X'}, owner=OwnerRef.from_user(alice), overrides={'created_by_id': 'someone'})
