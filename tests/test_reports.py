"""
Saved custom reports: filter sanitization, snapshots and visibility.
"""
import uuid
from datetime import datetime

import pytest

from coe_tracker.config import settings
from coe_tracker.services.category_registry import SOURCE_TYPES
from coe_tracker.services.exceptions import ForbiddenError, InvalidArgumentError, NotFoundError
from coe_tracker.services.report_service import ReportService, build_filter_criteria, build_query_filter


class TestFilterCriteria:
    def test_blank_null_and_na_values_are_dropped(self):
        raw = {'a': '', 'b': None, 'c': 'N/A', 'd': 'x', 'e': 0, 'f': False}
        assert build_filter_criteria(raw) == {'d': 'x', 'e': 0, 'f': False}

    def test_none_is_empty(self):
        assert build_filter_criteria(None) == {}

    def test_must_be_an_object(self):
        with pytest.raises(InvalidArgumentError):
            build_filter_criteria(['hecCategory', 'W'])

    def test_date_range_rewrite_for_talks(self):
        query = build_query_filter('TalksTrainingsAttended', {'dateFrom': 'a', 'dateTo': 'b', 'mode': 'Online'})
        assert query == {'mode': 'Online', 'date': {'$gte': 'a', '$lte': 'b'}}

    def test_no_rewrite_for_other_sources(self):
        criteria = {'dateFrom': 'a'}
        assert build_query_filter('Publications', criteria) == {'dateFrom': 'a'}


class TestCreateReport:
    @pytest.fixture
    def publications(self, alice, bob, make_record):
        return [
            make_record('publications', alice, title='W one', hec_category='W'),
            make_record('publications', bob, title='W two', hec_category='W'),
            make_record('publications', alice, title='X one', hec_category='X'),
        ]

    def test_snapshot_of_matching_records(self, db, alice, publications, caller_of):
        report = ReportService(db).create_report(
            'W papers', 'Publications', {'hecCategory': 'W', 'author': '', 'year': 'N/A'}, caller_of(alice)
        )

        assert report.filter_criteria == {'hecCategory': 'W'}
        assert report.created_by_id == str(alice.id)
        assert {r['title'] for r in report.report_data} == {'W one', 'W two'}

    def test_snapshot_is_not_requeried(self, db, alice, publications, caller_of):
        service = ReportService(db)
        report = service.create_report('W papers', 'Publications', {'hecCategory': 'W'}, caller_of(alice))
        report_id = str(report.id)

        publications[0].title = 'Renamed'
        db.commit()

        stored = service.get_report(report_id, caller_of(alice))
        assert 'Renamed' not in {r['title'] for r in stored.report_data}

    def test_empty_result_is_saved(self, db, alice, caller_of):
        report = ReportService(db).create_report('Nothing', 'Patents', {'title': 'none'}, caller_of(alice))
        assert report.report_data == []

    def test_invalid_source_type(self, db, alice, caller_of):
        with pytest.raises(InvalidArgumentError, match='Invalid source type'):
            ReportService(db).create_report('Bad', 'Recipes', {}, caller_of(alice))

    def test_legacy_table_is_not_a_source(self, db, alice, caller_of):
        with pytest.raises(InvalidArgumentError):
            ReportService(db).create_report('Bad', 'trainings', {}, caller_of(alice))

    def test_unknown_filter_field(self, db, alice, caller_of):
        with pytest.raises(InvalidArgumentError, match='Unknown filter field'):
            ReportService(db).create_report('Bad', 'Publications', {'colour': 'blue'}, caller_of(alice))

    def test_blank_title(self, db, alice, caller_of):
        with pytest.raises(InvalidArgumentError):
            ReportService(db).create_report('  ', 'Publications', {}, caller_of(alice))

    def test_talks_date_range(self, db, alice, make_record, caller_of):
        make_record('talkTrainingConference', alice, title='January talk', date=datetime(2024, 1, 15))
        make_record('talkTrainingConference', alice, title='June talk', date=datetime(2024, 6, 15))

        report = ReportService(db).create_report(
            'Q1 talks',
            'TalksTrainingsAttended',
            {'dateFrom': '2024-01-01T00:00:00', 'dateTo': '2024-03-31T00:00:00'},
            caller_of(alice),
        )

        assert [r['title'] for r in report.report_data] == ['January talk']
        assert report.filter_criteria == {'dateFrom': '2024-01-01T00:00:00', 'dateTo': '2024-03-31T00:00:00'}


class TestReportAccess:
    @pytest.fixture
    def reports(self, db, director, alice, bob, caller_of):
        service = ReportService(db)
        return {
            'director': service.create_report('D', 'Patents', {}, caller_of(director)),
            'alice': service.create_report('A', 'Patents', {}, caller_of(alice)),
            'bob': service.create_report('B', 'Patents', {}, caller_of(bob)),
        }

    def test_director_lists_all(self, db, director, reports, caller_of):
        assert len(ReportService(db).list_reports(caller_of(director))) == 3

    def test_director_only_mine(self, db, director, reports, caller_of):
        titles = [r.title for r in ReportService(db).list_reports(caller_of(director), only_mine=True)]
        assert titles == ['D']

    def test_contributor_lists_own(self, db, alice, reports, caller_of):
        assert [r.title for r in ReportService(db).list_reports(caller_of(alice))] == ['A']

    def test_get_by_id_is_open_to_any_user(self, db, bob, reports, caller_of):
        report = ReportService(db).get_report(str(reports['alice'].id), caller_of(bob))
        assert report.title == 'A'

    def test_ownership_enforced_when_enabled(self, db, bob, reports, caller_of, monkeypatch):
        monkeypatch.setattr(settings, 'REPORTS_ENFORCE_OWNERSHIP', True)
        service = ReportService(db)
        with pytest.raises(ForbiddenError):
            service.get_report(str(reports['alice'].id), caller_of(bob))
        with pytest.raises(ForbiddenError):
            service.delete_report(str(reports['alice'].id), caller_of(bob))

    def test_get_missing_and_malformed(self, db, alice, caller_of):
        service = ReportService(db)
        with pytest.raises(NotFoundError):
            service.get_report(str(uuid.uuid4()), caller_of(alice))
        with pytest.raises(InvalidArgumentError):
            service.get_report('nope', caller_of(alice))

    def test_update_and_delete(self, db, alice, reports, caller_of):
        service = ReportService(db)
        report_id = str(reports['alice'].id)

        updated = service.update_report(report_id, caller_of(alice), title='Renamed',
                                        filter_criteria={'scope': 'National', 'title': ''})
        assert updated.title == 'Renamed'
        assert updated.filter_criteria == {'scope': 'National'}

        service.delete_report(report_id, caller_of(alice))
        with pytest.raises(NotFoundError):
            service.get_report(report_id, caller_of(alice))


class TestReportsApi:
    def test_create_and_fetch(self, client, alice, make_record, auth_headers):
        make_record('patents', alice, title='Sensor', scope='National')
        resp = client.post(
            '/api/reports',
            json={'title': 'National patents', 'sourceType': 'Patents', 'filterCriteria': {'scope': 'National'}},
            headers=auth_headers(alice),
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body['message'] == 'Report created successfully'
        assert body['report']['createdBy'] == str(alice.id)
        assert body['report']['reportData'][0]['title'] == 'Sensor'

        report_id = body['report']['id']
        resp = client.get(f'/api/reports/{report_id}', headers=auth_headers(alice))
        assert resp.status_code == 200
        assert resp.json()['filterCriteria'] == {'scope': 'National'}

    def test_source_types(self, client, alice, auth_headers):
        resp = client.get('/api/reports/source-types', headers=auth_headers(alice))
        assert resp.status_code == 200
        assert resp.json() == list(SOURCE_TYPES)
        assert len(resp.json()) == 13

    def test_invalid_source_type(self, client, alice, auth_headers):
        resp = client.post('/api/reports', json={'title': 'Bad', 'sourceType': 'Recipes'}, headers=auth_headers(alice))
        assert resp.status_code == 400
        assert resp.json() == {'detail': 'Invalid source type'}

    def test_unknown_filter_field(self, client, alice, auth_headers):
        resp = client.post(
            '/api/reports',
            json={'title': 'Bad', 'sourceType': 'Patents', 'filterCriteria': {'colour': 'blue'}},
            headers=auth_headers(alice),
        )
        assert resp.status_code == 400

    def test_list_update_delete(self, client, director, alice, auth_headers):
        created = client.post('/api/reports', json={'title': 'Mine', 'sourceType': 'Events'},
                              headers=auth_headers(alice)).json()['report']

        listed = client.get('/api/reports?onlyMine=true', headers=auth_headers(director)).json()
        assert listed == []
        listed = client.get('/api/reports', headers=auth_headers(director)).json()
        assert [r['id'] for r in listed] == [created['id']]

        resp = client.put(f"/api/reports/{created['id']}", json={'title': 'Renamed'}, headers=auth_headers(alice))
        assert resp.status_code == 200
        assert resp.json()['report']['title'] == 'Renamed'

        resp = client.delete(f"/api/reports/{created['id']}", headers=auth_headers(alice))
        assert resp.json() == {'message': 'Report deleted successfully'}
        assert client.get(f"/api/reports/{created['id']}", headers=auth_headers(alice)).status_code == 404

    def test_malformed_id(self, client, alice, auth_headers):
        assert client.get('/api/reports/nope', headers=auth_headers(alice)).status_code == 400
