"""
Serialized-size estimates and KB rounding.
"""
from datetime import datetime

from coe_tracker.services.record_repository import serialize_record
from coe_tracker.services.size_estimator import estimate_size, size_stats, to_kb


class TestEstimateSize:
    """UTF-8 byte length of the compact JSON form"""

    def test_compact_ascii(self):
        assert estimate_size({'a': 1}) == len('{"a":1}')

    def test_multibyte_characters_count_as_bytes(self):
        # 9 characters, 'é' is two bytes in UTF-8
        assert estimate_size({'a': 'é'}) == 10

    def test_record_matches_its_serialized_form(self, db, alice, make_record):
        record = make_record('publications', alice, title='Deep Learning', year=2023,
                             date_of_publication=datetime(2023, 5, 1))
        assert estimate_size(record) == estimate_size(serialize_record(record))
        assert estimate_size(record) > 0

    def test_estimate_is_stable(self, db, alice, make_record):
        record = make_record('patents', alice, title='Sensor')
        assert estimate_size(record) == estimate_size(record)


class TestSizeStats:
    def test_to_kb_rounds_to_two_decimals(self):
        assert to_kb(1536) == 1.5
        assert to_kb(1000) == 0.98
        assert to_kb(0) == 0

    def test_empty_set_is_zeroed(self):
        assert size_stats(0, 0) == {'count': 0, 'totalSize': 0, 'averageSize': 0}

    def test_totals_and_average(self):
        assert size_stats(2, 2048) == {'count': 2, 'totalSize': 2.0, 'averageSize': 1.0}
