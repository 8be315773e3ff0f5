import pytest

from loghub.query.origin import Origin, classify_origin


@pytest.mark.parametrize("filters,expected", [
    ([("origin", "sls")], Origin.SYSTEM),
    ([("origin", "dice")], Origin.ORGANIZATION),
    ([("origin", "custom")], Origin.UNRECOGNIZED),
    ([("origin", "")], Origin.UNSPECIFIED),
    ([], Origin.UNSPECIFIED),
    ([("level", "ERROR")], Origin.UNSPECIFIED),
])
def test_classify_origin(filters, expected):
    assert classify_origin(filters) is expected

def test_last_origin_filter_wins():
    assert classify_origin([("origin", "custom"), ("origin", "sls")]) is Origin.SYSTEM
