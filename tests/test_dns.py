import pytest

from mdnsengine.dns import MDNS_BROWSE_TYPE, RecordType


@pytest.mark.parametrize(
    "value, member",
    [
        (1, RecordType.A),
        (28, RecordType.AAAA),
        (255, RecordType.ANY),
        (47, RecordType.NSEC),
        (12, RecordType.PTR),
        (33, RecordType.SRV),
        (16, RecordType.TXT),
    ],
)
def test_record_type_from_wire_value(value, member):
    assert RecordType(value) is member


def test_record_type_compares_with_int():
    assert RecordType(33) == 33
    assert int(RecordType(16)) == 16


def test_record_type_name():
    assert RecordType(28).name == "AAAA"


def test_unknown_record_type_rejected():
    with pytest.raises(ValueError):
        RecordType(2)


def test_browse_type_is_local_fqdn():
    assert MDNS_BROWSE_TYPE.endswith(b".local.")