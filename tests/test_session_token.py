import pytest

from taskboard.domain.common.ids import SessionToken
from taskboard.infra.ids.hex_gen import HexIdGenerator


def test_generated_ids_are_valid_tokens():
    ids = HexIdGenerator()
    values = {ids.new_id() for _ in range(100)}
    assert len(values) == 100
    for v in values:
        assert SessionToken.parse(v) == SessionToken(v)


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "abc",
        "0" * 31,
        "0" * 33,
        "g" * 32,  # not hex
        "A" * 32,  # uppercase is not a shape we hand out
        "0123456789abcdef0123456789abcde!",
    ],
)
def test_malformed_tokens_do_not_parse(raw):
    assert SessionToken.parse(raw) is None


def test_parse_trims_surrounding_whitespace():
    raw = "0123456789abcdef0123456789abcdef"
    assert SessionToken.parse(f"  {raw}\n") == SessionToken(raw)


def test_direct_construction_rejects_malformed_value():
    with pytest.raises(ValueError):
        SessionToken("not-a-token")
