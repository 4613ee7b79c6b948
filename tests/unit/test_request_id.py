"""Request ids reused from or assigned to incoming requests."""

import pytest

from gymdesk.core.middleware import request_id_from


def test_short_token_is_reused():
    assert request_id_from("req-42") == "req-42"
    assert request_id_from("a" * 64) == "a" * 64


@pytest.mark.parametrize("header", ["a" * 65, "has space", "a\n", "semi;colon", ""])
def test_malformed_header_gets_fresh_id(header):
    generated = request_id_from(header)
    assert generated != header
    assert len(generated) == 32
    int(generated, 16)


def test_missing_header_gets_fresh_id():
    assert len(request_id_from(None)) == 32
