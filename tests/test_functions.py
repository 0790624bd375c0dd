# tests/test_functions.py
import base64

from util.functions import chunk_count, start_at_from_next, urnify


def test_urnify_strips_padding():
    assert base64.b64encode(b"test").decode() == "dGVzdA=="
    assert urnify("test") == "dGVzdA"


def test_urnify_is_deterministic_and_reversible():
    object_id = "urn:adsk.objects:os.object:test-bucket/阿壳案例.dwg"
    urn = urnify(object_id)
    assert urn == urnify(object_id)
    assert "=" not in urn
    padded = urn + "=" * (-len(urn) % 4)
    assert base64.b64decode(padded).decode("utf-8") == object_id


def test_start_at_from_next_reads_query_param():
    url = (
        "https://developer.api.autodesk.com/oss/v2/buckets/b/objects"
        "?startAt=model%20064.dwg&limit=64"
    )
    assert start_at_from_next(url) == "model 064.dwg"


def test_start_at_from_next_without_continuation():
    assert start_at_from_next(None) is None
    assert start_at_from_next("") is None
    assert start_at_from_next("https://example.com/objects?limit=64") is None


def test_chunk_count():
    assert chunk_count(0, 5) == 1
    assert chunk_count(5, 5) == 1
    assert chunk_count(6, 5) == 2
    assert chunk_count(130, 64) == 3
