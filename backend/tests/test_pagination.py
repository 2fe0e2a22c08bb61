from domain.services.pagination import build_page_links
from factories import make_stream

def _streams(*ids):
    return [make_stream(i) for i in ids]

def test_full_page_builds_both_links():
    params = [("genre", "Rock"), ("order", "1"), ("limit", "2")]
    next_url, prev_url = build_page_links("/streams/", params, _streams(3, 5), 2)
    assert next_url == "/streams/?genre=Rock&order=1&limit=2&starting_after=5"
    assert prev_url == "/streams/?genre=Rock&order=1&limit=2&ending_before=3"

def test_short_page_has_no_links():
    assert build_page_links("/streams/", [("limit", "3")], _streams(1, 2), 3) == (None, None)

def test_no_limit_has_no_links():
    assert build_page_links("/streams/", [], _streams(1, 2), None) == (None, None)

def test_empty_page_has_no_links():
    assert build_page_links("/streams/", [("limit", "2")], [], 2) == (None, None)

def test_existing_cursors_are_replaced():
    params = [("starting_after", "9"), ("limit", "2"), ("q", "jazz fm")]
    next_url, prev_url = build_page_links("/streams/", params, _streams(8, 7), 2)
    # 既存カーソルは取り除かれ、新しいカーソルは末尾に付く
    assert next_url == "/streams/?limit=2&q=jazz%20fm&starting_after=7"
    assert prev_url == "/streams/?limit=2&q=jazz%20fm&ending_before=8"
    assert "starting_after" not in prev_url

def test_unknown_params_are_preserved():
    params = [("limit", "1"), ("foo", "bar")]
    next_url, _ = build_page_links("/streams/", params, _streams(4), 1)
    assert next_url == "/streams/?limit=1&foo=bar&starting_after=4"
