from typing import Iterable, List, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode

from domain.models.stream import StreamRecord

CURSOR_KEYS = ("starting_after", "ending_before")


def _with_cursor(params: List[Tuple[str, str]], key: str, value: int) -> List[Tuple[str, str]]:
    return [(k, v) for k, v in params if k not in CURSOR_KEYS] + [(key, str(value))]


def build_page_links(
    path: str,
    params: Iterable[Tuple[str, str]],
    streams: Sequence[StreamRecord],
    limit: Optional[int],
) -> Tuple[Optional[str], Optional[str]]:
    """
    Returns (next_url, prev_url).

    Links are only produced for a full page (len(streams) == limit). A full
    last page therefore still gets a next_url that leads to an empty page.
    """
    if not limit or not streams or len(streams) != limit:
        return None, None

    params = list(params)
    next_qs = urlencode(_with_cursor(params, "starting_after", streams[-1].id), quote_via=quote)
    prev_qs = urlencode(_with_cursor(params, "ending_before", streams[0].id), quote_via=quote)
    return f"{path}?{next_qs}", f"{path}?{prev_qs}"
