"""URL joining helpers."""

import re
from typing import Sequence

_BARE_SCHEME = re.compile(r"^[^/:]+:/*$")
_SCHEME = re.compile(r"^([^/:]+):/*")
_TRAILING_SLASHES = re.compile(r"/+$")
_SLASH_BEFORE_PARAMS = re.compile(r"/(\?|&|#[^!])")


def url_join(*parts: str | Sequence[str]) -> str:
    """Join URL segments into a single normalized URL.

    Accepts either several string arguments or one list/tuple of strings.
    Duplicate slashes between segments are collapsed, empty segments are
    dropped and query strings found in any segment are merged behind a
    single ``?``.

    Examples:
        >>> url_join("http://a/", "/b/", "/c")
        'http://a/b/c'
        >>> url_join("http://a", "b?x=1", "c?y=2")
        'http://a/b/c?x=1&y=2'

    Raises:
        TypeError: If a segment is not a string.
    """
    if len(parts) == 1 and isinstance(parts[0], (list, tuple)):
        segments = list(parts[0])
    else:
        segments = list(parts)
    return _normalize(segments)


def _scheme_separator(match: re.Match[str]) -> str:
    scheme = match.group(1)
    if scheme.lower() == "file":
        return f"{scheme}:///"
    return f"{scheme}://"


def _normalize(segments: list) -> str:
    if not segments:
        return ""

    for segment in segments:
        if not isinstance(segment, str):
            raise TypeError(f"Url must be a string. Received {segment!r}")

    # "https:" + "example.com" -> "https:example.com"
    if _BARE_SCHEME.match(segments[0]) and len(segments) > 1:
        first = segments.pop(0)
        segments[0] = first + segments[0]

    segments[0] = _SCHEME.sub(_scheme_separator, segments[0], count=1)

    paths: list[str] = []
    queries: list[str] = []
    has_query = False
    last = len(segments) - 1

    for i, component in enumerate(segments):
        if component == "":
            continue

        raw_path, sep, query = component.partition("?")
        if sep:
            has_query = True
            queries.extend(part for part in query.split("?") if part)

        path = raw_path
        if i > 0:
            path = path.lstrip("/")
        if i < last:
            path = path.rstrip("/")
        else:
            path = _TRAILING_SLASHES.sub("/", path)

        if not path:
            # A final bare "/" still marks a trailing slash
            if i == last and raw_path:
                paths.append("")
            continue
        paths.append(path)

    url = "/".join(paths)
    if has_query:
        url += "?" + "&".join(queries)

    return _SLASH_BEFORE_PARAMS.sub(r"\1", url)
