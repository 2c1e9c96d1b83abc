"""Slack message permalink parsing and timestamp conversion."""

import re
from functools import lru_cache
from urllib.parse import parse_qs, urlparse

from slack_linker.config import get_settings
from slack_linker.models.message import ParsedLink

# Slack message ts is "<seconds>.<microseconds>" with a six-digit fraction
_TS_FRACTION_DIGITS = 6
_THREAD_TS_PATTERN = re.compile(r"^\d+\.\d+$")


@lru_cache
def _link_pattern(host: str) -> re.Pattern[str]:
    """Compile the permalink pattern for a Slack host (e.g. "slack.com")."""
    return re.compile(
        r"^https://(?P<workspace>[a-zA-Z0-9-]+)\." + re.escape(host)
        + r"/archives/(?P<channel>[A-Z0-9]+)/p(?P<ts>[0-9]+)(?=$|[/?#])"
    )


def convert_timestamp(timestamp: str) -> str:
    """Convert a compact permalink timestamp to Slack's canonical form.

    The decimal point goes six characters from the end:
    "1609459200000100" -> "1609459200.000100". Runs shorter than six digits
    are zero-padded first, so "123" becomes "0.000123".
    """
    padded = timestamp
    if len(padded) < _TS_FRACTION_DIGITS:
        padded = padded.rjust(_TS_FRACTION_DIGITS + 1, "0")
    return f"{padded[:-_TS_FRACTION_DIGITS]}.{padded[-_TS_FRACTION_DIGITS:]}"


def parse_message_link(url: str) -> ParsedLink | None:
    """Extract workspace, channel, timestamp and thread_ts from a permalink.

    Accepts https://<workspace>.slack.com/archives/<channel>/p<digits> with an
    optional ?thread_ts=<seconds.micro> query parameter (other parameters such
    as cid= are ignored). Returns None for anything else; never raises.
    """
    if not isinstance(url, str):
        return None

    url = url.strip()
    match = _link_pattern(get_settings().slack_host).match(url)
    if not match:
        return None

    query = parse_qs(urlparse(url).query)
    thread_ts = next(
        (value for value in query.get("thread_ts", []) if _THREAD_TS_PATTERN.match(value)),
        None,
    )

    return ParsedLink(
        workspace_slug=match.group("workspace"),
        channel_id=match.group("channel"),
        timestamp=match.group("ts"),
        thread_timestamp=thread_ts,
    )
