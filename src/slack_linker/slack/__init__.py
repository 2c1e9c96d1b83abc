"""Slack access: link parsing, tiered message fetch, name and mention resolution."""

from slack_linker.slack.client import MissingTokenError, create_slack_client
from slack_linker.slack.fetcher import fetch_message
from slack_linker.slack.links import convert_timestamp, parse_message_link
from slack_linker.slack.mentions import rewrite_mentions
from slack_linker.slack.names import NameResolver

__all__ = [
    "MissingTokenError",
    "NameResolver",
    "convert_timestamp",
    "create_slack_client",
    "fetch_message",
    "parse_message_link",
    "rewrite_mentions",
]
