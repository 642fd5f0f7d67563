"""Source adapters for reading blog exports."""

from fb2wp.adapters.sources.freeblog_source import FreeblogImporter, parse_timestamp

__all__ = ["FreeblogImporter", "parse_timestamp"]
