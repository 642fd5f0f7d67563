"""Author-name lookup adapters."""

from fb2wp.adapters.lookup.freeblog_profile import FreeblogProfileLookup, StaticNameLookup

__all__ = ["FreeblogProfileLookup", "StaticNameLookup"]
