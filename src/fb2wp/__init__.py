"""Convert Freeblog blog exports to WordPress WXR."""

__version__ = "0.1.0"
