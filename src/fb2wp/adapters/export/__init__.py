"""Target document exporters."""

from fb2wp.adapters.export.wxr_exporter import NSMAP, WxrExporter, make_slug

__all__ = ["NSMAP", "WxrExporter", "make_slug"]
