"""Business logic use cases."""

from pathlib import Path
from typing import Callable, Optional

from fb2wp.adapters.export import WxrExporter
from fb2wp.adapters.sources import FreeblogImporter
from fb2wp.config import Settings
from fb2wp.core import (
    AuthorResolver,
    Exporter,
    Importer,
    MigrationReport,
    NameLookup,
    UsageError,
    load_cache,
    persist_cache,
)

ImporterFactory = Callable[[Path, AuthorResolver, Settings], Importer]
ExporterFactory = Callable[[Settings], Exporter]


def default_importers() -> dict[str, ImporterFactory]:
    """Known source formats."""
    return {
        "fb": lambda root, resolver, settings: FreeblogImporter(root, resolver),
    }


def default_exporters() -> dict[str, ExporterFactory]:
    """Known target formats."""
    return {
        "wp": lambda settings: WxrExporter(settings.export),
    }


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)


class MigrationService:
    """Run one conversion: read, resolve authors, persist the cache, build, write."""

    def __init__(
        self,
        settings: Settings,
        lookup: NameLookup,
        importers: Optional[dict[str, ImporterFactory]] = None,
        exporters: Optional[dict[str, ExporterFactory]] = None,
    ) -> None:
        self.settings = settings
        self.lookup = lookup
        self.importers = importers if importers is not None else default_importers()
        self.exporters = exporters if exporters is not None else default_exporters()

        source_format = settings.formats.source
        target_format = settings.formats.target

        if source_format not in self.importers:
            raise UsageError(f"Unknown source format: {source_format!r}")
        if target_format not in self.exporters:
            raise UsageError(f"Unknown target format: {target_format!r}")

        self.importer_factory = self.importers[source_format]
        self.exporter_factory = self.exporters[target_format]

    async def migrate(self, source: Path, target: Path) -> MigrationReport:
        """Convert the export in source into one document at target.

        Nothing is written if reading fails. The author cache is written
        before the document is built.
        """
        cache_path = self.settings.author_cache
        resolver = AuthorResolver(
            lookup=self.lookup,
            cache=load_cache(cache_path),
            concurrency=self.settings.lookup_concurrency,
        )
        importer = self.importer_factory(source, resolver, self.settings)

        _banner("📥 STEP 1: READING SOURCE")

        categories = importer.read_categories()
        print(f"✓ Categories: {len(categories)}")

        entries = importer.read_entries()
        print(f"✓ Entries: {len(entries)}")

        comments = importer.read_comments()
        print(f"✓ Comments: {len(comments)}")

        _banner("👤 STEP 2: RESOLVING AUTHORS")

        await resolver.flush()
        persist_cache(cache_path, resolver.cached_names())
        print(f"✓ Author cache saved to {cache_path}")

        _banner("📝 STEP 3: WRITING OUTPUT")

        exporter = self.exporter_factory(self.settings)
        document = exporter.build(entries, comments)
        exporter.write(document, target)

        exported = exporter.exported_comments(entries, comments)
        skipped = len(comments) - exported

        print(f"✓ Written to {target}")
        if skipped:
            print(f"  • Skipped comments (unknown entry or empty): {skipped}")

        return MigrationReport(
            categories=len(categories),
            entries=len(entries),
            comments=len(comments),
            exported_comments=exported,
            looked_up_authors=resolver.looked_up,
        )
