"""CLI entry point for fb2wp."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from fb2wp.adapters.lookup import FreeblogProfileLookup, StaticNameLookup
from fb2wp.config import Settings, get_settings
from fb2wp.core import Fb2WpError, MigrationReport, NameLookup, ParseError, UsageError
from fb2wp.use_cases import MigrationService

USAGE = "fb2wp <fb export directory> <wp output path>"


def help_text() -> None:
    print(USAGE)
    print()


def main(
    source: Optional[Path] = typer.Argument(None, help="Freeblog export directory"),
    target: Optional[Path] = typer.Argument(None, help="WXR file to write"),
    extra: Optional[list[str]] = typer.Argument(None, hidden=True),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
    no_lookup: bool = typer.Option(False, "--no-lookup", help="Do not fetch author names"),
) -> None:
    """Convert a Freeblog export into a WordPress WXR import file."""
    # Exactly two positional arguments are accepted
    if extra or source is None or target is None or not source.is_dir():
        help_text()
        return

    settings = get_settings(config)

    try:
        report = asyncio.run(async_run(source, target, settings, no_lookup))
    except UsageError as e:
        print(f"❌ {e}")
        help_text()
        return
    except ParseError as e:
        print(f"❌ Parse error: {e}")
        raise typer.Exit(code=1)
    except Fb2WpError as e:
        print(f"❌ {e}")
        raise typer.Exit(code=1)

    print("\n" + "=" * 70)
    print("✅ DONE")
    print("=" * 70)
    print(f"  • Categories: {report.categories}")
    print(f"  • Entries: {report.entries}")
    print(f"  • Comments: {report.exported_comments}/{report.comments}")
    print(f"  • Authors looked up: {report.looked_up_authors}")
    print()


def app() -> None:
    """CLI entry point."""
    typer.run(main)


def build_lookup(settings: Settings, no_lookup: bool) -> NameLookup:
    if no_lookup or not settings.lookup.enabled:
        return StaticNameLookup()
    return FreeblogProfileLookup(
        profile_url=settings.lookup.profile_url,
        timeout=settings.lookup.timeout,
    )


async def async_run(
    source: Path, target: Path, settings: Settings, no_lookup: bool
) -> MigrationReport:
    """Async implementation of the conversion."""
    print("\n" + "=" * 70)
    print("📦 FB2WP - Freeblog to WordPress")
    print("=" * 70)
    print(f"  • Source: {source}")
    print(f"  • Target: {target}")
    print(f"  • Author cache: {settings.author_cache}")

    service = MigrationService(settings=settings, lookup=build_lookup(settings, no_lookup))
    return await service.migrate(source, target)


if __name__ == "__main__":
    app()
