"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass
class PathsConfig:
    """Path settings."""
    author_cache: Path = Path("users.txt")


@dataclass
class LookupConfig:
    """Author-name lookup settings."""
    enabled: bool = True
    profile_url: str = "http://admin.freeblog.hu/profile/{user_id}/"
    concurrency: int = 8
    timeout: float = 30.0


@dataclass
class ExportConfig:
    """Channel metadata written to the WXR document."""
    title: str = "export"
    language: str = "hu-hu"
    base_site_url: str = "http://localhost"
    base_blog_url: str = "http://localhost"
    link_base: str = "http://localhost/?p="
    author_email: str = "PUT YOUR EMAIL HERE"
    generator: str = "fb2wp"


@dataclass
class FormatsConfig:
    """Registry keys of the source and target formats."""
    source: str = "fb"
    target: str = "wp"


@dataclass
class Settings:
    """Application settings."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    lookup: LookupConfig = field(default_factory=LookupConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    formats: FormatsConfig = field(default_factory=FormatsConfig)

    @property
    def author_cache(self) -> Path:
        return self.paths.author_cache

    @property
    def lookup_concurrency(self) -> int:
        return self.lookup.concurrency


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings()

    if "paths" in config:
        for key, value in config["paths"].items():
            setattr(settings.paths, key, Path(value))

    if "lookup" in config:
        for key, value in config["lookup"].items():
            setattr(settings.lookup, key, value)

    if "export" in config:
        for key, value in config["export"].items():
            setattr(settings.export, key, value)

    if "formats" in config:
        settings.formats = FormatsConfig(**config["formats"])

    author_cache = os.getenv("FB2WP_AUTHOR_CACHE")
    if author_cache:
        settings.paths.author_cache = Path(author_cache)

    return settings
