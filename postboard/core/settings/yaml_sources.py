"""Optional YAML configuration files.

Every settings domain looks for ``<CONFIG_DIR>/<domain>.yaml`` followed by
``<CONFIG_DIR>/<domain>.d/*.yaml`` in name order, later files overriding
earlier ones. ``CONFIG_DIR`` defaults to ``conf``; absent files are skipped.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

CONFIG_DIR_ENV = "CONFIG_DIR"
DEFAULT_CONFIG_DIR = "conf"


def yaml_files_for(domain: str, config_dir: Path | None = None) -> list[Path]:
    """Existing YAML files for a domain, in override order."""
    base = config_dir or Path(os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_DIR))
    files = [base / f"{domain}.yaml"]
    overrides = base / f"{domain}.d"
    if overrides.is_dir():
        files.extend(sorted([*overrides.glob("*.yaml"), *overrides.glob("*.yml")]))
    return [path for path in files if path.is_file()]


def create_yaml_source(
    settings_cls: type[BaseSettings],
    domain: str,
) -> YamlConfigSettingsSource:
    """YAML source for ``settings_customise_sources``.

    Example:
        @classmethod
        def settings_customise_sources(cls, settings_cls, init_settings, env_settings, ...):
            return (init_settings, create_yaml_source(settings_cls, "cache"), env_settings, ...)
    """
    files = yaml_files_for(domain)
    return YamlConfigSettingsSource(
        settings_cls,
        yaml_file=files or None,
        yaml_file_encoding="utf-8",
    )


class DomainSettings(BaseSettings):
    """Settings base with source order init > YAML > env > dotenv > secrets.

    Subclasses name their YAML domain:

        class CacheSettings(DomainSettings):
            yaml_domain: ClassVar[str] = "cache"
    """

    yaml_domain: ClassVar[str] = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            create_yaml_source(settings_cls, cls.yaml_domain),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
