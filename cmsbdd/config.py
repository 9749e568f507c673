"""
Global Configuration for the step library

Values come from environment variables, then from behave userdata
(`behave -D BASE_URL=...`), which wins.
"""
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType

import yaml

from cmsbdd.common.errors import ConfigurationError
from cmsbdd.models.descriptors import parse_block_descriptor

logger = logging.getLogger("cmsbdd")

BROWSERS = ("chrome", "html")


@dataclass(frozen=True)
class Settings:
    """Run settings for a behave session"""

    base_url: str = "http://localhost:8080"
    site_config: str = ""
    wait_timeout: float = 0
    content_api_url: str = ""
    browser: str = "chrome"
    log_level: str = "INFO"

    @classmethod
    def load(cls, userdata=None) -> "Settings":
        userdata = userdata or {}

        def value(name, default):
            return userdata.get(name, os.getenv(name, default))

        browser = str(value("BROWSER", cls.browser)).lower()
        if browser not in BROWSERS:
            raise ConfigurationError(f"BROWSER must be one of {', '.join(BROWSERS)}, not '{browser}'")
        try:
            wait_timeout = float(value("WAIT_TIMEOUT", cls.wait_timeout))
        except ValueError as error:
            raise ConfigurationError("WAIT_TIMEOUT must be a number of seconds") from error
        return cls(
            base_url=str(value("BASE_URL", cls.base_url)).rstrip("/"),
            site_config=str(value("SITE_CONFIG", cls.site_config)),
            wait_timeout=wait_timeout,
            content_api_url=str(value("CONTENT_API_URL", cls.content_api_url)),
            browser=browser,
            log_level=str(value("LOG_LEVEL", cls.log_level)).upper(),
        )


@dataclass(frozen=True)
class SiteConfig:
    """Pages, blocks and forms of the site under test (read only)"""

    pages: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    blocks: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    forms: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, data) -> "SiteConfig":
        data = data or {}
        for section in ("pages", "blocks", "forms"):
            if not isinstance(data.get(section) or {}, dict):
                raise ConfigurationError(f"'{section}' must be a mapping")
        pages = {name: str(path) for name, path in (data.get("pages") or {}).items()}
        blocks = {}
        for name, raw in (data.get("blocks") or {}).items():
            try:
                blocks[name] = parse_block_descriptor(raw)
            except TypeError as error:
                raise ConfigurationError(f"Block '{name}': {error}") from error
        forms = {
            name: MappingProxyType(dict(fields or {}))
            for name, fields in (data.get("forms") or {}).items()
        }
        return cls(MappingProxyType(pages), MappingProxyType(blocks), MappingProxyType(forms))


def load_site_config(path: str) -> SiteConfig:
    """Read the site YAML file; no path means an empty configuration"""
    if not path:
        return SiteConfig()
    try:
        with open(path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as error:
        raise ConfigurationError(f"Site configuration '{path}' not found") from error
    except yaml.YAMLError as error:
        raise ConfigurationError(f"Site configuration '{path}' is not valid YAML: {error}") from error
    logger.info("Site configuration loaded from %s", path)
    return SiteConfig.from_dict(data)
