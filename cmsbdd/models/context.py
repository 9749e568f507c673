"""
Per-scenario state.

A ScenarioContext is built fresh for every scenario and handed to every
component that needs scenario data. Nothing in it outlives the scenario.
"""
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType

logger = logging.getLogger("cmsbdd")


def _empty() -> MappingProxyType:
    return MappingProxyType({})


@dataclass
class ScenarioContext:
    """Scenario-scoped data plus the read-only site configuration"""

    page_map: MappingProxyType = field(default_factory=_empty)
    main_attributes: MappingProxyType = field(default_factory=_empty)
    forms: MappingProxyType = field(default_factory=_empty)
    content_holder: dict = field(default_factory=dict)
    prior_search_phrase: str = ""

    @classmethod
    def fresh(cls, site_config=None) -> "ScenarioContext":
        """Start a scenario with an empty content holder"""
        if site_config is None:
            return cls()
        return cls(
            page_map=site_config.pages,
            main_attributes=site_config.blocks,
            forms=site_config.forms,
        )

    def store(self, identifier: str, data) -> None:
        logger.debug("Storing content '%s'", identifier)
        self.content_holder[identifier] = data

    def content_for(self, identifier: str, fallback=None):
        """Data stored under the identifier, or the fallback lookup result"""
        if identifier in self.content_holder:
            return self.content_holder[identifier]
        if fallback is not None:
            return fallback(identifier)
        return None

    def file_for(self, identifier: str, fallback=None):
        """A path on disk is used as is, anything else is a content lookup"""
        if os.path.isfile(identifier):
            return identifier
        return self.content_for(identifier, fallback)

    def close(self) -> None:
        self.content_holder.clear()
        self.prior_search_phrase = ""
