"""
Package: cmsbdd

Step library for driving a browser against a content management system
from behave scenarios. create_catalog() wires the components for one
scenario.
"""
import logging

from cmsbdd.catalog import StepCatalog
from cmsbdd.config import Settings, SiteConfig
from cmsbdd.content import PendingContentRepository, RestContentRepository
from cmsbdd.models import ScenarioContext

logger = logging.getLogger("cmsbdd")


def create_repository(settings: Settings):
    """REST repository when CONTENT_API_URL is set, the pending one otherwise"""
    if settings.content_api_url:
        logger.info("Content repository at %s", settings.content_api_url)
        return RestContentRepository(settings.content_api_url)
    return PendingContentRepository()


def create_catalog(
    browser,
    settings: Settings | None = None,
    site_config: SiteConfig | None = None,
    repository=None,
) -> StepCatalog:
    """Build a StepCatalog over a fresh ScenarioContext"""
    settings = settings or Settings()
    context = ScenarioContext.fresh(site_config)
    return StepCatalog(
        browser,
        context,
        repository=repository or create_repository(settings),
        base_url=settings.base_url,
        wait_timeout=settings.wait_timeout,
    )


__all__ = ["StepCatalog", "create_catalog", "create_repository"]
