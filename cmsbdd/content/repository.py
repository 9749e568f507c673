"""
Content repository boundary.

Data set-up steps create content types, content objects and users through a
ContentRepository. PendingContentRepository is the default: every call marks
the step as pending until a real adapter is configured.
"""
from abc import ABC, abstractmethod

from cmsbdd.common.errors import PendingStepError


class ContentRepository(ABC):
    """Capabilities the step catalog needs from the CMS"""

    @abstractmethod
    def create_content_type(self, draft):
        """Create a content type draft and return it as stored"""

    @abstractmethod
    def publish_content_type(self, identifier: str):
        """Publish a content type draft"""

    @abstractmethod
    def load_content_type_by_identifier(self, identifier: str) -> dict:
        """Content type with its "fields" list of {identifier, field_type}"""

    @abstractmethod
    def create_content(self, draft) -> dict:
        """Create a content draft and return its id and version"""

    @abstractmethod
    def publish_version(self, content_id, version):
        """Publish a content version"""

    @abstractmethod
    def update_content(self, content_id, fields: dict):
        """Change fields of a content object"""

    @abstractmethod
    def delete_content(self, content_id) -> None:
        """Remove a content object; missing objects are ignored"""

    @abstractmethod
    def load_content_by_url(self, path: str):
        """Content object behind a url alias, or None"""

    @abstractmethod
    def get_data_by_identifier(self, identifier: str):
        """Data stored for a test identifier, or None"""

    @abstractmethod
    def create_user(self, data: dict):
        """Create a user account"""

    def get_field_definitions(self, identifier: str) -> dict:
        """field identifier -> field type of a content type"""
        content_type = self.load_content_type_by_identifier(identifier)
        if not content_type:
            return {}
        return {
            definition["identifier"]: definition["field_type"]
            for definition in content_type.get("fields", [])
        }


class PendingContentRepository(ContentRepository):
    """Placeholder used when no repository is configured"""

    @staticmethod
    def _pending(action: str):
        raise PendingStepError(f"Content managing: {action}")

    def create_content_type(self, draft):
        self._pending("Content Type create")

    def publish_content_type(self, identifier: str):
        self._pending("Content Type publish")

    def load_content_type_by_identifier(self, identifier: str) -> dict:
        self._pending("Content Type load")

    def create_content(self, draft) -> dict:
        self._pending("Content create")

    def publish_version(self, content_id, version):
        self._pending("Content publish")

    def update_content(self, content_id, fields: dict):
        self._pending("Content update")

    def delete_content(self, content_id) -> None:
        self._pending("Content delete")

    def load_content_by_url(self, path: str):
        self._pending("Load content by url alias")

    def get_data_by_identifier(self, identifier: str):
        return None

    def create_user(self, data: dict):
        self._pending("User create")
