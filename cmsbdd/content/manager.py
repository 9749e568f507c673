"""
Content manager.

Builds content type and content drafts from Gherkin input, fills the values a
repository demands but the scenario left out, and hands the drafts to the
configured ContentRepository.
"""
import logging
import re
from collections.abc import Mapping

from factory.fuzzy import FuzzyInteger

from cmsbdd.common.errors import ConfigurationError, PendingStepError
from cmsbdd.content.structs import ContentDraft, ContentTypeDraft, FieldDefinitionDraft

logger = logging.getLogger("cmsbdd")

DEFAULT_LANGUAGE = "eng-GB"
DEFAULT_LOCATION = 2
DEFAULT_GROUPS = (1,)

# values a repository refuses to do without, filled when omitted
DEMANDED = {
    "FieldDefinitionDraft": {},
    "ContentTypeDraft": {
        "identifier": "unique",
        "names": "language_names",
        "main_language_code": "language",
    },
}

SIMPLE_FIELD_TYPES = frozenset(
    {"ezemail", "ezfloat", "ezinteger", "ezkeyword", "ezstring", "eztext", "ezurl"}
)


def has_multi_data(value):
    """"key:value" cells split into their parts, other values unchanged"""
    if isinstance(value, str):
        parts = value.split(":")
        if len(parts) > 1:
            return parts
    return value


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name.strip()).replace(" ", "_").lower()


def _unique(prefix: str) -> str:
    return f"{prefix}{FuzzyInteger(1000, 9999).fuzz()}"


class ContentManager:
    """Turns scenario data into repository calls"""

    def __init__(self, repository, language: str = DEFAULT_LANGUAGE):
        self.repository = repository
        self.language = language

    ######################################################################
    # Draft helpers
    ######################################################################
    def fill_demanded(self, draft) -> None:
        """Give omitted required values a usable default"""
        for name, kind in DEMANDED.get(type(draft).__name__, {}).items():
            if getattr(draft, name):
                continue
            logger.debug("Filling demanded '%s' of %s", name, type(draft).__name__)
            if kind == "unique":
                setattr(draft, name, _unique("unique"))
            elif kind == "language_names":
                setattr(draft, name, {self.language: _unique("string")})
            elif kind == "language":
                setattr(draft, name, self.language)

    @staticmethod
    def _attribute_for(draft, definition: str) -> str:
        base = _snake_case(definition)
        for candidate in (definition, base, f"is_{base}", f"{base}_id", f"{base}s"):
            if hasattr(draft, candidate):
                return candidate
        raise ConfigurationError(f"Unknown definition '{definition}' for {type(draft).__name__}")

    def set_definitions(self, draft, definitions) -> None:
        """Apply "name", "not name" or "name:value" definitions to a draft"""
        for definition in definitions:
            if not definition:
                continue
            value = True
            parts = has_multi_data(definition)
            if isinstance(parts, list):
                definition, value = parts[0], ":".join(parts[1:])
            if isinstance(value, str) and value.lower() in ("true", "false"):
                value = value.lower() == "true"
            if definition.startswith("not "):
                definition, value = definition[len("not ") :], False
            setattr(draft, self._attribute_for(draft, definition), value)

    ######################################################################
    # Content types
    ######################################################################
    def create_field_definition(self, identifier, field_type, definitions=(), fill_demanded=True):
        definition = FieldDefinitionDraft(identifier=identifier, field_type=field_type)
        self.set_definitions(definition, definitions)
        if fill_demanded:
            self.fill_demanded(definition)
        return definition

    def create_content_type(
        self, identifier, definitions=(), fields=(), groups=None, fill_demanded=True, publish=True
    ) -> ContentTypeDraft:
        """Create (and publish) a content type.

        Each field is a row: field type, field identifier, then definitions.
        """
        draft = ContentTypeDraft(identifier=identifier)
        self.set_definitions(draft, definitions)
        for position, row in enumerate(fields, start=1):
            if len(row) < 2:
                raise ConfigurationError("A field needs a field type and an identifier")
            field_definition = self.create_field_definition(
                row[1], row[0], row[2:], fill_demanded
            )
            field_definition.position = position
            draft.add_field_definition(field_definition)
        if fill_demanded:
            self.fill_demanded(draft)
        draft.groups = list(groups or (DEFAULT_GROUPS if fill_demanded else ()))
        self.repository.create_content_type(draft)
        if publish:
            self.repository.publish_content_type(draft.identifier)
        return draft

    ######################################################################
    # Content
    ######################################################################
    @staticmethod
    def set_content_field(draft, identifier, field_type, data) -> None:
        if field_type not in SIMPLE_FIELD_TYPES:
            raise PendingStepError(f"Field type '{field_type}' not defined yet.")
        draft.set_field(identifier, data)

    def make_fields_for_content(self, content_type_identifier, data) -> dict:
        """Attach the field type to every value.

        data is either a field -> value mapping or the list of values in the
        content type's field order.
        """
        definitions = self.repository.get_field_definitions(content_type_identifier)
        result = {}
        if isinstance(data, Mapping):
            for name, value in data.items():
                for identifier, field_type in definitions.items():
                    if identifier in (name, str(name).lower()):
                        entry = result.setdefault(identifier, {"field_type": field_type, "data": []})
                        entry["data"].append(value)
                        break
            return result

        if len(data) != len(definitions):
            raise ConfigurationError(
                "Table has a different amount of values than the Content Type fields."
            )
        for (identifier, field_type), value in zip(definitions.items(), data):
            result[identifier] = {"field_type": field_type, "data": [value]}
        return result

    def _location_for(self, location):
        if location in (None, ""):
            return DEFAULT_LOCATION
        if isinstance(location, int) or str(location).isdigit():
            return int(location)
        path = location if location.startswith("/") else f"/{location}"
        found = self.repository.load_content_by_url(path)
        if not found:
            raise ConfigurationError(f"No location found at url alias '{path}'")
        return found.get("location_id", found.get("id"))

    def create_content(
        self, content_type, data, language=None, location=None, fill_demanded=True, publish=True
    ) -> dict:
        """Create (and publish) a content object of a content type"""
        language = language or (self.language if fill_demanded else "")
        if fill_demanded:
            location = self._location_for(location)
        draft = ContentDraft(content_type, language, location)
        for identifier, entry in self.make_fields_for_content(content_type, data).items():
            values = entry["data"]
            self.set_content_field(
                draft, identifier, entry["field_type"], values[0] if len(values) == 1 else values
            )
        created = self.repository.create_content(draft) or {}
        if publish and "id" in created:
            self.repository.publish_version(created["id"], created.get("version", 1))
        return created
