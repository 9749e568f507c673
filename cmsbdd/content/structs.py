"""
Create structures sent to the content repository.
"""
from dataclasses import asdict, dataclass, field


@dataclass
class FieldDefinitionDraft:
    """A field of a content type being created"""

    identifier: str
    field_type: str
    names: dict = field(default_factory=dict)
    descriptions: dict = field(default_factory=dict)
    field_group: str = ""
    position: int = 0
    is_translatable: bool = True
    is_required: bool = False
    is_info_collector: bool = False
    is_searchable: bool = False
    default_value: object = None


@dataclass
class ContentTypeDraft:
    """A content type being created"""

    identifier: str = ""
    names: dict = field(default_factory=dict)
    descriptions: dict = field(default_factory=dict)
    main_language_code: str = ""
    remote_id: str = ""
    name_schema: str = ""
    url_alias_schema: str = ""
    is_container: bool = False
    default_always_available: bool = True
    field_definitions: list = field(default_factory=list)
    groups: list = field(default_factory=list)

    def add_field_definition(self, definition: FieldDefinitionDraft) -> None:
        self.field_definitions.append(definition)


@dataclass
class ContentDraft:
    """A content object being created"""

    content_type: str
    main_language_code: str
    location: object = None
    fields: dict = field(default_factory=dict)

    def set_field(self, identifier: str, value) -> None:
        self.fields[identifier] = value


def serialize(draft) -> dict:
    """Plain dictionary for a draft"""
    return asdict(draft)
