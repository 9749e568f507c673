"""
Dummy content.

Synthetic field values for data the scenario needs but does not spell out.
"""
from factory.fuzzy import FuzzyFloat, FuzzyInteger
from faker import Faker

from cmsbdd.common.errors import PendingStepError

_faker = Faker()


def _integer():
    return FuzzyInteger(1000, 99999999).fuzz()


def _float():
    return round(FuzzyFloat(2, 9999999).fuzz(), 4)


def _identifier():
    return f"id{FuzzyInteger(1000, 9999).fuzz()}RND"


def _text():
    return f"{_faker.sentence(nb_words=8)} {FuzzyInteger(1000, 9999).fuzz()}"


GENERATORS = {
    "integer": _integer,
    "ezinteger": _integer,
    "float": _float,
    "ezfloat": _float,
    "identifier": _identifier,
    "text": _text,
    "eztext": _text,
    "string": _text,
    "ezstring": _text,
    "email": _faker.email,
    "ezemail": _faker.email,
    "url": _faker.url,
    "ezurl": _faker.url,
}


def dummy_content_for(type_name: str):
    """A random value for a field type; unknown types are pending"""
    try:
        generator = GENERATORS[type_name.lower()]
    except KeyError as error:
        raise PendingStepError(f"Define dummy data for '{type_name}' type") from error
    return generator()


def dummy_data_for_fields(field_definitions: dict) -> dict:
    """Dummy value for each field -> type entry"""
    return {field: dummy_content_for(type_name) for field, type_name in field_definitions.items()}
