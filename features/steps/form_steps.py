"""Step definitions for configured forms and scenario data."""

# pylint: disable=no-member,not-callable

from __future__ import annotations

from behave import given, then, when

from cmsbdd.models import GherkinTable
from cmsbdd.common.error_handlers import catalog_step


def _field_names(fields: str) -> list:
    return [name.strip() for name in fields.split(",") if name.strip()]


@when('I fill the "{form}" form')
@catalog_step
def step_fill_form(context, form):
    context.catalog.fill_form(form)


@when('I fill the "{form}" form and keep it as "{identifier}"')
@catalog_step
def step_fill_form_as(context, form, identifier):
    context.catalog.fill_form(form, identifier=identifier)


@when('I fill "{fields}" on the "{form}" form and keep it as "{identifier}"')
@catalog_step
def step_fill_form_fields(context, fields, form, identifier):
    context.catalog.fill_form(form, _field_names(fields), identifier)


@given('I fix data "{identifier}" with')
@catalog_step
def step_fix_data(context, identifier):
    context.catalog.fix_data(identifier, GherkinTable.from_behave(context.table))


@then('I see form filled with "{identifier}" data')
@catalog_step
def step_form_filled(context, identifier):
    context.catalog.assert_form_filled_with(identifier)


@given('I have dummy "{type_name}" content as "{identifier}"')
@catalog_step
def step_dummy_content(context, type_name, identifier):
    context.catalog.dummy_content(type_name, identifier)
