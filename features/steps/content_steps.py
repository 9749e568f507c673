"""Step definitions that set up data through the content repository."""

# pylint: disable=no-member,not-callable

from __future__ import annotations

from behave import given, then, when

from cmsbdd.models import GherkinTable
from cmsbdd.common.error_handlers import catalog_step


@given("I have an User with")
@catalog_step
def step_user(context):
    context.catalog.have_user_with(GherkinTable.from_behave(context.table))


@given('I have a Content Type "{identifier}" with')
@catalog_step
def step_content_type(context, identifier):
    context.catalog.have_content_type_with(identifier, GherkinTable.from_behave(context.table))


@given('I have a Content object "{identifier}" of Content Type "{content_type}" with')
@catalog_step
def step_content_object_with(context, identifier, content_type):
    context.catalog.have_content_object_with(
        identifier, content_type, GherkinTable.from_behave(context.table)
    )


@given('I have a Content object Draft "{identifier}" of Content Type "{content_type}"')
@catalog_step
def step_content_object_draft(context, identifier, content_type):
    context.catalog.have_content_object_draft(identifier, content_type)


@given('I have a Content object "{identifier}" of Content Type "{content_type}"')
@catalog_step
def step_content_object(context, identifier, content_type):
    context.catalog.have_content_object(identifier, content_type)


@given('I have the following Content objects of Content Type "{content_type}"')
@catalog_step
def step_following_content_objects(context, content_type):
    context.catalog.have_following_content_objects(
        content_type, GherkinTable.from_behave(context.table)
    )


@given(
    'I have {containers:d} Content objects of Content Type "{container_type}"'
    ' containing {leafs:d} Content objects of Content Type "{leaf_type}"'
)
@catalog_step
def step_containers(context, containers, container_type, leafs, leaf_type):
    context.catalog.have_containers_containing(containers, container_type, leafs, leaf_type)


@given('I have an average "{stars}" stars with "{votes}" votes on Content object "{identifier}"')
@catalog_step
def step_average_stars(context, stars, votes, identifier):
    context.catalog.have_average_stars(stars, votes, identifier)


@given("I don't have Content object \"{identifier}\"")
@catalog_step
def step_no_content_object(context, identifier):
    context.catalog.dont_have_content_object(identifier)


@when('I update Content object "{identifier}" to')
@catalog_step
def step_update_content_object(context, identifier):
    context.catalog.update_content_object(identifier, GherkinTable.from_behave(context.table))


@then('I see Content object "{identifier}"')
@catalog_step
def step_see_content_object(context, identifier):
    context.catalog.see_content_object(identifier)


@given('I have "{extension}" active with')
@catalog_step
def step_extension_active(context, extension):
    context.catalog.extension_active_with(extension, GherkinTable.from_behave(context.table))


@given('I got "{setting}" enabled')
@catalog_step
def step_setting_enabled(context, setting):
    context.catalog.setting_enabled(setting)


@given('I got "{setting}" disabled')
@catalog_step
def step_setting_disabled(context, setting):
    context.catalog.setting_disabled(setting)
