"""Step definitions for navigation, links, menus, search and listings."""

# pylint: disable=no-member,not-callable
# The behave decorators (@given, @when, @then) are not recognized by pylint
# but they work correctly at runtime

from __future__ import annotations

from behave import given, then, when

from cmsbdd.models import GherkinTable
from cmsbdd.common.error_handlers import catalog_step


def _menu_name(menu: str) -> str:
    menu = menu.strip()
    return menu[len("the ") :] if menu.startswith("the ") else menu


######################################################################
# Navigation
######################################################################
@given('I am logged in as "{user}" with password "{password}"')
@catalog_step
def step_logged_in(context, user, password):
    context.catalog.logged_in_as(user, password)


@given('I am on the "{identifier}" page')
@given('I am on "{identifier}" page')
@when('I go to the "{identifier}" page')
@when('I go to "{identifier}" page')
@catalog_step
def step_go_to(context, identifier):
    context.catalog.go_to(identifier)


@then('I am on the "{identifier}" page')
@then('I see "{identifier}" page')
@catalog_step
def step_assert_on_page(context, identifier):
    context.catalog.assert_on_page(identifier)


@given('I am on "{path}"')
@when('I visit "{path}"')
@catalog_step
def step_visit(context, path):
    context.catalog.visit(path)


@when('I click on "{label}" link')
@when('I click at "{label}" link')
@catalog_step
def step_click_link(context, label):
    context.catalog.click_link(label)


@when('I press "{label}"')
@catalog_step
def step_press(context, label):
    context.catalog.press_button(label)


@when('I fill in "{field}" with "{value}"')
@catalog_step
def step_fill_field(context, field, value):
    context.catalog.fill_field(field, value)


@when('I attach the file "{identifier}" to "{field}"')
@catalog_step
def step_attach_file(context, identifier, field):
    context.catalog.attach_file(field, identifier)


@then('I should be redirected to "{target}"')
@catalog_step
def step_redirected(context, target):
    context.catalog.assert_redirected_to(target)


######################################################################
# Links
######################################################################
@then("I don't see links")
@then("I do not see links")
@catalog_step
def step_dont_see_links(context):
    context.catalog.dont_see_links(GherkinTable.from_behave(context.table))


@then("I don't see on {block} the links")
@catalog_step
def step_dont_see_links_on(context, block):
    context.catalog.dont_see_links(GherkinTable.from_behave(context.table), block)


@then("I see links for Content objects")
@catalog_step
def step_see_links(context):
    context.catalog.see_links_for_content_objects(GherkinTable.from_behave(context.table))


@then("I see on {block} the links for Content objects")
@catalog_step
def step_see_links_on(context, block):
    context.catalog.see_links_for_content_objects(
        GherkinTable.from_behave(context.table), block
    )


@then("I see links for Content objects in following order")
@catalog_step
def step_see_links_in_order(context):
    context.catalog.see_links_in_order(GherkinTable.from_behave(context.table))


@then("I see on {block} links in following order")
@catalog_step
def step_see_links_in_order_on(context, block):
    context.catalog.see_links_in_order(GherkinTable.from_behave(context.table), block)


@then("I see links in")
@catalog_step
def step_see_links_in_tags(context):
    context.catalog.see_links_in_tags(GherkinTable.from_behave(context.table))


######################################################################
# Menus
######################################################################
@then("I see {menu} menu")
@catalog_step
def step_see_menu(context, menu):
    context.catalog.see_menu(_menu_name(menu))


@then("I don't see {menu} menu")
@then("I do not see {menu} menu")
@catalog_step
def step_dont_see_menu(context, menu):
    context.catalog.dont_see_menu(_menu_name(menu))


######################################################################
# Search, listings and tables
######################################################################
@when('I search for "{phrase}"')
@catalog_step
def step_search(context, phrase):
    context.catalog.search_for(phrase)


@then("I see search {count:d} result")
@then("I see search {count:d} results")
@catalog_step
def step_search_results(context, count):
    context.catalog.assert_search_results(count)


@then('I see {count:d} "{object_type}" elements listed')
@catalog_step
def step_listed(context, count, object_type):
    context.catalog.see_listed_count(count, object_type)


@then("I see a table with")
@catalog_step
def step_see_table(context):
    context.catalog.see_table(GherkinTable.from_behave(context.table))


@then("I want dump of the page")
@catalog_step
def step_dump_page(context):
    context.catalog.dump_page()
