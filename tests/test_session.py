import pytest

from modulehub.catalog.query import SORT_NAME, evaluate
from modulehub.catalog.selection import CopyConfirmation, CopyOutcome, SelectionModal
from modulehub.catalog.session import BrowseSession


def _names(modules):
    return [m.name for m in modules]


@pytest.fixture
def session(catalog, clipboard, scheduler):
    modal = SelectionModal(clipboard=clipboard, confirmation=CopyConfirmation(delay=2.0, scheduler=scheduler))
    return BrowseSession(catalog, modal=modal)


def test_initial_state(session, catalog):
    assert session.criteria.sort == "stars"
    assert len(session.results) == 8
    assert _names(session.visible) == ["eks", "vpc", "s3-bucket", "rds", "aks", "kubernetes-engine"]
    assert session.can_load_more
    assert session.summary == "Showing 6 of 8 modules"
    assert session.providers == ("aws", "azurerm", "google")
    assert "aws" in session.tags


def test_load_more_does_not_requery(session):
    results = session.results

    visible = session.load_more()

    assert session.results is results
    assert len(visible) == 8
    assert not session.can_load_more
    assert session.summary == "Showing 8 of 8 modules"


def test_criteria_change_resets_window(session):
    session.load_more()
    assert session.window.revealed == 8

    session.set_sort(SORT_NAME)

    assert session.window.revealed == 6
    assert _names(session.visible)[:3] == ["aks", "eks", "kubernetes-engine"]


def test_same_criteria_still_resets_window(session):
    session.load_more()
    session.set_text("")

    assert session.window.revealed == 6


def test_toggle_tag_filters_and_untoggles(session, catalog):
    session.toggle_tag("aws")
    assert session.is_tag_selected("aws")
    assert _names(session.results) == ["eks", "vpc", "s3-bucket", "rds", "security-group"]
    assert not session.can_load_more
    assert session.summary == "Showing 5 of 5 modules"

    session.toggle_tag("aws")
    assert not session.is_tag_selected("aws")
    assert len(session.results) == len(catalog)


def test_toggle_provider(session):
    session.toggle_provider("google")

    assert session.is_provider_selected("google")
    assert _names(session.results) == ["kubernetes-engine"]


def test_clear_filters_keeps_text(session):
    session.set_text("a")
    session.toggle_tag("aws")
    session.toggle_provider("aws")

    session.clear_filters()

    assert session.criteria.tags == frozenset()
    assert session.criteria.providers == frozenset()
    assert session.criteria.text == "a"
    assert session.results == evaluate(session.catalog, session.criteria)


def test_hero_search_copies_term_into_filter(session):
    session.hero_text = "VPC"

    session.hero_search()

    assert session.criteria.text == "VPC"
    assert _names(session.results) == ["eks", "vpc", "security-group"]

    session.hero_search("rds")
    assert session.hero_text == "rds"
    assert _names(session.results) == ["rds"]


def test_no_results_state(session):
    session.set_text("does-not-exist")

    assert session.is_empty
    assert session.visible == []
    assert session.window.revealed == 0
    assert not session.can_load_more
    assert session.summary == "No modules found"


def test_selection_is_independent_of_query(session, catalog):
    session.select(catalog[0])
    session.set_text("azure")

    assert session.selected is catalog[0]

    session.dismiss()
    assert session.selected is None


@pytest.mark.asyncio
async def test_copy_from_session_modal(session, catalog, clipboard):
    session.select(catalog[2])

    assert await session.modal.copy_selected() is CopyOutcome.SUCCESS
    assert clipboard.writes[0].startswith('module "eks" {')
    assert session.modal.detail()["copy_label"] == "Copied!"


def test_sort_options_follow_criteria(session):
    assert session.sort_options == [
        ("stars", "Most Starred", True),
        ("recent", "Recently Updated", False),
        ("name", "Name (A-Z)", False),
    ]

    session.set_sort("name")

    assert [key for key, _, selected in session.sort_options if selected] == ["name"]
