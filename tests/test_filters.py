# tests/test_filters.py

import pytest
from pydantic import ValidationError

from support_dashboard.backend.app.dashboard.filters import apply_filters, matches_search
from support_dashboard.backend.app.schemas.dashboard import FilterSpec


@pytest.fixture()
def tickets(make_ticket):
    return [
        make_ticket("t-1", title="Printer Jam", status="open", priority="urgent", category="hardware"),
        make_ticket("t-2", title="VPN drops", description="Every hour the VPN disconnects",
                    status="in_progress", priority="low", category="network"),
        make_ticket("t-3", title="Password reset", requester_name="Brian Phiri",
                    status="resolved", priority="normal", category="account"),
        make_ticket("t-4", title="New monitor", status="open", priority="low", category="hardware"),
    ]


def ids(tickets):
    return [t.id for t in tickets]


def test_neutral_spec_is_identity(tickets):
    result = apply_filters(tickets, FilterSpec())
    assert result == tickets
    assert all(a is b for a, b in zip(result, tickets))


def test_empty_input_gives_empty_output():
    assert apply_filters([], FilterSpec(search="x", status="open")) == []


def test_search_is_case_insensitive(make_ticket):
    ticket = make_ticket(title="Printer Jam")
    assert apply_filters([ticket], FilterSpec(search="PRINTER")) == [ticket]


def test_search_looks_at_description_and_requester(tickets):
    assert ids(apply_filters(tickets, FilterSpec(search="disconnects"))) == ["t-2"]
    assert ids(apply_filters(tickets, FilterSpec(search="phiri"))) == ["t-3"]


def test_search_is_substring_and_not_trimmed(tickets):
    assert ids(apply_filters(tickets, FilterSpec(search=" jam"))) == ["t-1"]
    assert apply_filters(tickets, FilterSpec(search="jam ")) == []


def test_single_character_search(tickets):
    # every ticket in the fixture has "e" somewhere
    assert ids(apply_filters(tickets, FilterSpec(search="e"))) == ["t-1", "t-2", "t-3", "t-4"]
    assert ids(apply_filters(tickets, FilterSpec(search="j"))) == ["t-1"]


def test_status_filter_scenario(make_ticket):
    a = make_ticket("a", status="open", priority="urgent")
    b = make_ticket("b", status="in_progress", priority="low")
    c = make_ticket("c", status="resolved", priority="normal")
    spec = FilterSpec(search="", status="open", priority="all", category="all")
    assert apply_filters([a, b, c], spec) == [a]


def test_predicates_are_conjunctive(tickets):
    spec = FilterSpec(status="open", category="hardware")
    assert ids(apply_filters(tickets, spec)) == ["t-1", "t-4"]

    spec = FilterSpec(status="open", priority="low", category="hardware")
    assert ids(apply_filters(tickets, spec)) == ["t-4"]

    spec = FilterSpec(search="printer", priority="low")
    assert apply_filters(tickets, spec) == []


def test_result_matches_every_active_predicate(tickets):
    spec = FilterSpec(search="o", priority="low")
    result = apply_filters(tickets, spec)
    expected = [t for t in tickets if matches_search(t, "o") and t.priority == "low"]
    assert result == expected


def test_order_is_preserved(tickets):
    reversed_tickets = list(reversed(tickets))
    result = apply_filters(reversed_tickets, FilterSpec(priority="low"))
    assert ids(result) == ["t-4", "t-2"]


def test_empty_categorical_value_is_neutral(tickets):
    assert apply_filters(tickets, FilterSpec(status="", priority="", category="")) == tickets


def test_unknown_status_is_matched_exactly(make_ticket):
    waiting = make_ticket("w", status="waiting_on_customer")
    other = make_ticket("o", status="open")
    assert apply_filters([waiting, other], FilterSpec(status="waiting_on_customer")) == [waiting]
    # categorical match is exact, not case-insensitive
    assert apply_filters([other], FilterSpec(status="OPEN")) == []


def test_filter_spec_is_a_frozen_value():
    assert FilterSpec(status="open") == FilterSpec(status="open")
    assert FilterSpec(status="open") != FilterSpec(status="open", search="x")
    assert FilterSpec().is_neutral()
    assert not FilterSpec(category="network").is_neutral()

    spec = FilterSpec()
    with pytest.raises(ValidationError):
        spec.status = "open"
