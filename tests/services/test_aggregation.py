"""Unit tests for joining users onto companies."""
from __future__ import annotations

from topups.domain.records import Company, User
from topups.services.aggregation import TopUpAggregator


def _user(
    user_id: int,
    last_name: str,
    *,
    first_name: str = "Test",
    company_id: int = 1,
    email_status: bool = True,
    active_status: bool = True,
    tokens: int = 0,
) -> User:
    return User(
        id=user_id,
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name.lower()}@x.com",
        company_id=company_id,
        email_status=email_status,
        active_status=active_status,
        tokens=tokens,
    )


ACME = Company(id=1, name="Acme", top_up=100, email_status=True)


def test_aggregate_splits_by_user_email_status() -> None:
    jane = _user(1, "Doe", first_name="Jane", tokens=50)
    bob = _user(2, "Ray", first_name="Bob", email_status=False, tokens=20)

    summary = TopUpAggregator().aggregate(ACME, [jane, bob])

    assert summary.emailed == (jane,)
    assert summary.not_emailed == (bob,)
    assert summary.active_count == 2
    assert summary.total_top_up == 200
    assert [entry.new_balance for entry in summary.top_ups(summary.emailed)] == [150]
    assert [entry.new_balance for entry in summary.top_ups(summary.not_emailed)] == [120]


def test_company_without_email_sends_everyone_to_not_emailed() -> None:
    company = Company(id=5, name="Quiet", top_up=10, email_status=False)
    user = _user(1, "Doe", company_id=5, email_status=True)

    summary = TopUpAggregator().aggregate(company, [user])

    assert summary.emailed == ()
    assert summary.not_emailed == (user,)


def test_inactive_and_foreign_users_are_excluded() -> None:
    inactive = _user(1, "Adams", active_status=False)
    foreign = _user(2, "Baker", company_id=2)
    member = _user(3, "Clark")

    summary = TopUpAggregator().aggregate(ACME, [inactive, foreign, member])

    assert summary.emailed == (member,)
    assert summary.not_emailed == ()
    assert summary.active_count == 1


def test_company_without_active_users_is_empty() -> None:
    summary = TopUpAggregator().aggregate(ACME, [_user(1, "Doe", company_id=9)])

    assert summary.is_empty
    assert summary.active_count == 0
    assert summary.total_top_up == 0


def test_groups_sort_by_last_name_keeping_input_order_for_ties() -> None:
    users = [
        _user(1, "Young", first_name="Yara"),
        _user(2, "Boyd", first_name="Ralph"),
        _user(3, "Anderson", first_name="Jody"),
        _user(4, "Boyd", first_name="Amanda"),
    ]

    summary = TopUpAggregator().aggregate(ACME, users)

    assert [(u.last_name, u.first_name) for u in summary.emailed] == [
        ("Anderson", "Jody"),
        ("Boyd", "Ralph"),
        ("Boyd", "Amanda"),
        ("Young", "Yara"),
    ]


def test_aggregate_does_not_reorder_input() -> None:
    users = [_user(1, "Zed"), _user(2, "Abe")]
    original = list(users)

    TopUpAggregator().aggregate(ACME, users)

    assert users == original


def test_summarize_orders_companies_by_id() -> None:
    companies = [
        Company(id=3, name="C", top_up=1, email_status=True),
        Company(id=1, name="A", top_up=1, email_status=True),
        Company(id=2, name="B", top_up=1, email_status=False),
    ]

    summaries = list(TopUpAggregator().summarize(companies, []))

    assert [summary.company.id for summary in summaries] == [1, 2, 3]
    assert [company.id for company in companies] == [3, 1, 2]


def test_active_count_matches_group_sizes() -> None:
    users = [
        _user(1, "A", email_status=False),
        _user(2, "B"),
        _user(3, "C", active_status=False),
        _user(4, "D", email_status=False),
    ]

    summary = TopUpAggregator().aggregate(ACME, users)

    assert summary.active_count == len(summary.emailed) + len(summary.not_emailed) == 3
