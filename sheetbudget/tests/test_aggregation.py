from sheetbudget.app.services.aggregation_service import aggregate, summarize_rows

def test_aggregate_empty_month(store, expense_factory):
    """A month with no expenses has zero spent and empty breakdowns"""
    store.append_expense(expense_factory(date="15/05/2024"))

    result = aggregate(store, "2024-06")

    assert result.total_spent == 0
    assert result.category_breakdown == {}
    assert result.member_breakdown == {}
    assert result.daily_totals == []

def test_aggregate_breakdowns(store, expense_factory):
    store.append_expense(expense_factory(date="01/06/2024", member_name="Asha", category="Food", amount=100))
    store.append_expense(expense_factory(date="01/06/2024", member_name="Rafi", category="Transport", amount=40))
    store.append_expense(expense_factory(date="03/06/2024", member_name="Asha", category="Food", amount=60.5))
    store.append_expense(expense_factory(date="30/05/2024", member_name="Asha", category="Food", amount=999))

    result = aggregate(store, "2024-06")

    assert result.total_spent == 200.5
    assert result.category_breakdown == {"Food": 160.5, "Transport": 40}
    assert result.member_breakdown == {"Asha": 160.5, "Rafi": 40}
    assert result.daily_totals == [("01/06/2024", 140), ("03/06/2024", 60.5)]

def test_month_is_matched_exactly(expense_factory):
    """The month column decides membership; the date is not re-interpreted"""
    rows = [
        expense_factory(date="15/06/2024", amount=10),
        expense_factory(date="15/06/2024", amount=20, month="2024-6"),
    ]
    assert summarize_rows(rows, "2024-06").total_spent == 10

def test_missing_member_and_category_defaults(expense_factory):
    rows = [expense_factory(member_name="", category="", amount=5, date="01/06/2024")]

    result = summarize_rows(rows, "2024-06")

    assert result.category_breakdown == {"Other": 5}
    assert result.member_breakdown == {"Unknown": 5}

def test_rows_without_date_skip_daily_totals(expense_factory):
    rows = [
        expense_factory(date="", month="2024-06", amount=7),
        expense_factory(date="02/06/2024", amount=3),
    ]

    result = summarize_rows(rows, "2024-06")

    assert result.total_spent == 10
    assert result.daily_totals == [("02/06/2024", 3)]

def test_daily_totals_sorted_by_calendar_date(expense_factory):
    rows = [
        expense_factory(date="5/3/2024", month="2024-01", amount=1),
        expense_factory(date="15/1/2024", month="2024-01", amount=2),
        expense_factory(date="1/1/2024", month="2024-01", amount=3),
        expense_factory(date="10/1/2024", month="2024-01", amount=4),
        expense_factory(date="2/1/2024", month="2024-01", amount=5),
    ]

    result = summarize_rows(rows, "2024-01")

    assert [day for day, _ in result.daily_totals] == [
        "1/1/2024", "2/1/2024", "10/1/2024", "15/1/2024", "5/3/2024"
    ]

def test_aggregate_does_not_write(store, expense_factory):
    store.append_expense(expense_factory())
    aggregate(store, "2024-06")
    assert store.list_budgets() == []
    assert store.count_expenses() == 1
