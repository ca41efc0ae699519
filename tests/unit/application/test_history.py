from datetime import date

from application.services.history import paginate_history


def test_items_are_in_chronological_order(usd_history):
    page = paginate_history(usd_history)

    assert [item.date for item in page.items] == [date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 3)]
    assert page.base_currency == "USD"
    assert page.total_count == 3
    assert page.total_pages == 1


def test_pages_slice_the_ordered_items(usd_history):
    first = paginate_history(usd_history, page=1, page_size=2)
    second = paginate_history(usd_history, page=2, page_size=2)

    assert [item.date for item in first.items] == [date(2025, 1, 1), date(2025, 1, 2)]
    assert [item.date for item in second.items] == [date(2025, 1, 3)]
    assert first.total_pages == second.total_pages == 2


def test_page_past_the_end_is_empty(usd_history):
    page = paginate_history(usd_history, page=5, page_size=2)

    assert page.items == []
    assert page.total_count == 3
