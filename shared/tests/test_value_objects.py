from datetime import date
from decimal import Decimal

import pytest

from shared.domain.value_objects import DateRange, Money


def test_date_range_counts_nights():
    assert len(DateRange(date(2026, 1, 10), date(2026, 1, 13))) == 3


def test_date_range_rejects_empty_or_inverted_range():
    with pytest.raises(ValueError):
        DateRange(date(2026, 1, 10), date(2026, 1, 10))
    with pytest.raises(ValueError):
        DateRange(date(2026, 1, 10), date(2026, 1, 9))


def test_adjacent_stays_do_not_overlap():
    first = DateRange(date(2026, 1, 10), date(2026, 1, 12))
    second = DateRange(date(2026, 1, 12), date(2026, 1, 14))
    assert not first.overlaps_with(second)
    assert not second.overlaps_with(first)


def test_overlapping_stays():
    first = DateRange(date(2026, 1, 10), date(2026, 1, 12))
    second = DateRange(date(2026, 1, 11), date(2026, 1, 15))
    assert first.overlaps_with(second)
    assert second.overlaps_with(first)


def test_days_lists_each_night():
    stay = DateRange(date(2026, 1, 30), date(2026, 2, 2))
    assert list(stay.days()) == [date(2026, 1, 30), date(2026, 1, 31), date(2026, 2, 1)]


def test_money_subtraction_floors_at_zero():
    assert (Money(Decimal("100"), "KRW") - Money(Decimal("150"), "KRW")).amount == Decimal("0")


def test_money_refuses_mixed_currencies():
    with pytest.raises(ValueError):
        Money(Decimal("1"), "KRW") + Money(Decimal("1"), "USD")


def test_money_rejects_negative_amounts():
    with pytest.raises(ValueError):
        Money(Decimal("-1"), "KRW")


def test_quantized_uses_currency_minor_unit():
    assert Money(Decimal("1234.5"), "KRW").quantized().amount == Decimal("1235")
    assert Money(Decimal("12.345"), "USD").quantized().amount == Decimal("12.35")
