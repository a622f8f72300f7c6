"""
Тесты XBDate

Покрытие:
- Построение и нормализация к 12:00:00.000 UTC
- Опции (normalize, merge с DEFAULT_OPTIONS, валидация)
- UTC аксессоры
- Невалидная дата (sentinel, NaN аксессоры)
- add/subtract: календарная арифметика, переполнение, неизменность исходной даты
- set: замена полей на месте, переполнение, aliasing
- is_: сравнение с точностью year/month/day, permissive оператор
"""

import math
from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from xbdate import DEFAULT_OPTIONS, INVALID_INSTANT, DateUnit, XBDate, XBDateOptions
from xbdate.core.domain.options import resolve_options


RAW_INPUTS = [
    "2024-03-15",
    "2024-03-15T00:00:00Z",
    "2024-03-15T23:59:59.999Z",
    "2024-03-15T08:30:00+00:00",
    "2024-03-15T10:15:00.250+03:00",
    1_710_460_800_000,
    1_710_547_199_999,
    datetime(2024, 3, 15, 6, 45, 1, 2_000, tzinfo=timezone.utc),
    date(2024, 3, 15),
]


# =============================================================================
# CONSTRUCTION & NORMALIZATION
# =============================================================================


class TestConstruction:
    """Построение и нормализация"""

    @pytest.mark.parametrize("raw", RAW_INPUTS)
    def test_normalize_forces_noon_utc(self, raw) -> None:
        """normalize=True: время суток всегда 12:00:00.000 UTC"""
        d = XBDate(raw)

        assert d.get_hours() == 12
        assert d.get_minutes() == 0
        assert d.get_seconds() == 0
        assert d.get().microsecond == 0
        assert d.to_string() == "2024-03-15T12:00:00.000Z"

    def test_normalize_uses_utc_day(self) -> None:
        """Нормализация берёт UTC день, а не день во входном смещении"""
        d = XBDate("2024-03-15T21:30:00-05:00")
        assert d.to_string() == "2024-03-16T12:00:00.000Z"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2024-03-15T23:45:10.500Z", "2024-03-15T23:45:10.500Z"),
            ("2024-03-15T10:15:00.250+03:00", "2024-03-15T07:15:00.250Z"),
            (1_710_547_199_999, "2024-03-15T23:59:59.999Z"),
            ("2024-03-15", "2024-03-15T00:00:00.000Z"),
        ],
    )
    def test_no_normalize_preserves_utc_time(self, raw, expected) -> None:
        """normalize=False: UTC время суток сохраняется до миллисекунд"""
        d = XBDate(raw, {"normalize": False})
        assert d.to_string() == expected

    def test_no_normalize_fields(self) -> None:
        d = XBDate("2024-03-15T23:45:10.500Z", {"normalize": False})
        assert d.get_hours() == 23
        assert d.get_minutes() == 45
        assert d.get_seconds() == 10
        assert d.get().microsecond == 500_000

    def test_from_other_date_value(self) -> None:
        """XBDate из XBDate — независимый экземпляр"""
        original = XBDate("2024-03-15")
        copy = XBDate(original)

        assert copy is not original
        assert copy.to_string() == original.to_string()

        original.set({"day": 1})
        assert copy.get_date() == 15

    def test_from_underlying_instant(self) -> None:
        original = XBDate("2024-03-15T08:30:00Z", {"normalize": False})
        rebuilt = XBDate(original.get(), {"normalize": False})
        assert rebuilt.get_time() == original.get_time()

    def test_from_timestamp_roundtrip(self) -> None:
        original = XBDate("2024-03-15T08:30:00.123Z", {"normalize": False})
        rebuilt = XBDate(original.get_time(), {"normalize": False})
        assert rebuilt.to_string() == "2024-03-15T08:30:00.123Z"

    def test_absent_input_is_now(self) -> None:
        now_ms = (datetime.now(timezone.utc) - datetime(1970, 1, 1, tzinfo=timezone.utc)) // timedelta(
            milliseconds=1
        )
        d = XBDate(None, {"normalize": False})
        assert abs(d.get_time() - now_ms) < 5_000

    def test_underlying_instant_is_utc(self) -> None:
        assert XBDate("2024-03-15T10:00:00+05:00").get().tzinfo is timezone.utc


# =============================================================================
# OPTIONS
# =============================================================================


class TestOptions:
    """Опции построения"""

    def test_default_options(self) -> None:
        assert DEFAULT_OPTIONS.normalize is True
        assert resolve_options(None) is DEFAULT_OPTIONS
        assert XBDate("2024-03-15").options.normalize is True

    def test_model_options(self) -> None:
        options = XBDateOptions(normalize=False)
        assert resolve_options(options) is options

    def test_mapping_merged_over_defaults(self) -> None:
        assert resolve_options({}).normalize is True
        assert resolve_options({"normalize": False}).normalize is False

    def test_invalid_option_value_rejected(self) -> None:
        with pytest.raises(ValidationError):
            XBDate("2024-03-15", {"normalize": "sometimes"})

    def test_options_frozen(self) -> None:
        with pytest.raises(ValidationError):
            DEFAULT_OPTIONS.normalize = False


# =============================================================================
# ACCESSORS
# =============================================================================


class TestAccessors:
    """UTC аксессоры"""

    @pytest.fixture
    def friday(self) -> XBDate:
        return XBDate("2024-03-15")

    def test_calendar_fields(self, friday) -> None:
        """Месяц zero-based"""
        assert friday.get_year() == 2024
        assert friday.get_month() == 2
        assert friday.get_date() == 15

    def test_time(self, friday) -> None:
        assert friday.get_time() == 1_710_504_000_000

    @pytest.mark.parametrize(
        "raw, weekday",
        [
            ("2024-03-17", 0),  # воскресенье
            ("2024-03-18", 1),
            ("2024-03-15", 5),
            ("2024-03-16", 6),  # суббота
        ],
    )
    def test_weekday_zero_based_from_sunday(self, raw, weekday) -> None:
        assert XBDate(raw).get_weekday() == weekday

    def test_str_and_repr(self, friday) -> None:
        assert str(friday) == "2024-03-15T12:00:00.000Z"
        assert repr(friday) == "XBDate('2024-03-15T12:00:00.000Z')"


# =============================================================================
# INVALID DATE
# =============================================================================


class TestInvalidDate:
    """Невалидный вход: sentinel без исключений"""

    @pytest.fixture
    def invalid(self) -> XBDate:
        return XBDate("not a date")

    def test_sentinel(self, invalid) -> None:
        assert invalid.is_valid() is False
        assert invalid.get() is INVALID_INSTANT
        assert invalid.to_string() == "Invalid Date"

    def test_accessors_return_nan(self, invalid) -> None:
        for accessor in (
            invalid.get_year,
            invalid.get_month,
            invalid.get_date,
            invalid.get_time,
            invalid.get_weekday,
            invalid.get_hours,
            invalid.get_minutes,
            invalid.get_seconds,
        ):
            assert math.isnan(accessor())

    def test_comparisons_are_false(self, invalid) -> None:
        valid = XBDate("2024-03-15")
        for op in (">=", ">", "=", "<", "<="):
            assert invalid.is_(op, valid) is False
            assert valid.is_(op, invalid) is False
        assert invalid.is_("=", invalid) is False

    def test_arithmetic_propagates_invalid(self, invalid) -> None:
        assert invalid.add({"day": 1}).is_valid() is False
        assert invalid.subtract({"year": 1}).is_valid() is False
        assert invalid.set({"year": 2024}) is invalid
        assert invalid.is_valid() is False

    def test_copy_stays_invalid(self, invalid) -> None:
        """XBDate(invalid) не превращается в 'сейчас'"""
        assert XBDate(invalid).is_valid() is False
        assert invalid.copy().is_valid() is False

    def test_rebuilt_from_get_stays_invalid(self, invalid) -> None:
        """XBDate(invalid.get()) не превращается в 'сейчас'"""
        rebuilt = XBDate(invalid.get())
        assert rebuilt.is_valid() is False
        assert rebuilt.to_string() == "Invalid Date"
        assert XBDate(invalid.get(), {"normalize": False}).is_valid() is False

    @pytest.mark.parametrize("amount", [None, "1", math.nan, [1]])
    def test_subtract_non_numeric_amount_is_invalid(self, amount) -> None:
        """subtract, как и add, не бросает исключение на нечисловом приращении"""
        valid = XBDate("2024-03-15")
        assert valid.add({"day": amount}).is_valid() is False
        assert valid.subtract({"day": amount}).is_valid() is False
        assert valid.is_valid() is True

    def test_subtract_unknown_unit_with_non_numeric_amount(self) -> None:
        result = XBDate("2024-03-15").subtract({"week": None})
        assert result.to_string() == "2024-03-15T12:00:00.000Z"

    def test_out_of_range_arithmetic(self) -> None:
        assert XBDate("9999-12-31").add({"day": 1}).is_valid() is False


# =============================================================================
# ADD / SUBTRACT
# =============================================================================


class TestArithmetic:
    """Календарная арифметика"""

    def test_add_day_rolls_over_year(self) -> None:
        assert XBDate("2024-12-31").add({"day": 1}).to_string() == "2025-01-01T12:00:00.000Z"

    def test_subtract_day_rolls_back_year(self) -> None:
        assert XBDate("2024-01-01").subtract({"day": 1}).to_string() == "2023-12-31T12:00:00.000Z"

    def test_add_month_overflow(self) -> None:
        """31 января + 1 месяц = 31 февраля → 2 марта"""
        assert XBDate("2024-01-31").add({"month": 1}).to_string() == "2024-03-02T12:00:00.000Z"

    def test_add_thirteen_months(self) -> None:
        assert XBDate("2024-01-15").add({"month": 13}).to_string() == "2025-02-15T12:00:00.000Z"

    def test_add_year_from_leap_day(self) -> None:
        assert XBDate("2024-02-29").add({"year": 1}).to_string() == "2025-03-01T12:00:00.000Z"

    def test_units_applied_in_mapping_order(self) -> None:
        """Каждая единица применяется отдельно и последовательно"""
        jan31 = XBDate("2024-01-31")
        assert jan31.add({"month": 1, "day": 1}).to_string() == "2024-03-03T12:00:00.000Z"
        assert jan31.add({"day": 1, "month": 1}).to_string() == "2024-03-01T12:00:00.000Z"

    def test_enum_units(self) -> None:
        result = XBDate("2024-03-15").add({DateUnit.DAY: 2, DateUnit.YEAR: -1})
        assert result.to_string() == "2023-03-17T12:00:00.000Z"

    def test_unknown_unit_adds_nothing(self) -> None:
        assert XBDate("2024-03-15").add({"week": 2}).to_string() == "2024-03-15T12:00:00.000Z"

    def test_empty_summands_return_copy(self) -> None:
        original = XBDate("2024-03-15")
        for result in (original.add(), original.add({}), original.subtract(None)):
            assert result is not original
            assert result.to_string() == original.to_string()

    def test_receiver_not_altered(self) -> None:
        original = XBDate("2024-03-15")
        first = original.add({"year": 1, "month": 2, "day": 3})
        second = original.subtract({"day": 40})

        assert original.to_string() == "2024-03-15T12:00:00.000Z"
        assert first.to_string() == "2025-05-18T12:00:00.000Z"
        assert second.to_string() == "2024-02-04T12:00:00.000Z"

    def test_result_independent_of_receiver(self) -> None:
        original = XBDate("2024-03-15")
        result = original.add({"day": 1})
        original.set({"year": 2000})
        assert result.to_string() == "2024-03-16T12:00:00.000Z"

    def test_time_of_day_kept_without_normalize(self) -> None:
        d = XBDate("2024-03-15T08:30:00.250Z", {"normalize": False})
        result = d.add({"day": 1})
        assert result.to_string() == "2024-03-16T08:30:00.250Z"
        assert result.options.normalize is False

    @pytest.mark.parametrize("n", list(range(-1000, 1001, 37)) + [-1, 0, 1, 365, 366])
    @pytest.mark.parametrize("raw", ["2024-12-31", "2024-02-29", "2023-01-01"])
    def test_add_then_subtract_days_restores_date(self, raw, n) -> None:
        original = XBDate(raw)
        restored = original.add({"day": n}).subtract({"day": n})
        assert restored.is_("=", original) is True


# =============================================================================
# SET
# =============================================================================


class TestSet:
    """Замена полей на месте"""

    def test_set_mutates_and_returns_receiver(self) -> None:
        d = XBDate("2024-03-15")
        result = d.set({"year": 2020})

        assert result is d
        assert d.to_string() == "2020-03-15T12:00:00.000Z"

    def test_omitted_fields_keep_current_values(self) -> None:
        d = XBDate("2024-03-15").set({"day": 1})
        assert d.to_string() == "2024-03-01T12:00:00.000Z"

    def test_set_all_fields(self) -> None:
        d = XBDate("2024-03-15").set({"year": 2021, "month": 6, "day": 4})
        assert d.to_string() == "2021-07-04T12:00:00.000Z"

    def test_month_twelve_rolls_into_next_year(self) -> None:
        """Месяц zero-based: 12 → январь следующего года"""
        assert XBDate("2024-03-15").set({"month": 12}).to_string() == "2025-01-15T12:00:00.000Z"

    def test_month_thirteen_rolls_into_next_year(self) -> None:
        assert XBDate("2024-03-15").set({"month": 13}).to_string() == "2025-02-15T12:00:00.000Z"

    def test_day_zero_is_last_day_of_previous_month(self) -> None:
        assert XBDate("2024-03-15").set({"day": 0}).to_string() == "2024-02-29T12:00:00.000Z"

    def test_fields_applied_sequentially(self) -> None:
        """31 января, месяц → февраль: 31 февраля → 2 марта, затем день 31 → 31 марта"""
        assert XBDate("2024-01-31").set({"month": 1}).to_string() == "2024-03-31T12:00:00.000Z"

    def test_chaining(self) -> None:
        d = XBDate("2024-03-15").set({"year": 2022}).set({"month": 0})
        assert d.to_string() == "2022-01-15T12:00:00.000Z"

    def test_enum_keys(self) -> None:
        d = XBDate("2024-03-15").set({DateUnit.DAY: 20})
        assert d.get_date() == 20

    def test_keeps_time_without_normalize(self) -> None:
        d = XBDate("2024-03-15T08:30:00Z", {"normalize": False}).set({"day": 1})
        assert d.to_string() == "2024-03-01T08:30:00.000Z"

    def test_aliasing_is_visible_to_all_holders(self) -> None:
        """set() меняет объект, поэтому все держатели ссылки видят изменения"""
        d = XBDate("2024-03-15")
        alias = d
        snapshot = d.copy()

        d.set({"year": 1999})

        assert alias.get_year() == 1999
        assert snapshot.get_year() == 2024


# =============================================================================
# IS
# =============================================================================


class TestIs:
    """Сравнение с точностью"""

    def test_year_precision(self) -> None:
        d = XBDate("2024-01-01")
        assert d.is_("=", XBDate("2024-12-31"), "year") is True
        assert d.is_("=", XBDate("2025-01-01"), "year") is False
        assert d.is_("<", XBDate("2025-01-01"), "year") is True

    def test_month_precision(self) -> None:
        d = XBDate("2024-03-01")
        assert d.is_("=", XBDate("2024-03-31"), "month") is True
        assert d.is_("=", XBDate("2024-03-31"), "day") is False
        assert d.is_(">", XBDate("2024-02-29"), DateUnit.MONTH) is True

    def test_default_precision_is_day(self) -> None:
        d = XBDate("2024-03-15T01:00:00Z", {"normalize": False})
        other = XBDate("2024-03-15T23:00:00Z", {"normalize": False})
        assert d.is_("=", other) is True
        assert d.is_("<", other) is False

    @pytest.mark.parametrize(
        "op, expected",
        [(">=", True), (">", True), ("=", False), ("<", False), ("<=", False)],
    )
    def test_operators(self, op, expected) -> None:
        assert XBDate("2024-03-16").is_(op, XBDate("2024-03-15")) is expected

    def test_equal_dates_with_non_strict_operators(self) -> None:
        d = XBDate("2024-03-15")
        assert d.is_(">=", XBDate("2024-03-15")) is True
        assert d.is_("<=", XBDate("2024-03-15")) is True

    def test_bogus_operator_behaves_as_equality(self) -> None:
        d = XBDate("2024-03-15")
        for other in ("2024-03-15", "2024-03-16", "2024-03-14"):
            other_date = XBDate(other)
            assert d.is_("bogus", other_date) is d.is_("=", other_date)

    def test_year_boundary_ordering(self) -> None:
        assert XBDate("2023-12-31").is_("<", XBDate("2024-01-01")) is True
        assert XBDate("2023-12-31").is_("<", XBDate("2024-01-01"), "month") is True
