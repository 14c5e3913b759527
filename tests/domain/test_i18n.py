"""Tests for the localization catalogs."""

from datetime import date

import pytest

from upkeepctl.domain.i18n import (
    CATALOGS,
    Locale,
    Message,
    format_long_date,
    resolve_locale,
    translate,
    unit_name,
    weekday_name,
)


class TestCatalogs:
    @pytest.mark.parametrize("locale", list(Locale))
    def test_every_message_translated(self, locale: Locale) -> None:
        assert set(CATALOGS[locale]) == set(Message)


class TestResolveLocale:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("de", Locale.DE),
            ("de-AT", Locale.DE),
            ("DE_ch", Locale.DE),
            ("en", Locale.EN),
            ("fr", Locale.EN),
            (None, Locale.EN),
            ("", Locale.EN),
            (Locale.DE, Locale.DE),
        ],
    )
    def test_resolution(self, value: object, expected: Locale) -> None:
        assert resolve_locale(value) is expected


class TestTranslate:
    def test_static_and_callable_entries(self) -> None:
        assert translate(Message.TODAY) == "today"
        assert translate(Message.IN_DAYS, 1) == "in 1 day"
        assert translate(Message.IN_DAYS, 3, locale=Locale.DE) == "in 3 Tagen"

    def test_every_locale_formats_history_heading(self) -> None:
        headings = {translate(Message.COMPLETION_HISTORY, locale=loc) for loc in Locale}
        assert headings == {"Completion history", "Erledigungsverlauf"}


class TestDates:
    def test_weekday_name(self) -> None:
        assert weekday_name(date(2024, 1, 15)) == "Monday"
        assert weekday_name(date(2024, 1, 21), locale=Locale.DE) == "Sonntag"

    def test_long_date(self) -> None:
        assert format_long_date(date(2024, 3, 5)) == "Tue, Mar 5, 2024"
        assert format_long_date(date(2024, 3, 5), locale=Locale.DE) == "Di., 5. März 2024"


class TestUnitName:
    def test_plural_selection(self) -> None:
        assert unit_name(1, "week") == "week"
        assert unit_name(2, "week") == "weeks"
        assert unit_name(3, "month", locale=Locale.DE) == "Monate"
