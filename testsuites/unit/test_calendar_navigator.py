import pytest

from testsuites.ui_testing.framework.calendar_navigator import (
    MONTHS,
    CalendarNavigator,
    CalendarOptions,
    parse_period_label,
    parse_target_date,
    to_period,
)
from testsuites.ui_testing.framework.errors import DateNotReachable, InvalidDate, InvalidMonthName
from testsuites.unit.fake_dom import FakeElement, FakePage


class CalendarWidget:
    """Paged month picker starting on `start_month`/`start_year`."""

    def __init__(self, start_month=1, start_year=2026, label_override=None, ignore_every=0):
        self.period = to_period(start_month, start_year)
        self.label_override = label_override
        self.ignore_every = ignore_every
        self.opened = False
        self.next_clicks = 0
        self.prev_clicks = 0
        self.selected = None

        self.days = [
            FakeElement("div", str(day), classes=["calendar-day"], on_click=self._select)
            for day in range(1, 32)
        ]
        self.page = FakePage(
            FakeElement("button", "Open", id="open-calendar", on_click=self._open),
            FakeElement("button", "<", id="prev-month", on_click=self._prev),
            FakeElement("span", self._label, id="current-month-year"),
            FakeElement("button", ">", id="next-month", on_click=self._next),
            FakeElement("div", id="calendar-grid", children=self.days),
        )

    def _label(self):
        if self.label_override:
            return self.label_override
        year, month = divmod(self.period, 12)
        return f" {MONTHS[month]} {year} "

    def _open(self, _):
        self.opened = True

    def _next(self, _):
        self.next_clicks += 1
        if self.ignore_every and self.next_clicks % self.ignore_every == 0:
            return
        self.period += 1

    def _prev(self, _):
        self.prev_clicks += 1
        self.period -= 1

    def _select(self, element):
        year, month = divmod(self.period, 12)
        self.selected = f"{element.text_value()} {MONTHS[month]} {year}"


def test_parse_target_date():
    target = parse_target_date("15 October 2024")
    assert (target.day, target.month_name, target.year) == (15, "October", 2024)
    assert target.period == 2024 * 12 + 9


@pytest.mark.parametrize("text", ["2024-10-15", "15 October", "x October 2024", "32 October 2024", "0 May 2024"])
def test_parse_target_date_rejects_bad_shapes(text):
    with pytest.raises(InvalidDate):
        parse_target_date(text)


def test_month_names_are_case_sensitive():
    with pytest.raises(InvalidMonthName) as exc_info:
        parse_target_date("15 october 2024")
    assert str(exc_info.value) == "Invalid month name: october"


def test_parse_period_label():
    assert parse_period_label("February 2026") == 2026 * 12 + 1


async def test_select_future_date():
    widget = CalendarWidget()
    await CalendarNavigator(widget.page, max_retries=24).select_date("#open-calendar", "15 April 2026")

    assert widget.opened
    assert widget.next_clicks == 2
    assert widget.selected == "15 April 2026"


async def test_select_past_date():
    widget = CalendarWidget()
    await CalendarNavigator(widget.page, max_retries=24).select_date("#open-calendar", "10 December 2025")

    assert widget.prev_clicks == 2
    assert widget.next_clicks == 0
    assert widget.selected == "10 December 2025"


async def test_current_month_needs_no_paging():
    widget = CalendarWidget()
    await CalendarNavigator(widget.page, max_retries=24).select_date("#open-calendar", "28 February 2026")

    assert widget.next_clicks == widget.prev_clicks == 0
    assert widget.selected == "28 February 2026"


async def test_day_match_is_exact():
    widget = CalendarWidget()
    await CalendarNavigator(widget.page, max_retries=24).select_date("#open-calendar", "1 February 2026")

    assert widget.selected == "1 February 2026"
    assert [cell.clicks for cell in widget.days if cell.text_value() in ("11", "21", "31")] == [0, 0, 0]


async def test_label_is_reread_after_every_step():
    widget = CalendarWidget(ignore_every=2)
    await CalendarNavigator(widget.page, max_retries=24).select_date("#open-calendar", "15 May 2026")

    assert widget.selected == "15 May 2026"
    assert widget.next_clicks > 3


async def test_target_within_budget():
    widget = CalendarWidget()
    # 23 months ahead: 23 clicks, aligned on the 24th read
    await CalendarNavigator(widget.page, max_retries=24).select_date("#open-calendar", "5 January 2028")

    assert widget.next_clicks == 23
    assert widget.selected == "5 January 2028"


async def test_target_beyond_budget_raises_without_clicking_a_day():
    widget = CalendarWidget()

    with pytest.raises(DateNotReachable) as exc_info:
        await CalendarNavigator(widget.page, max_retries=24).select_date("#open-calendar", "5 February 2028")

    assert exc_info.value.max_retries == 24
    assert widget.next_clicks == 24
    assert widget.selected is None


async def test_unknown_month_in_widget_label():
    widget = CalendarWidget(label_override="Brumaire 2026")

    with pytest.raises(InvalidMonthName):
        await CalendarNavigator(widget.page, max_retries=24).select_date("#open-calendar", "1 March 2026")


async def test_custom_selectors():
    widget = CalendarWidget()
    widget.page.document.children[0].children[2].id = "period"
    options = CalendarOptions(period_label="#period")

    await CalendarNavigator(widget.page, max_retries=5).select_date("#open-calendar", "3 March 2026", options)

    assert widget.selected == "3 March 2026"
