from datetime import date, timedelta

from uposatha.constants import PALI_LABELS
from uposatha.uposatha import (
    get_month_uposatha_days, get_next_uposatha, get_uposatha_status, get_year_uposatha_days,
)

from conftest import GAYA


def test_full_moon_is_primary(cache):
    s = get_uposatha_status(date(2026, 5, 1), GAYA, cache)
    assert s.is_full_moon and s.is_uposatha
    assert not s.is_new_moon and not s.is_optional
    assert s.tithi_number == 15
    assert s.tithi_name == "Purnima"
    assert s.pali_label == "Puṇṇamī (Pūrṇimā)"
    assert s.label == "Full Moon Uposatha (Puṇṇamī (Pūrṇimā)) — Pakkha Uposatha"


def test_new_moon_is_primary(cache):
    s = get_uposatha_status(date(2026, 11, 8), GAYA, cache)
    assert s.is_new_moon and s.is_uposatha
    assert not s.is_full_moon
    assert s.paksha == "Krishna"


def test_ordinary_day_label(cache):
    # 2026-01-02 -> tithi 1 in the fake cycle
    s = get_uposatha_status(date(2026, 1, 2), GAYA, cache)
    assert not s.is_uposatha and not s.is_optional
    assert s.label == "Dwitiya — Shukla Paksha"
    assert s.pali_label == ""


def test_ashtami_and_chaturdashi_flags(cache):
    ashtami = get_uposatha_status(date(2026, 1, 8), GAYA, cache)
    chaturdashi = get_uposatha_status(date(2026, 1, 14), GAYA, cache)
    assert ashtami.is_ashtami and ashtami.is_uposatha
    assert ashtami.label.startswith("8th Day Uposatha (Sukka Aṭṭhamī)")
    assert chaturdashi.is_chaturdashi and chaturdashi.is_uposatha


def test_vridhi_second_day_is_optional(cache, provider):
    provider.set_day(date(2026, 1, 8), 7)
    provider.set_day(date(2026, 1, 9), 7)
    first = get_uposatha_status(date(2026, 1, 8), GAYA, cache)
    second = get_uposatha_status(date(2026, 1, 9), GAYA, cache)
    assert first.is_uposatha and not first.is_vridhi
    assert second.is_vridhi and second.is_optional
    assert not second.is_uposatha and not second.is_kshaya
    assert "vridhi" in second.label


def test_repeated_full_moon_stays_primary(cache, provider):
    provider.set_day(date(2026, 1, 15), 14)
    provider.set_day(date(2026, 1, 16), 14)
    s = get_uposatha_status(date(2026, 1, 16), GAYA, cache)
    assert s.is_full_moon and s.is_uposatha
    assert not s.is_vridhi


def test_kshaya_tithi_surfaces_as_optional(cache, provider):
    # Ashtami (7) never meets a sunrise: 6 -> 8
    provider.set_day(date(2026, 1, 7), 6)
    provider.set_day(date(2026, 1, 8), 8)
    s = get_uposatha_status(date(2026, 1, 7), GAYA, cache)
    assert s.is_kshaya and s.is_optional
    assert not s.is_uposatha and not s.is_vridhi
    assert s.pali_label == "Sukka Aṭṭhamī"
    assert "kshaya" in s.label


def test_skipped_ordinary_tithi_is_not_optional(cache, provider):
    provider.set_day(date(2026, 1, 3), 2)
    provider.set_day(date(2026, 1, 4), 4)
    s = get_uposatha_status(date(2026, 1, 3), GAYA, cache)
    assert not s.is_kshaya and not s.is_optional


def test_full_moon_skipped_after_chaturdashi_lands_on_next_day(cache, provider):
    # Purnima (14) never meets a sunrise: 13 -> 15
    provider.set_day(date(2026, 1, 14), 13)
    provider.set_day(date(2026, 1, 15), 15)
    chaturdashi = get_uposatha_status(date(2026, 1, 14), GAYA, cache)
    after = get_uposatha_status(date(2026, 1, 15), GAYA, cache)
    following = get_uposatha_status(date(2026, 1, 16), GAYA, cache)
    assert chaturdashi.is_uposatha and not chaturdashi.is_optional
    assert after.is_kshaya and after.is_optional and not after.is_uposatha
    assert "Full Moon" in after.label and "kshaya" in after.label
    assert after.pali_label == "Puṇṇamī (Pūrṇimā)"
    assert not following.is_kshaya and not following.is_optional


def test_new_moon_skipped_after_chaturdashi_lands_on_next_day(cache, provider):
    # Amavasya (29) never meets a sunrise: 28 -> 0
    provider.set_day(date(2026, 1, 30), 0)
    s = get_uposatha_status(date(2026, 1, 30), GAYA, cache)
    assert s.is_kshaya and s.is_optional
    assert "New Moon" in s.label
    assert s.pali_label == PALI_LABELS[29]
    assert not get_uposatha_status(date(2026, 1, 31), GAYA, cache).is_optional

    days = get_month_uposatha_days(2026, 1, GAYA, cache, include_optional=True)
    assert date(2026, 1, 30) in [d for d, _ in days]


def test_exactly_one_classification_over_two_months(cache, provider):
    provider.set_day(date(2026, 2, 6), 6)
    provider.set_day(date(2026, 2, 7), 8)
    provider.set_day(date(2026, 2, 20), 22)
    provider.set_day(date(2026, 2, 21), 22)
    d = date(2026, 1, 1)
    while d < date(2026, 3, 1):
        s = get_uposatha_status(d, GAYA, cache)
        assert not (s.is_uposatha and s.is_optional)
        assert not (s.is_kshaya and s.is_vridhi)
        if s.tithi_index in (14, 29):
            assert s.is_uposatha
        d += timedelta(days=1)


def test_polar_day_keeps_status_with_null_sun(cache, provider):
    d = date(2026, 6, 21)
    provider.polar.add(d)
    s = get_uposatha_status(d, GAYA, cache)
    assert s.sunrise is None and s.sunset is None
    assert s.label


def test_month_days(cache):
    days = get_month_uposatha_days(2026, 1, GAYA, cache)
    assert [d.day for d, _ in days] == [8, 14, 15, 23, 29, 30]
    assert all(s.is_uposatha for _, s in days)


def test_month_days_optional_only_on_request(cache, provider):
    provider.set_day(date(2026, 1, 7), 6)
    provider.set_day(date(2026, 1, 8), 8)
    plain = get_month_uposatha_days(2026, 1, GAYA, cache)
    with_optional = get_month_uposatha_days(2026, 1, GAYA, cache, include_optional=True)
    assert date(2026, 1, 7) not in [d for d, _ in plain]
    assert date(2026, 1, 7) in [d for d, _ in with_optional]


def test_year_days_roughly_six_per_lunation(cache):
    days = get_year_uposatha_days(2026, GAYA, cache)
    assert 66 <= len(days) <= 76
    assert [d for d, _ in days] == sorted(d for d, _ in days)


def test_next_uposatha(cache):
    found = get_next_uposatha(date(2026, 1, 1), GAYA, cache)
    assert found.date == date(2026, 1, 8)
    assert get_next_uposatha(date(2026, 1, 1), GAYA, cache, max_days=5) is None
