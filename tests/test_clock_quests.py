from datetime import datetime, timezone

import pytest

from lilhelper.domain.clock import EASTERN, is_friday, next_daily_at, ordinal, seconds_until, to_rfc3339
from lilhelper.domain.quests import DAILY_QUESTS, build_boss_message, is_weekly_day

UTC = timezone.utc


def test_next_daily_at_before_target_is_today():
    now = datetime(2025, 1, 20, 9, 59, tzinfo=UTC)
    assert next_daily_at(now, 10) == datetime(2025, 1, 20, 10, 0, tzinfo=UTC)


def test_next_daily_at_on_or_after_target_rolls_over():
    assert next_daily_at(datetime(2025, 1, 20, 10, 0, tzinfo=UTC), 10) == datetime(2025, 1, 21, 10, 0, tzinfo=UTC)
    assert next_daily_at(datetime(2025, 1, 31, 23, 0, tzinfo=UTC), 0) == datetime(2025, 2, 1, 0, 0, tzinfo=UTC)


def test_next_daily_at_in_eastern_across_dst():
    # passage à l'heure d'été le 9 mars 2025
    now = datetime(2025, 3, 8, 16, 0, tzinfo=UTC)
    nxt = next_daily_at(now, 10, tz=EASTERN)
    assert nxt.astimezone(UTC) == datetime(2025, 3, 9, 14, 0, tzinfo=UTC)


def test_seconds_until_never_negative():
    now = datetime(2025, 1, 1, tzinfo=UTC)
    assert seconds_until(datetime(2024, 12, 31, tzinfo=UTC), now) == 0.0
    assert seconds_until(datetime(2025, 1, 1, 0, 1, tzinfo=UTC), now) == 60.0


def test_is_friday_uses_eastern_time():
    # samedi 01:00 UTC = vendredi 20:00 à New York
    assert is_friday(datetime(2025, 1, 18, 1, 0, tzinfo=UTC))
    assert not is_friday(datetime(2025, 1, 18, 6, 0, tzinfo=UTC))


@pytest.mark.parametrize("day, expected", [
    (1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"),
    (12, "12th"), (13, "13th"), (21, "21st"), (22, "22nd"), (23, "23rd"), (31, "31st"),
])
def test_ordinal(day, expected):
    assert ordinal(day) == expected


def test_to_rfc3339():
    assert to_rfc3339(datetime(2025, 1, 15, 11, 0, tzinfo=EASTERN)) == "2025-01-15T16:00:00Z"


def test_daily_message():
    content, reactions = build_boss_message(False, datetime(2025, 1, 20, 0, 0, tzinfo=UTC))
    assert content.startswith("What are your **daily boss quests today (Jan 20th)?**\n\n")
    assert " :chicken:  Griffin" in content
    assert "Gem quest" not in content
    assert reactions == [emoji for _, _, emoji in DAILY_QUESTS]


def test_weekly_message_adds_gem_quest():
    content, reactions = build_boss_message(True)
    assert content.startswith("What are your **weekly boss quests this week?**")
    assert content.endswith(" :gem:  Gem quest")
    assert reactions[-1] == "💎"
    assert len(reactions) == len(DAILY_QUESTS) + 1


def test_weekly_day_is_monday():
    assert is_weekly_day(datetime(2025, 1, 20, tzinfo=UTC))
    assert not is_weekly_day(datetime(2025, 1, 21, tzinfo=UTC))
