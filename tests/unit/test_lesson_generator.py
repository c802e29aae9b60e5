"""
Tests for daily lesson generation.

Children are built in memory; nothing here touches the database.
"""

from datetime import UTC, date, datetime, timedelta, timezone
from itertools import count

import pytest

from tinysteps.core.models import Child, ChildProgress
from tinysteps.curriculum import generate_daily_lesson, lesson_day
from tinysteps.learning import compute_milestones

LESSON_DATE = date(2026, 3, 2)


def make_child(sessions_completed: int = 0) -> Child:
    return Child(
        id="child_00000001",
        parent_id="parent_00000001",
        display_name="Kai",
        age_months=48,
        home_language="Mandarin",
        avatar_id="panda",
        placement_track="starter_b",
        progress=ChildProgress(
            child_id="child_00000001",
            sessions_completed=sessions_completed,
            units_completed=0,
            milestone_by_skill=compute_milestones(sessions_completed),
        ),
    )


@pytest.fixture
def next_id():
    counter = count(1)
    return lambda prefix: f"{prefix}_{next(counter):08d}"


class TestGenerateDailyLesson:
    def test_five_activities_from_first_unit(self, next_id):
        lesson = generate_daily_lesson(make_child(), LESSON_DATE, next_id)

        assert lesson.unit_id == "u01"
        assert lesson.child_id == "child_00000001"
        assert lesson.lesson_date == LESSON_DATE
        assert len(lesson.activities) == 5
        assert [activity.position for activity in lesson.activities] == [0, 1, 2, 3, 4]

    def test_activity_content(self, next_id):
        lesson = generate_daily_lesson(make_child(), LESSON_DATE, next_id)
        first = lesson.activities[0]

        assert first.type == "listen_tap"
        assert first.target_skill == "listening"
        assert first.prompt_audio_url == "speech:Listen and tap the picture. Theme Family. Word mama."
        assert first.asset_ids == ["image:mama", "theme:family"]

    def test_templates_in_catalog_order(self, next_id):
        lesson = generate_daily_lesson(make_child(), LESSON_DATE, next_id)

        assert [activity.type for activity in lesson.activities] == [
            "listen_tap",
            "match_picture",
            "listen_tap",
            "letter_sound",
            "repeat_audio",
        ]
        assert lesson.activities[3].target_skill == "phonics"

    def test_words_offset_by_sessions_completed(self, next_id):
        lesson = generate_daily_lesson(make_child(sessions_completed=1), LESSON_DATE, next_id)

        assert lesson.unit_id == "u02"
        words = [activity.asset_ids[0] for activity in lesson.activities]
        assert words == ["image:blue", "image:yellow", "image:green", "image:orange", "image:pink"]
        assert all(activity.asset_ids[1] == "theme:colors" for activity in lesson.activities)

    def test_word_cursor_wraps_vocabulary(self, next_id):
        # 8 sessions -> unit u09, words 8, 9, 0, 1, 2
        lesson = generate_daily_lesson(make_child(sessions_completed=8), LESSON_DATE, next_id)

        assert lesson.unit_id == "u09"
        words = [activity.asset_ids[0] for activity in lesson.activities]
        assert words == ["image:nine", "image:ten", "image:one", "image:two", "image:three"]

    def test_unit_wraps_after_catalog(self, next_id):
        lesson = generate_daily_lesson(make_child(sessions_completed=12), LESSON_DATE, next_id)
        assert lesson.unit_id == "u01"

    def test_fresh_ids_every_call(self, next_id):
        child = make_child()
        first = generate_daily_lesson(child, LESSON_DATE, next_id)
        second = generate_daily_lesson(child, LESSON_DATE, next_id)

        assert first.id != second.id
        assert first.unit_id == second.unit_id
        first_ids = {activity.id for activity in first.activities}
        second_ids = {activity.id for activity in second.activities}
        assert first_ids.isdisjoint(second_ids)
        assert all(activity_id.startswith("act_") for activity_id in first_ids)
        assert first.id.startswith("lesson_")

    def test_estimated_minutes_default_and_override(self, next_id):
        child = make_child()
        assert generate_daily_lesson(child, LESSON_DATE, next_id).estimated_minutes == 9
        assert (
            generate_daily_lesson(child, LESSON_DATE, next_id, estimated_minutes=12).estimated_minutes
            == 12
        )


class TestLessonDay:
    def test_utc_date(self):
        assert lesson_day(datetime(2026, 3, 2, 23, 59, tzinfo=UTC)) == date(2026, 3, 2)

    def test_other_timezones_are_converted_to_utc(self):
        singapore = timezone(timedelta(hours=8))
        assert lesson_day(datetime(2026, 3, 3, 7, 0, tzinfo=singapore)) == date(2026, 3, 2)
