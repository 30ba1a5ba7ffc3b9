"""
Tests for naming recordings after the class schedule.
"""

import datetime

import pytest

from video_uploader.utils.metadata import (
    ClassSchedule,
    ScheduledClass,
    parse_recording_time,
    parse_schedule,
    year_season,
)

SEMESTER_START = datetime.date(2023, 1, 16)


@pytest.fixture
def schedule():
    return ClassSchedule(
        parse_schedule('Advanced Tap,Monday,18:30;Beginner Jazz,Wednesday,17:00'),
        SEMESTER_START,
    )


class TestParsing:

    def test_parse_schedule(self):
        classes = parse_schedule('Advanced Tap, Monday, 18:30; ;beginner jazz,wednesday,17:00')

        assert classes == [
            ScheduledClass('Advanced Tap', 0, datetime.time(18, 30)),
            ScheduledClass('beginner jazz', 2, datetime.time(17, 0)),
        ]

    def test_empty_schedule(self):
        assert parse_schedule('') == []

    @pytest.mark.parametrize('value', [
        'Advanced Tap,Someday,18:30',
        'Advanced Tap,Monday,half past six',
        'Advanced Tap,Monday',
    ])
    def test_malformed_entry_raises_value_error(self, value):
        with pytest.raises(ValueError):
            parse_schedule(value)

    def test_recording_date_only(self):
        assert parse_recording_time('2023-01-30 lesson.mp4') == (datetime.datetime(2023, 1, 30), False)

    def test_recording_date_and_time(self):
        recorded_at, has_time = parse_recording_time('2023-01-30 18-35 lesson.mp4')

        assert recorded_at == datetime.datetime(2023, 1, 30, 18, 35)
        assert has_time

    def test_name_without_date(self):
        assert parse_recording_time('lesson.mp4') == (None, False)

    def test_impossible_date(self):
        assert parse_recording_time('2023-13-40 lesson.mp4') == (None, False)

    def test_year_season(self):
        assert year_season(datetime.date(2023, 1, 16)) == '2023 Spring'
        assert year_season(datetime.date(2023, 7, 1)) == '2023 Summer'
        assert year_season(datetime.date(2023, 11, 1)) == '2023 Winter'


class TestClassSchedule:
    """Tests for ClassSchedule.video_name()."""

    def test_name_from_date_and_time(self, schedule):
        assert schedule.video_name('2023-01-30 18-35 lesson.mp4') == 'Advanced Tap 2023 Spring - Week 3'

    def test_first_day_is_week_one(self, schedule):
        assert schedule.video_name('2023-01-18 16-20 lesson.mp4') == 'Beginner Jazz 2023 Spring - Week 1'

    def test_date_only_with_single_class_that_day(self, schedule):
        assert schedule.video_name('2023-01-30 lesson.mp4') == 'Advanced Tap 2023 Spring - Week 3'

    def test_date_only_with_several_classes_that_day(self):
        schedule = ClassSchedule(
            parse_schedule('Advanced Tap,Monday,18:30;Intermediate Tap,Monday,20:00'),
            SEMESTER_START,
        )

        assert schedule.video_name('2023-01-30 lesson.mp4') is None
        assert schedule.video_name('2023-01-30 20-10 lesson.mp4') == 'Intermediate Tap 2023 Spring - Week 3'

    def test_recording_outside_class_window(self, schedule):
        assert schedule.video_name('2023-01-30 21-00 lesson.mp4') is None

    def test_no_class_that_weekday(self, schedule):
        assert schedule.video_name('2023-01-31 18-30 lesson.mp4') is None

    def test_recording_before_semester(self, schedule):
        assert schedule.video_name('2023-01-09 18-30 lesson.mp4') is None

    def test_name_without_date(self, schedule):
        assert schedule.video_name('lesson.mp4') is None

    def test_unconfigured_schedule(self):
        assert not ClassSchedule([], SEMESTER_START).configured
        assert ClassSchedule(parse_schedule('Advanced Tap,Monday,18:30')).video_name(
            '2023-01-30 18-35 lesson.mp4') is None

    def test_from_config(self):
        class Settings:
            SEMESTER_START_DATE = '2023-01-16'
            CLASS_SCHEDULE = 'Advanced Tap,Monday,18:30'

        schedule = ClassSchedule.from_config(Settings)

        assert schedule.semester_start == SEMESTER_START
        assert schedule.classes == [ScheduledClass('Advanced Tap', 0, datetime.time(18, 30))]
