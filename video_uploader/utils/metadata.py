import datetime
import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

# "2023-01-30 lesson.mp4", optionally with a start time: "2023-01-30 18-35 lesson.mp4"
RECORDING_PREFIX = re.compile(r'^(\d{4}-\d{2}-\d{2})(?:[ _T](\d{2})[-.:](\d{2}))?(?=[ _.]|$)')

# A recording belongs to a class when it starts between 45 minutes before
# and 75 minutes after the class start time.
MINUTES_BEFORE_START = 45
MINUTES_AFTER_START = 75

RENAME_HINT = "rename the file with the date it was recorded at the start (ex. 2023-01-01 <filename>)"


@dataclass(frozen=True)
class ScheduledClass:
    name: str
    weekday: int
    start_time: datetime.time

    @classmethod
    def parse(cls, entry):
        """Parse ``Name,Weekday,HH:MM``"""
        parts = [p.strip() for p in entry.split(',')]
        if len(parts) != 3 or not parts[0]:
            raise ValueError(f"class entry {entry!r} must look like 'Name,Weekday,HH:MM'")
        name, day, start = parts

        try:
            weekday = [d.lower() for d in WEEKDAYS].index(day.lower())
        except ValueError:
            raise ValueError(f"unknown weekday {day!r} in class entry {entry!r}") from None

        start_time = datetime.datetime.strptime(start, '%H:%M').time()
        return cls(name=name, weekday=weekday, start_time=start_time)


def parse_schedule(value):
    """Parse ``;``-separated class entries; empty entries are ignored"""
    return [ScheduledClass.parse(entry) for entry in value.split(';') if entry.strip()]


def parse_recording_time(filename):
    """Read the date prefix of a file name.

    Returns ``(datetime, has_time)``, or ``(None, False)`` when the name does
    not start with a date.
    """
    match = RECORDING_PREFIX.match(filename)
    if match is None:
        return None, False

    day, hour, minute = match.groups()
    try:
        recorded_at = datetime.datetime.strptime(day, '%Y-%m-%d')
        if hour is not None:
            recorded_at = recorded_at.replace(hour=int(hour), minute=int(minute))
    except ValueError:
        return None, False
    return recorded_at, hour is not None


def year_season(date):
    """``2023 Spring`` for January to May, Summer to September, then Winter"""
    if date.month <= 5:
        season = 'Spring'
    elif date.month <= 9:
        season = 'Summer'
    else:
        season = 'Winter'
    return f"{date.year} {season}"


class ClassSchedule:
    """Names recordings after the class they were taken in.

    A file recorded on 2023-01-30 at 18:35, for a Monday 18:30 class in a
    semester starting 2023-01-16, becomes ``Advanced Tap 2023 Spring - Week 3``.
    """

    def __init__(self, classes, semester_start=None):
        self.classes = list(classes)
        self.semester_start = semester_start

    @classmethod
    def from_config(cls, cfg):
        semester_start = None
        if cfg.SEMESTER_START_DATE:
            semester_start = datetime.datetime.strptime(cfg.SEMESTER_START_DATE, '%Y-%m-%d').date()
        return cls(parse_schedule(cfg.CLASS_SCHEDULE), semester_start)

    @property
    def configured(self):
        return bool(self.classes) and self.semester_start is not None

    def match(self, recorded_at, has_time=True):
        candidates = [c for c in self.classes if c.weekday == recorded_at.weekday()]
        if not has_time:
            return candidates[0] if len(candidates) == 1 else None

        for scheduled in candidates:
            start = datetime.datetime.combine(recorded_at.date(), scheduled.start_time)
            minutes = (recorded_at - start).total_seconds() / 60
            if -MINUTES_BEFORE_START <= minutes <= MINUTES_AFTER_START:
                return scheduled
        return None

    def week_number(self, date):
        return (date - self.semester_start).days // 7 + 1

    def video_name(self, filename):
        """The class name, season and week for ``filename``, or None if unknown"""
        if not self.configured:
            return None

        recorded_at, has_time = parse_recording_time(filename)
        if recorded_at is None:
            logger.warning("No recording date in %s; %s", filename, RENAME_HINT)
            return None

        if recorded_at.date() < self.semester_start:
            logger.warning("%s was recorded before the semester started on %s",
                           filename, self.semester_start)
            return None

        scheduled = self.match(recorded_at, has_time)
        if scheduled is None:
            logger.warning("Could not determine the class %s was recorded in; %s", filename, RENAME_HINT)
            return None

        week = self.week_number(recorded_at.date())
        return f"{scheduled.name} {year_season(self.semester_start)} - Week {week}"
