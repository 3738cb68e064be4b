# The MIT License (MIT)
#
# Copyright (c) Arie Bovenberg
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - The value types and zones live in one file on purpose:
#   ZonedDateTime needs the zones, and the zones need Duration and UTCDateTime.
#   Splitting them up only trades this for circular imports.
# - Every value is immutable. Operations return new instances and
#   never touch the wrapped ``datetime`` in place.
# - Zones come in two variants with the same small interface
#   (``key``, ``tzinfo``, ``classify``). Only RegionZone knows about
#   gaps and overlaps.
from __future__ import annotations

__version__ = "0.1.0"

import re
from abc import ABC, abstractmethod
from bisect import bisect_right
from calendar import monthrange
from datetime import (
    date as _date,
    datetime as _datetime,
    timedelta as _timedelta,
    timezone as _timezone,
    tzinfo as _tzinfo,
)
from operator import attrgetter, itemgetter
from typing import (
    TYPE_CHECKING,
    Callable,
    ClassVar,
    Iterable,
    Literal,
    Mapping,
    TypeVar,
    Union,
    overload,
)
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

__all__ = [
    "Date",
    "DateTime",
    "AwareDateTime",
    "UTCDateTime",
    "ZonedDateTime",
    "NaiveDateTime",
    "Duration",
    "Period",
    "FixedOffset",
    "RegionZone",
    "RuleTable",
    "StaticRules",
    "tzdb",
    "zone",
    "hours",
    "minutes",
    "UnknownZone",
    "DoesntExistInZone",
    "Ambiguous",
    "InvalidOffsetForZone",
    "InvalidFormat",
]


MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(1, 8)


class NOT_SET:
    pass  # sentinel for when no value is passed


class Date:
    """A calendar date, without a time of day

    Example
    -------

    >>> Date(2017, 3, 26)
    Date(2017-03-26)

    """

    __slots__ = ("_py_date",)

    def __init__(self, year: int, month: int, day: int) -> None:
        self._py_date = _date(year, month, day)

    @property
    def year(self) -> int:
        return self._py_date.year

    @property
    def month(self) -> int:
        return self._py_date.month

    @property
    def day(self) -> int:
        return self._py_date.day

    def canonical_format(self) -> str:
        """The date as ``YYYY-MM-DD``

        Example
        -------

        >>> Date(2017, 10, 29).canonical_format()
        '2017-10-29'

        """
        return self._py_date.isoformat()

    __str__ = canonical_format

    def __repr__(self) -> str:
        return f"Date({self})"

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            if not isinstance(other, Date):
                return NotImplemented
            return self._py_date == other._py_date

        __hash__ = property(attrgetter("_py_date.__hash__"))

    def __lt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._py_date < other._py_date

    def __le__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._py_date <= other._py_date

    def __gt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._py_date > other._py_date

    def __ge__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._py_date >= other._py_date

    @classmethod
    def from_py_date(cls, d: _date, /) -> Date:
        """Wrap a :class:`~datetime.date`"""
        self = _object_new(cls)
        self._py_date = d
        return self

    def add(
        self, years: int = 0, months: int = 0, weeks: int = 0, days: int = 0
    ) -> Date:
        """Shift the date by calendar units, largest first.

        When the target month is too short, the day is clamped
        to the last day of that month.

        Example
        -------

        >>> Date(2017, 3, 26).add(days=1)
        Date(2017-03-27)
        >>> Date(2016, 2, 29).add(years=1)
        Date(2017-02-28)
        >>> Date(2017, 1, 31).add(months=1, weeks=1)
        Date(2017-03-07)

        """
        year_carry, month = divmod(self.month - 1 + months, 12)
        year = self.year + years + year_carry
        month += 1
        day = min(self.day, monthrange(year, month)[1])
        return Date.from_py_date(
            _date(year, month, day) + _timedelta(days=days, weeks=weeks)
        )

    def day_of_week(self) -> int:
        """ISO day of the week: Monday is 1, Sunday is 7

        >>> Date(2017, 3, 26).day_of_week() == SUNDAY
        True
        """
        return self._py_date.isoweekday()


class Duration:
    """An exact amount of elapsed time.

    Unlike :class:`Period`, a duration doesn't care about calendars
    or clocks: 24 hours is always 24 hours, even when the clocks
    are set forward in between.
    The components are normalized, so 90 minutes equals 1 hour and
    30 minutes.

    Example
    -------

    >>> Duration(hours=1, minutes=30)
    Duration(01:30:00)
    >>> Duration(minutes=90) == Duration(hours=1.5)
    True

    """

    __slots__ = ("_micros",)

    def __init__(
        self,
        *,
        hours: float = 0,
        minutes: float = 0,
        seconds: float = 0,
        microseconds: int = 0,
    ) -> None:
        assert type(microseconds) is int  # catch this common mistake
        # each component is truncated separately to limit float error
        self._micros = (
            int(hours * 3_600_000_000)
            + int(minutes * 60_000_000)
            + int(seconds * 1_000_000)
            + microseconds
        )

    ZERO: ClassVar[Duration]

    def in_hours(self) -> float:
        """Total length in hours

        >>> Duration(minutes=90).in_hours()
        1.5
        """
        return self._micros / 3_600_000_000

    def in_minutes(self) -> float:
        return self._micros / 60_000_000

    def in_seconds(self) -> float:
        return self._micros / 1_000_000

    def in_microseconds(self) -> int:
        return self._micros

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._micros == other._micros

    def __hash__(self) -> int:
        return hash(self._micros)

    def __lt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._micros < other._micros

    def __le__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._micros <= other._micros

    def __gt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._micros > other._micros

    def __ge__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._micros >= other._micros

    def __bool__(self) -> bool:
        return bool(self._micros)

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(microseconds=self._micros + other._micros)

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(microseconds=self._micros - other._micros)

    def __mul__(self, other: float) -> Duration:
        """Scale by a number

        >>> Duration(hours=1) * 24
        Duration(24:00:00)
        """
        if not isinstance(other, (int, float)):
            return NotImplemented
        return Duration(microseconds=int(self._micros * other))

    __rmul__ = __mul__

    def __neg__(self) -> Duration:
        return Duration(microseconds=-self._micros)

    def __abs__(self) -> Duration:
        return Duration(microseconds=abs(self._micros))

    @overload
    def __truediv__(self, other: float) -> Duration: ...

    @overload
    def __truediv__(self, other: Duration) -> float: ...

    def __truediv__(self, other: float | Duration) -> Duration | float:
        """Divide by a number, or by another duration to get a ratio

        >>> Duration(hours=24) / Duration(hours=1)
        24.0
        """
        if isinstance(other, Duration):
            return self._micros / other._micros
        elif isinstance(other, (int, float)):
            return Duration(microseconds=int(self._micros / other))
        return NotImplemented

    def canonical_format(self) -> str:
        """Format as ``[-]HH:MM:SS(.ffffff)``

        Hours are not wrapped at 24, so a day is ``24:00:00``.

        >>> Duration(hours=-1, minutes=-30).canonical_format()
        '-01:30:00'
        """
        hrs, mins, secs, micros = abs(self).as_tuple()
        return (
            f"{'-' * (self._micros < 0)}{hrs:02}:{mins:02}:{secs:02}"
            + f".{micros:0>6}" * bool(micros)
        )

    __str__ = canonical_format

    @classmethod
    def from_canonical_format(cls, s: str, /) -> Duration:
        """Parse the output of :meth:`canonical_format`

        Raises
        ------
        InvalidFormat
            If the string does not match the format exactly.
        """
        if not (match := _match_duration(s)):
            raise InvalidFormat()
        sign, hrs, mins, secs = match.groups()
        return cls(
            microseconds=(-1 if sign == "-" else 1)
            * (
                int(hrs) * 3_600_000_000
                + int(mins) * 60_000_000
                + round(float(secs) * 1_000_000)
            )
        )

    def py_timedelta(self) -> _timedelta:
        """The equivalent :class:`~datetime.timedelta`"""
        return _timedelta(microseconds=self._micros)

    @classmethod
    def from_py_timedelta(cls, td: _timedelta, /) -> Duration:
        """Create from a :class:`~datetime.timedelta`

        >>> from datetime import timedelta
        >>> Duration.from_py_timedelta(timedelta(hours=2))
        Duration(02:00:00)
        """
        return cls(
            microseconds=(td.days * 86_400 + td.seconds) * 1_000_000
            + td.microseconds
        )

    def as_tuple(self) -> tuple[int, int, int, int]:
        """The (hours, minutes, seconds, microseconds) components.
        All components carry the sign of the duration.

        >>> Duration(hours=-1, minutes=-30).as_tuple()
        (-1, -30, 0, 0)
        """
        hrs, rest = divmod(abs(self._micros), 3_600_000_000)
        mins, rest = divmod(rest, 60_000_000)
        secs, micros = divmod(rest, 1_000_000)
        if self._micros < 0:
            return (-hrs, -mins, -secs, -micros)
        return (hrs, mins, secs, micros)

    def __repr__(self) -> str:
        return f"Duration({self})"


Duration.ZERO = Duration()


class Period:
    """A calendar amount: years, months, weeks and days.

    A period says nothing about elapsed time. "One day" after 01:00
    is 01:00 the next day, whether that day lasts 23, 24, or 25 hours.
    Use :class:`Duration` for exact amounts of time.

    The fields are kept as given, so 7 days is not the same as 1 week.
    The canonical format is ``PnYnMnWnD``:

    >>> Period(days=1)
    Period(P1D)
    >>> Period(years=1, weeks=-2)
    Period(P1Y-2W)

    """

    __slots__ = ("_years", "_months", "_weeks", "_days")

    ZERO: ClassVar[Period]

    def __init__(
        self, *, years: int = 0, months: int = 0, weeks: int = 0, days: int = 0
    ) -> None:
        self._years = years
        self._months = months
        self._weeks = weeks
        self._days = days

    @property
    def years(self) -> int:
        return self._years

    @property
    def months(self) -> int:
        return self._months

    @property
    def weeks(self) -> int:
        return self._weeks

    @property
    def days(self) -> int:
        return self._days

    def as_tuple(self) -> tuple[int, int, int, int]:
        """The (years, months, weeks, days) fields"""
        return (self._years, self._months, self._weeks, self._days)

    def __eq__(self, other: object) -> bool:
        """Field-by-field equality. No normalization is done,
        so ``Period(weeks=1) != Period(days=7)``.
        """
        if not isinstance(other, Period):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __bool__(self) -> bool:
        return any(self.as_tuple())

    def canonical_format(self) -> str:
        return "P" + (
            "".join(
                f"{value}{unit}"
                for value, unit in zip(self.as_tuple(), "YMWD")
                if value
            )
            or "0D"
        )

    __str__ = canonical_format

    @classmethod
    def from_canonical_format(cls, s: str, /) -> Period:
        """Parse the output of :meth:`canonical_format`

        >>> Period.from_canonical_format("P1Y-2W")
        Period(P1Y-2W)

        Raises
        ------
        InvalidFormat
            If the string does not match the format exactly.
        """
        if not (match := _match_period(s)) or s == "P":
            raise InvalidFormat()
        years, months, weeks, days = (int(g or 0) for g in match.groups())
        return cls(years=years, months=months, weeks=weeks, days=days)

    def __repr__(self) -> str:
        return f"Period({self})"

    def __neg__(self) -> Period:
        return Period(
            years=-self._years,
            months=-self._months,
            weeks=-self._weeks,
            days=-self._days,
        )

    def __mul__(self, other: int) -> Period:
        if not isinstance(other, int):
            return NotImplemented
        return Period(
            years=self._years * other,
            months=self._months * other,
            weeks=self._weeks * other,
            days=self._days * other,
        )

    __rmul__ = __mul__

    def __add__(self, other: Period) -> Period:
        if not isinstance(other, Period):
            return NotImplemented
        return Period(
            years=self._years + other._years,
            months=self._months + other._months,
            weeks=self._weeks + other._weeks,
            days=self._days + other._days,
        )

    def __sub__(self, other: Period) -> Period:
        if not isinstance(other, Period):
            return NotImplemented
        return self + -other


Period.ZERO = Period()


def tzdb(key: str, /) -> _tzinfo:
    """Look up a zone's rules in the IANA time zone database.

    This is the default zone lookup. Any callable with the same
    signature can take its place, see :class:`StaticRules`.

    Raises
    ------
    UnknownZone
        If the database has no zone with this key.
    """
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise UnknownZone.for_key(key) from e


class StaticRules:
    """A zone lookup backed by a fixed mapping of keys to rules.

    Useful to pin down transitions in tests, independent of
    whatever version of the IANA database is installed.

    Example
    -------

    >>> spring = RuleTable(hours(1), [(UTCDateTime(2017, 3, 26, 1), hours(2))])
    >>> rules = StaticRules({"Test/Spring": spring})
    >>> zone("Test/Spring", rules)
    RegionZone(Test/Spring)

    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[str, _tzinfo], /) -> None:
        self._rules = dict(rules)

    def __call__(self, key: str, /) -> _tzinfo:
        try:
            return self._rules[key]
        except KeyError:
            raise UnknownZone.for_key(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def __repr__(self) -> str:
        return f"StaticRules({sorted(self._rules)})"


class RuleTable(_tzinfo):
    """A :class:`~datetime.tzinfo` defined by an explicit list of
    offset transitions.

    Each transition is the UTC moment it takes effect, and the offset
    from then on. Before the first transition, ``initial`` applies.
    Local times are resolved following :pep:`495`: inside a gap
    ``fold=0`` uses the offset from before the transition, inside an
    overlap ``fold=0`` picks the earlier of the two moments.

    Example
    -------

    >>> spring = RuleTable(
    ...     hours(1),
    ...     [(UTCDateTime(2017, 3, 26, 1), hours(2))],
    ...     name="Test/Spring",
    ... )
    >>> ZonedDateTime(2017, 3, 26, 2, 30, tz=RegionZone("Test/Spring", spring))
    ZonedDateTime(2017-03-26 03:30:00+02:00[Test/Spring])

    """

    def __init__(
        self,
        initial: Duration,
        transitions: Iterable[tuple[UTCDateTime, Duration]] = (),
        /,
        name: str | None = None,
    ) -> None:
        changes = sorted(
            (
                (moment._py_dt.replace(tzinfo=None), offset.py_timedelta())
                for moment, offset in transitions
            ),
            key=itemgetter(0),
        )
        self._name = name
        self._utc = [moment for moment, _ in changes]
        self._offsets = [initial.py_timedelta()]
        self._offsets.extend(offset for _, offset in changes)
        # Wall-clock bounds of each transition:
        # from _starts[i] it applies to fold=1, from _ends[i] to fold=0 too.
        self._starts = []
        self._ends = []
        for i, moment in enumerate(self._utc):
            before, after = self._offsets[i], self._offsets[i + 1]
            self._starts.append(moment + min(before, after))
            self._ends.append(moment + max(before, after))

    def utcoffset(self, dt: _datetime | None) -> _timedelta | None:
        if dt is None:
            return None
        bounds = self._starts if dt.fold else self._ends
        return self._offsets[bisect_right(bounds, dt.replace(tzinfo=None))]

    def dst(self, dt: _datetime | None) -> _timedelta | None:
        return None

    def tzname(self, dt: _datetime | None) -> str | None:
        return self._name

    def fromutc(self, dt: _datetime) -> _datetime:
        if dt.tzinfo is not self:
            raise ValueError("fromutc: dt.tzinfo is not self")
        idx = bisect_right(self._utc, dt.replace(tzinfo=None))
        local = dt + self._offsets[idx]
        # right after a backward transition, the wall clock repeats itself
        if (
            idx
            and self._offsets[idx] < self._offsets[idx - 1]
            and local.replace(tzinfo=None) < self._ends[idx - 1]
        ):
            local = local.replace(fold=1)
        return local

    def __repr__(self) -> str:
        return f"RuleTable({self._name!r})"


class FixedOffset:
    """A zone with a constant offset from UTC and no transitions.

    The wall-clock time is always taken literally: there are no gaps
    or overlaps to correct for. That also means it can't follow a
    region's daylight saving time. ``02:30+02:00`` on the morning
    clocks in Warsaw skip from 02:00 to 03:00 is a perfectly valid
    value for this zone, while ``Europe/Warsaw`` would shift it to 03:30.

    The ``prefix`` only affects the zone ID: ``UTC+2`` and ``+02:00``
    have the same rules, but print differently.

    Example
    -------

    >>> FixedOffset(hours(2))
    FixedOffset(+02:00)
    >>> FixedOffset(hours(-3) - minutes(30), prefix="UTC").key
    'UTC-03:30'

    """

    __slots__ = ("_offset", "_prefix", "_tzinfo")

    def __init__(
        self, offset: Duration, /, prefix: Literal["", "UTC", "GMT", "UT"] = ""
    ) -> None:
        if prefix not in _OFFSET_PREFIXES:
            raise ValueError(f"Invalid offset prefix: {prefix!r}")
        if abs(offset) > _MAX_OFFSET or offset.in_microseconds() % 1_000_000:
            raise ValueError(
                "Offset must be whole seconds within 18 hours of UTC, "
                f"got {offset}"
            )
        self._offset = offset
        self._prefix = prefix
        self._tzinfo = _timezone(offset.py_timedelta())

    @property
    def offset(self) -> Duration:
        return self._offset

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def key(self) -> str:
        return self._prefix + _format_offset(self._offset)

    @property
    def tzinfo(self) -> _tzinfo:
        return self._tzinfo

    def classify(self, d: NaiveDateTime, /) -> Resolution:
        """Always ``"unique"``: a fixed offset has no transitions"""
        return "unique"

    def _resolve(self, d: _datetime, disambiguate: Disambiguate) -> _datetime:
        _folds(disambiguate)
        return d.replace(tzinfo=self._tzinfo, fold=0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedOffset):
            return NotImplemented
        return (self._offset, self._prefix) == (other._offset, other._prefix)

    def __hash__(self) -> int:
        return hash((FixedOffset, self._offset, self._prefix))

    def __repr__(self) -> str:
        return f"FixedOffset({self.key})"


class RegionZone:
    """A named zone whose offset follows a table of transitions,
    typically an IANA zone like ``Europe/Warsaw``.

    Usually created with :func:`zone`. Resolving a local time in a
    region may hit one of two special cases:

    - **gap**: the clocks were set forward, and the local time was
      skipped. ``2017-03-26 02:30`` never happened in Warsaw.
    - **overlap**: the clocks were set back, and the local time
      happened twice. ``2017-10-29 02:30`` happened in Warsaw at
      both +02:00 and +01:00.

    Example
    -------

    >>> warsaw = zone("Europe/Warsaw")
    >>> warsaw.classify(NaiveDateTime(2017, 3, 26, 2, 30))
    'gap'
    >>> warsaw.classify(NaiveDateTime(2017, 10, 29, 2, 30))
    'overlap'

    """

    __slots__ = ("_key", "_tzinfo")

    def __init__(self, key: str, tzinfo: _tzinfo, /) -> None:
        self._key = key
        self._tzinfo = tzinfo

    @property
    def key(self) -> str:
        return self._key

    @property
    def tzinfo(self) -> _tzinfo:
        return self._tzinfo

    def classify(self, d: NaiveDateTime, /) -> Resolution:
        """Whether the local time is unique, skipped (``"gap"``)
        or repeated (``"overlap"``) in this zone"""
        return self._classify(d._py_dt)

    def _classify(self, d: _datetime) -> Resolution:
        earlier = d.replace(tzinfo=self._tzinfo, fold=0).utcoffset()
        later = d.replace(tzinfo=self._tzinfo, fold=1).utcoffset()
        if earlier == later:
            return "unique"
        # mypy doesn't know these are never None
        return "gap" if earlier < later else "overlap"  # type: ignore[operator]

    def _resolve(self, d: _datetime, disambiguate: Disambiguate) -> _datetime:
        gap_fold, overlap_fold = _folds(disambiguate)
        kind = self._classify(d)
        if kind == "gap":
            if disambiguate == "raise":
                raise DoesntExistInZone.for_zone(d, self._key)
            # In gaps, fold=0 carries the offset from before the transition,
            # which lands *after* the gap once normalized. "earlier" is
            # the other way around.
            return (
                d.replace(tzinfo=self._tzinfo, fold=gap_fold)
                .astimezone(_UTC)
                .astimezone(self._tzinfo)
            )
        elif kind == "overlap":
            if disambiguate == "raise":
                raise Ambiguous.for_zone(d, self._key)
            return d.replace(tzinfo=self._tzinfo, fold=overlap_fold)
        return d.replace(tzinfo=self._tzinfo, fold=0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegionZone):
            return NotImplemented
        return self._key == other._key and self._tzinfo is other._tzinfo

    def __hash__(self) -> int:
        return hash((RegionZone, self._key))

    def __repr__(self) -> str:
        return f"RegionZone({self._key})"


def zone(key: str, /, rules: ZoneLookup = tzdb) -> FixedOffset | RegionZone:
    """Get the zone for an ID.

    Offset-style IDs (``+02:00``, ``-5``, ``UTC+2``, ``GMT-03:30``,
    ``Z``) give a :class:`FixedOffset`. All other IDs are looked up
    with ``rules`` and give a :class:`RegionZone`.

    Example
    -------

    >>> zone("Europe/Warsaw")
    RegionZone(Europe/Warsaw)
    >>> zone("UTC+2")
    FixedOffset(UTC+02:00)
    >>> zone("Mars/Olympus_Mons")
    Traceback (most recent call last):
      ...
    wallclock.UnknownZone: 'Unknown zone: Mars/Olympus_Mons'

    Raises
    ------
    UnknownZone
        If the ID is neither a valid offset nor known to ``rules``.
    """
    if key == "Z":
        return FixedOffset(Duration.ZERO)
    if (match := _match_offset_zone(key)) is None:
        return RegionZone(key, rules(key))
    prefix, sign, hrs, mins, secs = match.groups()
    if int(mins or 0) > 59 or int(secs or 0) > 59:
        raise UnknownZone.for_key(key)
    offset = Duration(
        hours=int(hrs), minutes=int(mins or 0), seconds=int(secs or 0)
    )
    try:
        return FixedOffset(-offset if sign == "-" else offset, prefix or "")
    except ValueError:
        raise UnknownZone.for_key(key) from None


_TDateTime = TypeVar("_TDateTime", bound="DateTime")


class DateTime(ABC):
    """Abstract base class for all datetime types"""

    __slots__ = ("_py_dt", "__weakref__")
    _py_dt: _datetime

    if TYPE_CHECKING:

        @property
        def year(self) -> int: ...

        @property
        def month(self) -> int: ...

        @property
        def day(self) -> int: ...

        @property
        def hour(self) -> int: ...

        @property
        def minute(self) -> int: ...

        @property
        def second(self) -> int: ...

        @property
        def microsecond(self) -> int: ...

    else:
        # Defining properties this way is faster than declaring a `def`,
        # but the type checker doesn't like it.
        year = property(attrgetter("_py_dt.year"))
        month = property(attrgetter("_py_dt.month"))
        day = property(attrgetter("_py_dt.day"))
        hour = property(attrgetter("_py_dt.hour"))
        minute = property(attrgetter("_py_dt.minute"))
        second = property(attrgetter("_py_dt.second"))
        microsecond = property(attrgetter("_py_dt.microsecond"))

    def date(self) -> Date:
        """The date part of the datetime"""
        return Date.from_py_date(self._py_dt.date())

    @abstractmethod
    def canonical_format(self, sep: Literal[" ", "T"] = "T") -> str:
        """Format as the canonical string representation.
        Each subclass documents its own format.
        Inverse of :meth:`from_canonical_format`.
        """

    def __str__(self) -> str:
        """Same as :meth:`canonical_format` with ``sep=" "``"""
        return self.canonical_format(" ")

    def py_datetime(self) -> _datetime:
        """The underlying :class:`~datetime.datetime` object"""
        return self._py_dt

    @classmethod
    def _from_py_unchecked(
        cls: type[_TDateTime], d: _datetime, /
    ) -> _TDateTime:
        self = _object_new(cls)
        self._py_dt = d
        return self

    # Values are immutable, so copies can be the same object
    def __copy__(self: _TDateTime) -> _TDateTime:
        return self

    def __deepcopy__(self: _TDateTime, _: object) -> _TDateTime:
        return self


class AwareDateTime(DateTime):
    """Abstract base class for datetimes that pin down an exact moment:
    :class:`UTCDateTime` and :class:`ZonedDateTime`.
    """

    __slots__ = ()

    def timestamp(self) -> float:
        """Seconds since the UNIX epoch"""
        return self._py_dt.timestamp()

    @property
    @abstractmethod
    def offset(self) -> Duration:
        """The UTC offset in effect"""

    @abstractmethod
    def as_utc(self) -> UTCDateTime:
        """The same moment, in UTC"""

    def as_zoned(self, tz: str | Zone, /) -> ZonedDateTime:
        """The same moment, in the given zone.

        Converting a moment never hits a gap or overlap:
        every moment has exactly one local time in every zone.

        Raises
        ------
        UnknownZone
            If ``tz`` is a string that isn't a known zone ID.
        """
        z = _as_zone(tz)
        return ZonedDateTime._from_zoned(self._py_dt.astimezone(z.tzinfo), z)

    def naive(self) -> NaiveDateTime:
        """The local date and time, with the zone and offset dropped"""
        return NaiveDateTime._from_py_unchecked(
            self._py_dt.replace(tzinfo=None, fold=0)
        )

    @abstractmethod
    def exact_eq(self: _TDateTime, other: _TDateTime, /) -> bool:
        """Compare by value instead of by moment.

        ``a.exact_eq(b)`` implies ``a == b``, but not the other way around:
        02:30+02:00 and 02:30+01:00 on the night clocks go back
        have the same wall time, but are different moments. 01:30 UTC
        and 03:30+02:00 are the same moment, but different values.
        """


class UTCDateTime(AwareDateTime):
    """A moment in time, expressed in UTC.

    The reference all zoned values are resolved against.
    Its canonical format is ``YYYY-MM-DDTHH:MM:SS(.ffffff)Z``.

    Example
    -------

    >>> UTCDateTime(2017, 3, 26, 1)
    UTCDateTime(2017-03-26 01:00:00Z)
    >>> _.as_zoned("Europe/Warsaw")
    ZonedDateTime(2017-03-26 03:00:00+02:00[Europe/Warsaw])

    """

    __slots__ = ()

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        microsecond: int = 0,
    ) -> None:
        self._py_dt = _datetime(
            year, month, day, hour, minute, second, microsecond, _UTC
        )

    @classmethod
    def now(cls) -> UTCDateTime:
        return cls._from_py_unchecked(_datetime.now(_UTC))

    @classmethod
    def from_timestamp(cls, ts: float, /) -> UTCDateTime:
        """Inverse of :meth:`~AwareDateTime.timestamp`

        >>> UTCDateTime.from_timestamp(0)
        UTCDateTime(1970-01-01 00:00:00Z)
        """
        return cls._from_py_unchecked(_fromtimestamp(ts, _UTC))

    def canonical_format(self, sep: Literal[" ", "T"] = "T") -> str:
        return f"{self._py_dt.isoformat(sep)[:-6]}Z"

    @classmethod
    def from_canonical_format(cls, s: str, /) -> UTCDateTime:
        if not _match_utc_str(s):
            raise InvalidFormat()
        return cls._from_py_unchecked(
            _fromisoformat(s[:-1]).replace(tzinfo=_UTC)
        )

    offset = Duration.ZERO

    if TYPE_CHECKING:

        def replace(
            self,
            *,
            year: int | NOT_SET = NOT_SET(),
            month: int | NOT_SET = NOT_SET(),
            day: int | NOT_SET = NOT_SET(),
            hour: int | NOT_SET = NOT_SET(),
            minute: int | NOT_SET = NOT_SET(),
            second: int | NOT_SET = NOT_SET(),
            microsecond: int | NOT_SET = NOT_SET(),
        ) -> UTCDateTime: ...

    else:

        def replace(self, /, **kwargs) -> UTCDateTime:
            if not _no_tzinfo_or_fold(kwargs):
                raise TypeError("tzinfo and fold are not allowed arguments")
            return self._from_py_unchecked(self._py_dt.replace(**kwargs))

        __hash__ = property(attrgetter("_py_dt.__hash__"))

        # Hiding __eq__ from mypy ensures that --strict-equality works
        def __eq__(self, other: object) -> bool:
            if not isinstance(other, UTCDateTime):
                return NotImplemented
            return self._py_dt == other._py_dt

    def exact_eq(self, other: UTCDateTime, /) -> bool:
        return self._py_dt == other._py_dt

    def __lt__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, UTCDateTime):
            return NotImplemented
        return self._py_dt < other._py_dt

    def __le__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, UTCDateTime):
            return NotImplemented
        return self._py_dt <= other._py_dt

    def __gt__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, UTCDateTime):
            return NotImplemented
        return self._py_dt > other._py_dt

    def __ge__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, UTCDateTime):
            return NotImplemented
        return self._py_dt >= other._py_dt

    def __add__(self, delta: Duration | Period) -> UTCDateTime:
        """Add an amount of time. In UTC, a day is always 24 hours.

        >>> UTCDateTime(2017, 3, 26) + Period(days=1)
        UTCDateTime(2017-03-27 00:00:00Z)
        """
        if isinstance(delta, Duration):
            return self._from_py_unchecked(self._py_dt + delta.py_timedelta())
        elif isinstance(delta, Period):
            d = self.date().add(*delta.as_tuple())
            return self.replace(year=d.year, month=d.month, day=d.day)
        return NotImplemented

    if TYPE_CHECKING:

        @overload
        def __sub__(self, other: AwareDateTime) -> Duration: ...

        @overload
        def __sub__(self, other: Duration | Period) -> UTCDateTime: ...

        def __sub__(
            self, other: AwareDateTime | Duration | Period
        ) -> UTCDateTime | Duration: ...

    else:

        def __sub__(
            self, other: Duration | Period | AwareDateTime
        ) -> UTCDateTime | Duration:
            """Subtract a time amount, or another aware datetime
            to get the exact duration between them"""
            if isinstance(other, AwareDateTime):
                return Duration.from_py_timedelta(self._py_dt - other._py_dt)
            elif isinstance(other, Duration):
                return self._from_py_unchecked(
                    self._py_dt - other.py_timedelta()
                )
            elif isinstance(other, Period):
                return self + -other
            return NotImplemented

    def as_utc(self) -> UTCDateTime:
        return self

    def __repr__(self) -> str:
        return f"UTCDateTime({self})"


class ZonedDateTime(AwareDateTime):
    """A date and wall-clock time in a zone, resolved to an exact moment.

    The zone is either a region (``"Europe/Warsaw"``), which knows
    about daylight saving time, or a fixed offset (``"+02:00"``,
    ``"UTC+2"``), which doesn't.

    Example
    -------

    >>> ZonedDateTime(2017, 3, 26, 1, 30, tz="Europe/Warsaw")
    ZonedDateTime(2017-03-26 01:30:00+01:00[Europe/Warsaw])
    >>> # 02:30 was skipped that night: the time moves forward
    >>> ZonedDateTime(2017, 3, 26, 2, 30, tz="Europe/Warsaw")
    ZonedDateTime(2017-03-26 03:30:00+02:00[Europe/Warsaw])
    >>> # a fixed offset takes the time as-is
    >>> ZonedDateTime(2017, 3, 26, 2, 30, tz="UTC+2")
    ZonedDateTime(2017-03-26 02:30:00+02:00[UTC+02:00])

    Disambiguation
    --------------

    When the clocks change, a local time can be skipped (a *gap*)
    or happen twice (an *overlap*). ``disambiguate`` decides what
    happens then:

    +------------------+-------------------------------------------------+
    | ``disambiguate`` | Behavior                                        |
    +==================+=================================================+
    | ``"compatible"`` | (default) In a gap, shift forward by the length |
    |                  | of the gap. In an overlap, pick the earlier     |
    |                  | moment. This matches RFC 5545, ``java.time``    |
    |                  | and ``fold=0`` in the standard library.         |
    +------------------+-------------------------------------------------+
    | ``"earlier"``    | The earlier option. In a gap, this shifts the   |
    |                  | time *back* by the length of the gap.           |
    +------------------+-------------------------------------------------+
    | ``"later"``      | The later option                                |
    +------------------+-------------------------------------------------+
    | ``"raise"``      | Refuse to guess: raise :exc:`DoesntExistInZone` |
    |                  | or :exc:`Ambiguous`                             |
    +------------------+-------------------------------------------------+

    Fixed offsets never have gaps or overlaps, and ignore the argument.

    Note
    ----

    The canonical string format is:

    .. code-block:: text

       YYYY-MM-DDTHH:MM:SS(.ffffff)+HH:MM(:SS)[ZONE ID]

    The bracketed zone ID is left out for plain offsets like ``+02:00``,
    since it would only repeat the offset.
    """

    __slots__ = ("_zone",)
    _zone: Zone

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        microsecond: int = 0,
        *,
        tz: str | Zone,
        disambiguate: Disambiguate = "compatible",
    ) -> None:
        self._zone = z = _as_zone(tz)
        self._py_dt = z._resolve(
            _datetime(year, month, day, hour, minute, second, microsecond),
            disambiguate,
        )

    @classmethod
    def _from_zoned(cls, d: _datetime, z: Zone, /) -> ZonedDateTime:
        self = cls._from_py_unchecked(d)
        self._zone = z
        return self

    def _evolve(self, d: _datetime, /) -> ZonedDateTime:
        return self._from_zoned(d, self._zone)

    @classmethod
    def now(cls, tz: str | Zone) -> ZonedDateTime:
        z = _as_zone(tz)
        return cls._from_zoned(_datetime.now(z.tzinfo), z)

    @classmethod
    def from_timestamp(cls, ts: float, /, tz: str | Zone) -> ZonedDateTime:
        z = _as_zone(tz)
        return cls._from_zoned(_fromtimestamp(ts, z.tzinfo), z)

    def canonical_format(self, sep: Literal[" ", "T"] = "T") -> str:
        if isinstance(self._zone, FixedOffset) and not self._zone.prefix:
            return self._py_dt.isoformat(sep)
        return f"{self._py_dt.isoformat(sep)}[{self._zone.key}]"

    @classmethod
    def from_canonical_format(
        cls, s: str, /, rules: ZoneLookup = tzdb
    ) -> ZonedDateTime:
        """Parse the output of :meth:`canonical_format`.

        The offset must be valid for the zone at that local time,
        so it can tell the two sides of an overlap apart.

        >>> ZonedDateTime.from_canonical_format(
        ...     "2017-10-29T02:30:00+01:00[Europe/Warsaw]"
        ... )
        ZonedDateTime(2017-10-29 02:30:00+01:00[Europe/Warsaw])

        Raises
        ------
        InvalidFormat
            If the string doesn't match the format.
        InvalidOffsetForZone
            If the offset isn't one the zone uses at that local time.
        UnknownZone
            If the zone ID is unknown.
        """
        if (match := _match_zoned_str(s)) is None:
            raise InvalidFormat()
        dt = _fromisoformat(match[1])
        offset = dt.utcoffset()
        if match[2] is None:
            # mypy doesn't know the offset is always present here
            z: Zone = FixedOffset(Duration.from_py_timedelta(offset))  # type: ignore[arg-type]
        else:
            z = zone(match[2], rules)
        dt = dt.replace(tzinfo=z.tzinfo)
        if dt.utcoffset() != offset:  # offset/zone mismatch: try other fold
            dt = dt.replace(fold=1)
            if dt.utcoffset() != offset:
                raise InvalidOffsetForZone()
        if not _exists_in_tz(dt):
            raise InvalidOffsetForZone()
        return cls._from_zoned(dt, z)

    if TYPE_CHECKING:
        # We could have used typing.Unpack, but that's only available
        # in Python 3.11+ or with typing_extensions.
        def replace(
            self,
            *,
            year: int | NOT_SET = NOT_SET(),
            month: int | NOT_SET = NOT_SET(),
            day: int | NOT_SET = NOT_SET(),
            hour: int | NOT_SET = NOT_SET(),
            minute: int | NOT_SET = NOT_SET(),
            second: int | NOT_SET = NOT_SET(),
            microsecond: int | NOT_SET = NOT_SET(),
            tz: str | Zone | NOT_SET = NOT_SET(),
            disambiguate: Disambiguate | NOT_SET = NOT_SET(),
        ) -> ZonedDateTime: ...

    else:

        def replace(
            self, /, disambiguate="compatible", **kwargs
        ) -> ZonedDateTime:
            """Create a new value with some fields replaced.
            The result is resolved again, like the constructor does.

            >>> d = ZonedDateTime(2017, 3, 25, 2, 30, tz="Europe/Warsaw")
            >>> d.replace(day=26)
            ZonedDateTime(2017-03-26 03:30:00+02:00[Europe/Warsaw])
            """
            if not _no_tzinfo_or_fold(kwargs):
                raise TypeError("tzinfo and/or fold are not allowed arguments")
            z = _as_zone(kwargs.pop("tz", self._zone))
            return self._from_zoned(
                z._resolve(
                    self._py_dt.replace(tzinfo=None, fold=0, **kwargs),
                    disambiguate,
                ),
                z,
            )

    @property
    def tz(self) -> str:
        """The zone ID"""
        return self._zone.key

    @property
    def zone(self) -> Zone:
        return self._zone

    @property
    def offset(self) -> Duration:
        return Duration.from_py_timedelta(self._py_dt.utcoffset())  # type: ignore[arg-type]

    def __hash__(self) -> int:
        return hash(self._py_dt.astimezone(_UTC))

    # Hiding __eq__ from mypy ensures that --strict-equality works.
    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            """Whether both represent the same moment.

            Comparing datetimes with the same tzinfo ignores ``fold``
            (:pep:`495`), which would make both sides of an overlap equal.
            Normalizing to UTC avoids this.
            """
            if not isinstance(other, AwareDateTime):
                return NotImplemented
            return self._py_dt.astimezone(_UTC) == other._py_dt.astimezone(
                _UTC
            )

    def exact_eq(self, other: ZonedDateTime, /) -> bool:
        return (
            self._zone == other._zone
            and self._py_dt.utcoffset() == other._py_dt.utcoffset()
            and self._py_dt.replace(tzinfo=None)
            == other._py_dt.replace(tzinfo=None)
        )

    def __lt__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, AwareDateTime):
            return NotImplemented
        return self._py_dt.astimezone(_UTC) < other._py_dt

    def __le__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, AwareDateTime):
            return NotImplemented
        return self._py_dt.astimezone(_UTC) <= other._py_dt

    def __gt__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, AwareDateTime):
            return NotImplemented
        return self._py_dt.astimezone(_UTC) > other._py_dt

    def __ge__(self, other: AwareDateTime) -> bool:
        if not isinstance(other, AwareDateTime):
            return NotImplemented
        return self._py_dt.astimezone(_UTC) >= other._py_dt

    def __add__(self, delta: Duration | Period) -> ZonedDateTime:
        """Add an amount of time, accounting for changes in offset.

        Example
        -------

        >>> d = ZonedDateTime(2017, 3, 26, 1, tz="Europe/Warsaw")
        >>> # exactly 24 hours later, the clocks show an hour more
        >>> d + hours(24)
        ZonedDateTime(2017-03-27 02:00:00+02:00[Europe/Warsaw])
        >>> # a day later, the clocks show the same time
        >>> d + Period(days=1)
        ZonedDateTime(2017-03-27 01:00:00+02:00[Europe/Warsaw])

        Note
        ----
        A :class:`Duration` moves the moment: the result is exactly that
        much later, whatever the clocks say.
        A :class:`Period` moves the calendar date and keeps the wall time,
        following RFC 5545. If that wall time falls in a gap or overlap
        on the new date, the ``"compatible"`` rule resolves it.
        """
        if isinstance(delta, Duration):
            return self._evolve(
                (
                    self._py_dt.astimezone(_UTC) + delta.py_timedelta()
                ).astimezone(self._zone.tzinfo)
            )
        elif isinstance(delta, Period):
            date_old = self.date()
            date_new = date_old.add(*delta.as_tuple())
            if date_new == date_old:
                return self
            return self.replace(
                year=date_new.year,
                month=date_new.month,
                day=date_new.day,
                disambiguate="compatible",
            )
        return NotImplemented

    if TYPE_CHECKING:

        @overload
        def __sub__(self, other: AwareDateTime) -> Duration: ...

        @overload
        def __sub__(self, other: Duration | Period) -> ZonedDateTime: ...

        def __sub__(
            self, other: AwareDateTime | Duration | Period
        ) -> AwareDateTime | Duration: ...

    else:

        def __sub__(
            self, other: Duration | Period | AwareDateTime
        ) -> AwareDateTime | Duration:
            """Subtract a time amount, or another aware datetime
            to get the exact duration between them"""
            if isinstance(other, AwareDateTime):
                return Duration.from_py_timedelta(
                    self._py_dt.astimezone(_UTC) - other._py_dt
                )
            elif isinstance(other, Duration):
                return self._evolve(
                    (
                        self._py_dt.astimezone(_UTC) - other.py_timedelta()
                    ).astimezone(self._zone.tzinfo)
                )
            elif isinstance(other, Period):
                return self + -other
            return NotImplemented

    def is_ambiguous(self) -> bool:
        """Whether the wall time happens twice in this zone.

        >>> ZonedDateTime(2017, 10, 29, 2, 30, tz="Europe/Warsaw").is_ambiguous()
        True
        """
        return self._zone.classify(self.naive()) == "overlap"

    def as_utc(self) -> UTCDateTime:
        return UTCDateTime._from_py_unchecked(self._py_dt.astimezone(_UTC))

    def __repr__(self) -> str:
        return f"ZonedDateTime({self})"


class NaiveDateTime(DateTime):
    """A date and wall-clock time, without any zone or offset.

    Arithmetic on naive values is purely calendrical: it never
    consults any zone, so it can't know that 02:30 was skipped
    somewhere. To get an exact moment, explicitly pick a zone
    with :meth:`assume_zoned` or :meth:`assume_utc`.

    The canonical string format is ``YYYY-MM-DDTHH:MM:SS(.ffffff)``.

    Example
    -------

    >>> NaiveDateTime(2017, 3, 26, 2, 30)
    NaiveDateTime(2017-03-26 02:30:00)

    """

    __slots__ = ()

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        microsecond: int = 0,
    ) -> None:
        self._py_dt = _datetime(
            year, month, day, hour, minute, second, microsecond
        )

    def canonical_format(self, sep: Literal[" ", "T"] = "T") -> str:
        return self._py_dt.isoformat(sep)

    @classmethod
    def from_canonical_format(cls, s: str, /) -> NaiveDateTime:
        if not _match_naive_str(s):
            raise InvalidFormat()
        return cls._from_py_unchecked(_fromisoformat(s))

    if TYPE_CHECKING:

        def replace(
            self,
            *,
            year: int | NOT_SET = NOT_SET(),
            month: int | NOT_SET = NOT_SET(),
            day: int | NOT_SET = NOT_SET(),
            hour: int | NOT_SET = NOT_SET(),
            minute: int | NOT_SET = NOT_SET(),
            second: int | NOT_SET = NOT_SET(),
            microsecond: int | NOT_SET = NOT_SET(),
        ) -> NaiveDateTime: ...

    else:

        def replace(self, /, **kwargs) -> NaiveDateTime:
            if not _no_tzinfo_or_fold(kwargs):
                raise TypeError("tzinfo and fold are not allowed arguments")
            return self._from_py_unchecked(self._py_dt.replace(**kwargs))

        __hash__ = property(attrgetter("_py_dt.__hash__"))

        # Hiding __eq__ from mypy ensures that --strict-equality works
        def __eq__(self, other: object) -> bool:
            """Only ever equal to other :class:`NaiveDateTime` instances
            with the same values. Comparing to an aware datetime
            is always ``False``."""
            if not isinstance(other, NaiveDateTime):
                return NotImplemented
            return self._py_dt == other._py_dt

    def __lt__(self, other: NaiveDateTime) -> bool:
        if not isinstance(other, NaiveDateTime):
            return NotImplemented
        return self._py_dt < other._py_dt

    def __le__(self, other: NaiveDateTime) -> bool:
        if not isinstance(other, NaiveDateTime):
            return NotImplemented
        return self._py_dt <= other._py_dt

    def __gt__(self, other: NaiveDateTime) -> bool:
        if not isinstance(other, NaiveDateTime):
            return NotImplemented
        return self._py_dt > other._py_dt

    def __ge__(self, other: NaiveDateTime) -> bool:
        if not isinstance(other, NaiveDateTime):
            return NotImplemented
        return self._py_dt >= other._py_dt

    def __add__(self, other: Duration | Period) -> NaiveDateTime:
        """Add a time amount, by the calendar and the clock alone

        >>> NaiveDateTime(2017, 3, 26, 1) + hours(24)
        NaiveDateTime(2017-03-27 01:00:00)
        """
        if isinstance(other, Duration):
            return self._from_py_unchecked(self._py_dt + other.py_timedelta())
        elif isinstance(other, Period):
            d = self.date().add(*other.as_tuple())
            return self.replace(year=d.year, month=d.month, day=d.day)
        return NotImplemented

    if TYPE_CHECKING:

        @overload
        def __sub__(self, other: NaiveDateTime) -> Duration: ...

        @overload
        def __sub__(self, other: Duration | Period) -> NaiveDateTime: ...

        def __sub__(
            self, other: NaiveDateTime | Duration | Period
        ) -> NaiveDateTime | Duration: ...

    else:

        def __sub__(
            self, other: Duration | Period | NaiveDateTime
        ) -> NaiveDateTime | Duration:
            if isinstance(other, NaiveDateTime):
                return Duration.from_py_timedelta(self._py_dt - other._py_dt)
            elif isinstance(other, Duration):
                return self._from_py_unchecked(
                    self._py_dt - other.py_timedelta()
                )
            elif isinstance(other, Period):
                return self + -other
            return NotImplemented

    def assume_utc(self) -> UTCDateTime:
        """Take the wall time as UTC"""
        return UTCDateTime._from_py_unchecked(self._py_dt.replace(tzinfo=_UTC))

    def assume_zoned(
        self, tz: str | Zone, /, disambiguate: Disambiguate = "compatible"
    ) -> ZonedDateTime:
        """Take the wall time as local time in the given zone.
        Gaps and overlaps are resolved like the
        :class:`ZonedDateTime` constructor does.

        >>> NaiveDateTime(2017, 10, 29, 2, 30).assume_zoned(
        ...     "Europe/Warsaw", disambiguate="later"
        ... )
        ZonedDateTime(2017-10-29 02:30:00+01:00[Europe/Warsaw])
        """
        z = _as_zone(tz)
        return ZonedDateTime._from_zoned(
            z._resolve(self._py_dt, disambiguate), z
        )

    def __repr__(self) -> str:
        return f"NaiveDateTime({self})"


class UnknownZone(ZoneInfoNotFoundError):
    """A zone ID isn't a valid offset, nor known to the zone lookup"""

    @staticmethod
    def for_key(key: str) -> UnknownZone:
        return UnknownZone(f"Unknown zone: {key}")


class Ambiguous(Exception):
    """A local time happens twice in a zone, and the caller
    refused to guess which one is meant"""

    @staticmethod
    def for_zone(d: _datetime, key: str) -> Ambiguous:
        return Ambiguous(
            f"{d.replace(tzinfo=None)} is ambiguous in timezone {key}"
        )


class DoesntExistInZone(Exception):
    """A local time is skipped in a zone, e.g. because of DST"""

    @staticmethod
    def for_zone(d: _datetime, key: str) -> DoesntExistInZone:
        return DoesntExistInZone(
            f"{d.replace(tzinfo=None)} doesn't exist in timezone {key}"
        )


class InvalidOffsetForZone(ValueError):
    """A string has an invalid offset for the given zone"""


class InvalidFormat(ValueError):
    """A string has an invalid format"""


def _as_zone(tz: str | Zone) -> Zone:
    return zone(tz) if isinstance(tz, str) else tz


def _exists_in_tz(d: _datetime) -> bool:
    # non-existent datetimes don't survive a round-trip to UTC
    return d.astimezone(_UTC).astimezone(d.tzinfo) == d


def _format_offset(offset: Duration) -> str:
    hrs, mins, secs, _ = abs(offset).as_tuple()
    return (
        f"{'-' if offset < Duration.ZERO else '+'}{hrs:02}:{mins:02}"
        + f":{secs:02}" * bool(secs)
    )


def _folds(disambiguate: Disambiguate) -> tuple[int, int]:
    """The fold to use in a gap and in an overlap"""
    try:
        return _FOLDS[disambiguate]
    except KeyError:
        raise ValueError(
            f"Invalid disambiguate value: {disambiguate!r}, "
            "expected one of 'compatible', 'earlier', 'later', 'raise'"
        ) from None


# Helpers that pre-compute/lookup as much as possible
_UTC = _timezone.utc
_MAX_OFFSET = Duration(hours=18)
_OFFSET_PREFIXES = ("", "UTC", "GMT", "UT")
_FOLDS = {
    "compatible": (0, 0),
    "earlier": (1, 0),
    "later": (0, 1),
    "raise": (0, 0),
}
_no_tzinfo_or_fold = {"tzinfo", "fold"}.isdisjoint
_object_new = object.__new__
_fromisoformat = _datetime.fromisoformat
_fromtimestamp = _datetime.fromtimestamp
# YYYY-MM-DD HH:MM:SS[.fff[fff]]
_DATETIME_RE = r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(?:\.(?:\d{3}|\d{6}))?"
# YYYY-MM-DD HH:MM:SS[.fff[fff]]+HH:MM[:SS]
_OFFSET_RE = rf"{_DATETIME_RE}[+-]\d{{2}}:\d{{2}}(?::\d{{2}})?"
_match_utc_str = re.compile(rf"{_DATETIME_RE}Z").fullmatch
_match_naive_str = re.compile(_DATETIME_RE).fullmatch
_match_zoned_str = re.compile(rf"({_OFFSET_RE})(?:\[([^\]]+)\])?").fullmatch
_match_offset_zone = re.compile(
    r"(UTC|GMT|UT)?([+-])(\d{1,2})(?::?(\d{2})(?::?(\d{2}))?)?"
).fullmatch
_match_period = re.compile(
    r"P(?:([-+]?\d+)Y)?(?:([-+]?\d+)M)?(?:([-+]?\d+)W)?(?:([-+]?\d+)D)?"
).fullmatch
_match_duration = re.compile(
    r"([-+]?)(\d{2,}):([0-5]\d):([0-5]\d(?:\.\d{1,6})?)"
).fullmatch

Zone = Union[FixedOffset, RegionZone]
ZoneLookup = Callable[[str], _tzinfo]
Resolution = Literal["unique", "gap", "overlap"]
Disambiguate = Literal["compatible", "earlier", "later", "raise"]


def hours(i: int, /) -> Duration:
    """Create a :class:`Duration` with the given number of hours.
    ``hours(1) == Duration(hours=1)``
    """
    return Duration(hours=i)


def minutes(i: int, /) -> Duration:
    """Create a :class:`Duration` with the given number of minutes.
    ``minutes(1) == Duration(minutes=1)``
    """
    return Duration(minutes=i)
