"""Reduce an hourly forecast to the times of day read out in the summary.

All date and weekday decisions are made in the location's zone. Each
record is converted at its own instant, so a sequence spanning a daylight
saving transition keeps the correct local hour on both sides.
"""

from collections.abc import Sequence
from datetime import date, datetime, time, timezone, tzinfo

from jakesky.utils.logger import setup_logger
from jakesky.weather.models import HourlyRecord, SlotForecast, TimeSlot

logger = setup_logger(__name__)

# datetime.weekday(): Monday == 0
FRIDAY = 4
SATURDAY = 5
LATE_SLOT_WEEKDAYS = frozenset({FRIDAY, SATURDAY})

DAYTIME_SLOTS = (TimeSlot.MORNING, TimeSlot.NOON, TimeSlot.EVENING)


def _require_aware(reference_now: datetime) -> None:
    if reference_now.tzinfo is None or reference_now.utcoffset() is None:
        raise ValueError(f"reference_now must be timezone-aware, got {reference_now!r}")


def local_today(reference_now: datetime, tz: tzinfo) -> date:
    """Return the calendar date of ``reference_now`` in ``tz``."""
    _require_aware(reference_now)
    return reference_now.astimezone(tz).date()


def is_late_slot_day(reference_now: datetime, tz: tzinfo) -> bool:
    """Return True if the local weekday of ``reference_now`` is Friday or Saturday."""
    _require_aware(reference_now)
    return reference_now.astimezone(tz).weekday() in LATE_SLOT_WEEKDAYS


def slots_of_interest(late_slot: bool) -> list[TimeSlot]:
    """Return the slots to fill, in time-of-day order."""
    slots = list(DAYTIME_SLOTS)
    if late_slot:
        slots.append(TimeSlot.NIGHT)
    return sorted(slots, key=lambda slot: slot.hour)


def _closest_record(candidates: list[HourlyRecord], target_utc: datetime) -> HourlyRecord:
    """Pick the record at or after the target, else the latest one before it."""
    at_or_after = [r for r in candidates if r.utc_timestamp >= target_utc]
    if at_or_after:
        return min(at_or_after, key=lambda r: r.utc_timestamp)

    return max(candidates, key=lambda r: r.utc_timestamp)


def select(
    hourly: Sequence[HourlyRecord],
    reference_now: datetime,
    include_late_slot: bool,
    tz: tzinfo | None = None,
) -> list[SlotForecast]:
    """Select the hourly records that represent each time slot today.

    For every slot the record on today's local date closest to the slot's
    hour is chosen: an exact match, else the nearest record after the hour,
    else the nearest before it. Slots with no record today are omitted.
    The result depends only on the arguments.

    Args:
        hourly: Normalized hourly records.
        reference_now: Aware timestamp treated as "now".
        include_late_slot: Whether to fill the 22:00 slot.
        tz: Location zone. Defaults to the zone of the first record, then
            to the zone of ``reference_now``.

    Returns:
        SlotForecast pairs in time-of-day order.

    Raises:
        ValueError: If ``reference_now`` is naive.
    """
    _require_aware(reference_now)
    if not hourly:
        logger.debug("No hourly records to select from")
        return []

    zone = tz or hourly[0].timestamp.tzinfo or reference_now.tzinfo
    today = local_today(reference_now, zone)

    candidates = [r for r in hourly if r.timestamp.astimezone(zone).date() == today]
    if not candidates:
        logger.info(f"No hourly records fall on {today}; forecast is empty")
        return []

    selected: list[SlotForecast] = []
    for slot in slots_of_interest(include_late_slot):
        target = datetime.combine(today, time(slot.hour), tzinfo=zone)
        record = _closest_record(candidates, target.astimezone(timezone.utc))
        selected.append(SlotForecast(slot=slot, record=record))
        logger.debug(
            f"{slot.name} -> {record.timestamp.astimezone(zone).isoformat()}"
        )

    return selected
