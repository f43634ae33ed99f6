"""Appointment slot generation"""

from datetime import date, datetime, time, timedelta

SLOT_DURATION_MINUTES = 30
DAY_START = time(9, 0)
DAY_END = time(17, 0)


def generate_time_slots(target_date: date, now: datetime) -> list[str]:
    """
    Return the bookable "HH:MM" slot labels for ``target_date``.

    Slots run every 30 minutes in the window [09:00, 17:00). On the current
    day the first slot starts at ``now`` truncated to the minute instead of
    09:00 (but never before 09:00). Past dates have no slots.

    Args:
        target_date: Calendar date being booked
        now: Current clinic wall-clock time (naive, local)

    Returns:
        Strictly increasing list of slot labels, possibly empty
    """
    today = now.date()
    if target_date < today:
        return []

    start = datetime.combine(target_date, DAY_START)
    end = datetime.combine(target_date, DAY_END)

    if target_date == today:
        start = max(start, now.replace(second=0, microsecond=0))

    slots = []
    current = start
    while current < end:
        slots.append(current.strftime("%H:%M"))
        current += timedelta(minutes=SLOT_DURATION_MINUTES)

    return slots
