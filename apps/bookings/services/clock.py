"""Wall-clock access for the booking flow; tests patch ``local_now``."""

from django.utils import timezone


def local_now():
    """Current time in the shop's time zone (``settings.TIME_ZONE``)."""
    return timezone.localtime()
