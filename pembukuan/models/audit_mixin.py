from sqlalchemy import Column, DateTime

from pembukuan.utils.time_utils import local_now


class TimestampMixin:
    """Mixin that provides created/updated timestamps.

    Both columns are filled on insert. ``updated_at`` is refreshed by the ORM on
    every flush that changes the row; crud functions also set it explicitly when
    only a child collection (transaction files) changed.
    """
    # DateTime(timezone=True) keeps the zone on backends that support it.
    created_at = Column(DateTime(timezone=True), default=local_now)
    updated_at = Column(DateTime(timezone=True), default=local_now, onupdate=local_now)
