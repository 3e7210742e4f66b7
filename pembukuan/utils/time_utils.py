from datetime import datetime
import pytz

from pembukuan import config


def local_now() -> datetime:
    """Current instant in the configured application timezone."""
    return datetime.now(pytz.timezone(config.APP_TIMEZONE))
