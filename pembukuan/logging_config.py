import logging
import os
from datetime import datetime

from pembukuan import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging():
    """
    Configure the root logger: console output always, plus a per-run file under
    ``LOG_DIR`` when that setting is present.
    """
    root = logging.getLogger()
    if getattr(root, "_pembukuan_configured", False):
        return
    root.setLevel(config.LOG_LEVEL)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console_handler)

    if config.LOG_DIR:
        os.makedirs(config.LOG_DIR, exist_ok=True)
        # Create a unique log file name based on current date/time
        current_time_str = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        file_handler = logging.FileHandler(os.path.join(config.LOG_DIR, f"app_{current_time_str}.log"), mode='a')
        file_handler.setLevel(config.LOG_LEVEL)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    root._pembukuan_configured = True
