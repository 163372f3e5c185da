import os
from typing import Optional
# initially all flags are set to None, the on-load call of reset() will set
# them for their first time.
DEBUG = None
LOG_FORMAT = None

LOG_FORMATS = ('text', 'json')


def env_set_truthy(key: str) -> Optional[str]:
    """Return the value if it was set to a "truthy" string value, or None
    otherwise.
    """
    value = os.getenv(key)
    if not value or value.lower() in ('0', 'false', 'f'):
        return None
    return value


def env_log_format(key: str) -> str:
    value = (os.getenv(key) or 'text').lower()
    if value not in LOG_FORMATS:
        return 'text'
    return value


def reset():
    global DEBUG, LOG_FORMAT

    DEBUG = env_set_truthy('DATASTORE_DEBUG') is not None
    LOG_FORMAT = env_log_format('DATASTORE_LOG_FORMAT')


def set_from_args(args):
    """Apply flags from an argparse-style namespace. Attributes missing from
    `args` keep their current value.
    """
    global DEBUG, LOG_FORMAT

    DEBUG = bool(getattr(args, 'debug', DEBUG))
    log_format = getattr(args, 'log_format', LOG_FORMAT)
    if log_format in LOG_FORMATS:
        LOG_FORMAT = log_format


# initialize everything to the defaults on module load
reset()
