import re
import logging
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)

TAG_RE = re.compile(r"<[^>]*>")


def strip_tags(value: Any) -> str:
    return TAG_RE.sub("", str(value)).strip()


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def collect(target: Dict[str, Any], key: str, getter: Callable[[], Any]):
    """
    Stores getter() under key. A getter that fails or yields None leaves the
    key out; one missing value never aborts the snapshot.
    """
    try:
        value = getter()
    except Exception as e:
        logger.debug(f"Skipping '{key}': {e}")
        return
    if value is not None:
        target[key] = value
