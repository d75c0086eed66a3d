# canvas_api/services/image_map.py
from typing import Any, Dict


def image_map(params: Dict[str, Any]) -> Dict[str, str]:
    """
    Build an images map from Slack-style params.

    Slack returns team and user icons as flat ``image_34``, ``image_68``...
    keys next to flags like ``image_default``. Only the string URLs are kept.
    """
    return {
        key: value
        for key, value in params.items()
        if isinstance(key, str) and key.startswith("image_") and isinstance(value, str)
    }
