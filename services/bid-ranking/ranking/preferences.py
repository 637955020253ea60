"""
Resolve the preference vector stored with a tender.

Tenders keep their preferences as a JSON string (or nothing, for tenders
created before preferences existed). Anything unusable falls back to the
default vector {price: 4, delivery: 3, warranty: 3, quality: 3}.
"""

import json
import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from .models import PreferenceVector, DEFAULT_PREFERENCES

logger = logging.getLogger(__name__)


def load_preferences(
    raw: Optional[Union[str, Mapping[str, Any], PreferenceVector]],
) -> PreferenceVector:
    """Parse stored preferences; missing keys take their default value"""
    if raw is None:
        return DEFAULT_PREFERENCES
    if isinstance(raw, PreferenceVector):
        return raw

    data: Any = raw
    if isinstance(raw, str):
        if not raw.strip():
            return DEFAULT_PREFERENCES
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse tender preferences, using defaults: {e}")
            return DEFAULT_PREFERENCES

    if not isinstance(data, Mapping):
        logger.warning(
            f"Tender preferences must be an object, got {type(data).__name__} - using defaults"
        )
        return DEFAULT_PREFERENCES

    try:
        return PreferenceVector.model_validate(dict(data))
    except ValidationError as e:
        logger.warning(f"Invalid tender preferences, using defaults: {e.error_count()} error(s)")
        return DEFAULT_PREFERENCES
