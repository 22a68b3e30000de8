"""
Device info attached to a session.

Stored as JSON text in ``sessions.device_info``. The encode/decode pair below is
the only code that touches that column's serialized form. Decoding is lenient:
corrupt data yields ``None`` so one bad row never fails an authenticated request.
"""

import json
import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)


class DeviceInfo(BaseModel):
    """Recognized device fields plus a free-form fallback"""

    model_config = ConfigDict(frozen=True)

    platform: Optional[str] = None
    browser: Optional[str] = None
    raw: Optional[str] = None


def encode_device_info(info: Optional[DeviceInfo]) -> Optional[str]:
    if info is None:
        return None
    payload = info.model_dump(exclude_none=True)
    if not payload:
        return None
    return json.dumps(payload)


def decode_device_info(text: Optional[str]) -> Optional[DeviceInfo]:
    if not text:
        return None

    try:
        data = json.loads(text)
    except ValueError:
        logger.warning("Ignoring unparseable device_info (%d chars)", len(text))
        return None

    # Older rows may hold a bare JSON string
    if isinstance(data, str):
        return DeviceInfo(raw=data)

    if not isinstance(data, dict):
        logger.warning("Ignoring device_info of type %s", type(data).__name__)
        return None

    try:
        return DeviceInfo.model_validate(data)
    except ValidationError as exc:
        logger.warning("Ignoring invalid device_info: %s", exc.error_count())
        return None
