from fastapi import Request

from src.domain.device_info import DeviceInfo
from src.domain.records import ClientMetadata


def extract_client_metadata(request: Request) -> ClientMetadata:
    """
    Capture the device, address and user agent of the client logging in.

    Platform and browser come from the Client Hints headers sent by Chromium
    based browsers; other clients are recorded as "unknown".
    """
    headers = request.headers
    return ClientMetadata(
        device_info=DeviceInfo(
            platform=headers.get("sec-ch-ua-platform", "unknown"),
            browser=headers.get("sec-ch-ua", "unknown"),
        ),
        ip_address=request.client.host if request.client else None,
        user_agent=headers.get("user-agent"),
    )
