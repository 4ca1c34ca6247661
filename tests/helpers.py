"""Shared constants and HTTP helpers for the test modules."""

import json
from datetime import datetime
from typing import Optional

import azure.functions as func

TENANT_ID = 1
OWNER_ID = 2
BROKER_ID = 3
ADMIN_ID = 4
STRANGER_ID = 5
LISTING_ID = 10

BASE_TIME = datetime(2024, 3, 18, 12, 0, 0)


def make_request(method: str, url: str, token: Optional[str] = None, body=None,
                 route_params: Optional[dict] = None, headers: Optional[dict] = None) -> func.HttpRequest:
    all_headers = dict(headers or {})
    if token:
        all_headers["Authorization"] = f"Bearer {token}"
    if body is None:
        data = b""
    elif isinstance(body, (bytes, str)):
        data = body.encode() if isinstance(body, str) else body
    else:
        data = json.dumps(body).encode()
    return func.HttpRequest(
        method=method,
        url=url,
        headers=all_headers,
        route_params=route_params or {},
        body=data,
    )


def invoke(handler, req: func.HttpRequest) -> func.HttpResponse:
    """Run a blueprint-registered function the way the Functions host would."""
    return handler.build().get_user_function()(req)


def body_of(resp: func.HttpResponse):
    return json.loads(resp.get_body())
