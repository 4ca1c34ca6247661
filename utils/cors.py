import json
from typing import Any, Union
import azure.functions as func

def cors_response(
    body: Union[str, bytes] = b"",
    status: int = 200,
    mime: str = "text/plain"
) -> func.HttpResponse:
    return func.HttpResponse(
        body=body,
        status_code=status,
        mimetype=mime,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type, Authorization",
        },
    )

def json_response(payload: Any, status: int = 200) -> func.HttpResponse:
    return cors_response(json.dumps(payload), status, "application/json")

def error_response(message: str, status: int) -> func.HttpResponse:
    return json_response({"message": message}, status)
