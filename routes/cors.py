"""Shared response helpers for the browser-facing POST endpoints."""

from fastapi import Response
from fastapi.responses import JSONResponse

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# Verbs answered with 405 on POST-only endpoints
OTHER_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE"]


def json_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


def error_response(status_code: int, error: str) -> JSONResponse:
    return json_response(status_code, {"error": error})


def preflight_response() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


def method_not_allowed() -> JSONResponse:
    response = error_response(405, "Method not allowed")
    response.headers["Allow"] = "POST, OPTIONS"
    return response
