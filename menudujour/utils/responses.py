# menudujour/utils/responses.py
from fastapi import HTTPException
from fastapi.responses import JSONResponse

from menudujour.core.results import ErrorKind, Result

STATUS_BY_KIND = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.UNAUTHORIZED: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.STORE: 500,
    ErrorKind.RENDER: 500,
}


def status_for(result: Result) -> int:
    return STATUS_BY_KIND.get(result.kind, 500)


def raise_for_result(result: Result):
    """Return ``result.data`` or raise the HTTPException matching its error kind."""
    if not result.ok:
        raise HTTPException(status_code=status_for(result), detail=result.error)
    return result.data


def error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})
