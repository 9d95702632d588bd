# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""API response patterns: Result[T, E] mapped onto HTTP semantics."""

from typing import Any, TypeVar, Union

from beartype import beartype
from fastapi import Response
from pydantic import BaseModel, ConfigDict, Field

from ..core.result_types import Result

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Standardized error response for failures the caller can act on."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    success: bool = Field(default=False, description="Always false for error responses")
    error: str = Field(..., description="Human-readable error message")
    error_code: str | None = Field(default=None, description="Machine-readable error code")
    details: dict[str, Any] | None = Field(default=None, description="Additional error context")


# (phrases, status) checked in order; the first hit wins
_ERROR_STATUS_RULES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("not found", "does not exist", "missing"), 404),
    (("validation", "invalid", "malformed", "bad request", "required field"), 400),
    (("unavailable", "lookup failed", "timed out"), 503),
)


@beartype
def map_error_to_status(error: str) -> int:
    """Map an engine error message to an HTTP status code.

    Only the leading clause, up to the first colon, is classified. Text after
    it may echo caller input such as a site id and never changes the status.

    Args:
        error: Error message carried by an ``Err``

    Returns:
        HTTP status code, 422 when no rule applies
    """
    error_lower = error.split(":", 1)[0].lower()
    for phrases, status_code in _ERROR_STATUS_RULES:
        if any(phrase in error_lower for phrase in phrases):
            return status_code
    return 422


@beartype
def handle_result(
    result: Result[T, str],
    response: Response,
    success_status: int = 200,
) -> Union[T, ErrorResponse]:
    """Unwrap an ``Ok`` or turn an ``Err`` into an ``ErrorResponse``.

    The response status code is set on ``response`` either way.
    """
    if result.is_err():
        error_msg = result.unwrap_err()
        response.status_code = map_error_to_status(error_msg)
        return ErrorResponse(error=error_msg)

    response.status_code = success_status
    return result.unwrap()
