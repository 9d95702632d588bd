# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Readiness report endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response

from ...core.logging_utils import get_logger
from ...models.report import ReadinessReport
from ...readiness.engine import ReadinessEngine
from ..dependencies import get_readiness_engine
from ..response_patterns import ErrorResponse, handle_result

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/sites/{site_id}",
    response_model=None,
    responses={
        200: {"model": ReadinessReport},
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def get_site_readiness(
    site_id: str,
    response: Response,
    company_id: str | None = Query(
        default=None, description="Owning company; looked up from the site if omitted"
    ),
    as_of: datetime | None = Query(
        default=None, description="Evaluate as of this instant (defaults to now)"
    ),
    engine: ReadinessEngine = Depends(get_readiness_engine),
) -> ReadinessReport | ErrorResponse:
    """Score a site's inspection readiness against the requirement catalog.

    Args:
        site_id: Site to evaluate
        response: FastAPI response object for status code
        company_id: Optional owning company id
        as_of: Optional reference time
        engine: Injected readiness engine

    Returns:
        The readiness report, or an error when the site cannot be evaluated
    """
    logger.info(f"Readiness requested for site {site_id}")
    result = await engine.generate_readiness_report(site_id, company_id, as_of)
    return handle_result(result, response)
