# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""API v1 router aggregation."""

from fastapi import APIRouter

from .health import router as health_router
from .readiness import router as readiness_router

router = APIRouter(prefix="/api/v1")

router.include_router(health_router, tags=["health"])
router.include_router(readiness_router, prefix="/readiness", tags=["readiness"])


__all__ = ["router"]
