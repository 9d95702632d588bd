# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""FastAPI dependencies wiring the readiness engine to the evidence store."""

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, status

from ..core.config import Settings, get_settings
from ..core.logging_utils import get_logger
from ..readiness.engine import ReadinessEngine
from ..readiness.snapshot import EvidenceSnapshotLoader
from ..stores.postgrest import PostgrestEvidenceStore
from ..stores.protocols import EvidenceStores

logger = get_logger(__name__)


async def get_readiness_engine(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[ReadinessEngine, None]:
    """Provide a readiness engine backed by the PostgREST evidence store.

    Yields:
        ReadinessEngine: Engine for the current request

    Note:
        The store's HTTP client is closed after the request completes.
    """
    try:
        store = PostgrestEvidenceStore.from_settings(settings)
    except ValueError as e:
        logger.error(str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Evidence store is not configured",
        ) from e

    async with store:
        loader = EvidenceSnapshotLoader(EvidenceStores.from_store(store), settings)
        yield ReadinessEngine(loader, store, settings=settings)
