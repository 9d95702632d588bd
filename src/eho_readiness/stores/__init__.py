# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Evidence store contracts and adapters."""

from .memory import InMemoryEvidenceStore
from .postgrest import PostgrestEvidenceStore
from .protocols import EvidenceSourceError, EvidenceStores, SiteDirectory

__all__ = [
    "EvidenceSourceError",
    "EvidenceStores",
    "SiteDirectory",
    "InMemoryEvidenceStore",
    "PostgrestEvidenceStore",
]
