# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""EHO readiness scoring engine.

Audits a site's evidence against the fixed UK EHO requirement catalog and
produces a readiness report with a penalty-adjusted star rating.
"""

__version__ = "1.0.0"
