"""Source trust and coverage services."""

from credcheck.services.sources.coverage import (
    CoverageReport,
    assess_coverage,
    domain_of,
    infer_trust_tier,
)

__all__ = ["CoverageReport", "assess_coverage", "domain_of", "infer_trust_tier"]
