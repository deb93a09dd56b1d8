"""Matching strategies and the cascade that orders them."""
from company_match.matchers.matching_orchestrator import CASCADE, matching_orchestrator

__all__ = ["CASCADE", "matching_orchestrator"]
