"""URL boundary checks."""

from .domain_boundary import DomainBoundaryChecker

__all__ = ["DomainBoundaryChecker"]
