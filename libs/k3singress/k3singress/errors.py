"""
Exception hierarchy for k3singress.

Every error derives from ManifestError, which is a ValueError so callers
that already treat bad input as ValueError keep working.
"""


class ManifestError(ValueError):
    """Base error for manifest generation."""


class InvalidResource(ManifestError):
    """Raised when a ClusterIngress is missing or has malformed required fields."""


class UnsupportedSelector(InvalidResource):
    """Raised when a label selector uses set-based match expressions."""


class InvalidInstallConfig(ManifestError):
    """Raised when an install config lacks a cluster name or base domain."""


class TemplateError(ManifestError):
    """Raised when a built-in manifest template cannot be rendered."""
