"""Error types raised by the portal service layer."""


class PortalError(Exception):
    """Base class for portal errors that reach the app error handlers."""

    status_code = 500


class ResolutionError(PortalError):
    """Raised when the service container cannot produce a capability."""

    def __init__(self, capability, reason: str = "no registration"):
        self.capability = capability
        self.reason = reason
        super().__init__(f"Cannot resolve {describe_capability(capability)}: {reason}")


class ViewNotFoundError(PortalError):
    """Raised when no template matches a view name."""

    def __init__(self, view_name: str, searched=()):
        self.view_name = view_name
        self.searched = list(searched)
        locations = ', '.join(self.searched) or 'no locations'
        super().__init__(f"View '{view_name}' not found (searched: {locations})")


class RepositoryError(PortalError):
    """Raised when a repository cannot complete a write."""


def describe_capability(capability) -> str:
    """Readable name for a capability key (class or parameterized generic)."""
    if isinstance(capability, type):
        return capability.__qualname__
    return repr(capability)
