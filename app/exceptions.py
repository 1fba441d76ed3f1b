"""Domain exception classes for the platform service.

These are raised by service-layer code and caught by controllers
to map to appropriate HTTP responses.
"""


class CertificateNotFoundError(Exception):
    """Raised when a certificate cannot be found by ID."""

    def __init__(self, identifier: str = ""):
        self.identifier = identifier
        super().__init__(f"Certificate not found: {identifier}")


class CertificateAlreadyRevokedError(Exception):
    """Raised when revoking a certificate that is already revoked."""

    def __init__(self, identifier: str = ""):
        self.identifier = identifier
        super().__init__(f"Certificate has already been revoked: {identifier}")


class CertificateIssueError(Exception):
    """Raised when the store rejects a certificate insert (single or batch)."""


class CertificateUpdateError(Exception):
    """Raised when the store rejects a certificate update (e.g. unknown event)."""


class EmptyBatchError(Exception):
    """Raised when batch issuance is requested with no holder names."""


class CodeGenerationError(Exception):
    """Raised when no unique certificate code could be produced for a batch."""


class EventNotFoundError(Exception):
    def __init__(self, identifier: str = ""):
        self.identifier = identifier
        super().__init__(f"Event not found: {identifier}")


class CourseNotFoundError(Exception):
    """Raised when a course cannot be found by ID or slug."""

    def __init__(self, identifier: str = ""):
        self.identifier = identifier
        super().__init__(f"Course not found: {identifier}")


class NotResourceOwnerError(Exception):
    """Raised when a non-owner, non-admin tries to modify a resource."""


class SlugTakenError(Exception):
    """Raised by a slug claim when the candidate slug is already in use."""

    def __init__(self, slug: str = ""):
        self.slug = slug
        super().__init__(f"Slug already taken: {slug}")


class SlugExhaustedError(Exception):
    """Raised when no free slug was found within the attempt limit."""

    def __init__(self, base_slug: str = ""):
        self.base_slug = base_slug
        super().__init__(f"No free slug for: {base_slug}")
