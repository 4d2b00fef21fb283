"""Domain-specific exceptions with log-ready messages."""


class ConfigurationError(Exception):
    """Raised when application configuration is invalid."""

    pass


class VersionCheckException(Exception):
    """Base exception class for failures during a version check."""

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class InventoryException(VersionCheckException):
    """Exception raised when the cluster inventory cannot be queried."""

    def __init__(self, operation: str, cause: str) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Cannot {operation} because {cause}"
        super().__init__(message, error_code="INVENTORY_UNAVAILABLE")


class ReleaseFeedException(VersionCheckException):
    """Exception raised when the latest platform release cannot be read."""

    def __init__(self, url: str, cause: str) -> None:
        self.url = url
        message = f"Cannot read latest release from {url}: {cause}"
        super().__init__(message, error_code="RELEASE_FEED_UNAVAILABLE")


class RegistryException(VersionCheckException):
    """Exception raised when the tags of a repository cannot be listed."""

    def __init__(self, repository: str, endpoint: str, cause: str) -> None:
        self.repository = repository
        self.endpoint = endpoint
        message = f"Cannot list tags of {repository} on {endpoint}: {cause}"
        super().__init__(message, error_code="REGISTRY_UNAVAILABLE")


class UnresolvableImageException(VersionCheckException):
    """Exception raised when an image name maps to no registry coordinate."""

    def __init__(self, image_name: str) -> None:
        self.image_name = image_name
        message = f"Could not get registry and repository for the image {image_name}"
        super().__init__(message, error_code="UNRESOLVABLE_IMAGE")


class MalformedImageReferenceException(VersionCheckException):
    """Exception raised when an image reference has no usable name:tag split."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        message = f"Could not get parts of the image {reference}"
        super().__init__(message, error_code="MALFORMED_IMAGE_REFERENCE")
