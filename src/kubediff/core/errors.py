"""KubeDiff exceptions."""


class KubeDiffError(Exception):
    """Base class for KubeDiff errors."""


class ManifestNotFoundError(KubeDiffError):
    """Manifest path does not exist or is not a regular file."""


class ManifestParseError(KubeDiffError):
    """Manifest text is not valid YAML."""


class ManifestValidationError(KubeDiffError):
    """A decoded document is not a usable Kubernetes object."""
