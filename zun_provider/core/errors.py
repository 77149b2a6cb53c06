"""Errors raised while translating between pods and capsules."""


class TranslationError(Exception):
    """Base exception for pod/capsule translation failures."""
    pass


class PodTranslationError(TranslationError):
    """Raised when a pod cannot be turned into a capsule request."""
    pass


class ResourceConversionError(TranslationError):
    """Raised when a resource quantity cannot be parsed."""
    pass


class CapsuleIntegrityError(TranslationError):
    """Raised when a capsule lacks the labels that identify its pod."""

    def __init__(self, capsule_name: str, missing: list[str]):
        self.capsule_name = capsule_name
        self.missing = missing
        super().__init__(
            f"Capsule {capsule_name!r} is missing correlation labels: {', '.join(missing)}"
        )


class MalformedCapsuleError(TranslationError):
    """Raised when a Zun capsule record does not match the capsule schema."""
    pass
