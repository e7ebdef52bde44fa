"""Error taxonomy shared by the generation pipeline and progress tracking."""


class LearnPathError(Exception):
    """Base class for all domain errors."""


class GenerationUnavailableError(LearnPathError):
    """The generative backend is unreachable or returned nothing usable.

    Callers should surface this as a "try again later" condition. Nothing in
    the core retries it.
    """


class MalformedGenerationError(LearnPathError):
    """Generated output could not be coerced into any recoverable shape."""


class NotFoundError(LearnPathError):
    """A referenced record does not exist or is not owned by the caller."""


class ValidationError(LearnPathError):
    """A caller-supplied value is outside its declared range."""


class AuthenticationError(LearnPathError):
    """A bearer token could not be resolved to a user."""
