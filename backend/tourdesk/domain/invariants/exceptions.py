class InvariantViolation(Exception):
    """A domain rule was broken by the requested change."""


class SlugConflict(InvariantViolation):
    """The slug is already used by another record."""


class EntityNotFound(LookupError):
    pass
