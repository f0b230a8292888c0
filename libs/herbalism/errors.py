"""Exception taxonomy for the herbalism engine.

Validation failures are not exceptions: guards return a list of error
strings and workflow actions return False. Only corrupt reference data and
failing collaborators surface as raised errors.
"""


class HerbalismError(Exception):
    """Base class for all herbalism engine errors."""


class InvalidArgument(HerbalismError, ValueError):
    """A pure function was called with arguments it cannot work with."""


class DataIntegrityError(HerbalismError):
    """Reference data (recipes, templates, biomes) is malformed."""


class ExternalFailure(HerbalismError):
    """A collaborator failed to deliver data mid-resolution."""
