class MealRemixError(Exception):
    """Base for every failure the viewer knows how to report."""


class NetworkError(MealRemixError):
    """Transport failure or non-success response from the recipe catalog."""


class NotFoundError(MealRemixError):
    """Well-formed catalog response with no matching recipe."""


class RemixError(MealRemixError):
    """The remix service failed or returned no usable text."""


class PersistenceError(MealRemixError):
    """The durable store could not be read or written."""
