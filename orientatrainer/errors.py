"""Mini README: Error taxonomy shared by the route generation engine.

Structure:
    * OrientaTrainerError - base class for recoverable domain failures.
    * ValidationError - invalid request parameters, raised before any work.
    * NoCandidatesError - no beacons stored or none inside the catchment.
    * NetworkError - geocoder lookups that failed or timed out.
    * StorageError - persisted beacon payloads that cannot be decoded.
    * PartialRouteWarning - warning category for routes shorter than asked.

None of these are fatal. Callers catch them at the interface boundary and
translate them into HTTP responses, CLI exit codes or plan notices.
"""

from __future__ import annotations


class OrientaTrainerError(Exception):
    """Base class for every classified OrientaTrainer failure."""


class ValidationError(OrientaTrainerError, ValueError):
    """Raised when a request carries a missing or out of range parameter."""


class NoCandidatesError(OrientaTrainerError):
    """Raised when there are no beacons available to build a route from."""


class NetworkError(OrientaTrainerError):
    """Raised by geocoder clients when the remote lookup cannot complete."""


class StorageError(OrientaTrainerError):
    """Raised when the persisted beacon collection is malformed."""


class PartialRouteWarning(UserWarning):
    """Route finished with fewer beacons than requested.

    The route is still usable, so this is recorded as a notice on the plan
    rather than raised.
    """
