"""Mini README: Core package initializer for OrientaTrainer.

OrientaTrainer records orienteering control points ("beacons") and chains
them into practice routes constrained by the distance between consecutive
controls. This module exposes the logger factory so scripts can share the
package's logging configuration without importing the web stack.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
