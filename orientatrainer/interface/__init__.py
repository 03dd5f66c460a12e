"""Mini README: Interactive interfaces for OrientaTrainer.

Exports the FastAPI application factory backing the browser client. The
command line entry point lives in ``main_training_centre.py`` at the
repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
