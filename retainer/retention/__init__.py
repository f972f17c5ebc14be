"""Release retention.

- model: entities, retention events and results
- options: validated input bundle
- engine: per project/environment selection
- loader: JSON data files
"""

from .engine import retain_for_pair, retain_releases
from .model import (
    Deployment,
    Environment,
    Project,
    Release,
    RetentionEvent,
    RetentionResult,
)
from .options import (
    InvalidRetentionCountError,
    MissingCollectionError,
    RetentionOptions,
    RetentionOptionsError,
)

__all__ = [
    # model
    "Deployment",
    "Environment",
    "Project",
    "Release",
    "RetentionEvent",
    "RetentionResult",
    # options
    "InvalidRetentionCountError",
    "MissingCollectionError",
    "RetentionOptions",
    "RetentionOptionsError",
    # engine
    "retain_for_pair",
    "retain_releases",
]
