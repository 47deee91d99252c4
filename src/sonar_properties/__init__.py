"""sonar-properties core package.

Aggregates per-project build analysis records into a single
sonar-project.properties file. The generation logic lives in ``core`` and is
callable from the CLI or any other front end.
"""

__all__ = [
    "core",
]
