# ABOUTME: Services module initialization.
# ABOUTME: Exports the import service wiring the pipeline to the database adapters.

from smart_blogger.services.import_service import install, job_registry, run_import, uninstall

__all__ = [
    "install",
    "job_registry",
    "run_import",
    "uninstall",
]
