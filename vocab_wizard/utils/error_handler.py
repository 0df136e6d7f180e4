"""Error collection for batch operations"""

import logging

from ..exceptions import VocabWizardError


class ErrorCollector:
    """Collects errors of a batch run so it can continue past failures"""

    def __init__(self) -> None:
        self.errors: list[Exception] = []

    def add_error(self, error: Exception) -> None:
        self.errors.append(error)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def log_all(self, logger: logging.Logger) -> None:
        """Log every collected error once the batch is done"""
        for error in self.errors:
            if isinstance(error, VocabWizardError):
                logger.error(f"Application error: {error}")
            else:
                logger.error(f"Unexpected error: {error}")
