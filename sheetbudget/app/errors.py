class SheetBudgetError(RuntimeError):
    """Base class for errors raised by the budget store and its services."""


class StoreUnavailable(SheetBudgetError):
    """Raised when the backing store cannot be reached or a remote call fails."""


class ArchivalFailure(SheetBudgetError):
    """Raised inside an archival run; always caught and logged by the archival process."""
