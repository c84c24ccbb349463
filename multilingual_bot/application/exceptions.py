class DialogError(RuntimeError):
    """Base class for dialog engine failures."""
    pass


class UnknownDialogIdError(DialogError):
    """Raised when a dialog id is not registered in the dialog set."""
    pass


class DuplicateDialogIdError(DialogError):
    """Raised when a dialog id is registered twice."""
    pass


class LostDialogStateError(DialogError):
    """Raised when persisted dialog state no longer matches the registered dialogs."""
    pass


class PersistenceFailureError(RuntimeError):
    """Raised when bot state cannot be loaded from or flushed to the state store."""
    pass
