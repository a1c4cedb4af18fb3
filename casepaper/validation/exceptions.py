class ValidationStageError(Exception):
    """Raised when the validation/refinement stage cannot produce a result."""
