class GradingError(Exception):
    pass


class ValidationError(GradingError, ValueError):
    """Raised for inputs or configurations the engine refuses to correct silently."""
