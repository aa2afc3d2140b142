
class ApplicationError(Exception):
    """Base class for application-specific errors."""
    pass

class ConfigurationError(ApplicationError):
    """Raised when required configuration is missing or invalid."""
    pass

class ValidationError(ApplicationError):
    """Raised when a create/update request is missing required product fields."""
    def __init__(self, message="All fields are required!", missing_fields=None):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])

class NotFoundError(ApplicationError):
    """Raised when no product is stored under the requested identifier."""
    def __init__(self, message="Product not found!"):
        super().__init__(message)

class PersistenceError(ApplicationError):
    """Raised for any failure reported by the document store."""
    def __init__(self, message="A database error occurred.", original_exception=None):
        super().__init__(message)
        self.original_exception = original_exception
