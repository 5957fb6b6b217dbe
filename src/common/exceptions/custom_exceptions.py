"""Custom application-wide exceptions."""


class ApplicationError(Exception):
    """Base class for application-specific errors."""

    def __init__(
        self, message: str = "An application error occurred", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original error: {self.original_exception})"
        return self.message


class EntityNotFoundError(ApplicationError):
    """Raised when an identifier does not resolve to a stored entity."""

    def __init__(self, entity_kind: str, entity_id: int) -> None:
        super().__init__(f"{entity_kind} ID {entity_id} not found")
        self.entity_kind = entity_kind
        self.entity_id = entity_id


class PreconditionError(ApplicationError):
    """Raised when an operation is called in a state that does not allow it."""


class ProductNotSuppliedError(PreconditionError):
    """Raised when a supplier is asked for a product it does not carry."""

    def __init__(self, supplier_id: int, product_id: int) -> None:
        super().__init__(f"Supplier {supplier_id} does not supply product {product_id}")
        self.supplier_id = supplier_id
        self.product_id = product_id


class InsufficientStockError(PreconditionError):
    """Raised when a product cannot cover the requested quantity."""

    def __init__(self, product_id: int, requested: int, available: int) -> None:
        super().__init__(f"Insufficient stock for product {product_id}: requested {requested}, available {available}")
        self.product_id = product_id
        self.requested = requested
        self.available = available


class InvalidQuantityError(PreconditionError):
    """Raised when a transaction quantity is zero or negative."""

    def __init__(self, quantity: int) -> None:
        super().__init__(f"Quantity must be positive, got {quantity}")
        self.quantity = quantity


class RouteOptimizationError(PreconditionError):
    """Raised when a distribution route cannot be planned."""


class InventoryOptimizationError(PreconditionError):
    """Raised when an inventory allocation cannot be computed."""


class ValidationError(ApplicationError):
    """Exception raised for invalid catalog input."""

    def __init__(self, message: str = "Invalid input", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Validation Error: {message}"


class LedgerIntegrityError(ApplicationError):
    """Exception raised when the ledger invariants do not hold."""

    def __init__(self, message: str = "Ledger integrity violated", broken_index: int | None = None) -> None:
        super().__init__(message)
        self.broken_index = broken_index
        self.message = f"Ledger Integrity Error: {message}"
        if broken_index is not None:
            self.message += f" (First broken link at block {broken_index})"


class PersistenceError(ApplicationError):
    """Exception raised for errors while reading or writing data files."""

    def __init__(self, message: str = "Persistence operation failed", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Persistence Error: {message}"


class RecordFormatError(ApplicationError):
    """Exception raised when a persisted record line cannot be parsed."""

    def __init__(
        self, record_kind: str, line: str, reason: str = "", original_exception: Exception | None = None
    ) -> None:
        message = f"Invalid {record_kind} data format: {line!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, original_exception)
        self.record_kind = record_kind
        self.line = line
