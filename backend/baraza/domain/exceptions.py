"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ValidationError(Exception):
    """Raised when submitted data breaks a domain rule.

    Carries every message so the caller can report them together.
    """

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class InvalidReferenceError(Exception):
    """Raised when a referenced record is missing or not eligible."""

    def __init__(self, entity_type: str, entity_ids: list[int | str], reason: str = "not found"):
        self.entity_type = entity_type
        self.entity_ids = list(entity_ids)
        self.reason = reason
        ids = ", ".join(str(i) for i in self.entity_ids)
        super().__init__(f"{entity_type} reference(s) {ids}: {reason}")


class InvalidTransitionError(Exception):
    """Raised when a state transition is not allowed from the current state."""

    def __init__(self, entity_type: str, current: str, target: str):
        self.entity_type = entity_type
        self.current = current
        self.target = target
        super().__init__(f"{entity_type} cannot move from '{current}' to '{target}'")


class PermissionDeniedError(Exception):
    """Raised when the acting user may not perform an action."""

    def __init__(self, resource: str, action: str):
        self.resource = resource
        self.action = action
        super().__init__(f"Not authorized to {action} {resource}")


class IndexWriteError(Exception):
    """Raised by the search index adapter when a document write fails.

    Never aborts the data mutation that triggered the write.
    """

    def __init__(self, document_id: int | str, message: str):
        self.document_id = document_id
        self.message = message
        super().__init__(f"Index write for document '{document_id}' failed: {message}")


class SearchUnavailableError(Exception):
    """Raised when the search index cannot answer a query."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Search index unavailable: {message}")
