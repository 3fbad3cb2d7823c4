class StringAlreadyExistsError(ValueError):
    """Raised when a value that is already stored is submitted again."""


class StringNotFoundError(ValueError):
    def __init__(self, value: str):
        super().__init__(f"String '{value}' does not exist in the system")
        self.value = value


class InvalidFilterError(ValueError):
    """A structured filter parameter is out of range or malformed."""


class ConflictingFiltersError(ValueError):
    """Filters were understood but can never be satisfied together."""


class UnparseableQueryError(ValueError):
    pass
