"""Application exceptions."""


class PoliglotError(Exception):
    """Base class for application errors."""


class CatalogError(PoliglotError):
    """A catalog file could not be read or parsed."""


class TestLockedError(PoliglotError):
    """The test activity was requested before enough words were learned."""

    __test__ = False  # not a pytest test class

    def __init__(self, learned: int, required: int):
        super().__init__(f"Test is locked: {learned} of {required} words learned")
        self.learned = learned
        self.required = required


class NoActiveUserError(PoliglotError):
    """An activity was requested with nobody logged in."""


class NoBackendError(PoliglotError):
    """An account operation was requested without a user backend."""
