"""Domain exceptions raised by the service layer."""


class NosugarError(Exception):
    """Base class for nosugar errors."""


class InvalidEntryError(NosugarError):
    """Raised when a consumption entry cannot be added to the ledger."""


class UnknownPresetError(InvalidEntryError):
    """Raised when a preset label is not in the preset table."""


class InvalidCoefficientsError(NosugarError):
    """Raised when a coefficient update would break table integrity."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems
