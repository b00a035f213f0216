class AHPError(ValueError):
    """Base class for recoverable AHP input errors."""


class InvalidComparisonError(AHPError):
    pass


class UnsupportedCriteriaCountError(AHPError):
    def __init__(self, n: int, message: str = ""):
        super().__init__(message or f"No random index for {n} criteria; supply random_index explicitly")
        self.n = n


class MissingAttributeError(AHPError):
    def __init__(self, alternative: str, criterion: str):
        super().__init__(f"Alternative '{alternative}' has no value for criterion '{criterion}'")
        self.alternative = alternative
        self.criterion = criterion
