class StringAnalyzerError(ValueError):
    """Base class for all input/data failures raised by the analyzer core."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateContentError(StringAnalyzerError):
    status_code = 409


class NotFoundError(StringAnalyzerError):
    status_code = 404


class InvalidFilterValueError(StringAnalyzerError):
    status_code = 400


class UnparseableQueryError(StringAnalyzerError):
    status_code = 400


class UnsupportedWordCountError(StringAnalyzerError):
    status_code = 400


class ConflictingFiltersError(StringAnalyzerError):
    status_code = 422
