from typing import Optional


class QueryError(Exception):
    """
    Failure of a structured query.
    `message` is already translated for the locale of the request.
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ConfigError(QueryError):
    pass


class ValidationError(QueryError):
    pass


class RateLimited(QueryError):
    def __init__(self, message: str, attempts: int, detail: Optional[str] = None):
        super().__init__(message, detail)
        self.attempts = attempts


class UpstreamError(QueryError):
    def __init__(self, message: str, code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message, detail)
        self.code = code


class VoiceError(Exception):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class InvalidSessionState(RuntimeError):
    pass
