"""rise-cli error types."""

from __future__ import annotations

ERR_CODE_REQUEST_FAILED = "request_failed"
ERR_CODE_UNEXPECTED_ERROR = "unexpected_error"
ERR_CODE_VALIDATION_FAILED = "validation_failed"

ERROR_CODES = (
    ERR_CODE_REQUEST_FAILED,
    ERR_CODE_UNEXPECTED_ERROR,
    ERR_CODE_VALIDATION_FAILED,
)


class RiseError(RuntimeError):
    """Base rise-cli error."""


class AppError(RiseError):
    """A remote account operation did not reach its postcondition.

    ``code`` is one of ``ERROR_CODES``. ``message`` is only meant for display
    when the server rejected the input (``validation_failed``). ``retryable``
    tells the caller whether to offer the user another attempt.
    ``status_code`` and ``body`` are kept for diagnostics only.
    """

    def __init__(
        self,
        code: str,
        *,
        retryable: bool,
        message: str = "",
        cause: BaseException | None = None,
        status_code: int | None = None,
        body: object | None = None,
    ) -> None:
        if code not in ERROR_CODES:
            raise ValueError(f"unknown error code: {code}")
        super().__init__(message or code)
        self.code = code
        self.retryable = retryable
        self.message = message
        self.cause = cause
        self.status_code = status_code
        self.body = body

    @property
    def is_validation_failed(self) -> bool:
        return self.code == ERR_CODE_VALIDATION_FAILED

    def __repr__(self) -> str:
        return (
            f"AppError(code={self.code!r}, retryable={self.retryable!r}, "
            f"message={self.message!r}, status_code={self.status_code!r})"
        )
