"""Client for the Rise account endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import requests

from rise_cli.config import CLIConfig
from rise_cli.errors import (
    ERR_CODE_REQUEST_FAILED,
    ERR_CODE_UNEXPECTED_ERROR,
    ERR_CODE_VALIDATION_FAILED,
    AppError,
)
from rise_cli.tr import T

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

STATUS_OK = 200
STATUS_CREATED = 201
STATUS_UNPROCESSABLE = 422

ERROR_INVALID_PARAMS = "invalid_params"
CONFIRM_INVALID_DESCRIPTION = "invalid email or confirmation_code"
RESEND_INVALID_DESCRIPTION = "email is not found or already confirmed"

UnprocessableHandler = Callable[[dict], Optional[AppError]]
SuccessCheck = Callable[[dict], bool]


def validation_errors_to_string(body: dict) -> str:
    """Flatten an ``invalid_params`` body into one display line.

    ``errors`` maps a field name to a message or a list of messages, e.g.
    ``{"email": ["is taken"], "password": "is too short"}`` becomes
    ``"Email is taken, Password is too short"``.
    """
    messages: list[str] = []
    errors = body.get("errors")
    if isinstance(errors, dict):
        for field_name in sorted(errors):
            raw = errors[field_name]
            values = raw if isinstance(raw, list) else [raw]
            label = str(field_name).replace("_", " ").capitalize()
            for value in values:
                if isinstance(value, str) and value.strip():
                    messages.append(f"{label} {value.strip()}")
    if messages:
        return ", ".join(messages)

    description = body.get("error_description")
    if isinstance(description, str) and description.strip():
        return description.strip()
    return T("error_in_input")


def _describe(body: dict) -> str:
    description = body.get("error_description")
    return description if isinstance(description, str) else ""


def _create_unprocessable(body: dict) -> AppError | None:
    if body.get("error") != ERROR_INVALID_PARAMS:
        return None
    return AppError(
        ERR_CODE_VALIDATION_FAILED,
        message=validation_errors_to_string(body),
        retryable=False,
    )


def _confirm_unprocessable(body: dict) -> AppError | None:
    if body.get("error") != ERROR_INVALID_PARAMS:
        return None
    if body.get("error_description") != CONFIRM_INVALID_DESCRIPTION:
        return None
    return AppError(
        ERR_CODE_VALIDATION_FAILED,
        message=T("incorrect_confirmation_code"),
        retryable=False,
    )


def _resend_unprocessable(body: dict) -> AppError | None:
    if body.get("error") != ERROR_INVALID_PARAMS:
        return None
    if body.get("error_description") != RESEND_INVALID_DESCRIPTION:
        return None
    # Unlike the other validation failures this one is offered a retry.
    return AppError(
        ERR_CODE_VALIDATION_FAILED,
        message=T("email_not_found_or_confirmed"),
        retryable=True,
    )


@dataclass
class AccountClient:
    config: CLIConfig = field(default_factory=CLIConfig)
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.config.host.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": self.config.accept,
            "User-Agent": self.config.user_agent,
            "Content-Type": FORM_CONTENT_TYPE,
        }

    def _post_form(
        self,
        path: str,
        form: dict[str, str],
        *,
        success_status: int,
        on_unprocessable: UnprocessableHandler,
        success_check: SuccessCheck | None = None,
    ) -> dict[str, Any]:
        """Send one form POST and classify the outcome.

        Returns the decoded body when the operation succeeded and raises
        ``AppError`` otherwise. No retries are attempted.
        """
        url = self._url(path)
        logger.debug("POST %s", url)
        try:
            response = self.session.request(
                "POST",
                url,
                data=form,
                headers=self._headers(),
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as exc:
            logger.warning("request to %s failed: %s", url, exc)
            raise AppError(ERR_CODE_REQUEST_FAILED, cause=exc, retryable=True) from exc

        status = response.status_code
        logger.debug("POST %s -> %s", url, status)
        if status not in (success_status, STATUS_UNPROCESSABLE):
            raise AppError(ERR_CODE_UNEXPECTED_ERROR, retryable=True, status_code=status)

        try:
            body = response.json()
        except ValueError as exc:
            raise AppError(
                ERR_CODE_UNEXPECTED_ERROR,
                cause=exc,
                retryable=True,
                status_code=status,
            ) from exc
        if not isinstance(body, dict):
            raise AppError(
                ERR_CODE_UNEXPECTED_ERROR,
                retryable=True,
                status_code=status,
                body=body,
            )

        if status == STATUS_UNPROCESSABLE:
            error = on_unprocessable(body)
            if error is None:
                error = AppError(ERR_CODE_UNEXPECTED_ERROR, message=_describe(body), retryable=True)
            error.status_code = status
            error.body = body
            logger.debug("POST %s rejected: %s", url, error.code)
            raise error

        if success_check is not None and not success_check(body):
            logger.debug("POST %s returned %s without the expected result", url, status)
            raise AppError(
                ERR_CODE_UNEXPECTED_ERROR,
                retryable=True,
                status_code=status,
                body=body,
            )
        return body

    def create(self, email: str, password: str) -> None:
        self._post_form(
            "/users",
            {"email": email, "password": password},
            success_status=STATUS_CREATED,
            on_unprocessable=_create_unprocessable,
        )

    def confirm(self, email: str, confirmation_code: str) -> None:
        self._post_form(
            "/user/confirm",
            {"email": email, "confirmation_code": confirmation_code},
            success_status=STATUS_OK,
            on_unprocessable=_confirm_unprocessable,
            success_check=lambda body: body.get("confirmed") is True,
        )

    def resend_confirmation_code(self, email: str) -> None:
        self._post_form(
            "/user/confirm/resend",
            {"email": email},
            success_status=STATUS_OK,
            on_unprocessable=_resend_unprocessable,
            success_check=lambda body: body.get("sent") is True,
        )


__all__ = ["AccountClient", "validation_errors_to_string"]
