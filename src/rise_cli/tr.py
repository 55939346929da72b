"""Display strings for the rise CLI."""

from __future__ import annotations

DEFAULT_LOCALE = "en"

_STRINGS: dict[str, dict[str, str]] = {
    "en": {
        "rise_cli_desc": (
            "Command line interface for Rise, the easiest way to publish your HTML5 "
            "websites and apps"
        ),
        "signup_desc": "Create a new Rise account",
        "confirm_desc": "Confirm the email address of a Rise account",
        "init_desc": "Initialize a Rise project",
        "info_desc": "Show the Rise project in the current working directory",
        "unlink_desc": "Remove the Rise project settings from the current working directory",
        "version_desc": "Show CLI version and configuration",
        "join_rise": "Join Rise, the easiest way to publish your HTML5 websites and apps!",
        "enter_email": "Enter Email",
        "enter_password": "Enter Password",
        "confirm_password": "Confirm Password",
        "password_no_match": "Passwords do not match. Please re-enter password.",
        "error_in_input": "There were errors in your input. Please try again.",
        "account_created": (
            "Your account has been created. You will receive your confirmation code "
            "shortly via email."
        ),
        "enter_confirmation_resend": (
            'Enter Confirmation Code (Or enter "resend" if you need it sent again)'
        ),
        "confirmation_success": (
            "Thanks for confirming your email address! Your account is now active!"
        ),
        "confirmation_resent": (
            "Confirmation code has been resent. You will receive your confirmation code "
            "shortly via email."
        ),
        "incorrect_confirmation_code": (
            "You've entered an incorrect confirmation code. Please try again."
        ),
        "email_not_found_or_confirmed": (
            "That email address was not found or has already been confirmed. "
            "Check the address and try again."
        ),
        "too_many_attempts": "Too many attempts. Run `rise confirm` to try again later.",
        "no_rise_project": (
            "Could not find a Rise project in current working directory. To initialize "
            "a new Rise project here, run `rise init`."
        ),
        "something_wrong": "Something went wrong. Please try again.",
        "existing_rise_project": (
            "A Rise project already exists in the current working directory; aborting."
        ),
        "init_rise_project": "Set up your Rise project",
        "enter_project_path": "Enter Project Path",
        "enter_project_name": "Enter Project Name",
        "project_initialized": 'Successfully created project "%s".',
        "rise_json_saved": 'Saved project settings to "%s". This file should not be deleted.',
        "default_domain": "Default domain: %s",
        "project_unlinked": 'Removed "%s"; this directory is no longer a Rise project.',
    },
}


def T(key: str, locale: str = DEFAULT_LOCALE) -> str:
    table = _STRINGS.get(locale) or _STRINGS[DEFAULT_LOCALE]
    if key in table:
        return table[key]
    return _STRINGS[DEFAULT_LOCALE].get(key, key)
