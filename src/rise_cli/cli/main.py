"""Command-line interface for rise."""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import re
import sys
from pathlib import Path
from typing import Sequence

from rise_cli.client import AccountClient
from rise_cli.config import CLIConfig, ConfigError, cli_version, load_cli_config
from rise_cli.errors import AppError
from rise_cli.project import Project, ProjectError, ProjectFileError, load, load_default
from rise_cli.tr import T

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_NETWORK_ERROR = 2

CONFIRMATION_ATTEMPTS = 3
RESEND_KEYWORD = "resend"

_SENSITIVE_FIELDS = ("password", "confirmation_code")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rise", description=T("rise_cli_desc"))
    parser.add_argument(
        "--version",
        action="version",
        version=f"rise-cli {cli_version()}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to CLI config TOML (default: ~/.rise/config.toml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    sub = parser.add_subparsers(dest="command", required=True)

    version = sub.add_parser("version", help=T("version_desc"))
    version.add_argument("--json", action="store_true", help="Print version details as JSON")

    signup = sub.add_parser("signup", help=T("signup_desc"))
    signup.add_argument("--email", default=None)
    signup.add_argument(
        "--password",
        default=None,
        help="Account password (prompted for when omitted)",
    )

    confirm = sub.add_parser("confirm", help=T("confirm_desc"))
    confirm.add_argument("--email", default=None)
    confirm_mode = confirm.add_mutually_exclusive_group()
    confirm_mode.add_argument("--code", default=None, help="Confirmation code from the email")
    confirm_mode.add_argument(
        "--resend",
        action="store_true",
        help="Send the confirmation code again",
    )

    init = sub.add_parser("init", help=T("init_desc"))
    init.add_argument("--name", default=None, help="Project name")
    init.add_argument("--path", default=None, help="Directory to publish, relative to here")

    info = sub.add_parser("info", help=T("info_desc"))
    info.add_argument("--json", action="store_true")

    sub.add_parser("unlink", help=T("unlink_desc"))

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _sanitize_error_text(value: str) -> str:
    redacted = value
    for field in _SENSITIVE_FIELDS:
        redacted = re.sub(
            rf"(?i)({field}\s*[=:]\s*)([^&,\s]+)",
            r"\1[REDACTED]",
            redacted,
        )
    return redacted


def _print_error(stderr, prefix: str, message: str, *, code: int) -> int:
    print(f"{prefix}: {_sanitize_error_text(message)}", file=stderr)
    return code


def _print_app_error(stderr, prefix: str, exc: AppError) -> int:
    logger.debug("%s failed: %r (cause: %r)", prefix, exc, exc.cause)
    if exc.is_validation_failed:
        message = exc.message or T("error_in_input")
        return _print_error(stderr, prefix, message, code=EXIT_VALIDATION_ERROR)
    return _print_error(stderr, prefix, T("something_wrong"), code=EXIT_NETWORK_ERROR)


def _prompt(label: str, *, secret: bool = False, default: str | None = None) -> str:
    text = f"{label} [{default}]: " if default else f"{label}: "
    try:
        value = getpass.getpass(text) if secret else input(text)
    except EOFError:
        value = ""
    value = value.strip()
    return value or (default or "")


def _build_account_client(config: CLIConfig) -> AccountClient:
    return AccountClient(config=config)


def _run_version(*, config: CLIConfig, as_json: bool, stdout) -> int:
    payload = {
        "cli": "rise-cli",
        "version": cli_version(),
        "host": config.host,
        "default_domain": config.default_domain,
        "project_json": config.project_json,
    }
    if as_json:
        print(json.dumps(payload, sort_keys=True), file=stdout)
        return EXIT_SUCCESS

    print(f"rise-cli {payload['version']}", file=stdout)
    print(f"host: {payload['host']}", file=stdout)
    print(f"default domain: {payload['default_domain']}", file=stdout)
    return EXIT_SUCCESS


def _confirm_interactively(*, client: AccountClient, email: str, stdout, stderr) -> int:
    rc = EXIT_VALIDATION_ERROR
    for _ in range(CONFIRMATION_ATTEMPTS):
        code = _prompt(T("enter_confirmation_resend"))
        if code.lower() == RESEND_KEYWORD:
            try:
                client.resend_confirmation_code(email)
            except AppError as exc:
                rc = _print_app_error(stderr, "confirm error", exc)
                if not exc.retryable:
                    return rc
                continue
            print(T("confirmation_resent"), file=stdout)
            continue

        if not code:
            continue
        try:
            client.confirm(email, code)
        except AppError as exc:
            rc = _print_app_error(stderr, "confirm error", exc)
            if not exc.retryable:
                return rc
            continue
        print(T("confirmation_success"), file=stdout)
        return EXIT_SUCCESS

    print(T("too_many_attempts"), file=stderr)
    return rc


def _run_signup(*, args, config: CLIConfig, stdout, stderr) -> int:
    print(T("join_rise"), file=stdout)
    email = args.email or _prompt(T("enter_email"))
    if not email:
        return _print_error(stderr, "signup error", "email is required", code=EXIT_VALIDATION_ERROR)

    password = args.password
    if not password:
        password = _prompt(T("enter_password"), secret=True)
        if _prompt(T("confirm_password"), secret=True) != password:
            return _print_error(
                stderr,
                "signup error",
                T("password_no_match"),
                code=EXIT_VALIDATION_ERROR,
            )
    if not password:
        return _print_error(
            stderr, "signup error", "password is required", code=EXIT_VALIDATION_ERROR
        )

    client = _build_account_client(config)
    try:
        client.create(email, password)
    except AppError as exc:
        return _print_app_error(stderr, "signup error", exc)

    print(T("account_created"), file=stdout)
    return _confirm_interactively(client=client, email=email, stdout=stdout, stderr=stderr)


def _run_confirm(*, args, config: CLIConfig, stdout, stderr) -> int:
    email = args.email or _prompt(T("enter_email"))
    if not email:
        return _print_error(stderr, "confirm error", "email is required", code=EXIT_VALIDATION_ERROR)

    client = _build_account_client(config)
    if args.resend:
        try:
            client.resend_confirmation_code(email)
        except AppError as exc:
            return _print_app_error(stderr, "confirm error", exc)
        print(T("confirmation_resent"), file=stdout)
        return EXIT_SUCCESS

    if args.code:
        try:
            client.confirm(email, args.code)
        except AppError as exc:
            return _print_app_error(stderr, "confirm error", exc)
        print(T("confirmation_success"), file=stdout)
        return EXIT_SUCCESS

    return _confirm_interactively(client=client, email=email, stdout=stdout, stderr=stderr)


def _run_init(*, args, config: CLIConfig, stdout, stderr) -> int:
    if Path(config.project_json).exists():
        return _print_error(
            stderr,
            "init error",
            T("existing_rise_project"),
            code=EXIT_VALIDATION_ERROR,
        )

    try:
        defaults = load_default(config)
    except (ProjectFileError, OSError) as exc:
        return _print_error(stderr, "init error", str(exc), code=EXIT_VALIDATION_ERROR)

    print(T("init_rise_project"), file=stdout)
    path = args.path or defaults.path or _prompt(T("enter_project_path"), default=".")
    name = args.name or defaults.name or _prompt(T("enter_project_name"))

    proj = Project(name=name, path=path, config=config)
    try:
        proj.validate_path()
        proj.validate_name()
    except (ProjectError, OSError) as exc:
        return _print_error(stderr, "init error", str(exc), code=EXIT_VALIDATION_ERROR)

    try:
        proj.save()
    except OSError as exc:
        return _print_error(stderr, "init error", str(exc), code=EXIT_VALIDATION_ERROR)

    print(T("project_initialized") % proj.name, file=stdout)
    print(T("rise_json_saved") % config.project_json, file=stdout)
    print(T("default_domain") % proj.default_domain(), file=stdout)
    return EXIT_SUCCESS


def _load_project(*, config: CLIConfig, stderr) -> tuple[Project | None, int]:
    try:
        return load(config), EXIT_SUCCESS
    except FileNotFoundError:
        return None, _print_error(
            stderr, "project error", T("no_rise_project"), code=EXIT_VALIDATION_ERROR
        )
    except (ProjectFileError, OSError) as exc:
        return None, _print_error(stderr, "project error", str(exc), code=EXIT_VALIDATION_ERROR)


def _run_info(*, args, config: CLIConfig, stdout, stderr) -> int:
    proj, rc = _load_project(config=config, stderr=stderr)
    if proj is None:
        return rc

    payload = {
        "name": proj.name,
        "path": proj.path,
        "default_domain": proj.default_domain(),
    }
    if args.json:
        print(json.dumps(payload, sort_keys=True), file=stdout)
        return EXIT_SUCCESS

    print(f"name: {payload['name']}", file=stdout)
    print(f"path: {payload['path']}", file=stdout)
    print(f"default_domain: {payload['default_domain']}", file=stdout)
    return EXIT_SUCCESS


def _run_unlink(*, config: CLIConfig, stdout, stderr) -> int:
    proj, rc = _load_project(config=config, stderr=stderr)
    if proj is None:
        return rc
    try:
        proj.delete()
    except FileNotFoundError:
        return _print_error(
            stderr, "project error", T("no_rise_project"), code=EXIT_VALIDATION_ERROR
        )
    except OSError as exc:
        return _print_error(stderr, "project error", str(exc), code=EXIT_VALIDATION_ERROR)

    print(T("project_unlinked") % config.project_json, file=stdout)
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None, *, stdout=sys.stdout, stderr=sys.stderr) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = load_cli_config(args.config)
    except ConfigError as exc:
        return _print_error(stderr, "config error", str(exc), code=EXIT_VALIDATION_ERROR)

    if args.command == "version":
        return _run_version(config=config, as_json=args.json, stdout=stdout)

    if args.command == "signup":
        return _run_signup(args=args, config=config, stdout=stdout, stderr=stderr)

    if args.command == "confirm":
        return _run_confirm(args=args, config=config, stdout=stdout, stderr=stderr)

    if args.command == "init":
        return _run_init(args=args, config=config, stdout=stdout, stderr=stderr)

    if args.command == "info":
        return _run_info(args=args, config=config, stdout=stdout, stderr=stderr)

    if args.command == "unlink":
        return _run_unlink(config=config, stdout=stdout, stderr=stderr)

    print("unknown command", file=stderr)
    return EXIT_VALIDATION_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
