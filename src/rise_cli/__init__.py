"""rise-cli public surface."""

from rise_cli.client import AccountClient, validation_errors_to_string
from rise_cli.config import CLIConfig, ConfigError, load_cli_config
from rise_cli.errors import (
    ERR_CODE_REQUEST_FAILED,
    ERR_CODE_UNEXPECTED_ERROR,
    ERR_CODE_VALIDATION_FAILED,
    AppError,
    RiseError,
)
from rise_cli.project import (
    NameInvalidError,
    NameInvalidLengthError,
    PathNotDirError,
    PathNotExistError,
    PathNotRelativeError,
    Project,
    ProjectError,
    ProjectFileError,
    load,
    load_default,
)
from rise_cli.tr import T

__all__ = [
    "RiseError",
    "AppError",
    "ERR_CODE_REQUEST_FAILED",
    "ERR_CODE_UNEXPECTED_ERROR",
    "ERR_CODE_VALIDATION_FAILED",
    "AccountClient",
    "validation_errors_to_string",
    "CLIConfig",
    "ConfigError",
    "load_cli_config",
    "Project",
    "ProjectError",
    "ProjectFileError",
    "NameInvalidLengthError",
    "NameInvalidError",
    "PathNotRelativeError",
    "PathNotExistError",
    "PathNotDirError",
    "load",
    "load_default",
    "T",
]
