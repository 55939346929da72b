"""Local Rise project descriptor."""

from __future__ import annotations

import json
import os
import re
import stat
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from rise_cli.config import CLIConfig

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 63

_NAME_RE = re.compile(r"[a-z0-9][a-z0-9-]*[a-z0-9]")


class ProjectError(ValueError):
    """Raised when a project descriptor is invalid."""

    default_message = "invalid project"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NameInvalidLengthError(ProjectError):
    default_message = "Name must have minimum 3 and maximum 63 characters"


class NameInvalidError(ProjectError):
    default_message = (
        "Name may only contain lowercase letters, numbers and hyphens, "
        "but may not begin or end with hyphens"
    )


class PathNotRelativeError(ProjectError):
    default_message = "Path must be relative to current working directory"


class PathNotExistError(ProjectError):
    default_message = "Path does not exist"


class PathNotDirError(ProjectError):
    default_message = "Path must be a directory"


class ProjectFileError(ProjectError):
    default_message = "invalid project file"


class ProjectFile(BaseModel):
    """On-disk shape of the project file.

    Only the identity fields are durable. Toggle keys found in a file are
    ignored along with any other unknown key.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    path: str = ""


def _chmod_owner_only(path: Path) -> None:
    if os.name != "posix":
        return
    path.chmod(0o600)


@dataclass
class Project:
    name: str = ""
    path: str = ""
    default_domain_enabled: bool = False
    enable_stats: bool = False
    force_https: bool = False
    config: CLIConfig = field(default_factory=CLIConfig, compare=False, repr=False)

    def default_domain(self) -> str:
        return f"{self.name}.{self.config.default_domain}"

    def validate_name(self) -> None:
        # Length is counted in bytes, so multibyte names fail the pattern instead.
        length = len(self.name.encode("utf-8"))
        if length < NAME_MIN_LENGTH or length > NAME_MAX_LENGTH:
            raise NameInvalidLengthError()
        if not _NAME_RE.fullmatch(self.name):
            raise NameInvalidError()

    def validate_path(self) -> None:
        if os.path.isabs(self.path):
            raise PathNotRelativeError()
        try:
            info = os.stat(self.path)
        except FileNotFoundError as exc:
            raise PathNotExistError() from exc
        if not stat.S_ISDIR(info.st_mode):
            raise PathNotDirError()

    def save(self) -> None:
        """Write the project file into the current working directory.

        The file is truncated and rewritten in place; an interrupted write can
        leave it incomplete.
        """
        target = Path(self.config.project_json)
        payload = ProjectFile(name=self.name, path=self.path).model_dump()
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(json.dumps(payload, sort_keys=True, indent=2) + "\n")
        _chmod_owner_only(target)

    def delete(self) -> None:
        Path(self.config.project_json).unlink()


def _read_project_file(path: Path, config: CLIConfig) -> Project:
    raw = path.read_bytes()
    try:
        model = ProjectFile.model_validate_json(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValidationError) as exc:
        raise ProjectFileError(f"invalid project file: {path}") from exc
    return Project(name=model.name, path=model.path, config=config)


def load(config: CLIConfig | None = None) -> Project:
    """Load the project file from the current working directory.

    Raises ``FileNotFoundError`` when no project has been initialized here.
    """
    config = config or CLIConfig()
    return _read_project_file(Path(config.project_json), config)


def load_default(config: CLIConfig | None = None) -> Project:
    """Load the default project template, or an empty project when there is none."""
    config = config or CLIConfig()
    try:
        return _read_project_file(Path(config.default_project_json), config)
    except FileNotFoundError:
        return Project(config=config)
