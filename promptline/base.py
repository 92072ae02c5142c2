"""Core building blocks shared by every prompt segment."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Protocol


class CommandError(Exception):
    """A command ran but finished with a non-zero exit code."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass
class FileInfo:
    """A file or folder found while walking up from the working directory."""

    path: str
    parent_folder: str
    is_dir: bool


@dataclass
class Properties:
    """User configured values of a segment, with its colors."""

    values: dict[str, Any] = field(default_factory=dict)
    foreground: str = ""
    background: str = ""

    def get_string(self, key: str, default: str) -> str:
        value = self.values.get(key)
        return value if isinstance(value, str) else default

    def get_bool(self, key: str, default: bool) -> bool:
        value = self.values.get(key)
        return value if isinstance(value, bool) else default

    def get_color(self, key: str, default: str) -> str:
        value = self.values.get(key)
        return value if isinstance(value, str) and value else default

    def get_key_value_map(self, key: str, default: dict[str, str]) -> dict[str, str]:
        value = self.values.get(key)
        if not isinstance(value, Mapping):
            return default
        return {str(k): str(v) for k, v in value.items()}


class Environment(Protocol):
    """What segments need to know about the machine and the shell."""

    def has_command(self, command: str) -> bool:
        """Whether the command can be found on the search path."""

    def run_command(self, command: str, *args: str) -> str:
        """Run a command and return its trimmed output; raises CommandError."""

    def has_files(self, pattern: str) -> bool:
        """Whether the working directory holds files matching the pattern."""

    def has_files_in_dir(self, directory: str, pattern: str) -> bool:
        """Whether the directory holds files matching the pattern."""

    def has_folder(self, path: str) -> bool:
        """Whether the folder exists."""

    def has_parent_file_path(self, name: str) -> FileInfo:
        """Find the name in the working directory or a parent; raises FileNotFoundError."""

    def get_file_content(self, path: str) -> str:
        """The content of a file, empty when it cannot be read."""

    def getenv(self, name: str) -> str:
        """The value of an environment variable, empty when unset."""

    def getcwd(self) -> str:
        """The current working directory."""

    def home_dir(self) -> str:
        """The home directory of the current user."""

    def prompt_path(self) -> str:
        """The working directory as reported by the shell, possibly empty."""

    def path_separator(self) -> str:
        """The separator between path elements."""

    def is_running_as_root(self) -> bool:
        """Whether the shell runs with elevated rights."""

    def shell_name(self) -> str:
        """The name of the running shell."""

    def runtime_goos(self) -> str:
        """The operating system family: windows, darwin, linux and so on."""

    def platform(self) -> str:
        """The distribution name on Linux."""

    def current_user(self) -> str:
        """The name of the logged-in user."""

    def host_name(self) -> str:
        """The computer name; raises OSError when unknown."""

    def window_title(self, image_name: str, title_regex: str) -> str:
        """The title of a process window; raises LookupError when not found."""

    def do_get(self, url: str) -> bytes:
        """The body of an HTTP GET; raises OSError on failure."""


def find_named_regex_match(pattern: str, text: str) -> dict[str, str]:
    """Named groups of the first match, empty strings for unmatched groups."""
    match = re.search(pattern, text)
    if match is None:
        return {}
    return {name: value or "" for name, value in match.groupdict().items()}


def _command_output(env: Environment, command: str, *args: str) -> str:
    try:
        return env.run_command(command, *args)
    except CommandError:
        return ""


class Segment(ABC):
    """A part of the prompt that decides whether it shows and what it shows."""

    def __init__(self, props: Properties, env: Environment) -> None:
        self.props = props
        self.env = env

    @abstractmethod
    def enabled(self) -> bool:
        """Whether the segment is to be shown."""

    @abstractmethod
    def render(self) -> str:
        """The text of the segment."""


class Text(Segment):
    """Writes a fixed text."""

    def enabled(self) -> bool:
        return True

    def render(self) -> str:
        return self.props.get_string("text", "!!text property not defined!!")


class Shell(Segment):
    """Writes the name of the running shell."""

    def enabled(self) -> bool:
        return True

    def render(self) -> str:
        return self.env.shell_name()


class Root(Segment):
    """Shows an icon when running with elevated rights."""

    def enabled(self) -> bool:
        return self.env.is_running_as_root()

    def render(self) -> str:
        return self.props.get_string("root_icon", "\uF0E7")


_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_PLAIN_TOKENS = (
    "2006", "002", "01", "02", "03", "04", "05", "06", "15",
    "1", "2", "_2", "3", "4", "5", "PM", "pm",
    "Z07:00:00", "Z070000", "Z07:00", "Z0700", "Z07",
    "-07:00:00", "-070000", "-07:00", "-0700", "-07",
)

_SIMPLE_FIELDS = {
    "2006": lambda t: f"{t.year:04d}",
    "06": lambda t: f"{t.year % 100:02d}",
    "January": lambda t: _MONTHS[t.month - 1],
    "Jan": lambda t: _MONTHS[t.month - 1][:3],
    "01": lambda t: f"{t.month:02d}",
    "1": lambda t: str(t.month),
    "Monday": lambda t: _WEEKDAYS[t.weekday()],
    "Mon": lambda t: _WEEKDAYS[t.weekday()][:3],
    "02": lambda t: f"{t.day:02d}",
    "_2": lambda t: f"{t.day:2d}",
    "2": lambda t: str(t.day),
    "002": lambda t: f"{t.timetuple().tm_yday:03d}",
    "15": lambda t: f"{t.hour:02d}",
    "03": lambda t: f"{t.hour % 12 or 12:02d}",
    "3": lambda t: str(t.hour % 12 or 12),
    "04": lambda t: f"{t.minute:02d}",
    "4": lambda t: str(t.minute),
    "05": lambda t: f"{t.second:02d}",
    "5": lambda t: str(t.second),
    "PM": lambda t: "PM" if t.hour >= 12 else "AM",
    "pm": lambda t: "pm" if t.hour >= 12 else "am",
}


def _starts_lower(text: str) -> bool:
    return bool(text) and text[0].islower()


def _match_token(rest: str) -> str | None:
    for word in ("January", "Monday"):
        if rest.startswith(word):
            return word
    for short in ("Jan", "Mon"):
        if rest.startswith(short) and not _starts_lower(rest[3:]):
            return short
    if rest.startswith("MST"):
        return "MST"
    if rest.startswith("_2006"):
        return None
    for token in _PLAIN_TOKENS:
        if rest.startswith(token):
            return token
    if len(rest) > 1 and rest[0] in ".," and rest[1] in "09":
        digit = rest[1]
        end = 1
        while end < len(rest) and rest[end] == digit:
            end += 1
        if end == len(rest) or not rest[end].isdigit():
            return rest[:end]
    return None


def _offset_seconds(moment: datetime) -> int:
    return int((moment.utcoffset() or timedelta(0)).total_seconds())


def _zone(moment: datetime, token: str) -> str:
    seconds = _offset_seconds(moment)
    if token.startswith("Z"):
        if seconds == 0:
            return "Z"
        token = "-" + token[1:]
    sign = "-" if seconds < 0 else "+"
    seconds = abs(seconds)
    hours, minutes, secs = seconds // 3600, seconds // 60 % 60, seconds % 60
    layouts = {
        "-07:00:00": f"{hours:02d}:{minutes:02d}:{secs:02d}",
        "-070000": f"{hours:02d}{minutes:02d}{secs:02d}",
        "-07:00": f"{hours:02d}:{minutes:02d}",
        "-0700": f"{hours:02d}{minutes:02d}",
        "-07": f"{hours:02d}",
    }
    return sign + layouts[token]


def _zone_name(moment: datetime) -> str:
    name = moment.tzname()
    if name:
        return name
    minutes = _offset_seconds(moment) // 60
    sign = "-" if minutes < 0 else "+"
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}{minutes % 60:02d}"


def _fraction(moment: datetime, token: str) -> str:
    digits = f"{moment.microsecond:06d}000"[: len(token) - 1]
    if token[1] == "0":
        return token[0] + digits
    digits = digits.rstrip("0")
    return token[0] + digits if digits else ""


def format_reference_time(moment: datetime, layout: str) -> str:
    """Format a moment with a layout written as the reference time Mon Jan 2 15:04:05 MST 2006."""
    parts: list[str] = []
    position = 0
    while position < len(layout):
        token = _match_token(layout[position:])
        if token is None:
            parts.append(layout[position])
            position += 1
            continue
        if token in _SIMPLE_FIELDS:
            parts.append(_SIMPLE_FIELDS[token](moment))
        elif token == "MST":
            parts.append(_zone_name(moment))
        elif token[0] in ".,":
            parts.append(_fraction(moment, token))
        else:
            parts.append(_zone(moment, token))
        position += len(token)
    return "".join(parts)


class Clock(Segment):
    """Writes the current time."""

    def enabled(self) -> bool:
        return True

    def render(self) -> str:
        layout = self.props.get_string("time_format", "15:04:05")
        return format_reference_time(datetime.now().astimezone(), layout)


class Kubectl(Segment):
    """Writes the current kubectl context."""

    def __init__(self, props: Properties, env: Environment) -> None:
        super().__init__(props, env)
        self.context_name = ""

    def enabled(self) -> bool:
        if not self.env.has_command("kubectl"):
            return False
        self.context_name = _command_output(self.env, "kubectl", "config", "current-context")
        return self.context_name != ""

    def render(self) -> str:
        return self.context_name


class Terraform(Segment):
    """Writes the current terraform workspace."""

    def __init__(self, props: Properties, env: Environment) -> None:
        super().__init__(props, env)
        self.workspace_name = ""

    def enabled(self) -> bool:
        if not self.env.has_command("terraform") or not self.env.has_folder(".terraform"):
            return False
        self.workspace_name = _command_output(self.env, "terraform", "workspace", "show")
        return True

    def render(self) -> str:
        return self.workspace_name