"""Segment that shows the current working directory."""

from __future__ import annotations

import os
from enum import Enum

from promptline.base import Segment

_POWERSHELL_PREFIX = "Microsoft.PowerShell.Core\\FileSystem::"


class PathStyle(str, Enum):
    """How the working directory is written."""

    AGNOSTER = "agnoster"
    AGNOSTER_FULL = "agnoster_full"
    AGNOSTER_SHORT = "agnoster_short"
    SHORT = "short"
    FULL = "full"
    FOLDER = "folder"


def _split(path: str, separator: str) -> list[str]:
    if separator:
        return path.split(separator)
    return list(path)


def base_name(path: str, separator: str) -> str:
    """The last element of a path, ignoring trailing separators.

    An empty path gives ".", a path of separators only gives one separator.
    """
    if not path:
        return "."
    if separator:
        while path.endswith(separator):
            path = path[: -len(separator)]
    path = path[len(os.path.splitdrive(path)[0]):]
    if separator:
        index = path.rfind(separator)
        if index >= 0:
            path = path[index + len(separator):]
    return path or separator


class PathSegment(Segment):
    """Writes the working directory in one of several styles."""

    def enabled(self) -> bool:
        return True

    def render(self) -> str:
        cwd = self.env.getcwd()
        style = self.props.get_string("style", PathStyle.AGNOSTER.value)
        try:
            kind = PathStyle(style)
        except ValueError:
            return f"Path style: {style} is not available"
        if kind is PathStyle.AGNOSTER:
            formatted = self.agnoster_path()
        elif kind is PathStyle.AGNOSTER_FULL:
            formatted = self.agnoster_full_path()
        elif kind is PathStyle.AGNOSTER_SHORT:
            formatted = self.agnoster_short_path()
        elif kind is PathStyle.FOLDER:
            formatted = self.folder_path()
        else:
            # "short" is kept as an alias of "full"
            formatted = self.full_path()
        if self.props.get_bool("enable_hyperlink", False):
            return f"[{formatted}](file://{cwd})"
        return formatted

    def _folder_separator(self) -> str:
        return self.props.get_string("folder_separator_icon", self.env.path_separator())

    def agnoster_path(self) -> str:
        """The root, one icon per intermediate folder, and the current folder."""
        pwd = self.pwd()
        separator = self._folder_separator()
        folder_icon = self.props.get_string("folder_icon", "..")
        depth = self.path_depth(pwd)
        parts = [self.root_location()]
        parts.extend(f"{separator}{folder_icon}" for _ in range(1, depth))
        if depth > 0:
            parts.append(f"{separator}{base_name(pwd, self.env.path_separator())}")
        return "".join(parts)

    def agnoster_full_path(self) -> str:
        """Every folder name, without a leading separator."""
        pwd = self.pwd()
        separator = self.env.path_separator()
        if separator and pwd.startswith(separator):
            pwd = pwd[len(separator):]
        return self.replace_folder_separators(pwd)

    def agnoster_short_path(self) -> str:
        """The root and the current folder, with one icon between them."""
        separator = self._folder_separator()
        folder_icon = self.props.get_string("folder_icon", "..")
        root = self.root_location()
        pwd = self.pwd()
        current = base_name(pwd, self.env.path_separator())
        depth = self.path_depth(pwd)
        if depth <= 0:
            return root
        if depth == 1:
            return f"{root}{separator}{current}"
        return f"{root}{separator}{folder_icon}{separator}{current}"

    def full_path(self) -> str:
        return self.replace_folder_separators(self.pwd())

    def folder_path(self) -> str:
        return self.replace_folder_separators(base_name(self.pwd(), self.env.path_separator()))

    def pwd(self) -> str:
        """The working directory, with mapped locations replaced."""
        pwd = self.env.prompt_path() or self.env.getcwd()
        if self.props.get_bool("mapped_locations_enabled", True):
            pwd = self.replace_mapped_locations(pwd)
        return pwd

    def replace_mapped_locations(self, pwd: str) -> str:
        """Replace the longest matching mapped location prefix with its icon."""
        if pwd.startswith(_POWERSHELL_PREFIX):
            pwd = pwd[len(_POWERSHELL_PREFIX):]
        registry_icon = self.props.get_string("windows_registry_icon", "\uE0B1")
        mapped = {
            "HKCU:": registry_icon,
            "HKLM:": registry_icon,
            self.env.home_dir(): self.props.get_string("home_icon", "~"),
        }
        mapped.update(self.props.get_key_value_map("mapped_locations", {}))
        # reverse order puts a subfolder before its parent
        for location in sorted(mapped, reverse=True):
            if pwd.startswith(location):
                return pwd.replace(location, mapped[location], 1)
        return pwd

    def replace_folder_separators(self, pwd: str) -> str:
        default = self.env.path_separator()
        separator = self.props.get_string("folder_separator_icon", default)
        if separator == default or not default:
            return pwd
        return pwd.replace(default, separator)

    def in_home_dir(self, pwd: str) -> bool:
        return pwd.startswith(self.env.home_dir())

    def root_location(self) -> str:
        """The first element of the working directory."""
        pwd = self.pwd()
        separator = self.env.path_separator()
        if separator and pwd.startswith(separator):
            pwd = pwd[len(separator):]
        parts = _split(pwd, separator)
        return parts[0] if parts else ""

    def path_depth(self, pwd: str) -> int:
        """The number of non-empty elements after the first."""
        return sum(1 for part in _split(pwd, self.env.path_separator()) if part) - 1