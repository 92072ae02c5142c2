from dataclasses import dataclass

import pytest

from promptline.base import Properties
from promptline.path import PathSegment, PathStyle, base_name


@dataclass
class FakeEnv:
    cwd: str = "/usr/local/bin"
    home: str = "/home/user"
    prompt: str = ""
    separator: str = "/"

    def getcwd(self):
        return self.cwd

    def home_dir(self):
        return self.home

    def prompt_path(self):
        return self.prompt

    def path_separator(self):
        return self.separator


def make(cwd="/usr/local/bin", values=None, **env):
    return PathSegment(Properties(values=dict(values or {})), FakeEnv(cwd=cwd, **env))


def test_base_name_empty_is_dot():
    assert base_name("", "/") == "."


def test_base_name_only_separators():
    assert base_name("///", "/") == "/"


def test_base_name_strips_trailing_separator():
    assert base_name("/a/b/", "/") == "b"


def test_base_name_without_separator_keeps_path():
    assert base_name("VENV", "") == "VENV"


def test_home_is_mapped():
    seg = make(cwd="/home/user/code")
    assert seg.pwd() == "~" + "/code"


def test_custom_mapping_wins_over_parent():
    seg = make(cwd="/home/user/dev/x", values={"mapped_locations": {"/home/user/dev": "DEV"}})
    assert seg.pwd() == "DEV/x"


def test_powershell_prefix_removed():
    seg = make()
    assert seg.replace_mapped_locations("Microsoft.PowerShell.Core\\FileSystem::/tmp/x") == "/tmp/x"


def test_registry_mapped():
    seg = make()
    assert seg.replace_mapped_locations("HKCU:\\Software") == "\uE0B1\\Software"


def test_mapping_disabled():
    seg = make(cwd="/home/user/code", values={"mapped_locations_enabled": False})
    assert seg.full_path() == "/home/user/code"


def test_prompt_path_preferred():
    seg = make(cwd="/usr/local/bin", prompt="/opt/tools")
    assert seg.full_path() == "/opt/tools"


def test_full_path_custom_separator():
    seg = make(values={"folder_separator_icon": ">"})
    assert seg.full_path() == ">usr>local>bin"


def test_agnoster_full_strips_leading_separator():
    cwd = "/usr/local/bin"
    assert make(cwd=cwd).agnoster_full_path() == cwd[1:]


def test_folder_path():
    assert make(cwd="/usr/local/bin").folder_path() == "bin"


def test_agnoster_path():
    assert make(cwd="/usr/local/bin").agnoster_path() == "usr/../bin"


def test_agnoster_path_icons_follow_depth():
    cwd = "/usr/local/share/man"
    seg = make(cwd=cwd, values={"folder_separator_icon": " > ", "folder_icon": "…"})
    result = seg.agnoster_path()
    assert result.count("…") == seg.path_depth(cwd) - 1
    assert result.startswith("usr")
    assert result.endswith(" > man")


def test_agnoster_short_matches_agnoster_at_depth_two():
    seg = make(cwd="/usr/local/bin")
    assert seg.agnoster_short_path() == seg.agnoster_path()


def test_agnoster_short_deep_path_has_single_icon():
    seg = make(cwd="/usr/local/share/man")
    result = seg.agnoster_short_path()
    assert result.count("..") == 1
    assert result.endswith("/man")


def test_path_depth():
    assert make().path_depth("/usr/local/bin") == 2


def test_short_style_equals_full():
    short = make(values={"style": PathStyle.SHORT.value}).render()
    full = make(values={"style": PathStyle.FULL.value}).render()
    assert short == full == "/usr/local/bin"


def test_unknown_style():
    assert make(values={"style": "nope"}).render() == "Path style: nope is not available"


def test_hyperlink():
    cwd = "/usr/local/bin"
    seg = make(cwd=cwd, values={"style": "folder", "enable_hyperlink": True})
    assert seg.render() == f"[bin](file://{cwd})"


@pytest.mark.parametrize("pwd,expected", [("/home/user/x", True), ("/tmp", False)])
def test_in_home_dir(pwd, expected):
    assert make().in_home_dir(pwd) is expected


def test_root_location():
    assert make(cwd="/usr/local/bin").root_location() == "usr"