"""Segment that shows an icon for the operating system."""

from __future__ import annotations

from promptline.base import Segment

_DISTRO_ICONS = {
    "alpine": "\uF300",
    "aosc": "\uF301",
    "arch": "\uF303",
    "centos": "\uF304",
    "coreos": "\uF305",
    "debian": "\uF306",
    "devuan": "\uF307",
    "raspbian": "\uF315",
    "elementary": "\uF309",
    "fedora": "\uF30a",
    "gentoo": "\uF30d",
    "mageia": "\uF310",
    "manjaro": "\uF312",
    "mint": "\uF30e",
    "nixos": "\uF313",
    "opensuse": "\uF314",
    "sabayon": "\uF317",
    "slackware": "\uF319",
    "ubuntu": "\uF31b",
}


class OsInfo(Segment):
    """Writes the icon of the operating system or Linux distribution."""

    def enabled(self) -> bool:
        return True

    def render(self) -> str:
        goos = self.env.runtime_goos()
        if goos == "windows":
            return self.props.get_string("windows", "\uE62A")
        if goos == "darwin":
            return self.props.get_string("macos", "\uF179")
        if goos != "linux":
            return ""
        platform = self.env.platform()
        if self.env.getenv("WSL_DISTRO_NAME"):
            wsl = self.props.get_string("wsl", "WSL")
            separator = self.props.get_string("wsl_separator", " - ")
            return f"{wsl}{separator}{self.linux_icon(platform)}"
        return self.linux_icon(platform)

    def linux_icon(self, platform: str) -> str:
        """The icon for a Linux distribution, or the generic Linux icon."""
        if platform in _DISTRO_ICONS:
            return self.props.get_string(platform, _DISTRO_ICONS[platform])
        return self.props.get_string("linux", "\uF17C")