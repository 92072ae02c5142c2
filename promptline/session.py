"""Segment that shows the user and the computer name."""

from __future__ import annotations

from promptline.base import Environment, Properties, Segment

_SSH_VARIABLES = ("SSH_CONNECTION", "SSH_CLIENT")


class Session(Segment):
    """Writes user@host, with an icon for an SSH session."""

    def __init__(self, props: Properties, env: Environment) -> None:
        super().__init__(props, env)
        self.username = ""

    def enabled(self) -> bool:
        self.username = self.user_name()
        show_default_user = self.props.get_bool("display_default_user", True)
        default_user = self.props.get_string("default_user_name", "")
        return show_default_user or default_user != self.username

    def render(self) -> str:
        return self.formatted_text()

    def formatted_text(self) -> str:
        computer = self.computer_name()
        separator = ""
        if self.props.get_bool("display_host", True) and self.props.get_bool("display_user", True):
            separator = self.props.get_string("user_info_separator", "@")
        ssh = self.props.get_string("ssh_icon", "\uF817 ") if self.active_ssh_session() else ""
        user_color = self.props.get_color("user_color", self.props.foreground)
        host_color = self.props.get_color("host_color", self.props.foreground)
        return f"{ssh}<{user_color}>{self.username}</>{separator}<{host_color}>{computer}</>"

    def computer_name(self) -> str:
        if not self.props.get_bool("display_host", True):
            return ""
        try:
            name = self.env.host_name()
        except OSError:
            name = "unknown"
        return name.strip()

    def user_name(self) -> str:
        if not self.props.get_bool("display_user", True):
            return ""
        username = self.env.current_user().strip()
        if self.env.runtime_goos() == "windows" and "\\" in username:
            username = username.split("\\")[1]
        return username

    def active_ssh_session(self) -> bool:
        return any(self.env.getenv(name) for name in _SSH_VARIABLES)