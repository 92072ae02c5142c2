"""Segment that shows the state of the git repository in the working directory."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from promptline.base import (
    CommandError,
    Environment,
    Properties,
    Segment,
    find_named_regex_match,
)

_GIT_OPTIONS = ("-c", "core.quotepath=false", "-c", "color.status=false")

_BRANCH_PATTERN = (
    r"^## (?P<local>\S+?)(\.{3}(?P<upstream>\S+?)( \[(?P<upstream_status>"
    r"(ahead (?P<ahead>\d+)(, )?)?(behind (?P<behind>\d+))?(gone)?)])?)?$"
)


@dataclass
class GitStatus:
    """Counts of changes in the working tree or the staging area."""

    unmerged: int = 0
    deleted: int = 0
    added: int = 0
    modified: int = 0
    untracked: int = 0
    changed: bool = False

    def format(self, prefix: str, color: str) -> str:
        """The colored summary of the changes, empty when there are none."""
        counts = (
            ("+", self.added),
            ("~", self.modified),
            ("-", self.deleted),
            ("?", self.untracked),
            ("x", self.unmerged),
        )
        status = "".join(f" {sign}{count}" for sign, count in counts if count > 0)
        if not status:
            return ""
        return f"<{color}>{prefix}{status}</>"


@dataclass
class GitRepo:
    """What is known about the repository."""

    working: GitStatus = field(default_factory=GitStatus)
    staging: GitStatus = field(default_factory=GitStatus)
    ahead: int = 0
    behind: int = 0
    head: str = ""
    upstream: str = ""
    stash_count: int = 0
    git_folder: str = ""


def parse_git_stats(lines: list[str], working: bool) -> GitStatus:
    """Count the changes listed by a short git status, skipping the branch line."""
    status = GitStatus()
    for line in lines[1:]:
        if len(line) < 2:
            continue
        code = line[1] if working else line[0]
        if code == "?":
            if working:
                status.untracked += 1
        elif code == "D":
            status.deleted += 1
        elif code == "A":
            status.added += 1
        elif code == "U":
            status.unmerged += 1
        elif code in ("M", "R", "C"):
            status.modified += 1
    status.changed = any(
        (status.added, status.deleted, status.modified, status.unmerged, status.untracked)
    )
    return status


def parse_branch_info(line: str) -> dict[str, str]:
    """The local branch, upstream and ahead/behind counts of a status branch line."""
    return find_named_regex_match(_BRANCH_PATTERN, line)


def _count(value: str | None) -> int:
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


class Git(Segment):
    """Writes the branch, upstream state and local changes of the repository."""

    def __init__(self, props: Properties, env: Environment) -> None:
        super().__init__(props, env)
        self.repo = GitRepo()

    def enabled(self) -> bool:
        if not self.env.has_command("git"):
            return False
        try:
            git_dir = self.env.has_parent_file_path(".git")
        except FileNotFoundError:
            return False
        self.repo = GitRepo()
        if git_dir.is_dir:
            self.repo.git_folder = git_dir.path
            return True
        pointer = self.env.get_file_content(git_dir.path).strip(" \r\n")
        matches = find_named_regex_match(r"^gitdir: (?P<dir>.*)$", pointer)
        if matches.get("dir"):
            self.repo.git_folder = matches["dir"]
            return True
        return False

    def render(self) -> str:
        self.set_git_status()
        if self.props.get_bool("status_colors_enabled", False):
            self.set_status_color()
        repo = self.repo
        parts: list[str] = []
        if repo.upstream and self.props.get_bool("display_upstream_icon", False):
            parts.append(self.upstream_symbol())
        parts.append(repo.head)
        if not self.props.get_bool("display_status", True):
            return "".join(parts)
        if repo.ahead > 0:
            parts.append(f" {self.props.get_string('branch_ahead_icon', chr(0x2191))}{repo.ahead}")
        if repo.behind > 0:
            parts.append(f" {self.props.get_string('branch_behind_icon', chr(0x2193))}{repo.behind}")
        if repo.behind == 0 and repo.ahead == 0 and repo.upstream:
            parts.append(f" {self.props.get_string('branch_identical_icon', chr(0x2261))}")
        elif not repo.upstream:
            parts.append(f" {self.props.get_string('branch_gone_icon', chr(0x2262))}")
        if repo.staging.changed:
            parts.append(
                self.status_detail_string(repo.staging, "staging_color", "local_staged_icon", " \uF046")
            )
        if repo.staging.changed and repo.working.changed:
            parts.append(self.props.get_string("status_separator_icon", " |"))
        if repo.working.changed:
            parts.append(
                self.status_detail_string(repo.working, "working_color", "local_working_icon", " \uF044")
            )
        if repo.stash_count:
            parts.append(f" {self.props.get_string('stash_count_icon', chr(0xF692) + ' ')}{repo.stash_count}")
        return "".join(parts)

    def status_detail_string(self, status: GitStatus, color: str, icon: str, default_icon: str) -> str:
        """The icon and, unless disabled, the detailed counts of a status."""
        prefix = self.props.get_string(icon, default_icon)
        foreground = self.props.get_color(color, self.props.foreground)
        if not self.props.get_bool("display_status_detail", True):
            return f"<{foreground}>{prefix}</>"
        return status.format(prefix, foreground)

    def upstream_symbol(self) -> str:
        """The icon of the hosting service of the upstream remote."""
        remote = re.sub(r"/.*", "", self.repo.upstream)
        url = self.git_command_output("remote", "get-url", remote)
        if "github" in url:
            return self.props.get_string("github_icon", "\uF408 ")
        if "gitlab" in url:
            return self.props.get_string("gitlab_icon", "\uF296 ")
        if "bitbucket" in url:
            return self.props.get_string("bitbucket_icon", "\uF171 ")
        return self.props.get_string("git_icon", "\uE5FB ")

    def set_git_status(self) -> None:
        """Read the branch, changes and stash of the repository."""
        lines = self.git_command_output("status", "-unormal", "--short", "--branch").split("\n")
        self.repo.working = parse_git_stats(lines, True)
        self.repo.staging = parse_git_stats(lines, False)
        info = parse_branch_info(lines[0])
        local = info.get("local", "")
        if local:
            self.repo.ahead = _count(info.get("ahead"))
            self.repo.behind = _count(info.get("behind"))
            if info.get("upstream_status") != "gone":
                self.repo.upstream = info.get("upstream", "")
        self.repo.head = self.head_context(local)
        if self.props.get_bool("display_stash_count", False):
            self.repo.stash_count = self.stash_count()

    def set_status_color(self) -> None:
        """Color the segment after the state of the repository."""
        if self.props.get_bool("color_background", True):
            self.props.background = self.status_color(self.props.background)
        else:
            self.props.foreground = self.status_color(self.props.foreground)

    def status_color(self, default: str) -> str:
        """The configured color for the current state, or the default."""
        repo = self.repo
        if repo.staging.changed or repo.working.changed:
            return self.props.get_color("local_changes_color", default)
        if repo.ahead > 0 and repo.behind > 0:
            return self.props.get_color("ahead_and_behind_color", default)
        if repo.ahead > 0:
            return self.props.get_color("ahead_color", default)
        if repo.behind > 0:
            return self.props.get_color("behind_color", default)
        return default

    def git_command_output(self, *args: str) -> str:
        """The output of a git command, empty when it fails."""
        try:
            return self.env.run_command("git", *_GIT_OPTIONS, *args)
        except CommandError:
            return ""

    def head_context(self, ref: str) -> str:
        """Describe HEAD, including a rebase, merge or cherry-pick in progress."""
        branch_icon = self.props.get_string("branch_icon", "\uE0A0")
        ref = f"{branch_icon}{ref}" if ref else self.pretty_head_name()
        if self.has_git_folder("rebase-merge"):
            origin = self.git_file_contents("rebase-merge/head-name").replace("refs/heads/", "", 1)
            onto = self.ref_symbolic_name("rebase-merge/onto")
            step = self.git_file_contents("rebase-merge/msgnum")
            total = self.git_file_contents("rebase-merge/end")
            icon = self.props.get_string("rebase_icon", "\uE728 ")
            return f"{icon}{branch_icon}{origin} onto {branch_icon}{onto} ({step}/{total}) at {ref}"
        if self.has_git_folder("rebase-apply"):
            origin = self.git_file_contents("rebase-apply/head-name").replace("refs/heads/", "", 1)
            step = self.git_file_contents("rebase-apply/next")
            total = self.git_file_contents("rebase-apply/last")
            icon = self.props.get_string("rebase_icon", "\uE728 ")
            return f"{icon}{branch_icon}{origin} ({step}/{total}) at {ref}"
        if self.has_git_file("MERGE_MSG") and self.has_git_file("MERGE_HEAD"):
            icon = self.props.get_string("merge_icon", "\uE727 ")
            message = self.git_file_contents("MERGE_MSG")
            matches = find_named_regex_match(r"Merge branch '(?P<head>.*)' into", message)
            if matches.get("head"):
                return f"{icon}{branch_icon}{matches['head']} into {ref}"
        if self.has_git_file("CHERRY_PICK_HEAD"):
            sha = self.git_file_contents("CHERRY_PICK_HEAD")
            icon = self.props.get_string("cherry_pick_icon", "\uE29B ")
            return f"{icon}{sha[:6]} onto {ref}"
        return ref

    def has_git_file(self, name: str) -> bool:
        return self.env.has_files_in_dir(self.repo.git_folder, name)

    def has_git_folder(self, name: str) -> bool:
        return self.env.has_folder(f"{self.repo.git_folder}/{name}")

    def git_file_contents(self, name: str) -> str:
        """The trimmed content of a file inside the git folder."""
        return self.env.get_file_content(f"{self.repo.git_folder}/{name}").strip(" \r\n")

    def ref_symbolic_name(self, ref_file: str) -> str:
        """The branch name of the commit stored in a ref file."""
        ref = self.git_file_contents(ref_file)
        return self.git_command_output("name-rev", "--name-only", "--exclude=tags/*", ref)

    def pretty_head_name(self) -> str:
        """The tag or short commit hash of a detached HEAD."""
        tag = self.git_command_output("describe", "--tags", "--exact-match")
        if tag:
            return f"{self.props.get_string('tag_icon', chr(0xF412))}{tag}"
        commit = self.git_command_output("rev-parse", "--short", "HEAD")
        if not commit:
            return self.props.get_string("no_commits_icon", "\uF594 ")
        return f"{self.props.get_string('commit_icon', chr(0xF417))}{commit}"

    def stash_count(self) -> int:
        """The number of stash entries."""
        content = self.git_file_contents("logs/refs/stash")
        if not content:
            return 0
        return len(content.split("\n"))