"""Segments that show the song a music player is playing."""

from __future__ import annotations

import json
from enum import Enum

from promptline.base import CommandError, Environment, Properties, Segment


class PlayStatus(str, Enum):
    """The state of a music player."""

    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


def _now_playing(props: Properties, status: str, artist: str, track: str) -> str:
    if status == PlayStatus.STOPPED:
        # no artist or track when stopped
        return props.get_string("stopped_icon", "\uF04D ")
    icon = ""
    if status == PlayStatus.PAUSED:
        icon = props.get_string("paused_icon", "\uF8E3 ")
    elif status == PlayStatus.PLAYING:
        icon = props.get_string("playing_icon", "\uE602 ")
    separator = props.get_string("track_separator", " - ")
    return f"{icon}{artist}{separator}{track}"


_WINDOW_TITLE_PATTERN = r"^(Spotify.*)|(.*\s-\s.*)$"


class Spotify(Segment):
    """Writes the artist and track Spotify is playing."""

    def __init__(self, props: Properties, env: Environment) -> None:
        super().__init__(props, env)
        self.status = ""
        self.artist = ""
        self.track = ""

    def render(self) -> str:
        return _now_playing(self.props, self.status, self.artist, self.track)

    def enabled(self) -> bool:
        goos = self.env.runtime_goos()
        if goos == "darwin":
            return self._enabled_darwin()
        if goos == "windows":
            return self._enabled_windows()
        return False

    def _apple_script(self, command: str) -> str:
        try:
            return self.env.run_command("osascript", "-e", command)
        except CommandError:
            return ""

    def _enabled_darwin(self) -> bool:
        running = self._apple_script('application "Spotify" is running')
        if running in ("false", ""):
            return False
        self.status = self._apple_script('tell application "Spotify" to player state as string')
        if self.status == PlayStatus.STOPPED:
            return False
        self.artist = self._apple_script('tell application "Spotify" to artist of current track as string')
        self.track = self._apple_script('tell application "Spotify" to name of current track as string')
        return True

    def _enabled_windows(self) -> bool:
        # the title is "Spotify ..." when idle, "Artist - Track" when playing
        try:
            title = self.env.window_title("spotify.exe", _WINDOW_TITLE_PATTERN)
        except LookupError:
            return False
        if " - " not in title:
            self.status = PlayStatus.STOPPED.value
            return False
        artist, _, track = title.partition(" - ")
        self.artist = artist
        self.track = track
        self.status = PlayStatus.PLAYING.value
        return True


class YouTubeMusic(Segment):
    """Writes the song playing in the YouTube Music desktop app."""

    def __init__(self, props: Properties, env: Environment) -> None:
        super().__init__(props, env)
        self.status = PlayStatus.PLAYING
        self.artist = ""
        self.track = ""

    def render(self) -> str:
        return _now_playing(self.props, self.status, self.artist, self.track)

    def enabled(self) -> bool:
        # no answer means the app or its remote control API is not running
        try:
            self.set_status()
        except (OSError, ValueError):
            return False
        return True

    def set_status(self) -> None:
        """Query the remote control API; raises OSError or ValueError on failure."""
        url = self.props.get_string("api_url", "http://localhost:9863")
        body = self.env.do_get(url + "/query")
        response = json.loads(body)
        if not isinstance(response, dict):
            raise ValueError("unexpected response from the player")
        player = response.get("player") or {}
        track = response.get("track") or {}
        if not isinstance(player, dict) or not isinstance(track, dict):
            raise ValueError("unexpected response from the player")
        if not player.get("hasSong", False):
            self.status = PlayStatus.STOPPED
        elif player.get("isPaused", False):
            self.status = PlayStatus.PAUSED
        else:
            self.status = PlayStatus.PLAYING
        self.artist = str(track.get("author", ""))
        self.track = str(track.get("title", ""))