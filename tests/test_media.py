from dataclasses import dataclass, field

import pytest

from promptline.base import CommandError, Properties
from promptline.media import PlayStatus, Spotify, YouTubeMusic

RUNNING = 'application "Spotify" is running'
STATE = 'tell application "Spotify" to player state as string'
ARTIST = 'tell application "Spotify" to artist of current track as string'
TRACK = 'tell application "Spotify" to name of current track as string'


@dataclass
class FakeEnv:
    goos: str = "linux"
    scripts: dict = field(default_factory=dict)
    running_error: bool = False
    title: str = ""
    title_error: bool = False
    body: bytes = b""
    get_error: bool = False
    requested: list = field(default_factory=list)

    def runtime_goos(self):
        return self.goos

    def run_command(self, command, *args):
        assert command == "osascript"
        assert args[0] == "-e"
        if args[1] == RUNNING and self.running_error:
            raise CommandError("failed", 1)
        return self.scripts.get(args[1], "")

    def window_title(self, image_name, title_regex):
        assert image_name == "spotify.exe"
        if self.title_error:
            raise LookupError("")
        return self.title

    def do_get(self, url):
        self.requested.append(url)
        if self.get_error:
            raise OSError("Oh noes")
        return self.body


def spotify(artist="", track="", status="", env=None):
    s = Spotify(Properties(), env or FakeEnv())
    s.artist, s.track, s.status = artist, track, status
    return s


def test_spotify_string_playing():
    assert spotify("Candlemass", "Spellbreaker", "playing").render() == "\ue602 Candlemass - Spellbreaker"


def test_spotify_string_paused():
    assert spotify("Candlemass", "Spellbreaker", "paused").render() == "\uF8E3 Candlemass - Spellbreaker"


def test_spotify_string_stopped():
    assert spotify("Candlemass", "Spellbreaker", "stopped").render() == "\uf04d "


def darwin(running, status="", artist="", track="", running_error=False):
    env = FakeEnv(
        goos="darwin",
        scripts={RUNNING: running, STATE: status, ARTIST: artist, TRACK: track},
        running_error=running_error,
    )
    return Spotify(Properties(), env)


def test_spotify_darwin_not_running():
    assert darwin("false").enabled() is False


def test_spotify_darwin_running_error():
    assert darwin("true", running_error=True).enabled() is False


def test_spotify_darwin_playing():
    s = darwin("true", "playing", "Candlemass", "Spellbreaker")
    assert s.enabled() is True
    assert s.render() == "\ue602 Candlemass - Spellbreaker"


def test_spotify_darwin_paused():
    s = darwin("true", "paused", "Candlemass", "Spellbreaker")
    assert s.enabled() is True
    assert s.render() == "\uF8E3 Candlemass - Spellbreaker"


def test_spotify_darwin_stopped():
    assert darwin("true", "stopped").enabled() is False


def windows(title="", title_error=False):
    return Spotify(Properties(), FakeEnv(goos="windows", title=title, title_error=title_error))


def test_spotify_windows_not_running():
    assert windows(title_error=True).enabled() is False


def test_spotify_windows_playing():
    s = windows("Candlemass - Spellbreaker")
    assert s.enabled() is True
    assert s.render() == "\ue602 Candlemass - Spellbreaker"


def test_spotify_windows_stopped():
    s = windows("Spotify premium")
    assert s.enabled() is False
    assert s.status == PlayStatus.STOPPED


def test_spotify_windows_track_with_dash():
    s = windows("Artist - Song - Live")
    assert s.enabled() is True
    assert s.artist == "Artist"
    assert s.track == "Song - Live"


def test_spotify_other_platforms_disabled():
    assert Spotify(Properties(), FakeEnv(goos="linux")).enabled() is False


def ytm(artist="Candlemass", track="Spellbreaker", status=PlayStatus.PLAYING):
    y = YouTubeMusic(Properties(), FakeEnv())
    y.artist, y.track, y.status = artist, track, status
    return y


def test_ytm_string_playing():
    assert ytm().render() == "\ue602 Candlemass - Spellbreaker"


def test_ytm_string_paused():
    assert ytm(status=PlayStatus.PAUSED).render() == "\uF8E3 Candlemass - Spellbreaker"


def test_ytm_string_stopped():
    assert ytm(status=PlayStatus.STOPPED).render() == "\uf04d "


def bootstrap(body, error=False):
    env = FakeEnv(body=body.encode(), get_error=error)
    props = Properties(values={"api_url": "http://localhost:1337"})
    return YouTubeMusic(props, env), env


def test_ytmda_playing():
    y, env = bootstrap('{ "player": { "hasSong": true, "isPaused": false }, '
                       '"track": { "author": "Candlemass", "title": "Spellbreaker" } }')
    y.set_status()
    assert env.requested == ["http://localhost:1337/query"]
    assert y.status is PlayStatus.PLAYING
    assert y.artist == "Candlemass"
    assert y.track == "Spellbreaker"


def test_ytmda_paused():
    y, _ = bootstrap('{ "player": { "hasSong": true, "isPaused": true }, '
                     '"track": { "author": "Candlemass", "title": "Spellbreaker" } }')
    y.set_status()
    assert y.status is PlayStatus.PAUSED
    assert y.artist == "Candlemass"
    assert y.track == "Spellbreaker"


def test_ytmda_stopped():
    y, _ = bootstrap('{ "player": { "hasSong": false }, "track": { "author": "", "title": "" } }')
    y.set_status()
    assert y.status is PlayStatus.STOPPED
    assert y.artist == ""
    assert y.track == ""


def test_ytmda_error():
    y, _ = bootstrap('{ "player": { "hasSong": false }, "track": { "author": "", "title": "" } }', error=True)
    assert y.enabled() is False


def test_ytmda_invalid_json_raises():
    y, _ = bootstrap("not json")
    with pytest.raises(ValueError):
        y.set_status()


def test_ytmda_invalid_json_disables():
    y, _ = bootstrap("[1, 2]")
    assert y.enabled() is False