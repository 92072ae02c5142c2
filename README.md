# promptline

Building blocks for a shell prompt. Each segment decides whether it should
be shown (`enabled()`) and what text it contributes (`render()`).

## Installation

```
pip install .
```

The test dependencies are available through the `test` extra:

```
pip install ".[test]"
```

## Segments

| Module                        | Segments                                                 |
|-------------------------------|----------------------------------------------------------|
| `promptline.base`             | `Text`, `Shell`, `Root`, `Clock`, `Kubectl`, `Terraform` |
| `promptline.operating_system` | `OsInfo`                                                 |
| `promptline.git`              | `Git`                                                    |
| `promptline.path`             | `PathSegment`                                            |
| `promptline.session`          | `Session`                                                |
| `promptline.media`            | `Spotify`, `YouTubeMusic`                                |

Every segment derives from `promptline.base.Segment` and is built from a
`Properties` object (the segment's settings plus its `foreground` and
`background` colours) and an `Environment`. `Environment` is a protocol:
you supply an object that answers questions about the surroundings, such as
the working directory, environment variables, which commands exist, file
contents, running a command or doing an HTTP GET. Failing commands are
reported by raising `CommandError`, which carries an `exit_code`.

```python
from promptline.base import Properties, Text

segment = Text(Properties(values={"text": "hello"}), env)
if segment.enabled():
    print(segment.render())  # hello
```

## Properties

`Properties` offers typed lookups that fall back to a default when the key
is missing or holds a value of the wrong type:

- `get_string(key, default)`
- `get_bool(key, default)`
- `get_color(key, default)` – an empty string also falls back to the default
- `get_key_value_map(key, default)`

Segments render text that may carry colour markup of the form
`<#rrggbb>text</>`; turning that into terminal escape sequences is left to
whatever composes the prompt.

## Segments in brief

- `Text` – the `text` property.
- `Shell` – the shell name reported by the environment.
- `Root` – `root_icon`, shown only when running with elevated rights.
- `Clock` – the current time, laid out by `time_format` (default
  `15:04:05`) written as the reference time `Mon Jan 2 15:04:05 MST 2006`.
  The formatter is available on its own as
  `promptline.base.format_reference_time(moment, layout)`.
- `Kubectl` – the current kubectl context; hidden when there is none.
- `Terraform` – the workspace, shown when `terraform` is available and a
  `.terraform` folder exists.
- `OsInfo` – an icon for Windows, macOS or the Linux distribution, with a
  `wsl` prefix under WSL.
- `Git` – branch, tag or commit; an ongoing rebase, merge or cherry-pick;
  how far ahead or behind the upstream the branch is; staged and working
  changes; optionally the stash count (`display_stash_count`) and an icon
  for the upstream host (`display_upstream_icon`). With
  `status_colors_enabled` the segment colour follows the repository state.
  The helpers `parse_git_stats(lines, working)` and
  `parse_branch_info(line)` read `git status --short --branch` output.
- `PathSegment` – the working directory in the style `agnoster` (default),
  `agnoster_full`, `agnoster_short`, `full`, `short` or `folder`; known
  locations (the home directory, registry hives, or any given in
  `mapped_locations`) are replaced by icons. `base_name(path, separator)`
  gives the last element of a path.
- `Session` – `user@host`, with `ssh_icon` during an SSH session; can hide
  the default user (`display_default_user`, `default_user_name`).
- `Spotify` – the playing track on macOS (through AppleScript commands run
  by the environment) or Windows (from the player's window title); disabled
  elsewhere.
- `YouTubeMusic` – the playing track from the desktop app's remote control
  API at `api_url` (default `http://localhost:9863`).

## What this package does not do

There is no command to run, no configuration file loader and no prompt
renderer that lays segments out with separators and colours: the package
gives you the segments, and composing them is up to the caller. It also has
no segments that report the version of a programming language toolchain.