# vibecast

vibecast is an internet radio player that runs in the terminal and plays SomaFM
stations. It does these things:

- lists every station
- plays the station you pick through `mpv`
- shows the current song and the songs played before it
- draws the station artwork with half-block characters
- animates a visualizer that follows how loud the stream is

## Requirements

- Python 3.10 or later.
- `mpv` on your `PATH`. vibecast starts it once for each stream and controls it over its JSON IPC socket.
- A terminal that curses can drive. With 256 colours, themes are shown in colour. With fewer colours, the screen is drawn without colour.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running

```
vibecast
```

The station list loads when vibecast starts and the first station is selected. Move to a station and press Enter to start listening.

`vibecast --help` prints the usage. There are no other command-line options.

If something goes wrong, vibecast restores the terminal and prints `Error: …` to standard error. For example, this happens when the station list cannot be fetched.

## Keys

| Key                | Action                          |
|--------------------|---------------------------------|
| `p` / Space        | Play / pause                    |
| Enter              | Play the selected station       |
| `q` / Esc / Ctrl-C | Quit                            |
| `j` / Down         | Move down (wraps around)        |
| `k` / Up           | Move up (wraps around)          |
| `g` / `G`          | Go to top / bottom              |
| `+` / `=`          | Volume up by 5                  |
| `-` / `_`          | Volume down by 5                |
| `m`                | Mute / unmute                   |
| `f`                | Toggle favourite                |
| `s`                | Cycle sort mode                 |
| `R`                | Refresh the station list        |
| `v`                | Cycle visualization style       |
| `V`                | Show / hide the visualizer      |
| `a`                | Toggle artwork                  |
| `r`                | Toggle recently played          |
| `t`                | Cycle colour theme              |
| `<` / `,`          | Lower audio quality             |
| `>` / `.`          | Higher audio quality            |
| `?`                | Show help                       |

While the help overlay is open, any key closes it.

## Sort modes

Pressing `s` cycles through three orders. The first one is the default.

1. Favourites first, then by listener count.
2. Alphabetical by title.
3. By listener count only.

## Audio quality

Streams come in three levels. They are shown as `HQ`, `MQ` and `LQ` next to the station name, and the default is `HQ`.

At the chosen level, an AAC stream is preferred over MP3, and MP3 is preferred over any other format. If a station has no stream at that level, its best stream is used. If you change quality while playing, the stream restarts at the new level.

## Themes and visualizations

- Themes: Synthwave, Ocean, Forest, Sunset, Mono and Cyberpunk. Cyberpunk is the default.
- Visualizations: Spirograph, Pulse, Wave, Bounce, Stars, Heart, Spiral and Rain. Spiral is the default.

The theme and visualization you last chose are saved and used again on the next run.

## Files

Settings are stored in your user configuration directory, which comes from `platformdirs`:

- `config.json` holds the theme and visualization you last chose.
- `favorites.json` holds the ids of your favourite stations.

If either file is missing or malformed, the defaults are used.

Station artwork is cached in your user cache directory as `artwork/<station-id>.png`. Each image is downloaded only once.

## What it does not do

- vibecast does not decode audio itself. Playback always goes through an external `mpv` process.
- The visualizer does not show a frequency spectrum. Every bar follows one overall loudness level. vibecast reads that level from mpv's `astats` filter.
- If mpv does not report that level, vibecast computes a stand-in level from the playback position. In that case the animation does not follow the music.
- Nothing can be configured on the command line. Preferences can only be changed from inside the interface.

## Using it as a library

You can use the pieces behind the player on their own.

This example lists the stations and the stream each would play:

```python
from vibecast.api import AudioQuality, SomaFmClient

client = SomaFmClient()
for channel in client.get_channels():
    print(channel.title, channel.format_listeners(), channel.stream_url(AudioQuality.HIGHEST))
```

This example shows the most recent song on a station:

```python
song = client.get_current_song("groovesalad")
if song is not None:
    print(song.artist, "-", song.title)
```

`vibecast.player.MpvController` starts and controls mpv. It is a context manager, so the process is stopped when the block ends:

```python
from vibecast.player import MpvController

with MpvController() as player:
    player.play(url)
    player.volume_down()
    print(player.get_metadata())
```

Player failures raise `vibecast.player.MpvError`.