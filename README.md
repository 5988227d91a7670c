# knightrun

An endless side-scrolling platformer. A knight runs across a world stitched
together from randomly chosen map pieces while the camera creeps forward,
slowly speeding up. Fall out of the level or get left behind by the camera
and the run is over. Land on a monster to defeat it and earn bonus points;
touch one any other way and you die.

## Installing

```
pip install .
```

This installs the game and its one dependency, `pygame`.

## Playing

```
knightrun
knightrun --data-dir path/to/data
```

The game loads its assets from the data directory (the current directory by
default):

- `font/Pixel-UniCode.ttf`
- `texture/knight2.png`, `texture/monster.png`, `texture/tile2.png`,
  `texture/bg.jpg`, `texture/button.png`
- `texture/map.map` and `texture/map1.map` to `texture/map4.map`
- `sfx/MusicBackGround.mp3`, `sfx/Hit.wav`, `sfx/Jump.wav`,
  `sfx/Landing.wav`, `sfx/Monster.wav`

The best score is kept in `highscore.txt` in the same directory. If the
media or the maps cannot be loaded, the command prints a message and exits
with status 1.

Controls:

| Key / mouse        | Action                                   |
|--------------------|------------------------------------------|
| Left / Right       | Run                                      |
| Space              | Jump (release early for a shorter jump)  |
| Esc                | Pause / resume                           |
| M                  | Mute / unmute                            |
| Left mouse button  | Choose Play, Retry or Exit on the menus  |

## Scoring

The score is the furthest distance reached in tiles plus 20 points for every
monster defeated. While the knight is dead, the high score is updated and
written to `highscore.txt`.

## Using the pieces

The game logic does not need a window and can be driven directly:

- `knightrun.game.Game` holds the levels, player, monsters, menu and score;
  `create_levels()` builds the world and `step(play_sound)` advances it one
  frame, calling `play_sound` with a sound name such as `"jump"`.
- `knightrun.config.default_maps(base_dir)` lists the built-in maps and
  their monster start tiles.
- `knightrun.level.Level` is one grid of tiles; `knightrun.physics` has
  `check_collision`, `touches_wall` and `probe_ground`.
- `knightrun.timer.Timer` is a pausable millisecond stopwatch.
- `knightrun.game.load_high_score` and `save_high_score` read and write the
  score file.

## Map files

A map piece is a plain text file of 336 whitespace-separated tile numbers
(16 rows of 21 columns). Numbers from 0 to 48 are solid ground; anything up
to 255 is scenery the knight can pass through.
`knightrun.level.read_tile_types` reads and checks such a file, raising
`knightrun.level.MapFormatError` when it is short, holds something that is
not a number, or holds an invalid tile number.

## What is not included

The package ships no images, sounds, font or map files; the `knightrun`
command needs them in its data directory.

## Running the tests

```
pip install .[test]
pytest
```