"""Drawing of sprites, tiles and text onto a pygame surface."""

from __future__ import annotations

from typing import Optional, Sequence

import pygame

from .config import TILE_HEIGHT, TILE_WIDTH, TOTAL_TILE_SPRITES
from .entity import Flip, Rect, Tile

BACKGROUND = (38, 212, 255)

_TILE_SCALE = 4
_SPRITE_W = TILE_WIDTH // _TILE_SCALE
_SPRITE_H = TILE_HEIGHT // _TILE_SCALE
_SHEET_COLUMNS = 16


def tile_clips() -> list[Rect]:
    """Clips of every sprite in the tile sheet, 16 per row."""
    return [
        Rect(
            (index % _SHEET_COLUMNS) * _SPRITE_W,
            (index // _SHEET_COLUMNS) * _SPRITE_H,
            _SPRITE_W,
            _SPRITE_H,
        )
        for index in range(TOTAL_TILE_SPRITES)
    ]


def _area(clip: Rect) -> pygame.Rect:
    return pygame.Rect(clip.x, clip.y, clip.w, clip.h)


class Renderer:
    """Draws game images onto ``surface``; ``font`` is used for text."""

    def __init__(self, surface: pygame.Surface, font: Optional[object] = None) -> None:
        self.surface = surface
        self.font = font

    def clear(self) -> None:
        self.surface.fill(BACKGROUND)

    def draw_image(
        self,
        image: pygame.Surface,
        x: float,
        y: float,
        clip: Optional[Rect] = None,
        camera: Optional[Rect] = None,
        flip: Flip = Flip.NONE,
    ) -> None:
        """Draw ``image`` (or the ``clip`` part of it) at (x, y) relative to ``camera``."""
        source = image if clip is None else image.subsurface(_area(clip))
        if flip is Flip.HORIZONTAL:
            source = pygame.transform.flip(source, True, False)
        if camera is not None:
            x -= camera.x
            y -= camera.y
        self.surface.blit(source, (int(x), int(y)))

    def draw_tile(self, image: pygame.Surface, tile: Tile, clip: Rect, camera: Rect) -> None:
        """Draw one tile, its sheet sprite scaled up to full tile size."""
        source = image.subsurface(_area(clip))
        scaled = pygame.transform.scale(source, (clip.w * _TILE_SCALE, clip.h * _TILE_SCALE))
        self.surface.blit(scaled, (int(tile.x - camera.x), int(tile.y - camera.y)))

    def draw_text(self, text: str, color: Sequence[int], x: float, y: float) -> Rect:
        """Draw ``text`` with its top-left at (x, y); return the area it covers."""
        if self.font is None:
            raise RuntimeError("no font loaded")
        rendered = self.font.render(text, False, color)
        self.surface.blit(rendered, (int(x), int(y)))
        return Rect(int(x), int(y), rendered.get_width(), rendered.get_height())