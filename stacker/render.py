import numpy as np
import pygame

from stacker.config import COLOR_BG, COLOR_GAME_OVER, COLOR_OUTLINE, COLOR_TEXT
from stacker.core import Phase


def block_rect(block):
    return pygame.Rect(round(block.x), round(block.y), round(block.width), round(block.height))


def draw_block(surface, block):
    rect = block_rect(block)
    pygame.draw.rect(surface, block.color, rect)
    pygame.draw.rect(surface, COLOR_OUTLINE, rect, 2)


def draw(surface, state, font=None):
    """Paint background, then the tower bottom to top, then the moving block."""
    surface.fill(COLOR_BG)
    for block in state.stacked:
        draw_block(surface, block)
    if state.moving is not None:
        draw_block(surface, state.moving)
    if font is not None:
        draw_hud(surface, state, font)
        draw_overlay(surface, state, font)


def draw_hud(surface, state, font):
    score_text = font.render(f"Score: {state.score}", True, COLOR_TEXT)
    surface.blit(score_text, (10, 10))


def draw_overlay(surface, state, font):
    if state.phase is Phase.IDLE:
        _draw_center_text(surface, font, "Press ENTER to start", COLOR_TEXT)
    elif state.phase is Phase.GAME_OVER:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        surface.blit(overlay, (0, 0))
        _draw_center_text(surface, font, "GAME OVER", COLOR_GAME_OVER, dy=-20)
        _draw_center_text(surface, font, f"Final score: {state.score}", COLOR_TEXT, dy=20)


def _draw_center_text(surface, font, text, color, dy=0):
    surf = font.render(text, True, color)
    center = surface.get_rect().center
    rect = surf.get_rect(center=(center[0], center[1] + dy))
    surface.blit(surf, rect)


def render_array(surface):
    arr = pygame.surfarray.array3d(surface)
    return np.transpose(arr, (1, 0, 2)).astype(np.uint8)
