"""
Pygame Renderer
===============

Draws the sky, clouds, balloons, catcher and UI overlays with pygame.
Supports both display mode (human play) and headless RGB output.
Reads render data only; never mutates the game.
"""

from __future__ import annotations

import math
import random
from typing import Dict, Any, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from balloon_catcher.core.config_loader import GameConfig, get_config


class PygameRenderer:
    """
    Renderer for Balloon Catcher.

    Supports:
    - Vertical sky gradient with drifting clouds
    - Balloons with string, highlight, knot and bonus star
    - Tilting catcher with rim, handle, shine and catch glow
    - Score HUD and start / game over overlays
    - RGB array output for headless snapshots
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
            seed: Seed for cosmetic randomness (catch sparkles).
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config
        self._sparkle_rng = random.Random(seed)

        if not pygame.get_init():
            pygame.init()

        # Fonts
        pygame.font.init()
        self._font = pygame.font.Font(None, 28)
        self._font_large = pygame.font.Font(None, 48)
        self._font_huge = pygame.font.Font(None, 64)
        self._font_star = pygame.font.Font(None, 24)

        # Colors
        self._sky_top = (135, 206, 235)
        self._sky_bottom = (152, 251, 152)
        self._cloud_color = (255, 255, 255, 178)
        self._string_color = (102, 102, 102)
        self._knot_color = (51, 51, 51)
        self._text_color = (255, 255, 255)
        self._text_shadow = (40, 60, 90)
        self._overlay_color = (0, 0, 0, 140)

        self._background_cache: Dict[Tuple[int, int], pygame.Surface] = {}

    # ------------------------------------------------------------------
    # Entry points

    def render(self, render_data: Dict[str, Any], width: int, height: int) -> np.ndarray:
        """
        Render to RGB array.

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self.render_to_surface(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_surface(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Render the full scene onto surface, scaled from the viewport."""
        width, height = surface.get_size()
        surface.blit(self._get_background(width, height), (0, 0))

        phase = render_data["phase"]
        if phase == "playing":
            scale_x = width / max(1.0, render_data["viewport_width"])
            scale_y = height / max(1.0, render_data["viewport_height"])

            if render_data["catcher"] is not None:
                self.draw_catcher(surface, render_data["catcher"], scale_x, scale_y)
            for balloon in render_data["balloons"]:
                self.draw_balloon(surface, balloon, scale_x, scale_y)
            self._draw_clouds(surface, render_data["elapsed_time"], width)

            self._draw_hud(surface, render_data)
        elif phase == "game_over":
            self._draw_game_over(surface, render_data)
        else:
            self._draw_start(surface)

    # ------------------------------------------------------------------
    # Entities

    def draw_balloon(
        self,
        surface: pygame.Surface,
        balloon: Dict[str, Any],
        scale_x: float = 1.0,
        scale_y: float = 1.0
    ) -> None:
        """Draw one balloon from its render dict."""
        cx = int(balloon["x"] * scale_x)
        cy = int(balloon["y"] * scale_y)
        radius = max(2, int(balloon["radius"] * min(scale_x, scale_y)))
        string_end = cy + radius + int(balloon["string_length"] * scale_y)

        pygame.draw.line(surface, self._string_color, (cx, cy + radius), (cx, string_end), 2)
        pygame.draw.circle(surface, balloon["color"], (cx, cy), radius)

        # Highlight
        self._blend_circle(
            surface,
            (255, 255, 255, 102),
            (cx - int(radius * 0.3), cy - int(radius * 0.3)),
            max(1, int(radius * 0.3))
        )

        if balloon["is_bonus"]:
            star = self._font_star.render("*", True, (255, 255, 255))
            surface.blit(star, star.get_rect(center=(cx, cy + 3)))

        pygame.draw.circle(surface, self._knot_color, (cx, cy + radius), 3)

    def draw_catcher(
        self,
        surface: pygame.Surface,
        catcher: Dict[str, Any],
        scale_x: float = 1.0,
        scale_y: float = 1.0
    ) -> None:
        """Draw the catcher jar, rotated by its tilt."""
        w = int(catcher["width"] * scale_x)
        h = int(catcher["height"] * scale_y)
        effect = catcher["change_effect"]
        color = catcher["color"]

        # Pad for rim overhang, handle and glow
        pad = 30
        jar = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        ox, oy = pad, pad

        if effect > 0:
            glow_radius = int(20 * effect)
            for r in range(glow_radius, 0, -4):
                alpha = int(60 * effect * (1 - r / (glow_radius + 1)))
                glow_rect = pygame.Rect(ox - r // 2, oy - r // 2, w + r, h + r)
                pygame.draw.rect(jar, (*color, alpha), glow_rect, border_radius=8)

        body_alpha = int(255 * (0.8 + 0.2 * effect)) if effect > 0 else 255
        pygame.draw.rect(jar, (*color, body_alpha), pygame.Rect(ox, oy + 10, w, h - 10))
        pygame.draw.rect(jar, (*catcher["rim_color"], body_alpha), pygame.Rect(ox - 5, oy, w + 10, 15))

        # Handle
        handle_rect = pygame.Rect(ox + w - 5, oy + 10, 30, 30)
        pygame.draw.arc(jar, color, handle_rect, -math.pi / 2, math.pi / 2, 6)

        # Shine
        self._blend_rect(jar, (255, 255, 255, 77), pygame.Rect(ox + 5, oy + 15, 15, h - 20))

        if effect > 0:
            rng = self._sparkle_rng
            for _ in range(5):
                sx = ox + int(rng.random() * w)
                sy = oy + int(rng.random() * h)
                size = 2 + int(rng.random() * 3)
                self._blend_circle(jar, (255, 255, 255, int(255 * effect)), (sx, sy), size)

        if abs(catcher["tilt"]) > 0.001:
            jar = pygame.transform.rotate(jar, -math.degrees(catcher["tilt"]))

        center = (
            int(catcher["x"] * scale_x) + w // 2,
            int(catcher["y"] * scale_y) + h // 2
        )
        surface.blit(jar, jar.get_rect(center=center))

    # ------------------------------------------------------------------
    # Scenery and UI

    def _get_background(self, width: int, height: int) -> pygame.Surface:
        """Sky gradient, cached per size."""
        key = (width, height)
        if key not in self._background_cache:
            surface = pygame.Surface((width, height))
            for y in range(height):
                t = y / max(1, height)
                c = tuple(
                    int(top * (1 - t) + bottom * t)
                    for top, bottom in zip(self._sky_top, self._sky_bottom)
                )
                pygame.draw.line(surface, c, (0, y), (width, y))
            self._background_cache[key] = surface
        return self._background_cache[key]

    def _draw_clouds(self, surface: pygame.Surface, elapsed: float, width: int) -> None:
        t = elapsed * 0.5
        self._draw_cloud(surface, 50 + math.sin(t) * 20, 80, 40)
        self._draw_cloud(surface, width - 100 + math.cos(t * 0.7) * 15, 120, 35)
        self._draw_cloud(surface, width * 0.3 + math.sin(t * 0.5) * 25, 60, 30)

    def _draw_cloud(self, surface: pygame.Surface, x: float, y: float, size: float) -> None:
        puffs = [
            (x, y, size),
            (x + size * 0.6, y, size * 0.8),
            (x - size * 0.6, y, size * 0.8),
            (x, y - size * 0.5, size * 0.7),
        ]
        for px, py, r in puffs:
            self._blend_circle(surface, self._cloud_color, (int(px), int(py)), int(r))

    # ------------------------------------------------------------------
    # Translucency

    @staticmethod
    def _blend_circle(surface: pygame.Surface, rgba, center: Tuple[int, int], radius: int) -> None:
        """
        Alpha-blend a translucent circle onto surface.

        pygame.draw writes RGBA values straight into per-pixel-alpha
        surfaces, so translucent shapes go through their own layer and a blit.
        """
        if radius <= 0:
            return
        layer = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(layer, rgba, (radius, radius), radius)
        surface.blit(layer, (center[0] - radius, center[1] - radius))

    @staticmethod
    def _blend_rect(surface: pygame.Surface, rgba, rect: pygame.Rect) -> None:
        """Alpha-blend a translucent rectangle onto surface."""
        if rect.width <= 0 or rect.height <= 0:
            return
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        layer.fill(rgba)
        surface.blit(layer, rect.topleft)

    def _blit_text(self, surface, text, font, center, color=None) -> None:
        """Centered text with a drop shadow."""
        color = color or self._text_color
        shadow = font.render(text, True, self._text_shadow)
        surface.blit(shadow, shadow.get_rect(center=(center[0] + 2, center[1] + 2)))
        rendered = font.render(text, True, color)
        surface.blit(rendered, rendered.get_rect(center=center))

    def _draw_hud(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        score_text = f"Score: {render_data['score']}"
        shadow = self._font_large.render(score_text, True, self._text_shadow)
        surface.blit(shadow, (22, 22))
        surface.blit(self._font_large.render(score_text, True, self._text_color), (20, 20))

    def _draw_overlay(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill(self._overlay_color)
        surface.blit(overlay, (0, 0))

    def _draw_start(self, surface: pygame.Surface) -> None:
        width, height = surface.get_size()
        self._draw_overlay(surface)
        cx = width // 2
        self._blit_text(surface, "Balloon Catcher", self._font_huge, (cx, height // 3))
        self._blit_text(surface, "Move the jar to catch falling balloons", self._font, (cx, height // 2))
        self._blit_text(surface, "Gold balloons are worth 5 points", self._font, (cx, height // 2 + 34))
        self._blit_text(surface, "Click or press Space to start", self._font, (cx, height // 2 + 90))

    def _draw_game_over(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        width, height = surface.get_size()
        self._draw_overlay(surface)
        cx = width // 2
        self._blit_text(surface, "Game Over", self._font_huge, (cx, height // 3))
        self._blit_text(surface, f"Final Score: {render_data['final_score']}", self._font_large, (cx, height // 2))
        self._blit_text(surface, render_data["final_message"], self._font, (cx, height // 2 + 50))
        self._blit_text(surface, "R / Click: play again    Q: quit", self._font, (cx, height // 2 + 110))

    def close(self) -> None:
        """Clean up cached surfaces."""
        self._background_cache.clear()
