"""
Instrument Panel
Displays tank telemetry, bookmarks and the status line.
"""

import pygame
from config import (
    COLOR_PANEL_BG,
    COLOR_BORDER,
    COLOR_TEXT,
    COLOR_LABEL,
    COLOR_BOOKMARK,
    COLOR_GREEN,
    COLOR_RED,
    COLOR_WAYPOINT,
    FONT_TITLE_SIZE,
    FONT_LABEL_SIZE,
    FONT_VALUE_SIZE,
    FONT_SMALL_SIZE,
    FONT_FAMILY,
    INSTRUMENT_PANEL_PADDING,
    INSTRUMENT_LINE_SPACING,
    INSTRUMENT_SECTION_SPACING,
)


class InstrumentPanel:
    """
    Renders the side panel showing tank state and bookmarks.
    """

    def __init__(self, x, y, width, height):
        """
        Initialize instrument panel.

        Args:
            x, y: Top-left position in pixels
            width, height: Panel dimensions in pixels
        """
        self.x = x
        self.y = y
        self.width = width
        self.height = height

        # Load fonts
        self.font_title = pygame.font.SysFont(FONT_FAMILY, FONT_TITLE_SIZE, bold=True)
        self.font_label = pygame.font.SysFont(FONT_FAMILY, FONT_LABEL_SIZE)
        self.font_value = pygame.font.SysFont(FONT_FAMILY, FONT_VALUE_SIZE, bold=True)
        self.font_small = pygame.font.SysFont(FONT_FAMILY, FONT_SMALL_SIZE)

    def render(self, surface, tank, bookmarks, controls):
        """
        Render all instrument panels.

        Args:
            surface: Pygame surface
            tank: Tank instance
            bookmarks: BookmarkList instance
            controls: ControlHandler instance (pause state, status line)
        """
        bg_rect = pygame.Rect(self.x, self.y, self.width, self.height)
        pygame.draw.rect(surface, COLOR_PANEL_BG, bg_rect)
        pygame.draw.rect(surface, COLOR_BORDER, bg_rect, 2)

        y_pos = self.y + INSTRUMENT_PANEL_PADDING

        title = self.font_title.render(f"> {tank.name}", True, tank.color)
        surface.blit(title, (self.x + INSTRUMENT_PANEL_PADDING, y_pos))

        if controls.paused:
            pause_text = self.font_title.render("|| PAUSED", True, COLOR_RED)
            surface.blit(pause_text, (self.x + self.width - pause_text.get_width() - 10, y_pos))

        y_pos += INSTRUMENT_SECTION_SPACING

        y_pos = self._render_position_panel(surface, y_pos, tank)
        y_pos = self._render_waypoint_panel(surface, y_pos, tank)
        y_pos = self._render_bookmark_panel(surface, y_pos, bookmarks)

        self._render_status(surface, controls.status)

    def _render_row(self, surface, x, y_pos, label, value, color=COLOR_TEXT):
        surface.blit(self.font_label.render(label, True, COLOR_LABEL), (x, y_pos))
        surface.blit(self.font_value.render(value, True, color), (x + 90, y_pos - 2))
        return y_pos + INSTRUMENT_LINE_SPACING + 2

    def _render_position_panel(self, surface, y_pos, tank):
        """Render position panel: lat, lon, heading, distance."""
        x = self.x + INSTRUMENT_PANEL_PADDING

        title = self.font_title.render("POSITION", True, COLOR_TEXT)
        surface.blit(title, (x, y_pos))
        y_pos += 25

        lat, lon = tank.current_position()
        y_pos = self._render_row(surface, x, y_pos, "Lat:", f"{lat:.6f}")
        y_pos = self._render_row(surface, x, y_pos, "Lon:", f"{lon:.6f}")
        y_pos = self._render_row(surface, x, y_pos, "Hdg:", f"{tank.current_heading():.0f}°")
        y_pos = self._render_row(surface, x, y_pos, "Odo:", f"{tank.distance_m:.0f} m")

        return y_pos + 10

    def _render_waypoint_panel(self, surface, y_pos, tank):
        """Render waypoint panel: distance and bearing, or idle."""
        x = self.x + INSTRUMENT_PANEL_PADDING

        title = self.font_title.render("WAYPOINT", True, COLOR_TEXT)
        surface.blit(title, (x, y_pos))
        y_pos += 25

        distance = tank.distance_to_waypoint()
        if distance is None:
            idle = self.font_label.render(f"Idle ({tank.arrivals} reached)", True, COLOR_GREEN)
            surface.blit(idle, (x, y_pos))
            y_pos += INSTRUMENT_LINE_SPACING
        else:
            y_pos = self._render_row(surface, x, y_pos, "Dist:", f"{distance:.0f} m", COLOR_WAYPOINT)
            y_pos = self._render_row(surface, x, y_pos, "Brg:", f"{tank.bearing_to_waypoint():.0f}°",
                                     COLOR_WAYPOINT)

        return y_pos + 10

    def _render_bookmark_panel(self, surface, y_pos, bookmarks):
        """Render numbered bookmark list."""
        x = self.x + INSTRUMENT_PANEL_PADDING

        title = self.font_title.render("BOOKMARKS", True, COLOR_TEXT)
        surface.blit(title, (x, y_pos))
        y_pos += 25

        for idx, name in enumerate(bookmarks.names()):
            key = str(idx + 1) if idx < 9 else " "
            line = self.font_small.render(f"{key}  {name}", True, COLOR_BOOKMARK)
            surface.blit(line, (x, y_pos))
            y_pos += INSTRUMENT_LINE_SPACING - 4

        return y_pos + 10

    def _render_status(self, surface, status):
        """Status line pinned to the bottom of the panel."""
        if not status:
            return
        text = self.font_small.render(status[:40], True, COLOR_LABEL)
        surface.blit(text, (self.x + INSTRUMENT_PANEL_PADDING,
                            self.y + self.height - INSTRUMENT_PANEL_PADDING - text.get_height()))
