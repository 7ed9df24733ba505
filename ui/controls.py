"""
Controls Handler
Processes keyboard and mouse input for simulator control.
"""

import math

import pygame

from core.bookmarks import BookmarkError
from core.events import ClickKind, PickEvent, dispatch
from config import CLICK_MOVE_TOLERANCE_PX, DOUBLE_CLICK_MS

BUTTON_PRIMARY = 1
BUTTON_SECONDARY = 3


class ClickTracker:
    """
    Turns raw button press/release pairs into ClickKind values.

    A release far from its press is a drag, not a click. Two primary clicks
    close in time and space make a double click.
    """

    def __init__(self, double_click_ms=DOUBLE_CLICK_MS, tolerance_px=CLICK_MOVE_TOLERANCE_PX):
        self.double_click_ms = double_click_ms
        self.tolerance_px = tolerance_px
        self._press_pos = {}  # button -> (x, y)
        self._last_click = None  # (time_ms, pos) of previous single click

    def _near(self, pos1, pos2):
        return math.hypot(pos1[0] - pos2[0], pos1[1] - pos2[1]) <= self.tolerance_px

    def press(self, button, pos):
        self._press_pos[button] = pos

    def is_dragging(self, button, pos):
        """True if the button is held and the pointer left the press position."""
        press_pos = self._press_pos.get(button)
        return press_pos is not None and not self._near(press_pos, pos)

    def release(self, button, pos, time_ms):
        """
        Classify a button release.

        Args:
            button: Pygame mouse button number
            pos: (x, y) release position
            time_ms: Release time in milliseconds

        Returns:
            ClickKind, or None for drags and buttons that are not picks
        """
        press_pos = self._press_pos.pop(button, None)
        if press_pos is None:
            return None

        if not self._near(press_pos, pos):
            self._last_click = None
            return None

        if button == BUTTON_SECONDARY:
            return ClickKind.SECONDARY

        if button != BUTTON_PRIMARY:
            return None

        if self._last_click is not None:
            last_time, last_pos = self._last_click
            if time_ms - last_time <= self.double_click_ms and self._near(last_pos, pos):
                self._last_click = None
                return ClickKind.DOUBLE

        self._last_click = (time_ms, pos)
        return ClickKind.SINGLE


class ControlHandler:
    """
    Handles user input and maintains control state.
    """

    def __init__(self, tank, map_view, bookmarks):
        """
        Initialize control handler.

        Args:
            tank: Tank instance
            map_view: MapView instance
            bookmarks: BookmarkList instance
        """
        self.tank = tank
        self.map_view = map_view
        self.bookmarks = bookmarks

        # Simulation state
        self.paused = False
        self.follow_tank = True

        # Mouse state
        self.clicks = ClickTracker()
        self.last_mouse_pos = None

        # Bookmark name entry
        self.entering_name = False
        self.name_input = ""

        self.status = "Double-click to send the tank, right-click to cancel"

    def handle_event(self, event):
        """
        Process pygame event.

        Args:
            event: Pygame event object

        Returns:
            'quit' if user wants to quit, None otherwise
        """
        if event.type == pygame.KEYDOWN:
            if self.entering_name:
                self._handle_name_key(event)
                return None
            return self._handle_key(event)

        if event.type == pygame.MOUSEBUTTONDOWN:
            if not self.map_view.contains(*event.pos):
                return None

            if event.button == 4:  # Mouse wheel up - zoom in
                self.map_view.zoom_in()
            elif event.button == 5:  # Mouse wheel down - zoom out
                self.map_view.zoom_out()
            else:
                self.clicks.press(event.button, event.pos)
                self.last_mouse_pos = event.pos

        elif event.type == pygame.MOUSEBUTTONUP:
            kind = self.clicks.release(event.button, event.pos, pygame.time.get_ticks())
            self.last_mouse_pos = None
            if kind is not None:
                lat, lon = self.map_view.screen_to_latlon(event.pos[0], event.pos[1])
                self.handle_pick(PickEvent(kind, lat, lon))

        elif event.type == pygame.MOUSEMOTION:
            if self.last_mouse_pos and self.clicks.is_dragging(BUTTON_PRIMARY, event.pos):
                # Pan map
                dx = event.pos[0] - self.last_mouse_pos[0]
                dy = event.pos[1] - self.last_mouse_pos[1]
                self.map_view.pan(dx, dy)
                self.last_mouse_pos = event.pos
                self.follow_tank = False

        return None

    def handle_pick(self, event):
        """Dispatch a PickEvent to the tank and show the outcome."""
        message = dispatch(event, self.tank)
        if message:
            self.status = message

    def _handle_key(self, event):
        # ===== SIMULATION CONTROL =====
        if event.key == pygame.K_SPACE:
            self.paused = not self.paused
            status = "PAUSED" if self.paused else "RESUMED"
            print(f"Simulation {status}")
            self.status = f"Simulation {status.lower()}"

        elif event.key == pygame.K_ESCAPE:
            return 'quit'

        # ===== VIEW CONTROL =====
        elif event.key == pygame.K_c:
            self.follow_tank = not self.follow_tank
            status = "ON" if self.follow_tank else "OFF"
            print(f"Follow {self.tank.name} {status}")
            self.status = f"Follow {status}"

        elif event.key == pygame.K_LEFTBRACKET:
            self.map_view.zoom_out()
            print(f"Scale: 1:{self.map_view.current_scale():.0f}")

        elif event.key == pygame.K_RIGHTBRACKET:
            self.map_view.zoom_in()
            print(f"Scale: 1:{self.map_view.current_scale():.0f}")

        elif event.key == pygame.K_v:
            self.map_view.show_view_cone = not self.map_view.show_view_cone
            status = "ON" if self.map_view.show_view_cone else "OFF"
            print(f"Field of view {status}")

        elif event.key == pygame.K_h:
            self.status = "SPACE pause  C follow  [ ] zoom  V view  1-9 bookmark  B add"

        # ===== BOOKMARKS =====
        elif pygame.K_1 <= event.key <= pygame.K_9:
            self.goto_bookmark(event.key - pygame.K_1)

        elif event.key == pygame.K_b:
            self.entering_name = True
            self.name_input = ""
            self.status = "Bookmark name: "

        return None

    def _handle_name_key(self, event):
        if event.key == pygame.K_RETURN:
            self.entering_name = False
            self.add_bookmark(self.name_input)

        elif event.key == pygame.K_ESCAPE:
            self.entering_name = False
            self.status = "Bookmark cancelled"

        elif event.key == pygame.K_BACKSPACE:
            self.name_input = self.name_input[:-1]
            self.status = f"Bookmark name: {self.name_input}"

        else:
            char = event.unicode
            if char and char.isprintable():
                self.name_input += char
                self.status = f"Bookmark name: {self.name_input}"

    def goto_bookmark(self, index):
        """Move the camera to the bookmark at index."""
        if index >= len(self.bookmarks):
            return
        bookmark = self.bookmarks.get(index)
        self.map_view.set_viewpoint(bookmark.viewpoint)
        self.follow_tank = False
        self.status = bookmark.name
        print(f"Bookmark: {bookmark.name}")

    def add_bookmark(self, name):
        """
        Bookmark the current camera under the given name.

        Returns:
            True if added, False if the name was rejected
        """
        try:
            bookmark = self.bookmarks.add(name, self.map_view.current_viewpoint())
        except BookmarkError as e:
            print(f"Warning: {e}")
            self.status = str(e)
            return False

        print(f"Bookmark added: {bookmark.name}")
        self.status = f"Bookmark added: {bookmark.name}"
        return True
