"""
Paris Scene Simulator - Main Entry Point
Integrates all components and runs the main loop.
"""

import argparse
import json
import sys

import pygame

# Import configuration
from config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    MAP_WIDTH,
    MAP_HEIGHT,
    INSTRUMENT_WIDTH,
    FPS,
    TICK_INTERVAL,
    BREADCRUMB_INTERVAL,
    BASEMAP_PATH,
    HEADING_BLEND_MODE,
    HEADING_BLEND_MODES,
    TANK_START_LAT,
    TANK_START_LON,
    TANK_START_HEADING,
    TANK_NAME,
    SHOW_FPS,
    COLOR_GROUND,
    COLOR_WHITE
)

# Import core components
from core.bookmarks import BookmarkList
from core.tank import Tank

# Import data providers
from data.basemap import BasemapProvider

# Import UI components
from ui.map_view import MapView
from ui.instruments import InstrumentPanel
from ui.controls import ControlHandler

# Ticks between breadcrumb samples
BREADCRUMB_TICKS = max(1, round(BREADCRUMB_INTERVAL / TICK_INTERVAL))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Drive a tank across Paris toward double-clicked waypoints.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Interactive map window
    python main.py

    # Run 200 ticks without a display toward a waypoint
    python main.py --headless --ticks 200 --waypoint 48.8695 2.31
        """
    )

    parser.add_argument(
        '--headless',
        action='store_true',
        help='Run the stepper without opening a window'
    )

    parser.add_argument(
        '--ticks',
        type=int,
        default=100,
        help='Number of ticks to run in headless mode (default: 100)'
    )

    parser.add_argument(
        '--waypoint',
        type=float,
        nargs=2,
        metavar=('LAT', 'LON'),
        help='Initial waypoint for the tank'
    )

    parser.add_argument(
        '--heading-blend',
        choices=HEADING_BLEND_MODES,
        default=HEADING_BLEND_MODE,
        help=f'Heading smoothing mode (default: {HEADING_BLEND_MODE})'
    )

    parser.add_argument(
        '--basemap',
        default=BASEMAP_PATH,
        help=f'GeoJSON basemap file (default: {BASEMAP_PATH})'
    )

    return parser.parse_args(argv)


def create_tank(args):
    """Spawn the tank at its start position and apply the initial waypoint."""
    tank = Tank(TANK_START_LAT, TANK_START_LON, TANK_START_HEADING,
                name=TANK_NAME, blend_mode=args.heading_blend)
    if args.waypoint:
        tank.set_waypoint(args.waypoint[0], args.waypoint[1])
    return tank


def tick(tank):
    """One scheduler tick: step the tank and sample the breadcrumb trail."""
    tank.step()
    if tank.ticks % BREADCRUMB_TICKS != 0:
        return

    # Idle tank: no duplicate trail points
    if tank.breadcrumbs and tank.breadcrumbs[-1] == tank.current_position():
        return
    tank.add_breadcrumb()


def run_headless(tank, ticks):
    """
    Step the tank a fixed number of ticks and print its final state.

    Returns:
        Process exit code
    """
    for _ in range(ticks):
        tick(tank)

    state = tank.get_state_dict()
    state['breadcrumbs'] = len(tank.breadcrumbs)
    print(json.dumps(state, indent=2))
    return 0


def run_interactive(tank, args):
    """Open the map window and run the main loop until quit."""
    # Initialize Pygame
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    pygame.display.set_caption("Paris Scene Simulator")
    clock = pygame.time.Clock()

    # Create data providers
    print("\nInitializing data providers...")
    basemap = BasemapProvider(args.basemap)
    bookmarks = BookmarkList()

    # Create UI components
    print("Initializing UI...")
    map_view = MapView(MAP_WIDTH, MAP_HEIGHT, basemap)
    map_view.center_on(*tank.current_position())
    instruments = InstrumentPanel(MAP_WIDTH, 0, INSTRUMENT_WIDTH, SCREEN_HEIGHT)
    controls = ControlHandler(tank, map_view, bookmarks)
    fps_font = pygame.font.SysFont('monospace', 14)

    # Simulation state
    accumulator = 0.0

    print("\n" + "=" * 60)
    print("Simulation ready! Double-click the map to send the tank.")
    print("Press H for help, ESC to quit.")
    print("=" * 60 + "\n")

    running = True
    while running:
        frame_time = clock.tick(FPS) / 1000.0  # Convert ms to seconds

        # ===== EVENT HANDLING =====
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            result = controls.handle_event(event)
            if result == 'quit':
                running = False

        # ===== STEPPER (Fixed Time Step) =====
        if not controls.paused:
            accumulator += frame_time

            while accumulator >= TICK_INTERVAL:
                tick(tank)
                accumulator -= TICK_INTERVAL

        if controls.follow_tank:
            map_view.center_on(*tank.current_position())

        # ===== RENDERING =====
        map_surface = pygame.Surface((MAP_WIDTH, MAP_HEIGHT))
        map_surface.fill(COLOR_GROUND)

        map_view.render_basemap(map_surface)
        map_view.render_bookmarks(map_surface, bookmarks)
        map_view.render_breadcrumbs(map_surface, tank)
        map_view.render_waypoint(map_surface, tank)
        map_view.render_view_cone(map_surface, tank)
        map_view.render_tank(map_surface, tank)

        screen.blit(map_surface, (0, 0))

        instruments.render(screen, tank, bookmarks, controls)

        if SHOW_FPS:
            fps_text = fps_font.render(f"FPS: {int(clock.get_fps())}", True, COLOR_WHITE)
            screen.blit(fps_text, (10, 10))

        pygame.display.flip()

    # ===== CLEANUP =====
    print("\nShutting down...")
    pygame.quit()
    print("Simulator closed")
    return 0


def main(argv=None):
    """Simulator entry point."""
    args = parse_args(argv)

    print("=" * 60)
    print("Paris Scene Simulator")
    print("=" * 60)

    tank = create_tank(args)

    if args.headless:
        return run_headless(tank, args.ticks)
    return run_interactive(tank, args)


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        pygame.quit()
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ Fatal error: {e}")
        import traceback
        traceback.print_exc()
        pygame.quit()
        sys.exit(1)
