"""
Paris Scene Simulator - Configuration
All constants and settings for the simulator.
"""

# ==================== Screen Dimensions ====================
SCREEN_WIDTH = 1200
SCREEN_HEIGHT = 800
MAP_WIDTH = 900
MAP_HEIGHT = 800
INSTRUMENT_WIDTH = 300
FPS = 60

# ==================== Motion Constants ====================
TICK_INTERVAL = 0.1  # seconds - one stepper tick every 100ms
STEP_DISTANCE_M = 1.0  # meters moved per tick
HEADING_BLEND_DIVISOR = 10  # heading closes 1/N of the gap each tick
ARRIVAL_THRESHOLD_M = 5.0  # meters - waypoint reached at or below this

# 'shortest' turns the short way round; 'naive' keeps plain bearing - heading
HEADING_BLEND_MODES = ('shortest', 'naive')
HEADING_BLEND_MODE = 'shortest'

# ==================== Geodesy ====================
METERS_PER_DEGREE_LAT = 111000  # meters per degree latitude (projection only)

# ==================== Tank ====================
TANK_START_LAT = 48.869094
TANK_START_LON = 2.309664
TANK_START_HEADING = -60.0  # normalized to 300 at spawn
TANK_NAME = "Tank"

# Field of view wedge drawn in front of the tank (outline only)
VIEW_HEADING_OFFSET = 0.0  # degrees relative to tank heading
VIEW_HORIZONTAL_ANGLE = 90.0  # degrees
VIEW_MAX_DISTANCE_M = 250.0
VIEW_ARC_SEGMENTS = 24

# ==================== Colors (RGB tuples) ====================
COLOR_GROUND = (34, 38, 30)  # Dark olive
COLOR_FEATURE = (120, 120, 110)  # Buildings / streets
COLOR_FEATURE_OUTLINE = (160, 160, 150)
COLOR_TANK = (90, 140, 60)  # Army green
COLOR_TRACK = (100, 150, 255)  # Light blue
COLOR_WAYPOINT = (255, 255, 0)  # Yellow
COLOR_VIEW_CONE = (255, 140, 0)  # Orange
COLOR_BOOKMARK = (200, 100, 255)  # Violet
COLOR_TEXT = (255, 255, 255)
COLOR_LABEL = (180, 180, 180)
COLOR_PANEL_BG = (40, 40, 40)
COLOR_BORDER = (200, 200, 200)
COLOR_WHITE = (255, 255, 255)
COLOR_BLACK = (0, 0, 0)
COLOR_GREEN = (0, 255, 0)
COLOR_RED = (255, 0, 0)

# ==================== File Paths ====================
BASEMAP_PATH = 'paris.geojson'

# ==================== Camera / Map View ====================
# Initial camera over Paris
CAMERA_START_LAT = 48.85
CAMERA_START_LON = 2.35
CAMERA_START_SCALE = 6e3  # map scale denominator (1:6000)

MAP_ZOOM_MIN = 0.05
MAP_ZOOM_MAX = 50.0
MAP_ZOOM_STEP = 1.2  # Multiplier for zoom in/out
SCREEN_DPI = 96.0  # used to turn a scale denominator into pixels per meter
VIEWPORT_CULL_MARGIN = 1.2  # query 20% beyond the viewport

# ==================== Bookmarks ====================
# name -> (lat, lon, scale)
DEFAULT_BOOKMARKS = [
    ('Tour Eiffel', (48.858201, 2.294653, 6e3)),
    ('Arc de Triomphe', (48.873799, 2.295017, 6e3)),
    ('La Bastille', (48.853174, 2.369118, 6e3)),
    ('Notre Dame', (48.853032, 2.349956, 6e3)),
]
BOOKMARK_NAME_MAX_LENGTH = 40

# ==================== Mouse / Keyboard ====================
DOUBLE_CLICK_MS = 400  # max gap between presses of a double click
CLICK_MOVE_TOLERANCE_PX = 4  # press/release further apart is a drag

CONTROLS = {
    'simulation': {
        'pause': 'SPACE',  # Pause/resume the stepper
        'quit': 'ESCAPE',  # Quit simulation
    },
    'view': {
        'follow_tank': 'c',  # Toggle camera follow
        'zoom_in': ']',  # Zoom in
        'zoom_out': '[',  # Zoom out
        'toggle_view_cone': 'v',  # Toggle field of view wedge
        'help': 'h',  # Show help in status line
    },
    'bookmarks': {
        'goto': '1-9',  # Jump to bookmark N
        'add': 'b',  # Name and add a bookmark of the current view
    },
    'waypoint': {
        'set': 'MOUSE_LEFT_DOUBLE',  # Double click sets the waypoint
        'cancel': 'MOUSE_RIGHT',  # Right click cancels the waypoint
    },
}

# ==================== Breadcrumb Trail Settings ====================
BREADCRUMB_INTERVAL = 1.0  # seconds between breadcrumb points
MAX_BREADCRUMBS = 2000  # Maximum trail length

# ==================== Instrument Panel Layout ====================
INSTRUMENT_PANEL_PADDING = 10  # Pixels between sections
INSTRUMENT_LINE_SPACING = 20  # Pixels between lines
INSTRUMENT_SECTION_SPACING = 30  # Pixels between sections
FONT_TITLE_SIZE = 16
FONT_LABEL_SIZE = 14
FONT_VALUE_SIZE = 18
FONT_SMALL_SIZE = 12
FONT_FAMILY = 'monospace'  # Use monospace for consistent alignment

# ==================== Debug Settings ====================
DEBUG_MODE = False  # Print per-tick stepper state
SHOW_FPS = True  # Show FPS counter

# ==================== Coordinate System Notes ====================
# Positions are WGS84 (lat, lon) degrees; geographiclib takes (lat, lon) order
# GeoJSON / shapely use (lon, lat) order (x, y)
# Headings: 0=North, clockwise
# Screen coordinates: Origin top-left, Y increases downward
