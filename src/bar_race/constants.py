"""Global constants for the application."""

# Animation settings
DEFAULT_FPS = 30  # Default frames per second for animation
DEFAULT_DURATION = 10.0  # Default scene length in seconds
DEFAULT_SWAP = 0.25  # Seconds a rank change takes to settle

# Chart layout
DEFAULT_ITEM_COUNT = 20  # Number of bars visible at once
DEFAULT_SHAPE = (400, 300)  # Canvas width and height in pixels
DEFAULT_MARGIN = (20, 20, 20, 20)  # left, top, right, bottom
DEFAULT_BAR_PADDING = 8
DEFAULT_BAR_GAP = 8
BAR_RADIUS = 4
LABEL_FONT_RATIO = 0.8  # Label font size relative to bar height

# Time windows in seconds: (before the motion, after the motion)
DEFAULT_FREEZE_TIME = (2.0, 2.0)
DEFAULT_FADE_TIME = (0.5, 0.0)

# Field names
DEFAULT_ID_FIELD = "id"
DEFAULT_DATE_FIELD = "date"
DEFAULT_VALUE_FIELD = "value"
DEFAULT_DATE_FORMAT = "%Y-%m-%d"

# Alpha given to a bar sitting exactly on the cutoff rank
CUTOFF_ALPHA_FLOOR = 0.001

# Colors
BACKGROUND_COLOR = (255, 255, 255)
DATE_LABEL_COLOR = (119, 119, 119)
BAR_INFO_COLOR = (30, 30, 30)
PALETTE = (
    (31, 119, 180),
    (255, 127, 14),
    (44, 160, 44),
    (214, 39, 40),
    (148, 103, 189),
    (140, 86, 75),
    (227, 119, 194),
    (127, 127, 127),
    (188, 189, 34),
    (23, 190, 207),
)
