WHITE = (255, 255, 255, 255)
LIGHT_GRAY = (200, 200, 200, 255)

DEFAULT_CANVAS_SIZE = (1920, 1080)
DEFAULT_BACKGROUND = WHITE

DEFAULT_CURSOR_RADIUS = 20
MIN_CURSOR_RADIUS = 10
MAX_CURSOR_RADIUS = 100
CURSOR_RADIUS_STEP = 10

# name -> RGBA, in sidebar order; the first entry is selected on start
PALETTE = {
    "Red": (255, 0, 0, 255),
    "Orange": (255, 165, 0, 255),
    "Green": (0, 128, 0, 255),
    "Blue": (0, 0, 255, 255),
    "Yellow": (255, 255, 0, 255),
    "Purple": (128, 0, 128, 255),
    "Gray": (30, 30, 30, 255),
}

DEFAULT_SAVE_NAME = "gem.png"
