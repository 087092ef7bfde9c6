"""
Tunables for the graphing core.

Kept as plain module constants; hosts that need different values pass them
explicitly to the functions that accept them.
"""
import math

# -------------------------
# Names the tokenizer and parser recognize (lower-case)
# -------------------------
VARIABLE_NAME = "x"
FUNCTION_NAMES = ("sin", "cos", "tan", "sqrt", "log", "ln", "abs", "exp")
CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}

# -------------------------
# Numeric tolerances
# -------------------------
# |y| at or below this counts as an exact zero when marking intercepts
ZERO_TOLERANCE = 1e-12
# tan(x) is undefined where |cos(x)| falls below this
POLE_EPSILON = 1e-12

# -------------------------
# Viewport defaults
# -------------------------
DEFAULT_VIEWPORT_WIDTH = 1200
DEFAULT_VIEWPORT_HEIGHT = 800
DEFAULT_PIXELS_PER_UNIT = 50.0

# upper bound on one sampling pass
MAX_STEP_COUNT = 100_000

# -------------------------
# Expression size limits
# -------------------------
# nested parentheses and function calls
MAX_NESTING = 64
# levels in a parsed tree; evaluation recurses once per level
MAX_DEPTH = 64
