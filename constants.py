# --- Grid Structure ---
DEFAULT_NUM_RINGS = 5  # Number of concentric rings (e.g., 5 rings: 0-4)
DEFAULT_BASE_SUBDIVISION = 10  # Slices on the innermost ring
DEFAULT_MIN_ANGULAR_DISTANCE = 0.3  # Fraction of a ring's own step

# --- Cell Directions ---
DIR_CW = "CW"  # Clockwise (increasing angle)
DIR_CCW = "CCW"  # Counter-Clockwise (decreasing angle)
DIR_IN = "IN"  # Inward (towards center)
DIR_OUT = "OUT"  # Outward (towards edge)
ALL_DIRECTIONS = (DIR_IN, DIR_OUT, DIR_CW, DIR_CCW)

# --- Claim States ---
CELL_FREE = "FREE"
CELL_TAKEN = "TAKEN"

# --- Border Types ---
BORDER_ARC = "ARC"
BORDER_LINE = "LINE"

# --- Maze Builder States ---
STATE_SEEDING = "SEEDING"
STATE_SEEKING = "SEEKING"
STATE_CARVING = "CARVING"
STATE_DONE = "DONE"

# --- Tolerances ---
GEOMETRY_TOLERANCE = 1e-9  # For floating point comparisons
MESH_VERTEX_DISTANCE_TOLERANCE_SQ = (
    1e-12  # Squared tolerance for checking degenerate prisms
)

# --- Drawing ---
RING_SPACING = 10.0  # Radius of ring 0; ring r sits at (r + 1) * RING_SPACING
ARC_SAMPLES_PER_TURN = 360  # Polyline resolution for a full circle

# --- 2D STL Export ---
MAZE_2D_WALL_THICKNESS = 0.35 * RING_SPACING / 2.0
MAZE_2D_WALL_HEIGHT = 1.5 * RING_SPACING / 2.0
MAZE_2D_BASE_HEIGHT = MAZE_2D_WALL_HEIGHT / 3.0  # Configurable base height
MAZE_2D_CYLINDER_SECTIONS = 128  # Smoothness for the cylindrical base edge

# --- Visualization ---
VIS_FIGSIZE = (10, 10)
VIS_DPI = 150
VIS_WALL_LINE_STYLE = "k-"
VIS_WALL_LINE_LW = 1.5
VIS_WALL_LINE_ALPHA = 0.9
VIS_RING_COLOR = "lightgrey"
VIS_RING_LW = 0.5
VIS_POINT_MARKER = "b."
VIS_POINT_SIZE = 3
VIS_ENTRY_MARKER = "go"
VIS_ENTRY_MARKER_SIZE = 6
VIS_ENTRY_MARKER_ALPHA = 0.8
