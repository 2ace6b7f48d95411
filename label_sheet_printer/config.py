"""
Shared configuration and constants.
"""

import dataclasses


POINTS_PER_INCH = 72.0

# Avery 5160 sheet, all values in inches
PAGE_WIDTH = 8.5
PAGE_HEIGHT = 11.0
MARGIN_TOP = 0.5
MARGIN_LEFT = 0.21975
COL_WIDTH = 2.625
ROW_HEIGHT = 1.0
HORIZ_GAP = 0.125
PADDING_INTERNAL = 0.125
COLUMNS = 3
ROWS = 10
LABELS_PER_PAGE = COLUMNS * ROWS

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_SIZE = 11.0
MIN_FONT_SIZE = 8.0
MAX_FONT_SIZE = 16.0
FONT_SIZE_STEP = 0.5
LINE_HEIGHT_FACTOR = 1.15

TEXT_ALIGNMENTS = ("left", "center", "right")
DEFAULT_TEXT_ALIGN = "left"

PREVIEW_DPI = 100
PREVIEW_LINE_HEIGHT_FACTOR = 1.25
PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 10


@dataclasses.dataclass(frozen=True)
class LabelGeometry:
	page_width: float
	page_height: float
	margin_top: float
	margin_left: float
	col_width: float
	row_height: float
	horizontal_gap: float
	padding: float
	columns: int
	rows: int

	@property
	def capacity(self) -> int:
		return self.columns * self.rows


DEFAULT_GEOMETRY = LabelGeometry(
	page_width=PAGE_WIDTH,
	page_height=PAGE_HEIGHT,
	margin_top=MARGIN_TOP,
	margin_left=MARGIN_LEFT,
	col_width=COL_WIDTH,
	row_height=ROW_HEIGHT,
	horizontal_gap=HORIZ_GAP,
	padding=PADDING_INTERNAL,
	columns=COLUMNS,
	rows=ROWS,
)


@dataclasses.dataclass
class RenderSettings:
	template: str
	font_size: float = DEFAULT_FONT_SIZE
	text_align: str = DEFAULT_TEXT_ALIGN
	font_name: str = DEFAULT_FONT_REGULAR
	line_height_factor: float = LINE_HEIGHT_FACTOR
	draw_outlines: bool = False
	calibration: bool = False


@dataclasses.dataclass
class RenderResult:
	total_labels: int
	pages: int
	labels_per_page: int
	output_path: str


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


#============================================
def validate_font_size(value: float) -> float:
	"""
	Check a font size against the supported slider range.

	Args:
		value: Font size in points.

	Returns:
		The font size as a float.
	"""
	size = float(value)
	if size < MIN_FONT_SIZE or size > MAX_FONT_SIZE:
		raise ValueError(f"Font size {value} outside {MIN_FONT_SIZE}-{MAX_FONT_SIZE}")
	steps = (size - MIN_FONT_SIZE) / FONT_SIZE_STEP
	if abs(steps - round(steps)) > 1e-9:
		raise ValueError(f"Font size {value} is not a multiple of {FONT_SIZE_STEP}")
	return size


#============================================
def validate_text_align(value: str) -> str:
	"""
	Normalize and check a horizontal alignment mode.

	Args:
		value: Alignment name.

	Returns:
		Lowercase alignment name.
	"""
	normalized = value.strip().lower()
	if normalized not in TEXT_ALIGNMENTS:
		raise ValueError(f"Unknown text alignment: {value}")
	return normalized
