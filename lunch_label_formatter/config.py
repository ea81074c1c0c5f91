"""
Shared configuration, constants, and data types.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.pagesizes


POINTS_PER_INCH = 72.0
PAGE_WIDTH, PAGE_HEIGHT = reportlab.lib.pagesizes.letter
GEOMETRY_TOLERANCE = 1e-6

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
BORDER_LINE_WIDTH = 0.5
ELLIPSIS = "..."
MAX_CONTENT_LINES = 3

ORDER_ID_PREFIX = "#"
GRADE_PREFIX = "Grade: "
INSTRUCTIONS_PREFIX = "* "

ORDER_ID_COLOR = (0.3, 0.3, 0.3)
TEXT_COLOR = (0.0, 0.0, 0.0)
INSTRUCTIONS_COLOR = (0.5, 0.0, 0.0)

# size tier thresholds, inches
SMALL_MAX_WIDTH = 2.0
SMALL_MAX_HEIGHT = 0.75
LARGE_MIN_WIDTH = 3.5
LARGE_MIN_HEIGHT = 2.0

TIER_SMALL = "small"
TIER_MEDIUM = "medium"
TIER_LARGE = "large"

TIER_FONT_SIZES = {
	TIER_SMALL: {
		"order_id": 6.0,
		"student_name": 7.0,
		"grade": 6.0,
		"contents": 6.0,
		"special_instructions": 5.0,
	},
	TIER_MEDIUM: {
		"order_id": 7.0,
		"student_name": 9.0,
		"grade": 7.0,
		"contents": 7.0,
		"special_instructions": 6.0,
	},
	TIER_LARGE: {
		"order_id": 8.0,
		"student_name": 12.0,
		"grade": 8.0,
		"contents": 8.0,
		"special_instructions": 7.0,
	},
}
# points
TIER_LINE_SPACING = {
	TIER_SMALL: 8.0,
	TIER_MEDIUM: 10.0,
	TIER_LARGE: 12.0,
}
# inches
TIER_PADDING = {
	TIER_SMALL: 0.05,
	TIER_MEDIUM: 0.12,
	TIER_LARGE: 0.2,
}

# manual profile defaults, inches
DEFAULT_MARGIN = 0.5
DEFAULT_GAP = 0.125
CUSTOM_TEMPLATE_NAME = "custom"
MANUAL_TEMPLATE_NAME = "manual"
DEFAULT_TEMPLATE_NAME = "5160"

ORDER_ID_MAX_LENGTH = 20
STUDENT_NAME_MAX_LENGTH = 50
CONTENTS_MAX_LENGTH = 200
SPECIAL_INSTRUCTIONS_MAX_LENGTH = 100

# external column name -> LunchOrder attribute
ORDER_COLUMNS = {
	"orderId": "order_id",
	"studentName": "student_name",
	"grade": "grade",
	"contents": "contents",
	"specialInstructions": "special_instructions",
}
REQUIRED_COLUMNS = ["orderId", "studentName", "grade", "contents"]
GRADE_CHOICES = [
	"Pre-K", "K", "1st", "2nd", "3rd", "4th", "5th", "6th",
	"7th", "8th", "9th", "10th", "11th", "12th",
]


@dataclasses.dataclass(frozen=True)
class LayoutProfile:
	name: str
	label_width: float
	label_height: float
	labels_per_row: int
	labels_per_column: int
	margin_top: float
	margin_left: float
	horizontal_gap: float
	vertical_gap: float

	@property
	def labels_per_page(self) -> int:
		return self.labels_per_row * self.labels_per_column


@dataclasses.dataclass(frozen=True)
class LunchOrder:
	order_id: str
	student_name: str
	grade: str
	contents: str
	special_instructions: str = ""


@dataclasses.dataclass(frozen=True)
class GridCell:
	page_index: int
	row: int
	column: int
	x: float
	y: float
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class PlacedLabel:
	order: LunchOrder
	cell: GridCell


@dataclasses.dataclass(frozen=True)
class FontPlan:
	order_id: float
	student_name: float
	grade: float
	contents: float
	special_instructions: float


@dataclasses.dataclass(frozen=True)
class FitSettings:
	tier: str
	font_plan: FontPlan
	line_spacing: float
	padding: float


@dataclasses.dataclass(frozen=True)
class FitWarning:
	action: str
	field: str
	order_id: str
	message: str


@dataclasses.dataclass(frozen=True)
class TextLine:
	text: str
	font_name: str
	font_size: float
	x: float
	y: float
	color: tuple[float, float, float] = TEXT_COLOR


@dataclasses.dataclass
class LabelPlan:
	cell: GridCell
	lines: list[TextLine] = dataclasses.field(default_factory=list)
	warnings: list[FitWarning] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class GenerationResult:
	total_labels: int
	pages: int
	labels_per_page: int
	template_name: str
	output_path: str
	warnings: list[FitWarning] = dataclasses.field(default_factory=list)


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
def points_to_inches(value: float) -> float:
	"""
	Convert points to inches.

	Args:
		value: Points value.

	Returns:
		Inches value.
	"""
	return value / POINTS_PER_INCH
