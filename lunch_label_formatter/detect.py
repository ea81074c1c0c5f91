"""
Best-effort label layout detection from a reference PDF page size.

Only the page dimensions are inspected. Standard office pages map to the
default 5160 layout; anything else gets a grid estimated from the
available area.
"""

# Standard Library
import dataclasses
import math
import pathlib

# PIP3 modules
import pypdf
import pypdf.errors

# local repo modules
import lunch_label_formatter as llf
import lunch_label_formatter.config
import lunch_label_formatter.errors
import lunch_label_formatter.templates


LayoutProfile = llf.config.LayoutProfile
DataFormatError = llf.errors.DataFormatError

CUSTOM_TEMPLATE_NAME = llf.config.CUSTOM_TEMPLATE_NAME
points_to_inches = llf.config.points_to_inches

# inches
STANDARD_PAGE_SIZES = {
	"letter": (8.5, 11.0),
	"a4": (8.27, 11.69),
}
PAGE_SIZE_TOLERANCE = 0.1
CUSTOM_MARGIN = 0.5
MAX_ESTIMATED_WIDTH = 3.0
MAX_ESTIMATED_HEIGHT = 1.5
ESTIMATED_COLUMNS = 3
ESTIMATED_ROWS = 10
FLOOR_EPSILON = 1e-9


@dataclasses.dataclass(frozen=True)
class TemplateAnalysis:
	profile: LayoutProfile
	page_width: float
	page_height: float
	page_size_name: str | None


#============================================
def match_standard_page(page_width: float, page_height: float) -> str | None:
	"""
	Match a page size in inches against known office paper sizes.

	Args:
		page_width: Page width in inches.
		page_height: Page height in inches.

	Returns:
		Page size name or None.
	"""
	for size_name, (width, height) in STANDARD_PAGE_SIZES.items():
		if abs(page_width - width) < PAGE_SIZE_TOLERANCE and abs(page_height - height) < PAGE_SIZE_TOLERANCE:
			return size_name
	return None


#============================================
def create_custom_profile(page_width: float, page_height: float) -> LayoutProfile:
	"""
	Estimate a label grid for an unrecognized page size.

	Args:
		page_width: Page width in inches.
		page_height: Page height in inches.

	Returns:
		LayoutProfile named "custom".
	"""
	available_width = page_width - 2.0 * CUSTOM_MARGIN
	available_height = page_height - 2.0 * CUSTOM_MARGIN
	if available_width <= 0 or available_height <= 0:
		raise DataFormatError(
			f"Template page {page_width:.2f}x{page_height:.2f} in is too small for {CUSTOM_MARGIN} in margins"
		)
	label_width = min(available_width / ESTIMATED_COLUMNS, MAX_ESTIMATED_WIDTH)
	label_height = min(available_height / ESTIMATED_ROWS, MAX_ESTIMATED_HEIGHT)
	labels_per_row = max(1, math.floor(available_width / label_width + FLOOR_EPSILON))
	labels_per_column = max(1, math.floor(available_height / label_height + FLOOR_EPSILON))
	return LayoutProfile(
		name=CUSTOM_TEMPLATE_NAME,
		label_width=label_width,
		label_height=label_height,
		labels_per_row=labels_per_row,
		labels_per_column=labels_per_column,
		margin_top=CUSTOM_MARGIN,
		margin_left=CUSTOM_MARGIN,
		horizontal_gap=0.0,
		vertical_gap=0.0,
	)


#============================================
def detect_label_layout(page_width: float, page_height: float) -> TemplateAnalysis:
	"""
	Pick a layout for a page size given in points.

	Args:
		page_width: Page width in points.
		page_height: Page height in points.

	Returns:
		TemplateAnalysis.
	"""
	width_in = points_to_inches(page_width)
	height_in = points_to_inches(page_height)
	size_name = match_standard_page(width_in, height_in)
	if size_name is not None:
		profile = llf.templates.DEFAULT_PROFILE
	else:
		profile = create_custom_profile(width_in, height_in)
	return TemplateAnalysis(
		profile=profile,
		page_width=width_in,
		page_height=height_in,
		page_size_name=size_name,
	)


#============================================
def read_page_size(pdf_path: pathlib.Path) -> tuple[float, float]:
	"""
	Read the first page size of a PDF.

	Args:
		pdf_path: PDF file path.

	Returns:
		Tuple of (width, height) in points.
	"""
	try:
		reader = pypdf.PdfReader(str(pdf_path))
	except pypdf.errors.PdfReadError as error:
		raise DataFormatError(f"Failed to analyze template {pdf_path}: {error}") from error
	if len(reader.pages) == 0:
		raise DataFormatError(f"Template PDF has no pages: {pdf_path}")
	box = reader.pages[0].mediabox
	return (float(box.width), float(box.height))


#============================================
def analyze_template(pdf_path: pathlib.Path) -> TemplateAnalysis:
	"""
	Detect a label layout from a reference PDF.

	Args:
		pdf_path: PDF file path.

	Returns:
		TemplateAnalysis.
	"""
	page_width, page_height = read_page_size(pathlib.Path(pdf_path))
	return detect_label_layout(page_width, page_height)
