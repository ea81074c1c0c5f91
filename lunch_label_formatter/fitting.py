"""
Text fitting for a single label: font sizes, wrapping, truncation, and omission.
"""

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import lunch_label_formatter as llf
import lunch_label_formatter.config


LayoutProfile = llf.config.LayoutProfile
LunchOrder = llf.config.LunchOrder
GridCell = llf.config.GridCell
FontPlan = llf.config.FontPlan
FitSettings = llf.config.FitSettings
FitWarning = llf.config.FitWarning
TextLine = llf.config.TextLine
LabelPlan = llf.config.LabelPlan

DEFAULT_FONT_REGULAR = llf.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = llf.config.DEFAULT_FONT_BOLD
ELLIPSIS = llf.config.ELLIPSIS
MAX_CONTENT_LINES = llf.config.MAX_CONTENT_LINES
inches_to_points = llf.config.inches_to_points


#============================================
def measure_text(text: str, font_name: str, font_size: float) -> float:
	"""
	Measure rendered text width.

	Args:
		text: Text to measure.
		font_name: PDF font name.
		font_size: Font size in points.

	Returns:
		Width in points.
	"""
	return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size)


#============================================
def classify_tier(profile: LayoutProfile) -> str:
	"""
	Classify a profile as a small, medium, or large label.

	Args:
		profile: Layout profile.

	Returns:
		Tier name.
	"""
	if profile.label_width < llf.config.SMALL_MAX_WIDTH or profile.label_height < llf.config.SMALL_MAX_HEIGHT:
		return llf.config.TIER_SMALL
	if profile.label_width > llf.config.LARGE_MIN_WIDTH or profile.label_height > llf.config.LARGE_MIN_HEIGHT:
		return llf.config.TIER_LARGE
	return llf.config.TIER_MEDIUM


#============================================
def build_font_plan(tier: str) -> FontPlan:
	"""
	Get the per-field font sizes for a tier.

	Args:
		tier: Tier name.

	Returns:
		FontPlan.
	"""
	return FontPlan(**llf.config.TIER_FONT_SIZES[tier])


#============================================
def build_fit_settings(profile: LayoutProfile) -> FitSettings:
	"""
	Compute font sizes, line spacing, and padding for a profile.

	Args:
		profile: Layout profile.

	Returns:
		FitSettings with spacing and padding in points.
	"""
	tier = classify_tier(profile)
	return FitSettings(
		tier=tier,
		font_plan=build_font_plan(tier),
		line_spacing=llf.config.TIER_LINE_SPACING[tier],
		padding=inches_to_points(llf.config.TIER_PADDING[tier]),
	)


#============================================
def fits_width(text: str, font_name: str, font_size: float, max_width: float) -> bool:
	"""
	Check whether text fits a width, inclusive.

	Args:
		text: Text to measure.
		font_name: PDF font name.
		font_size: Font size in points.
		max_width: Available width in points.

	Returns:
		True if the rendered width is at most max_width.
	"""
	return measure_text(text, font_name, font_size) <= max_width


#============================================
def truncate_to_width(
	text: str,
	font_name: str,
	font_size: float,
	max_width: float,
) -> str | None:
	"""
	Shorten text with a trailing ellipsis until it fits.

	Args:
		text: Input text.
		font_name: PDF font name.
		font_size: Font size in points.
		max_width: Available width in points.

	Returns:
		The text unchanged when it fits, a shortened string ending in
		the ellipsis, or None when not even the ellipsis fits.
	"""
	if fits_width(text, font_name, font_size, max_width):
		return text
	truncated = text
	while truncated:
		truncated = truncated[:-1]
		candidate = truncated + ELLIPSIS
		if fits_width(candidate, font_name, font_size, max_width):
			return candidate
	return None


#============================================
def wrap_words(
	text: str,
	font_name: str,
	font_size: float,
	max_width: float,
	max_lines: int = MAX_CONTENT_LINES,
) -> tuple[list[str], bool]:
	"""
	Greedily wrap whitespace-separated words into lines.

	A single word wider than the line is kept on a line of its own.

	Args:
		text: Input text.
		font_name: PDF font name.
		font_size: Font size in points.
		max_width: Available width in points.
		max_lines: Maximum number of lines to emit.

	Returns:
		Tuple of (lines, dropped) where dropped is True if words were cut.
	"""
	words = text.split()
	lines: list[str] = []
	current = ""
	for word in words:
		candidate = word if not current else f"{current} {word}"
		if not current or fits_width(candidate, font_name, font_size, max_width):
			current = candidate
			continue
		lines.append(current)
		if len(lines) >= max_lines:
			return (lines, True)
		current = word
	if current:
		lines.append(current)
	return (lines, False)


#============================================
def plan_label(order: LunchOrder, cell: GridCell, settings: FitSettings) -> LabelPlan:
	"""
	Decide the text lines, fonts, and positions for one label.

	Fields are stacked top to bottom, left aligned inside the padding.
	Nothing here raises for lack of space; fields that do not fit are
	dropped or shortened and reported as FitWarnings.

	Args:
		order: Lunch order to print.
		cell: Label rectangle.
		settings: Fit settings for the profile.

	Returns:
		LabelPlan.
	"""
	plan = LabelPlan(cell=cell)
	sizes = settings.font_plan
	padding = settings.padding
	spacing = settings.line_spacing
	max_width = cell.width - 2.0 * padding
	text_x = cell.x + padding
	cursor_y = cell.y + cell.height - padding - spacing * 0.5

	def add_line(text: str, font_name: str, font_size: float, color: tuple[float, float, float]) -> None:
		nonlocal cursor_y
		plan.lines.append(TextLine(text, font_name, font_size, text_x, cursor_y, color))
		cursor_y -= spacing

	def warn(action: str, field: str, message: str) -> None:
		plan.warnings.append(FitWarning(action, field, order.order_id, message))

	# order id: skipped, never truncated
	id_text = llf.config.ORDER_ID_PREFIX + order.order_id
	if fits_width(id_text, DEFAULT_FONT_BOLD, sizes.order_id, max_width):
		add_line(id_text, DEFAULT_FONT_BOLD, sizes.order_id, llf.config.ORDER_ID_COLOR)
	else:
		warn("omitted", "order_id", f'Order ID "{id_text}" too long for label width')

	name_text = truncate_to_width(order.student_name, DEFAULT_FONT_BOLD, sizes.student_name, max_width)
	if name_text is None:
		warn("omitted", "student_name", f'Student name "{order.student_name}" does not fit label width')
	else:
		add_line(name_text, DEFAULT_FONT_BOLD, sizes.student_name, llf.config.TEXT_COLOR)
		if name_text != order.student_name:
			warn("truncated", "student_name", f'Student name "{order.student_name}" truncated to fit label')

	grade_text = llf.config.GRADE_PREFIX + order.grade
	if fits_width(grade_text, DEFAULT_FONT_REGULAR, sizes.grade, max_width):
		add_line(grade_text, DEFAULT_FONT_REGULAR, sizes.grade, llf.config.TEXT_COLOR)
	else:
		warn("omitted", "grade", f'Grade text "{grade_text}" too long for label width')

	content_lines, dropped = wrap_words(order.contents, DEFAULT_FONT_REGULAR, sizes.contents, max_width)
	for line in content_lines:
		add_line(line, DEFAULT_FONT_REGULAR, sizes.contents, llf.config.TEXT_COLOR)
	if dropped:
		warn("truncated", "contents", f"Contents for order {order.order_id} truncated to fit label")

	instructions = order.special_instructions.strip()
	if instructions:
		note_text = llf.config.INSTRUCTIONS_PREFIX + instructions
		note_fits = fits_width(note_text, DEFAULT_FONT_REGULAR, sizes.special_instructions, max_width)
		if note_fits and cursor_y > cell.y + padding:
			add_line(note_text, DEFAULT_FONT_REGULAR, sizes.special_instructions, llf.config.INSTRUCTIONS_COLOR)
		else:
			warn(
				"omitted",
				"special_instructions",
				f"Special instructions for order {order.order_id} omitted due to space constraints",
			)

	return plan
