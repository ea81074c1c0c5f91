"""
Grid layout and pagination of lunch orders onto label sheets.
"""

# Standard Library
import math

# local repo modules
import lunch_label_formatter as llf
import lunch_label_formatter.config
import lunch_label_formatter.errors


LayoutProfile = llf.config.LayoutProfile
LunchOrder = llf.config.LunchOrder
GridCell = llf.config.GridCell
PlacedLabel = llf.config.PlacedLabel
ConfigurationError = llf.errors.ConfigurationError
LayoutOverflowError = llf.errors.LayoutOverflowError

PAGE_WIDTH = llf.config.PAGE_WIDTH
PAGE_HEIGHT = llf.config.PAGE_HEIGHT
GEOMETRY_TOLERANCE = llf.config.GEOMETRY_TOLERANCE
inches_to_points = llf.config.inches_to_points


#============================================
def compute_grid_extent(profile: LayoutProfile) -> tuple[float, float]:
	"""
	Compute the far edges of the label grid measured from the top-left corner.

	Args:
		profile: Layout profile.

	Returns:
		Tuple of (right_edge, bottom_edge) in points.
	"""
	right = inches_to_points(
		profile.margin_left
		+ profile.labels_per_row * profile.label_width
		+ (profile.labels_per_row - 1) * profile.horizontal_gap
	)
	bottom = inches_to_points(
		profile.margin_top
		+ profile.labels_per_column * profile.label_height
		+ (profile.labels_per_column - 1) * profile.vertical_gap
	)
	return (right, bottom)


#============================================
def validate_profile(profile: LayoutProfile) -> None:
	"""
	Check a layout profile before any label is placed.

	Args:
		profile: Layout profile.

	Raises:
		ConfigurationError: If a dimension is invalid or the grid overflows the page.
	"""
	for field_name in ("label_width", "label_height"):
		value = getattr(profile, field_name)
		if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
			raise ConfigurationError(
				f"Template {profile.name}: {field_name} must be a positive number, got {value!r}"
			)
	for field_name in ("labels_per_row", "labels_per_column"):
		value = getattr(profile, field_name)
		if not isinstance(value, int) or isinstance(value, bool) or value < 1:
			raise ConfigurationError(
				f"Template {profile.name}: {field_name} must be a positive integer, got {value!r}"
			)
	for field_name in ("margin_top", "margin_left", "horizontal_gap", "vertical_gap"):
		value = getattr(profile, field_name)
		if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
			raise ConfigurationError(
				f"Template {profile.name}: {field_name} must be a non-negative number, got {value!r}"
			)

	right, bottom = compute_grid_extent(profile)
	if right > PAGE_WIDTH + GEOMETRY_TOLERANCE:
		raise ConfigurationError(
			f"Template {profile.name}: labels extend beyond the right edge "
			f"({right:.2f} > {PAGE_WIDTH:.2f} points)"
		)
	if bottom > PAGE_HEIGHT + GEOMETRY_TOLERANCE:
		raise ConfigurationError(
			f"Template {profile.name}: labels extend beyond the bottom edge "
			f"({bottom:.2f} > {PAGE_HEIGHT:.2f} points)"
		)


#============================================
def compute_grid_cell(global_index: int, profile: LayoutProfile) -> GridCell:
	"""
	Place one label on its page, row, and column.

	Args:
		global_index: Zero-based position of the label in the input.
		profile: Layout profile.

	Returns:
		GridCell with the label rectangle in points, origin bottom-left.

	Raises:
		LayoutOverflowError: If the rectangle leaves the page.
	"""
	labels_per_page = profile.labels_per_page
	page_index = global_index // labels_per_page
	index_on_page = global_index % labels_per_page
	row = index_on_page // profile.labels_per_row
	column = index_on_page % profile.labels_per_row

	label_width = inches_to_points(profile.label_width)
	label_height = inches_to_points(profile.label_height)
	margin_left = inches_to_points(profile.margin_left)
	margin_top = inches_to_points(profile.margin_top)
	h_gap = inches_to_points(profile.horizontal_gap)
	v_gap = inches_to_points(profile.vertical_gap)

	x = margin_left + column * (label_width + h_gap)
	y = PAGE_HEIGHT - (margin_top + row * (label_height + v_gap)) - label_height

	label_number = global_index + 1
	if x < -GEOMETRY_TOLERANCE:
		raise LayoutOverflowError(
			label_number, "left", x,
			f"Label {label_number} would be positioned too far left (x={x:.2f} points)",
		)
	if y < -GEOMETRY_TOLERANCE:
		raise LayoutOverflowError(
			label_number, "bottom", y,
			f"Label {label_number} would be positioned too far down (y={y:.2f} points)",
		)
	if x + label_width > PAGE_WIDTH + GEOMETRY_TOLERANCE:
		raise LayoutOverflowError(
			label_number, "right", x,
			f"Label {label_number} would extend beyond right edge "
			f"(x={x:.2f}, width={label_width:.2f}, page width={PAGE_WIDTH:.2f})",
		)
	if y + label_height > PAGE_HEIGHT + GEOMETRY_TOLERANCE:
		raise LayoutOverflowError(
			label_number, "top", y,
			f"Label {label_number} would extend beyond top edge "
			f"(y={y:.2f}, height={label_height:.2f}, page height={PAGE_HEIGHT:.2f})",
		)

	return GridCell(
		page_index=page_index,
		row=row,
		column=column,
		x=x,
		y=y,
		width=label_width,
		height=label_height,
	)


#============================================
def paginate(orders: list[LunchOrder], profile: LayoutProfile) -> list[PlacedLabel]:
	"""
	Assign every order a grid cell in row-major order across pages.

	Args:
		orders: Lunch orders in print order.
		profile: Layout profile.

	Returns:
		PlacedLabel entries, one per order, in input order.
	"""
	validate_profile(profile)
	placed: list[PlacedLabel] = []
	for global_index, order in enumerate(orders):
		cell = compute_grid_cell(global_index, profile)
		placed.append(PlacedLabel(order=order, cell=cell))
	return placed


#============================================
def count_pages(total_labels: int, profile: LayoutProfile) -> int:
	"""
	Count the sheets needed for a number of labels.

	Args:
		total_labels: Number of labels.
		profile: Layout profile.

	Returns:
		Page count.
	"""
	if total_labels <= 0:
		return 0
	labels_per_page = profile.labels_per_page
	return (total_labels + labels_per_page - 1) // labels_per_page
