"""
Built-in Avery label templates and layout profile selection.
"""

# Standard Library
import dataclasses
import math
import types

# local repo modules
import lunch_label_formatter as llf
import lunch_label_formatter.config
import lunch_label_formatter.errors
import lunch_label_formatter.layout


LayoutProfile = llf.config.LayoutProfile
ConfigurationError = llf.errors.ConfigurationError
UnknownTemplateError = llf.errors.UnknownTemplateError

CUSTOM_TEMPLATE_NAME = llf.config.CUSTOM_TEMPLATE_NAME
MANUAL_TEMPLATE_NAME = llf.config.MANUAL_TEMPLATE_NAME
DEFAULT_MARGIN = llf.config.DEFAULT_MARGIN
DEFAULT_GAP = llf.config.DEFAULT_GAP


# name, width, height, per row, per column, top, left, h gap, v gap, description
_TEMPLATE_TABLE = [
	("5160", 2.625, 1.0, 3, 10, 0.5, 0.1875, 0.125, 0.0,
		'1" x 2-5/8" (30 per sheet) - Recommended for lunch orders'),
	("8160", 2.625, 1.0, 3, 10, 0.5, 0.1875, 0.125, 0.0,
		'1" x 2-5/8" (30 per sheet)'),
	("5162", 4.0, 1.333, 2, 7, 0.5, 0.25, 0.25, 0.125,
		'1-1/3" x 4" (14 per sheet) - Address labels'),
	("5163", 4.0, 2.0, 2, 5, 0.25, 0.25, 0.25, 0.125,
		'2" x 4" (10 per sheet) - Shipping labels'),
	("8163", 4.0, 2.0, 2, 5, 0.25, 0.25, 0.25, 0.125,
		'2" x 4" (10 per sheet) - Shipping labels'),
	("5164", 4.0, 3.333, 2, 3, 0.5, 0.15625, 0.1875, 0.0,
		'3-1/3" x 4" (6 per sheet)'),
	("8164", 4.0, 3.333, 2, 3, 0.5, 0.15625, 0.1875, 0.0,
		'3-1/3" x 4" (6 per sheet)'),
	("5167", 1.75, 0.5, 4, 20, 0.5, 0.3, 0.3, 0.0,
		'1/2" x 1-3/4" (80 per sheet) - Return address labels'),
]


#============================================
def _build_registry() -> tuple[types.MappingProxyType, types.MappingProxyType]:
	"""
	Build the read-only template and description tables.

	Returns:
		Tuple of (templates, descriptions) mappings keyed by name.
	"""
	profiles: dict[str, LayoutProfile] = {}
	descriptions: dict[str, str] = {}
	for row in _TEMPLATE_TABLE:
		name, width, height, per_row, per_column, top, left, h_gap, v_gap, description = row
		profiles[name] = LayoutProfile(
			name=name,
			label_width=width,
			label_height=height,
			labels_per_row=per_row,
			labels_per_column=per_column,
			margin_top=top,
			margin_left=left,
			horizontal_gap=h_gap,
			vertical_gap=v_gap,
		)
		descriptions[name] = description
	return (types.MappingProxyType(profiles), types.MappingProxyType(descriptions))


TEMPLATES, TEMPLATE_DESCRIPTIONS = _build_registry()
DEFAULT_PROFILE = TEMPLATES[llf.config.DEFAULT_TEMPLATE_NAME]


#============================================
def is_valid_name(name: str) -> bool:
	"""
	Check whether a template name can be requested.

	Args:
		name: Template name.

	Returns:
		True for registered names and the custom sentinel.
	"""
	return name in TEMPLATES or name == CUSTOM_TEMPLATE_NAME


#============================================
def lookup(name: str) -> LayoutProfile:
	"""
	Look up a built-in template by name.

	Args:
		name: Template name, e.g. "5160".

	Returns:
		LayoutProfile.

	Raises:
		UnknownTemplateError: If the name is not registered.
		ConfigurationError: For "custom", which needs a reference PDF or manual numbers.
	"""
	if name in TEMPLATES:
		return TEMPLATES[name]
	if name == CUSTOM_TEMPLATE_NAME:
		raise ConfigurationError(
			"Template 'custom' needs a reference PDF (--template) or "
			"manual dimensions (--rows, --columns, --width, --height)"
		)
	raise UnknownTemplateError(name)


#============================================
def list_templates() -> list[tuple[str, str]]:
	"""
	List built-in templates in registration order.

	Returns:
		List of (name, description).
	"""
	return [(name, TEMPLATE_DESCRIPTIONS[name]) for name in TEMPLATES]


#============================================
def build_manual_profile(rows: int, columns: int, width: float, height: float) -> LayoutProfile:
	"""
	Build an ad hoc profile with default margins and gaps.

	Args:
		rows: Labels per column (rows on a sheet).
		columns: Labels per row (columns on a sheet).
		width: Label width in inches.
		height: Label height in inches.

	Returns:
		LayoutProfile named "manual".
	"""
	for field_name, value in (("rows", rows), ("columns", columns)):
		if not isinstance(value, int) or isinstance(value, bool) or value < 1:
			raise ConfigurationError(f"Manual layout: {field_name} must be a positive integer, got {value!r}")
	for field_name, value in (("width", width), ("height", height)):
		is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
		if not is_number or not math.isfinite(value) or value <= 0:
			raise ConfigurationError(f"Manual layout: {field_name} must be a positive number, got {value!r}")
	return LayoutProfile(
		name=MANUAL_TEMPLATE_NAME,
		label_width=float(width),
		label_height=float(height),
		labels_per_row=columns,
		labels_per_column=rows,
		margin_top=DEFAULT_MARGIN,
		margin_left=DEFAULT_MARGIN,
		horizontal_gap=DEFAULT_GAP,
		vertical_gap=DEFAULT_GAP,
	)


@dataclasses.dataclass(frozen=True)
class NamedProfile:
	name: str


@dataclasses.dataclass(frozen=True)
class ManualProfile:
	rows: int
	columns: int
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class InferredProfile:
	profile: LayoutProfile


ProfileSource = NamedProfile | ManualProfile | InferredProfile


#============================================
def resolve_profile(source: ProfileSource) -> LayoutProfile:
	"""
	Resolve a profile selection into one validated LayoutProfile.

	Args:
		source: NamedProfile, ManualProfile, or InferredProfile.

	Returns:
		Validated LayoutProfile.
	"""
	if isinstance(source, NamedProfile):
		profile = lookup(source.name)
	elif isinstance(source, ManualProfile):
		profile = build_manual_profile(source.rows, source.columns, source.width, source.height)
	elif isinstance(source, InferredProfile):
		profile = source.profile
	else:
		raise TypeError(f"Unsupported profile source: {source!r}")
	llf.layout.validate_profile(profile)
	return profile
