import dataclasses

import pytest

import lunch_label_formatter.config as config
import lunch_label_formatter.fitting as fitting
import lunch_label_formatter.layout
import lunch_label_formatter.templates


BOLD = config.DEFAULT_FONT_BOLD
REGULAR = config.DEFAULT_FONT_REGULAR
LONG_NAME = "A Very Long Student Name That Does Not Fit"


#============================================
def profile_with_size(width: float, height: float) -> config.LayoutProfile:
	"""
	Build a one-label profile of the given size in inches.
	"""
	return config.LayoutProfile(
		name="test",
		label_width=width,
		label_height=height,
		labels_per_row=1,
		labels_per_column=1,
		margin_top=0.5,
		margin_left=0.5,
		horizontal_gap=0.0,
		vertical_gap=0.0,
	)


#============================================
def plan_for(order: config.LunchOrder, profile: config.LayoutProfile) -> config.LabelPlan:
	"""
	Plan the first label slot of a profile.
	"""
	cell = lunch_label_formatter.layout.compute_grid_cell(0, profile)
	settings = fitting.build_fit_settings(profile)
	return fitting.plan_label(order, cell, settings)


#============================================
def warned_fields(plan: config.LabelPlan) -> dict[str, str]:
	"""
	Map each warned field to its fit action.
	"""
	return {warning.field: warning.action for warning in plan.warnings}


#============================================
def test_tier_classification() -> None:
	"""
	Reference sizes map to their tiers, every time.
	"""
	for _ in range(3):
		assert fitting.classify_tier(profile_with_size(2.625, 1.0)) == "medium"
		assert fitting.classify_tier(profile_with_size(1.75, 0.5)) == "small"
		assert fitting.classify_tier(profile_with_size(4.0, 3.333)) == "large"


#============================================
def test_tier_boundaries_are_exclusive() -> None:
	"""
	Values exactly on a threshold stay medium.
	"""
	assert fitting.classify_tier(profile_with_size(2.0, 0.75)) == "medium"
	assert fitting.classify_tier(profile_with_size(3.5, 2.0)) == "medium"
	assert fitting.classify_tier(profile_with_size(3.0, 0.7)) == "small"
	assert fitting.classify_tier(profile_with_size(1.5, 3.0)) == "small"
	assert fitting.classify_tier(profile_with_size(3.0, 2.5)) == "large"


#============================================
def test_fit_settings_per_tier() -> None:
	"""
	Font plan, spacing, and padding follow the tier tables.
	"""
	small = fitting.build_fit_settings(lunch_label_formatter.templates.lookup("5167"))
	assert small.tier == "small"
	assert small.line_spacing == 8.0
	assert small.padding == pytest.approx(3.6)
	assert small.font_plan == config.FontPlan(6.0, 7.0, 6.0, 6.0, 5.0)

	medium = fitting.build_fit_settings(lunch_label_formatter.templates.lookup("5160"))
	assert medium.tier == "medium"
	assert medium.line_spacing == 10.0
	assert medium.padding == pytest.approx(8.64)
	assert medium.font_plan.student_name == 9.0

	large = fitting.build_fit_settings(lunch_label_formatter.templates.lookup("5164"))
	assert large.tier == "large"
	assert large.line_spacing == 12.0
	assert large.padding == pytest.approx(14.4)
	assert large.font_plan.student_name == 12.0
	assert fitting.build_fit_settings(lunch_label_formatter.templates.lookup("5164")) == large


#============================================
def test_truncate_keeps_fitting_text() -> None:
	"""
	Text that already fits comes back unchanged.
	"""
	text = "Emma Johnson"
	width = fitting.measure_text(text, BOLD, 9.0)
	assert fitting.truncate_to_width(text, BOLD, 9.0, width) == text
	assert fitting.truncate_to_width(text, BOLD, 9.0, width + 50.0) == text


#============================================
def test_truncate_long_text() -> None:
	"""
	Long text is shortened and ends with an ellipsis that fits.
	"""
	max_width = 80.0
	result = fitting.truncate_to_width(LONG_NAME, BOLD, 7.0, max_width)
	assert result is not None
	assert result.endswith("...")
	assert fitting.measure_text(result, BOLD, 7.0) <= max_width
	assert LONG_NAME.startswith(result[:-3])
	# one more character would not have fit
	longer = LONG_NAME[:len(result) - 2] + "..."
	assert fitting.measure_text(longer, BOLD, 7.0) > max_width


#============================================
def test_truncate_omits_when_ellipsis_does_not_fit() -> None:
	"""
	When not even the ellipsis fits, the field is dropped.
	"""
	ellipsis_width = fitting.measure_text("...", BOLD, 7.0)
	assert fitting.truncate_to_width(LONG_NAME, BOLD, 7.0, ellipsis_width - 0.01) is None
	assert fitting.truncate_to_width(LONG_NAME, BOLD, 7.0, ellipsis_width) == "..."


#============================================
def test_wrap_words_short_text() -> None:
	"""
	Short text stays on one line.
	"""
	lines, dropped = fitting.wrap_words("Pizza and juice", REGULAR, 7.0, 200.0)
	assert lines == ["Pizza and juice"]
	assert dropped is False


#============================================
def test_wrap_words_caps_lines() -> None:
	"""
	Wrapping stops at three lines and reports dropped words.
	"""
	two_words = fitting.measure_text("aaaa aaaa", REGULAR, 7.0)
	lines, dropped = fitting.wrap_words(" ".join(["aaaa"] * 6), REGULAR, 7.0, two_words)
	assert lines == ["aaaa aaaa"] * 3
	assert dropped is False

	lines, dropped = fitting.wrap_words(" ".join(["aaaa"] * 7), REGULAR, 7.0, two_words)
	assert lines == ["aaaa aaaa"] * 3
	assert dropped is True


#============================================
def test_wrap_words_lines_fit_width() -> None:
	"""
	Every wrapped line made of several words fits the width.
	"""
	text = "Turkey sandwich on wheat, apple slices, carrot sticks, chocolate milk"
	max_width = 90.0
	lines, _dropped = fitting.wrap_words(text, REGULAR, 7.0, max_width, max_lines=10)
	assert " ".join(lines) == text
	for line in lines:
		if " " in line:
			assert fitting.measure_text(line, REGULAR, 7.0) <= max_width


#============================================
def test_wrap_words_keeps_overlong_word() -> None:
	"""
	A single word wider than the line still gets its own line.
	"""
	lines, dropped = fitting.wrap_words("Supercalifragilistic", REGULAR, 7.0, 5.0)
	assert lines == ["Supercalifragilistic"]
	assert dropped is False


#============================================
def test_plan_label_medium_layout() -> None:
	"""
	A typical order on 5160 prints every field top to bottom.
	"""
	order = config.LunchOrder("LUNCH001", "Emma Johnson", "3rd", "Turkey sandwich, apple, milk", "No nuts")
	profile = lunch_label_formatter.templates.lookup("5160")
	plan = plan_for(order, profile)
	assert [line.text for line in plan.lines] == [
		"#LUNCH001",
		"Emma Johnson",
		"Grade: 3rd",
		"Turkey sandwich, apple, milk",
		"* No nuts",
	]
	assert plan.warnings == []

	cell = plan.cell
	top = cell.y + cell.height - 8.64 - 5.0
	ys = [line.y for line in plan.lines]
	assert ys == pytest.approx([top - 10.0 * step for step in range(5)])
	for line in plan.lines:
		assert line.x == pytest.approx(cell.x + 8.64)
	assert [line.font_name for line in plan.lines] == [BOLD, BOLD, REGULAR, REGULAR, REGULAR]
	assert [line.font_size for line in plan.lines] == [7.0, 9.0, 7.0, 7.0, 6.0]
	assert plan.lines[-1].color == config.INSTRUCTIONS_COLOR


#============================================
def test_plan_label_small_tier_truncates_name() -> None:
	"""
	A long name on a small label is truncated with a warning.
	"""
	order = config.LunchOrder("LUNCH001", LONG_NAME, "3rd", "Pizza", "")
	profile = lunch_label_formatter.templates.lookup("5167")
	plan = plan_for(order, profile)
	name_lines = [line for line in plan.lines if line.font_size == 7.0]
	assert len(name_lines) == 1
	assert name_lines[0].text.endswith("...")
	max_width = plan.cell.width - 2.0 * 3.6
	assert fitting.measure_text(name_lines[0].text, BOLD, 7.0) <= max_width
	assert warned_fields(plan)["student_name"] == "truncated"


#============================================
def test_plan_label_skips_wide_order_id_and_grade() -> None:
	"""
	Order id and grade are omitted, never truncated.
	"""
	profile = profile_with_size(0.6, 1.0)
	order = config.LunchOrder("LUNCH0000000000001", "Al", "Kindergarten morning", "Pizza", "")
	settings = fitting.build_fit_settings(profile)
	max_width = profile.label_width * 72.0 - 2.0 * settings.padding
	assert fitting.measure_text("#" + order.order_id, BOLD, settings.font_plan.order_id) > max_width
	assert fitting.measure_text("Grade: " + order.grade, REGULAR, settings.font_plan.grade) > max_width

	plan = plan_for(order, profile)
	texts = [line.text for line in plan.lines]
	assert not any(text.startswith("#") for text in texts)
	assert not any(text.startswith("Grade") for text in texts)
	assert texts[0] == "Al"
	fields = warned_fields(plan)
	assert fields["order_id"] == "omitted"
	assert fields["grade"] == "omitted"


#============================================
def test_plan_label_drops_extra_contents() -> None:
	"""
	Contents beyond three lines are dropped with a warning.
	"""
	contents = " ".join(["Turkey sandwich with lettuce and tomato"] * 5)
	order = config.LunchOrder("LUNCH002", "Liam Smith", "5th", contents, "")
	plan = plan_for(order, lunch_label_formatter.templates.lookup("5160"))
	content_lines = [line for line in plan.lines if line.font_size == 7.0 and line.font_name == REGULAR]
	# grade line plus three content lines
	assert len(content_lines) == 4
	assert warned_fields(plan)["contents"] == "truncated"


#============================================
def test_plan_label_omits_instructions_without_room() -> None:
	"""
	Special instructions need vertical room below the contents.
	"""
	order = config.LunchOrder("LUNCH003", "Al", "3rd", "Pizza", "No nuts")
	plan = plan_for(order, lunch_label_formatter.templates.lookup("5167"))
	assert not any(line.text.startswith("* ") for line in plan.lines)
	assert warned_fields(plan)["special_instructions"] == "omitted"


#============================================
def test_plan_label_omits_wide_instructions() -> None:
	"""
	Special instructions that are too wide are omitted.
	"""
	instructions = "Allergic to peanuts, tree nuts, shellfish, and dairy; please double check every item"
	order = config.LunchOrder("LUNCH004", "Mia Chen", "2nd", "Pasta", instructions)
	plan = plan_for(order, lunch_label_formatter.templates.lookup("5160"))
	assert not any(line.text.startswith("* ") for line in plan.lines)
	assert warned_fields(plan) == {"special_instructions": "omitted"}


#============================================
def test_blank_instructions_are_silent() -> None:
	"""
	Missing special instructions produce no line and no warning.
	"""
	order = config.LunchOrder("LUNCH005", "Noah Lee", "4th", "Salad", "   ")
	plan = plan_for(order, lunch_label_formatter.templates.lookup("5160"))
	assert len(plan.lines) == 4
	assert plan.warnings == []


#============================================
def test_plan_label_is_pure() -> None:
	"""
	Planning the same label twice gives the same result.
	"""
	order = config.LunchOrder("LUNCH006", LONG_NAME, "3rd", "Pizza " * 30, "Extra napkins")
	profile = lunch_label_formatter.templates.lookup("5167")
	assert plan_for(order, profile) == plan_for(order, profile)


#============================================
def test_font_plan_constant_across_orders() -> None:
	"""
	Font sizes depend on the profile only.
	"""
	profile = dataclasses.replace(lunch_label_formatter.templates.lookup("5160"), name="copy")
	first = plan_for(config.LunchOrder("A1", "Ann", "K", "Soup"), profile)
	second = plan_for(config.LunchOrder("B2", "Bob Brown", "12th", "Rice and beans"), profile)
	assert [line.font_size for line in first.lines] == [line.font_size for line in second.lines]


#============================================
def test_instructions_follow_full_contents() -> None:
	"""
	Special instructions still print below three content lines when there is room.
	"""
	contents = " ".join(["Sandwich"] * 21)
	order = config.LunchOrder("LUNCH007", "Olivia Park", "1st", contents, "No nuts")
	profile = lunch_label_formatter.templates.lookup("5164")
	settings = fitting.build_fit_settings(profile)
	plan = plan_for(order, profile)

	max_width = plan.cell.width - 2.0 * settings.padding
	content_lines, dropped = fitting.wrap_words(contents, REGULAR, settings.font_plan.contents, max_width)
	assert len(content_lines) == 3
	assert dropped is False

	assert plan.lines[-1].text == "* No nuts"
	assert len(plan.lines) == 7
	top = plan.cell.y + plan.cell.height - settings.padding - settings.line_spacing * 0.5
	assert plan.lines[-1].y == pytest.approx(top - 6 * settings.line_spacing)
	assert "special_instructions" not in warned_fields(plan)
