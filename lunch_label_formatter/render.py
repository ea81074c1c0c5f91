"""
Rendering of planned labels onto letter-size PDF sheets.
"""

# Standard Library
import io
import json
import pathlib

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import lunch_label_formatter as llf
import lunch_label_formatter.config
import lunch_label_formatter.errors
import lunch_label_formatter.fitting
import lunch_label_formatter.layout
import lunch_label_formatter.orders


LayoutProfile = llf.config.LayoutProfile
LunchOrder = llf.config.LunchOrder
GridCell = llf.config.GridCell
PlacedLabel = llf.config.PlacedLabel
LabelPlan = llf.config.LabelPlan
FitWarning = llf.config.FitWarning
GenerationResult = llf.config.GenerationResult
ConfigurationError = llf.errors.ConfigurationError
DataFormatError = llf.errors.DataFormatError

PAGE_WIDTH = llf.config.PAGE_WIDTH
PAGE_HEIGHT = llf.config.PAGE_HEIGHT
BORDER_LINE_WIDTH = llf.config.BORDER_LINE_WIDTH
DEFAULT_FONT_REGULAR = llf.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = llf.config.DEFAULT_FONT_BOLD


class LabelObserver:
	"""
	Receives progress events from the renderer. Methods do nothing by default.
	"""

	def on_warning(self, warning: FitWarning) -> None:
		pass

	def on_page_created(self, page_index: int) -> None:
		pass


class RecordingObserver(LabelObserver):
	"""
	Observer that keeps every event, handy for tests and manifests.
	"""

	def __init__(self):
		self.warnings: list[FitWarning] = []
		self.pages: list[int] = []

	def on_warning(self, warning: FitWarning) -> None:
		self.warnings.append(warning)

	def on_page_created(self, page_index: int) -> None:
		self.pages.append(page_index)


#============================================
def draw_label_border(pdf: reportlab.pdfgen.canvas.Canvas, cell: GridCell) -> None:
	"""
	Draw a thin cut guide around a label.

	Args:
		pdf: ReportLab canvas.
		cell: Label rectangle.
	"""
	pdf.setLineWidth(BORDER_LINE_WIDTH)
	pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
	pdf.rect(cell.x, cell.y, cell.width, cell.height, stroke=1, fill=0)


#============================================
def draw_label_plan(pdf: reportlab.pdfgen.canvas.Canvas, plan: LabelPlan) -> None:
	"""
	Draw the fitted text lines of one label.

	Args:
		pdf: ReportLab canvas.
		plan: LabelPlan from the fitting step.
	"""
	for line in plan.lines:
		pdf.setFont(line.font_name, line.font_size)
		pdf.setFillColorRGB(*line.color)
		pdf.drawString(line.x, line.y, line.text)


#============================================
def render_document(
	placed: list[PlacedLabel],
	profile: LayoutProfile,
	observer: LabelObserver | None = None,
) -> tuple[bytes, int, list[FitWarning]]:
	"""
	Render paginated labels into an in-memory PDF.

	Args:
		placed: PlacedLabel entries from the paginator.
		profile: Layout profile the labels were placed with.
		observer: Optional event receiver.

	Returns:
		Tuple of (pdf_bytes, page_count, warnings).

	Raises:
		DataFormatError: If there are no labels.
	"""
	if not placed:
		raise DataFormatError("No labels to render")
	if observer is None:
		observer = LabelObserver()
	settings = llf.fitting.build_fit_settings(profile)
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
	pdf.setTitle("Lunch labels")

	warnings: list[FitWarning] = []
	current_page = -1
	page_count = 0
	for entry in placed:
		page_index = entry.cell.page_index
		if page_index < current_page:
			raise ConfigurationError(
				f"Label for order {entry.order.order_id} targets page {page_index + 1} "
				f"after page {current_page + 1} was started"
			)
		if page_index > current_page:
			if page_count > 0:
				pdf.showPage()
			current_page = page_index
			page_count += 1
			observer.on_page_created(page_index)

		plan = llf.fitting.plan_label(entry.order, entry.cell, settings)
		draw_label_border(pdf, entry.cell)
		draw_label_plan(pdf, plan)
		for warning in plan.warnings:
			warnings.append(warning)
			observer.on_warning(warning)

	pdf.save()
	return (buffer.getvalue(), page_count, warnings)


#============================================
def generate_labels(
	orders: list[LunchOrder],
	profile: LayoutProfile,
	output_path: pathlib.Path,
	observer: LabelObserver | None = None,
) -> GenerationResult:
	"""
	Validate, lay out, render, and write a label PDF.

	The output file is written only after the whole document is built,
	so any failure leaves no partial file behind.

	Args:
		orders: Lunch orders in print order.
		profile: Layout profile.
		output_path: Destination PDF path.
		observer: Optional event receiver.

	Returns:
		GenerationResult.
	"""
	llf.orders.validate_orders(orders)
	placed = llf.layout.paginate(orders, profile)
	pdf_bytes, pages, warnings = render_document(placed, profile, observer)

	output_path = pathlib.Path(output_path)
	output_path.parent.mkdir(parents=True, exist_ok=True)
	output_path.write_bytes(pdf_bytes)

	return GenerationResult(
		total_labels=len(placed),
		pages=pages,
		labels_per_page=profile.labels_per_page,
		template_name=profile.name,
		output_path=str(output_path),
		warnings=warnings,
	)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	result: GenerationResult,
	profile: LayoutProfile,
) -> None:
	"""
	Write a manifest JSON file describing a generation run.

	Args:
		manifest_path: Output path.
		result: Generation result.
		profile: Layout profile used.
	"""
	settings = llf.fitting.build_fit_settings(profile)
	data = {
		"output": result.output_path,
		"template": result.template_name,
		"labels_per_page": result.labels_per_page,
		"total_labels": result.total_labels,
		"pages": result.pages,
		"layout": {
			"label_width": profile.label_width,
			"label_height": profile.label_height,
			"labels_per_row": profile.labels_per_row,
			"labels_per_column": profile.labels_per_column,
			"margin_top": profile.margin_top,
			"margin_left": profile.margin_left,
			"horizontal_gap": profile.horizontal_gap,
			"vertical_gap": profile.vertical_gap,
		},
		"fit": {
			"tier": settings.tier,
			"line_spacing": settings.line_spacing,
			"padding": settings.padding,
			"font_sizes": {
				"order_id": settings.font_plan.order_id,
				"student_name": settings.font_plan.student_name,
				"grade": settings.font_plan.grade,
				"contents": settings.font_plan.contents,
				"special_instructions": settings.font_plan.special_instructions,
			},
		},
		"fonts": {
			"regular": DEFAULT_FONT_REGULAR,
			"bold": DEFAULT_FONT_BOLD,
		},
		"warnings": [
			{
				"order_id": warning.order_id,
				"field": warning.field,
				"action": warning.action,
				"message": warning.message,
			}
			for warning in result.warnings
		],
	}
	manifest_path = pathlib.Path(manifest_path)
	manifest_path.parent.mkdir(parents=True, exist_ok=True)
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
