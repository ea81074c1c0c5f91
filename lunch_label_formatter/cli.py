"""
CLI entry points for lunch label generation.
"""

# Standard Library
import argparse
import datetime
import pathlib
import time

# local repo modules
import lunch_label_formatter as llf
import lunch_label_formatter.config
import lunch_label_formatter.detect
import lunch_label_formatter.errors
import lunch_label_formatter.orders
import lunch_label_formatter.render
import lunch_label_formatter.templates


LunchOrder = llf.config.LunchOrder
FitWarning = llf.config.FitWarning
LabelFormatterError = llf.errors.LabelFormatterError
ConfigurationError = llf.errors.ConfigurationError

DEFAULT_OUTPUT = "./lunch-labels.pdf"
DEFAULT_GRADE = "5th"
CUSTOM_TEMPLATE_NAME = llf.config.CUSTOM_TEMPLATE_NAME


class PrintObserver(llf.render.LabelObserver):
	"""
	Print renderer events to stdout.
	"""

	def __init__(self, debug: bool = False):
		self.debug = debug

	def on_warning(self, warning: FitWarning) -> None:
		print(f"Warning: {warning.message}")

	def on_page_created(self, page_index: int) -> None:
		if self.debug:
			print(f"Created page {page_index + 1}")


#============================================
def build_profile_source(args: argparse.Namespace) -> llf.templates.ProfileSource:
	"""
	Choose the layout profile source from CLI args.

	A reference PDF wins over manual numbers, which win over a template name.

	Args:
		args: Parsed argparse namespace.

	Returns:
		NamedProfile, ManualProfile, or InferredProfile.
	"""
	if args.template_pdf:
		print(f"Analyzing template: {args.template_pdf}")
		analysis = llf.detect.analyze_template(pathlib.Path(args.template_pdf))
		print(f"Template analyzed: {analysis.profile.name}")
		return llf.templates.InferredProfile(analysis.profile)

	manual_values = (args.rows, args.columns, args.width, args.height)
	if any(value is not None for value in manual_values):
		if any(value is None for value in manual_values):
			raise ConfigurationError("Manual layout needs all of --rows, --columns, --width, --height")
		return llf.templates.ManualProfile(args.rows, args.columns, args.width, args.height)

	print(f"Using built-in template: {args.template_name}")
	return llf.templates.NamedProfile(args.template_name)


#============================================
def build_output_path(args: argparse.Namespace, now: datetime.datetime | None = None) -> pathlib.Path:
	"""
	Build the output PDF path from CLI args.

	Args:
		args: Parsed argparse namespace.
		now: Timestamp to use with --timestamp.

	Returns:
		Output path.
	"""
	output_path = pathlib.Path(args.output_path)
	if args.output_dir:
		output_path = pathlib.Path(args.output_dir) / output_path.name
	if args.timestamp:
		if now is None:
			now = datetime.datetime.now()
		stamp = now.strftime("%Y-%m-%dT%H-%M-%S")
		output_path = output_path.with_name(f"{output_path.stem}-{stamp}{output_path.suffix}")
	return output_path


#============================================
def _prompt_text(input_func, message: str, limit: int | None, required: bool) -> str:
	"""
	Ask until the answer is non-empty (when required) and within the limit.

	Args:
		input_func: Function used to read one answer, like input().
		message: Prompt text.
		limit: Maximum length, or None.
		required: Reject empty answers.

	Returns:
		Trimmed answer.
	"""
	while True:
		value = input_func(message).strip()
		if required and not value:
			print("This field is required")
			continue
		if limit is not None and len(value) > limit:
			print(f"Too long (max {limit} characters)")
			continue
		return value


#============================================
def collect_orders_interactive(input_func=input) -> list[LunchOrder]:
	"""
	Collect lunch orders by prompting on the terminal.

	Args:
		input_func: Function used to read one answer, like input().

	Returns:
		List of LunchOrder.
	"""
	orders: list[LunchOrder] = []
	grade_choices = ", ".join(llf.config.GRADE_CHOICES)
	while True:
		order_id = _prompt_text(input_func, "Order ID: ", llf.config.ORDER_ID_MAX_LENGTH, True)
		student_name = _prompt_text(input_func, "Student name: ", llf.config.STUDENT_NAME_MAX_LENGTH, True)
		while True:
			grade = input_func(f"Student grade ({grade_choices}) [{DEFAULT_GRADE}]: ").strip() or DEFAULT_GRADE
			if grade in llf.config.GRADE_CHOICES:
				break
			print(f"Choose one of: {grade_choices}")
		contents = _prompt_text(input_func, "Lunch contents: ", llf.config.CONTENTS_MAX_LENGTH, True)
		instructions = _prompt_text(
			input_func,
			"Special instructions (optional): ",
			llf.config.SPECIAL_INSTRUCTIONS_MAX_LENGTH,
			False,
		)
		orders.append(LunchOrder(order_id, student_name, grade, contents, instructions))
		answer = input_func("Add another lunch order? [y/N]: ").strip().lower()
		if answer not in ("y", "yes"):
			break
	return orders


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(
		prog="lunch-label-formatter",
		description="Generate Avery label PDFs for school lunch orders.",
	)
	parser.add_argument("--debug", dest="debug", action="store_true", help="Print extra progress output.")
	subparsers = parser.add_subparsers(dest="command", required=True)

	generate = subparsers.add_parser("generate", help="Generate lunch order labels.")
	input_group = generate.add_argument_group("Input")
	input_group.add_argument("-f", "--file", dest="input_path", default=None, help="CSV or JSON file with lunch orders.")
	input_group.add_argument("-i", "--interactive", dest="interactive", action="store_true", help="Enter orders interactively.")

	layout_group = generate.add_argument_group("Layout")
	layout_group.add_argument("-t", "--template", dest="template_pdf", default=None, help="PDF template to analyze for the label layout.")
	layout_group.add_argument(
		"-n", "--template-name",
		dest="template_name",
		default=llf.config.DEFAULT_TEMPLATE_NAME,
		help="Built-in template name (see the templates command), or custom.",
	)
	layout_group.add_argument("--rows", dest="rows", type=int, default=None, help="Manual layout: labels per column.")
	layout_group.add_argument("--columns", dest="columns", type=int, default=None, help="Manual layout: labels per row.")
	layout_group.add_argument("--width", dest="width", type=float, default=None, help="Manual layout: label width in inches.")
	layout_group.add_argument("--height", dest="height", type=float, default=None, help="Manual layout: label height in inches.")

	output_group = generate.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=DEFAULT_OUTPUT, help="Output PDF path.")
	output_group.add_argument("-d", "--output-dir", dest="output_dir", default=None, help="Output directory for the PDF.")
	output_group.add_argument("--timestamp", dest="timestamp", action="store_true", help="Add a timestamp to the output filename.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Write a JSON manifest of the run.")

	analyze = subparsers.add_parser("analyze-template", help="Detect the label layout of a PDF template.")
	analyze.add_argument("template_path", help="PDF template path.")

	subparsers.add_parser("templates", help="List built-in templates.")

	args = parser.parse_args(argv)
	return args


#============================================
def run_generate(args: argparse.Namespace, input_func=input) -> llf.config.GenerationResult:
	"""
	Run label generation.

	Args:
		args: Parsed argparse namespace.
		input_func: Answer reader for interactive mode.

	Returns:
		GenerationResult.
	"""
	if not args.interactive and not args.input_path:
		raise ConfigurationError("Please provide a file path (--file) or use --interactive")
	if not llf.templates.is_valid_name(args.template_name):
		raise llf.errors.UnknownTemplateError(args.template_name)

	start_time = time.perf_counter()
	if args.interactive:
		print("Starting interactive data entry")
		orders = collect_orders_interactive(input_func)
		print(f"Collected {len(orders)} lunch orders")
	else:
		print(f"Loading data from: {args.input_path}")
		orders = llf.orders.load_orders(pathlib.Path(args.input_path))
		print(f"Loaded {len(orders)} lunch orders")

	llf.orders.validate_orders(orders)
	print("All lunch orders validated")

	profile = llf.templates.resolve_profile(build_profile_source(args))
	output_path = build_output_path(args)
	if output_path.exists():
		print(f"Output file already exists and will be replaced: {output_path}")

	print(f"Generating PDF with {len(orders)} labels")
	observer = PrintObserver(debug=args.debug)
	result = llf.render.generate_labels(orders, profile, output_path, observer)

	total_time = time.perf_counter() - start_time
	print(f"Pages written: {result.pages}")
	print(f"Labels printed: {result.total_labels}")
	if result.warnings:
		print(f"Fit warnings: {len(result.warnings)}")
	print(f"Output: {output_path}")
	print(f"File size: {output_path.stat().st_size / 1024.0:.2f} KB")
	print(f"Timing: total={total_time:.2f}s")

	if args.manifest_path:
		llf.render.write_manifest(pathlib.Path(args.manifest_path), result, profile)
		print(f"Manifest written: {args.manifest_path}")
	return result


#============================================
def run_analyze_template(args: argparse.Namespace) -> llf.detect.TemplateAnalysis:
	"""
	Print the layout detected from a PDF template.

	Args:
		args: Parsed argparse namespace.

	Returns:
		TemplateAnalysis.
	"""
	print(f"Analyzing template: {args.template_path}")
	analysis = llf.detect.analyze_template(pathlib.Path(args.template_path))
	profile = analysis.profile
	if analysis.page_size_name:
		print(f"Detected page size: {analysis.page_size_name}")
	else:
		print("No known template detected, created a custom template")
	print(f"Template Name: {profile.name}")
	print(f'Label Width: {profile.label_width:g}"')
	print(f'Label Height: {profile.label_height:g}"')
	print(f"Labels per Row: {profile.labels_per_row}")
	print(f"Labels per Column: {profile.labels_per_column}")
	print(f"Total Labels per Sheet: {profile.labels_per_page}")
	print(f'Top Margin: {profile.margin_top:g}"')
	print(f'Left Margin: {profile.margin_left:g}"')
	print(f'Horizontal Gap: {profile.horizontal_gap:g}"')
	print(f'Vertical Gap: {profile.vertical_gap:g}"')
	return analysis


#============================================
def run_templates(args: argparse.Namespace) -> None:
	"""
	Print the built-in templates.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Available built-in templates:")
	for name, description in llf.templates.list_templates():
		print(f"  {name}: {description}")
	print(f"  {CUSTOM_TEMPLATE_NAME}: Detected from --template or built from --rows/--columns/--width/--height")


#============================================
def error_hint(error: Exception) -> str | None:
	"""
	Suggest a fix for common failures.

	Args:
		error: Raised exception.

	Returns:
		Hint text or None.
	"""
	if isinstance(error, FileNotFoundError):
		return "Check the file path and ensure the file exists"
	if isinstance(error, PermissionError):
		return "Check the file permissions"
	if isinstance(error, IsADirectoryError):
		return "Pass a file, not a directory"
	if isinstance(error, llf.errors.UnknownTemplateError):
		return "Run the templates command to see available templates"
	if isinstance(error, llf.errors.ValidationError):
		return "Ensure every order has orderId, studentName, grade, and contents"
	return None


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Process exit status.
	"""
	args = parse_args(argv)
	handlers = {
		"generate": run_generate,
		"analyze-template": run_analyze_template,
		"templates": run_templates,
	}
	try:
		handlers[args.command](args)
	except (LabelFormatterError, OSError) as error:
		print(f"Error: {error}")
		hint = error_hint(error)
		if hint:
			print(f"Tip: {hint}")
		return 1
	return 0
