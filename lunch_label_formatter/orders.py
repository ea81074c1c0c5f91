"""
Loading, validating, and saving lunch order data (CSV and JSON).
"""

# Standard Library
import csv
import io
import json
import pathlib

# local repo modules
import lunch_label_formatter as llf
import lunch_label_formatter.config
import lunch_label_formatter.errors


LunchOrder = llf.config.LunchOrder
ValidationError = llf.errors.ValidationError
DataFormatError = llf.errors.DataFormatError

ORDER_COLUMNS = llf.config.ORDER_COLUMNS
REQUIRED_COLUMNS = llf.config.REQUIRED_COLUMNS
SUPPORTED_EXTENSIONS = (".csv", ".json")

FIELD_LIMITS = {
	"order_id": llf.config.ORDER_ID_MAX_LENGTH,
	"student_name": llf.config.STUDENT_NAME_MAX_LENGTH,
	"contents": llf.config.CONTENTS_MAX_LENGTH,
	"special_instructions": llf.config.SPECIAL_INSTRUCTIONS_MAX_LENGTH,
}
REQUIRED_FIELDS = [ORDER_COLUMNS[column] for column in REQUIRED_COLUMNS]


#============================================
def _text_value(value) -> str:
	"""
	Convert a raw cell or JSON value to trimmed text, None to "".
	"""
	if value is None:
		return ""
	return str(value).strip()


#============================================
def order_from_mapping(data: dict, index: int) -> LunchOrder:
	"""
	Build a LunchOrder from a record keyed by external column names.

	Args:
		data: Mapping with orderId, studentName, grade, contents keys.
		index: 1-based record position, used in error messages.

	Returns:
		LunchOrder with trimmed values.
	"""
	if not isinstance(data, dict):
		raise DataFormatError(f"Item {index} is not an object")
	missing = [column for column in REQUIRED_COLUMNS if not _text_value(data.get(column))]
	if missing:
		field = ORDER_COLUMNS[missing[0]]
		raise ValidationError(index, field, "", f"is required (missing: {', '.join(missing)})")
	values = {attribute: _text_value(data.get(column)) for column, attribute in ORDER_COLUMNS.items()}
	return LunchOrder(**values)


#============================================
def order_to_mapping(order: LunchOrder) -> dict[str, str]:
	"""
	Convert a LunchOrder back to external column names.

	Args:
		order: Lunch order.

	Returns:
		Dict keyed by column name.
	"""
	return {column: getattr(order, attribute) for column, attribute in ORDER_COLUMNS.items()}


#============================================
def check_order(order: LunchOrder, index: int) -> list[ValidationError]:
	"""
	Collect every validation problem of one order.

	Args:
		order: Lunch order.
		index: 1-based record position.

	Returns:
		List of ValidationError, empty when the order is valid.
	"""
	errors: list[ValidationError] = []
	for field in REQUIRED_FIELDS:
		value = getattr(order, field)
		if not value or not value.strip():
			errors.append(ValidationError(index, field, value, "is required"))
	for field, limit in FIELD_LIMITS.items():
		value = getattr(order, field)
		if value and len(value) > limit:
			errors.append(ValidationError(index, field, value, f"too long (max {limit} characters)"))
	return errors


#============================================
def validate_order(order: LunchOrder, index: int) -> None:
	"""
	Raise on the first problem with an order.

	Args:
		order: Lunch order.
		index: 1-based record position.

	Raises:
		ValidationError: If a field is missing or too long.
	"""
	errors = check_order(order, index)
	if errors:
		raise errors[0]


#============================================
def collect_order_errors(orders: list[LunchOrder]) -> list[ValidationError]:
	"""
	Validate every order and report all problems.

	Args:
		orders: Lunch orders.

	Returns:
		All ValidationErrors in input order.
	"""
	errors: list[ValidationError] = []
	for index, order in enumerate(orders, start=1):
		errors.extend(check_order(order, index))
	return errors


#============================================
def validate_orders(orders: list[LunchOrder]) -> None:
	"""
	Validate orders, stopping at the first problem.

	Args:
		orders: Lunch orders.
	"""
	if not orders:
		raise DataFormatError("No lunch orders to print")
	for index, order in enumerate(orders, start=1):
		validate_order(order, index)


#============================================
def parse_csv_text(content: str) -> list[LunchOrder]:
	"""
	Parse CSV order data with a header row.

	Args:
		content: CSV text.

	Returns:
		List of LunchOrder.
	"""
	content = content.strip()
	if not content:
		raise DataFormatError("CSV file is empty")
	rows = list(csv.reader(io.StringIO(content)))
	if len(rows) < 2:
		raise DataFormatError("CSV file must have at least a header row and one data row")

	headers = [header.strip() for header in rows[0]]
	missing = [column for column in REQUIRED_COLUMNS if column not in headers]
	if missing:
		raise DataFormatError(f"Missing required headers: {', '.join(missing)}")

	orders: list[LunchOrder] = []
	for row_number, row in enumerate(rows[1:], start=2):
		if not row or all(not value.strip() for value in row):
			raise DataFormatError(f"Row {row_number}: CSV file contains empty lines")
		if len(row) != len(headers):
			raise DataFormatError(
				f"Row {row_number}: Column count mismatch. Expected {len(headers)}, got {len(row)}"
			)
		record = dict(zip(headers, row))
		orders.append(order_from_mapping(record, len(orders) + 1))
	return orders


#============================================
def parse_json_text(content: str) -> list[LunchOrder]:
	"""
	Parse a JSON array of order objects.

	Args:
		content: JSON text.

	Returns:
		List of LunchOrder.
	"""
	if not content.strip():
		raise DataFormatError("JSON file is empty")
	try:
		data = json.loads(content)
	except json.JSONDecodeError as error:
		raise DataFormatError(f"Invalid JSON format: {error}") from error
	if not isinstance(data, list):
		raise DataFormatError("JSON content must be an array of objects")
	if not data:
		raise DataFormatError("JSON array cannot be empty")
	return [order_from_mapping(item, index) for index, item in enumerate(data, start=1)]


#============================================
def orders_to_csv_text(orders: list[LunchOrder]) -> str:
	"""
	Serialize orders to CSV with a header row.

	Args:
		orders: Lunch orders.

	Returns:
		CSV text; fields with commas, quotes, or newlines are quoted.
	"""
	buffer = io.StringIO()
	writer = csv.DictWriter(buffer, fieldnames=list(ORDER_COLUMNS), lineterminator="\n")
	writer.writeheader()
	for order in orders:
		writer.writerow(order_to_mapping(order))
	return buffer.getvalue()


#============================================
def orders_to_json_text(orders: list[LunchOrder]) -> str:
	"""
	Serialize orders to a JSON array.

	Args:
		orders: Lunch orders.

	Returns:
		JSON text.
	"""
	return json.dumps([order_to_mapping(order) for order in orders], indent=2)


#============================================
def _check_extension(path: pathlib.Path) -> str:
	"""
	Get the lowercase extension of a data file, rejecting unknown formats.

	Args:
		path: Data file path.

	Returns:
		Extension, ".csv" or ".json".
	"""
	extension = path.suffix.lower()
	if extension not in SUPPORTED_EXTENSIONS:
		raise DataFormatError(
			f"Unsupported file format: {extension or '(none)'}. Supported formats: .json, .csv"
		)
	return extension


#============================================
def load_orders(path: pathlib.Path) -> list[LunchOrder]:
	"""
	Load orders from a CSV or JSON file.

	File system errors (FileNotFoundError, PermissionError,
	IsADirectoryError) propagate unchanged.

	Args:
		path: Input file path.

	Returns:
		List of LunchOrder.
	"""
	path = pathlib.Path(path)
	extension = _check_extension(path)
	content = path.read_text(encoding="utf-8-sig")
	if not content.strip():
		raise DataFormatError(f"File is empty: {path}")
	if extension == ".json":
		return parse_json_text(content)
	return parse_csv_text(content)


#============================================
def save_orders(orders: list[LunchOrder], path: pathlib.Path) -> None:
	"""
	Save orders as CSV or JSON, creating parent directories.

	Args:
		orders: Lunch orders.
		path: Output file path.
	"""
	path = pathlib.Path(path)
	extension = _check_extension(path)
	if not orders:
		raise DataFormatError("Data array cannot be empty")
	if extension == ".json":
		content = orders_to_json_text(orders)
	else:
		content = orders_to_csv_text(orders)
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(content, encoding="utf-8")
