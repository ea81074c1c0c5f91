"""
Exception types raised by the label formatter.
"""


class LabelFormatterError(Exception):
	"""
	Base class for all label formatter failures.
	"""


class ConfigurationError(LabelFormatterError):
	"""
	A layout profile is malformed or does not fit on the page.
	"""


class LayoutOverflowError(ConfigurationError):
	"""
	A computed label rectangle falls outside the page.
	"""

	def __init__(self, label_number: int, edge: str, coordinate: float, message: str):
		super().__init__(message)
		self.label_number = label_number
		self.edge = edge
		self.coordinate = coordinate


class UnknownTemplateError(LabelFormatterError):
	"""
	A template name is not registered.
	"""

	def __init__(self, name: str):
		super().__init__(
			f"Unknown template: {name}. Run the 'templates' command to see available options."
		)
		self.name = name


class ValidationError(LabelFormatterError):
	"""
	A lunch order is missing a required field or exceeds a length limit.
	"""

	def __init__(self, index: int, field: str, value: str, reason: str):
		super().__init__(f"Order {index}: {field} {reason}")
		self.index = index
		self.field = field
		self.value = value
		self.reason = reason


class DataFormatError(LabelFormatterError):
	"""
	Input or output data is not in a supported shape.
	"""
