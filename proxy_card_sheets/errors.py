"""
Error types raised while laying out card sheets.
"""


class ProxyCardError(Exception):
	"""
	Base class for all card sheet errors.
	"""


class ConfigurationError(ProxyCardError, ValueError):
	"""
	The page or card configuration cannot produce a valid grid.
	"""


class SourceReadError(ProxyCardError):
	"""
	An input image could not be read or decoded.
	"""


class EncodeError(ProxyCardError):
	"""
	The finished document could not be written to its output sink.
	"""


class SequencingMisuse(ProxyCardError, RuntimeError):
	"""
	A writer operation was called in the wrong state.
	"""
