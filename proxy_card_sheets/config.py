"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.pagesizes

# local repo modules
import proxy_card_sheets as pcs
import proxy_card_sheets.errors


ConfigurationError = pcs.errors.ConfigurationError

POINTS_PER_INCH = 72.0
POINTS_PER_CM = POINTS_PER_INCH / 2.54

PAGE_SIZES = {
	"a4": reportlab.lib.pagesizes.A4,
	"letter": reportlab.lib.pagesizes.letter,
}
DEFAULT_PAGE_SIZE = "a4"
COLUMNS = 3
ROWS = 3

DEFAULT_SPACING_CM = 0.0
DEFAULT_CARD_WIDTH_IN = 2.5
DEFAULT_CARD_HEIGHT_IN = 3.5
DEFAULT_BORDER_THICKNESS_CM = 0.4
DEFAULT_BORDER_INSET_CM = 0.1
DEFAULT_BORDER_PADDING_CM = 0.165
DEFAULT_CROP_MARK_LENGTH_CM = 0.5
DEFAULT_CROP_MARK_GAP_CM = 0.1
DEFAULT_CROP_LINE_THICKNESS = 0.1

DEFAULT_INPUT_DIR = "./"
DEFAULT_OUTPUT_FILE = "./output.pdf"
PROGRESS_BAR_WIDTH = 20


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


#============================================
def cm_to_points(value: float) -> float:
	"""
	Convert centimeters to points.
	"""
	return value * POINTS_PER_CM


@dataclasses.dataclass(frozen=True)
class PageConfig:
	page_width: float
	page_height: float
	columns: int
	rows: int
	spacing: float

	@property
	def cards_per_page(self) -> int:
		return self.columns * self.rows


@dataclasses.dataclass(frozen=True)
class CardConfig:
	card_width: float
	card_height: float
	border_thickness: float
	border_inset: float
	border_padding: float
	crop_mark_length: float
	crop_mark_gap: float
	crop_line_thickness: float
	draw_border: bool
	draw_crop_marks: bool

	@property
	def effective_border_padding(self) -> float:
		# the image fills the whole card when no border is drawn
		if self.draw_border:
			return self.border_padding
		return 0.0


@dataclasses.dataclass
class ImageRequest:
	name: str
	data: bytes
	repeat_count: int = 1


@dataclasses.dataclass
class LayoutResult:
	images: int
	cards_placed: int
	pages: int
	cards_per_page: int


#============================================
def default_page_config(page_size: str = DEFAULT_PAGE_SIZE) -> PageConfig:
	"""
	Build the default 3x3 page configuration.

	Args:
		page_size: Key into PAGE_SIZES.

	Returns:
		PageConfig.
	"""
	if page_size not in PAGE_SIZES:
		raise ConfigurationError(f"unknown page size: {page_size}")
	page_width, page_height = PAGE_SIZES[page_size]
	return PageConfig(
		page_width=page_width,
		page_height=page_height,
		columns=COLUMNS,
		rows=ROWS,
		spacing=cm_to_points(DEFAULT_SPACING_CM),
	)


#============================================
def default_card_config() -> CardConfig:
	"""
	Build the default poker card configuration with border and crop marks.

	Returns:
		CardConfig.
	"""
	return CardConfig(
		card_width=inches_to_points(DEFAULT_CARD_WIDTH_IN),
		card_height=inches_to_points(DEFAULT_CARD_HEIGHT_IN),
		border_thickness=cm_to_points(DEFAULT_BORDER_THICKNESS_CM),
		border_inset=cm_to_points(DEFAULT_BORDER_INSET_CM),
		border_padding=cm_to_points(DEFAULT_BORDER_PADDING_CM),
		crop_mark_length=cm_to_points(DEFAULT_CROP_MARK_LENGTH_CM),
		crop_mark_gap=cm_to_points(DEFAULT_CROP_MARK_GAP_CM),
		crop_line_thickness=DEFAULT_CROP_LINE_THICKNESS,
		draw_border=True,
		draw_crop_marks=True,
	)


#============================================
def validate_page_config(config: PageConfig) -> None:
	"""
	Check grid invariants that do not depend on the card size.

	Args:
		config: Page configuration.

	Raises:
		ConfigurationError: On an empty grid or a non-positive page.
	"""
	if config.columns < 1 or config.rows < 1:
		raise ConfigurationError(
			f"grid needs at least one column and row, got {config.columns}x{config.rows}"
		)
	if config.page_width <= 0.0 or config.page_height <= 0.0:
		raise ConfigurationError(
			f"page size must be positive, got {config.page_width}x{config.page_height}"
		)
	if config.spacing < 0.0:
		raise ConfigurationError(f"spacing must not be negative, got {config.spacing}")


#============================================
def validate_card_config(config: CardConfig) -> None:
	"""
	Check card invariants.

	Args:
		config: Card configuration.

	Raises:
		ConfigurationError: When a dimension, padding or crop mark setting is out of range.
	"""
	if config.card_width <= 0.0 or config.card_height <= 0.0:
		raise ConfigurationError(
			f"card size must be positive, got {config.card_width}x{config.card_height}"
		)
	half_short_side = min(config.card_width, config.card_height) / 2.0
	if not 0.0 <= config.border_padding < half_short_side:
		raise ConfigurationError(
			f"border padding {config.border_padding:.2f} must be below {half_short_side:.2f}"
		)
	if not 0.0 <= config.border_inset < half_short_side:
		raise ConfigurationError(
			f"border inset {config.border_inset:.2f} must be below {half_short_side:.2f}"
		)
	if config.border_thickness <= 0.0 or config.crop_line_thickness <= 0.0:
		raise ConfigurationError("line thicknesses must be positive")
	if not 0.0 < config.crop_mark_gap < config.crop_mark_length:
		raise ConfigurationError(
			f"crop mark gap {config.crop_mark_gap:.2f} must be between 0 and "
			f"the crop mark length {config.crop_mark_length:.2f}"
		)
