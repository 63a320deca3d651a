"""
Grid, border and crop mark geometry.

All functions are pure. Coordinates are PDF points measured from the
lower-left corner of the page.
"""

# Standard Library
import dataclasses

# local repo modules
import proxy_card_sheets as pcs
import proxy_card_sheets.config
import proxy_card_sheets.errors


PageConfig = pcs.config.PageConfig
CardConfig = pcs.config.CardConfig
ConfigurationError = pcs.errors.ConfigurationError
SequencingMisuse = pcs.errors.SequencingMisuse

Point = tuple[float, float]
Segment = tuple[Point, Point]


@dataclasses.dataclass(frozen=True)
class Placement:
	x: float
	y: float


@dataclasses.dataclass(frozen=True)
class SlotCursor:
	placed_count: int = 0

	def __post_init__(self) -> None:
		if self.placed_count < 0:
			raise ValueError(f"placed_count must not be negative, got {self.placed_count}")

	def advance(self) -> "SlotCursor":
		return SlotCursor(self.placed_count + 1)

	def slot_index(self, cards_per_page: int) -> int:
		return self.placed_count % cards_per_page

	def page_index(self, cards_per_page: int) -> int:
		return self.placed_count // cards_per_page


#============================================
def margin_left(page_width: float, columns: int, card_width: float, spacing: float) -> float:
	"""
	Compute the left margin that centers the grid horizontally.

	Args:
		page_width: Page width.
		columns: Number of grid columns.
		card_width: Card width.
		spacing: Gap between neighbouring cards.

	Returns:
		Left (and right) margin.

	Raises:
		ConfigurationError: If the grid is wider than the page.
	"""
	grid_width = columns * card_width + (columns - 1) * spacing
	margin = (page_width - grid_width) / 2.0
	if margin < 0.0:
		raise ConfigurationError(
			f"{columns} columns need {grid_width:.2f}pt but the page is {page_width:.2f}pt wide"
		)
	return margin


#============================================
def margin_bottom(page_height: float, rows: int, card_height: float, spacing: float) -> float:
	"""
	Compute the bottom margin that centers the grid vertically.

	Args:
		page_height: Page height.
		rows: Number of grid rows.
		card_height: Card height.
		spacing: Gap between neighbouring cards.

	Returns:
		Bottom (and top) margin.

	Raises:
		ConfigurationError: If the grid is taller than the page.
	"""
	grid_height = rows * card_height + (rows - 1) * spacing
	margin = (page_height - grid_height) / 2.0
	if margin < 0.0:
		raise ConfigurationError(
			f"{rows} rows need {grid_height:.2f}pt but the page is {page_height:.2f}pt high"
		)
	return margin


#============================================
def cards_per_page(page_config: PageConfig) -> int:
	count = page_config.cards_per_page
	if count <= 0:
		raise ConfigurationError(
			f"grid {page_config.columns}x{page_config.rows} has no slots"
		)
	return count


#============================================
def starts_new_page(cursor: SlotCursor, page_config: PageConfig) -> bool:
	return cursor.slot_index(cards_per_page(page_config)) == 0


#============================================
def page_start_origin(page_config: PageConfig, card_config: CardConfig) -> Placement:
	"""
	Origin of the top-left slot of a page.

	Args:
		page_config: Page configuration.
		card_config: Card configuration.

	Returns:
		Placement of slot 0.
	"""
	left = margin_left(
		page_config.page_width,
		page_config.columns,
		card_config.card_width,
		page_config.spacing,
	)
	bottom = margin_bottom(
		page_config.page_height,
		page_config.rows,
		card_config.card_height,
		page_config.spacing,
	)
	top_row_y = bottom + (page_config.rows - 1) * (page_config.spacing + card_config.card_height)
	return Placement(left, top_row_y)


#============================================
def next_origin(
	cursor: SlotCursor,
	previous: Placement | None,
	page_config: PageConfig,
	card_config: CardConfig,
) -> Placement:
	"""
	Compute the origin of the slot the cursor points at.

	Slots fill left to right, rows stack top to bottom and a full grid
	starts a new page. The page-start branch wins over the new-row branch.

	Args:
		cursor: Number of cards already placed.
		previous: Origin of the previously placed card, None before the first card.
		page_config: Page configuration.
		card_config: Card configuration.

	Returns:
		Placement of the next card.

	Raises:
		SequencingMisuse: If previous is missing in the middle of a page.
	"""
	per_page = cards_per_page(page_config)
	if cursor.slot_index(per_page) == 0:
		return page_start_origin(page_config, card_config)
	if previous is None:
		raise SequencingMisuse(
			f"slot {cursor.placed_count} continues a page but no previous origin was given"
		)
	if cursor.placed_count % page_config.columns == 0:
		left = margin_left(
			page_config.page_width,
			page_config.columns,
			card_config.card_width,
			page_config.spacing,
		)
		return Placement(left, previous.y - page_config.spacing - card_config.card_height)
	return Placement(previous.x + page_config.spacing + card_config.card_width, previous.y)


#============================================
def slot_origin(slot_index: int, page_config: PageConfig, card_config: CardConfig) -> Placement:
	"""
	Closed-form origin of a page-relative slot index.

	Args:
		slot_index: Slot index within the page.
		page_config: Page configuration.
		card_config: Card configuration.

	Returns:
		Placement of the slot.
	"""
	per_page = cards_per_page(page_config)
	if not 0 <= slot_index < per_page:
		raise ValueError(f"slot index {slot_index} outside 0..{per_page - 1}")
	start = page_start_origin(page_config, card_config)
	row = slot_index // page_config.columns
	col = slot_index % page_config.columns
	x = start.x + col * (card_config.card_width + page_config.spacing)
	y = start.y - row * (card_config.card_height + page_config.spacing)
	return Placement(x, y)


#============================================
def image_rect(origin: Placement, card_config: CardConfig) -> tuple[float, float, float, float]:
	"""
	Rectangle the card image is scaled into.

	Args:
		origin: Card origin.
		card_config: Card configuration.

	Returns:
		Tuple of (x0, y0, x1, y1).
	"""
	padding = card_config.effective_border_padding
	return (
		origin.x + padding,
		origin.y + padding,
		origin.x + card_config.card_width - padding,
		origin.y + card_config.card_height - padding,
	)


#============================================
def border_path(
	origin: Placement,
	card_width: float,
	card_height: float,
	inset: float,
	border_thickness: float,
) -> list[Point]:
	"""
	Closed border rectangle inset from the card edges.

	Traced clockwise from the bottom-left corner. The closing point stops
	half a stroke short so the joint is not drawn twice.

	Args:
		origin: Card origin.
		card_width: Card width.
		card_height: Card height.
		inset: Distance of the stroke centre line from the card edge.
		border_thickness: Stroke width.

	Returns:
		List of 5 points.
	"""
	left = origin.x + inset
	right = origin.x + card_width - inset
	bottom = origin.y + inset
	top = origin.y + card_height - inset
	return [
		(left, bottom),
		(left, top),
		(right, top),
		(right, bottom),
		(left - border_thickness / 2.0, bottom),
	]


#============================================
def crop_mark_segments(
	origin: Placement,
	card_width: float,
	card_height: float,
	crop_mark_length: float,
	crop_mark_gap: float,
) -> list[Segment]:
	"""
	Crop mark segments for the four corners of a card.

	For both ends of every side a segment runs outward from the card edge,
	starting crop_mark_gap away from it and ending crop_mark_length away.
	Extended, each horizontal and vertical pair meets at a corner.

	Args:
		origin: Card origin.
		card_width: Card width.
		card_height: Card height.
		crop_mark_length: Outer reach of a mark from the card edge.
		crop_mark_gap: Blank distance between the card edge and the mark.

	Returns:
		List of 8 (start, end) segments.
	"""
	x = origin.x
	y = origin.y
	segments: list[Segment] = []
	for factor in (0.0, 1.0):
		side_y = y + card_height * factor
		side_x = x + card_width * factor
		# left
		segments.append(((x - crop_mark_gap, side_y), (x - crop_mark_length, side_y)))
		# top
		segments.append((
			(side_x, y + card_height + crop_mark_gap),
			(side_x, y + card_height + crop_mark_length),
		))
		# right
		segments.append((
			(x + card_width + crop_mark_gap, side_y),
			(x + card_width + crop_mark_length, side_y),
		))
		# bottom
		segments.append(((side_x, y - crop_mark_gap), (side_x, y - crop_mark_length)))
	return segments
