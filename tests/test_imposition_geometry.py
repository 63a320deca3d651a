import dataclasses

import pytest

import proxy_card_sheets.config
import proxy_card_sheets.errors
import proxy_card_sheets.geometry


geometry = proxy_card_sheets.geometry
config = proxy_card_sheets.config
EPSILON = 0.001


#============================================
def build_configs(
	columns: int = 3,
	rows: int = 3,
	spacing: float = 0.0,
) -> tuple[config.PageConfig, config.CardConfig]:
	"""
	Build A4 page and poker card configs for tests.
	"""
	page_config = config.PageConfig(
		page_width=config.PAGE_SIZES["a4"][0],
		page_height=config.PAGE_SIZES["a4"][1],
		columns=columns,
		rows=rows,
		spacing=spacing,
	)
	return (page_config, config.default_card_config())


#============================================
def walk_origins(count: int, page_config, card_config) -> list[geometry.Placement]:
	"""
	Run next_origin over count consecutive slots.
	"""
	origins = []
	cursor = geometry.SlotCursor()
	previous = None
	for _ in range(count):
		previous = geometry.next_origin(cursor, previous, page_config, card_config)
		origins.append(previous)
		cursor = cursor.advance()
	return origins


#============================================
@pytest.mark.parametrize("spacing", [0.0, 5.0, 14.17])
@pytest.mark.parametrize("columns,rows", [(1, 1), (3, 3), (2, 3)])
def test_margins_center_grid(columns: int, rows: int, spacing: float) -> None:
	"""
	Left margin equals right margin and bottom equals top.
	"""
	page_config, card_config = build_configs(columns, rows, spacing)
	left = geometry.margin_left(page_config.page_width, columns, card_config.card_width, spacing)
	bottom = geometry.margin_bottom(page_config.page_height, rows, card_config.card_height, spacing)

	grid_right = left + columns * card_config.card_width + (columns - 1) * spacing
	grid_top = bottom + rows * card_config.card_height + (rows - 1) * spacing
	assert page_config.page_width - grid_right == pytest.approx(left)
	assert page_config.page_height - grid_top == pytest.approx(bottom)


#============================================
def test_margin_too_small_page_raises() -> None:
	"""
	A grid wider or taller than the page is a configuration error.
	"""
	with pytest.raises(proxy_card_sheets.errors.ConfigurationError):
		geometry.margin_left(500.0, 3, 180.0, 0.0)
	with pytest.raises(proxy_card_sheets.errors.ConfigurationError):
		geometry.margin_bottom(700.0, 3, 252.0, 0.0)
	assert geometry.margin_left(540.0, 3, 180.0, 0.0) == 0.0


#============================================
def test_empty_grid_raises_before_modulo() -> None:
	"""
	A zero-slot grid is rejected instead of dividing by zero.
	"""
	page_config, card_config = build_configs(columns=0, rows=3)
	with pytest.raises(proxy_card_sheets.errors.ConfigurationError):
		geometry.next_origin(geometry.SlotCursor(), None, page_config, card_config)


#============================================
def test_page_start_origin_is_top_left_slot() -> None:
	"""
	Slot 0 sits in the top row at the left margin.
	"""
	page_config, card_config = build_configs()
	origin = geometry.next_origin(geometry.SlotCursor(), None, page_config, card_config)
	left = (page_config.page_width - 3 * card_config.card_width) / 2.0
	bottom = (page_config.page_height - 3 * card_config.card_height) / 2.0
	assert origin.x == pytest.approx(left)
	assert origin.y == pytest.approx(bottom + 2 * card_config.card_height)


#============================================
def test_next_origin_periodic_per_page() -> None:
	"""
	Slot k and slot k + cards_per_page share an origin.
	"""
	page_config, card_config = build_configs(columns=2, rows=3, spacing=3.0)
	per_page = page_config.cards_per_page
	origins = walk_origins(per_page * 3, page_config, card_config)
	for index in range(per_page * 2):
		assert origins[index] == origins[index + per_page]


#============================================
def test_raster_order_within_page() -> None:
	"""
	X grows along a row, then resets while Y drops for the next row.
	"""
	page_config, card_config = build_configs(columns=3, rows=3, spacing=2.0)
	origins = walk_origins(page_config.cards_per_page, page_config, card_config)
	for index in range(1, len(origins)):
		before = origins[index - 1]
		after = origins[index]
		if index % page_config.columns == 0:
			assert after.x < before.x
			assert after.y < before.y
		else:
			assert after.x > before.x
			assert after.y == before.y


#============================================
def test_incremental_matches_closed_form() -> None:
	"""
	next_origin and slot_origin agree on every slot.
	"""
	page_config, card_config = build_configs(columns=3, rows=2, spacing=4.0)
	origins = walk_origins(page_config.cards_per_page, page_config, card_config)
	for index, origin in enumerate(origins):
		expected = geometry.slot_origin(index, page_config, card_config)
		assert origin.x == pytest.approx(expected.x)
		assert origin.y == pytest.approx(expected.y)


#============================================
def test_slots_within_page_and_non_overlapping() -> None:
	"""
	All slots stay on-page and adjacent slots do not overlap.
	"""
	page_config, card_config = build_configs(spacing=2.0)
	width = card_config.card_width
	height = card_config.card_height
	origins = walk_origins(page_config.cards_per_page, page_config, card_config)
	for origin in origins:
		assert 0.0 <= origin.x < origin.x + width <= page_config.page_width
		assert 0.0 <= origin.y < origin.y + height <= page_config.page_height
	assert origins[1].x >= origins[0].x + width - EPSILON
	assert origins[3].y + height <= origins[0].y + EPSILON


#============================================
def test_next_origin_requires_previous_mid_page() -> None:
	"""
	Continuing a page without a previous origin is a sequencing error.
	"""
	page_config, card_config = build_configs()
	with pytest.raises(proxy_card_sheets.errors.SequencingMisuse):
		geometry.next_origin(geometry.SlotCursor(4), None, page_config, card_config)


#============================================
def test_slot_cursor_indices() -> None:
	"""
	Cursor splits into page index and page-relative slot index.
	"""
	cursor = geometry.SlotCursor(10)
	assert cursor.slot_index(9) == 1
	assert cursor.page_index(9) == 1
	assert cursor.advance() == geometry.SlotCursor(11)
	assert geometry.starts_new_page(geometry.SlotCursor(9), build_configs()[0])
	with pytest.raises(ValueError):
		geometry.SlotCursor(-1)


#============================================
def test_crop_marks_eight_segments_without_corners() -> None:
	"""
	Every card gets 8 crop marks and none touches a corner.
	"""
	origin = geometry.Placement(30.0, 40.0)
	width = 180.0
	height = 252.0
	segments = geometry.crop_mark_segments(origin, width, height, 14.17, 2.83)
	assert len(segments) == 8

	corners = {
		(30.0, 40.0),
		(30.0 + width, 40.0),
		(30.0, 40.0 + height),
		(30.0 + width, 40.0 + height),
	}
	for start, end in segments:
		assert start not in corners
		assert end not in corners
		length = abs(end[0] - start[0]) + abs(end[1] - start[1])
		assert length == pytest.approx(14.17 - 2.83)
		# axis aligned
		assert start[0] == end[0] or start[1] == end[1]


#============================================
def test_crop_marks_point_outward_along_corner_lines() -> None:
	"""
	Marks lie outside the card on the lines through its edges.
	"""
	origin = geometry.Placement(0.0, 0.0)
	segments = geometry.crop_mark_segments(origin, 100.0, 200.0, 10.0, 2.0)
	for start, end in segments:
		for x, y in (start, end):
			outside_x = x < 0.0 or x > 100.0
			outside_y = y < 0.0 or y > 200.0
			assert outside_x or outside_y
			assert x in (0.0, 100.0) or y in (0.0, 200.0)
	assert ((-2.0, 0.0), (-10.0, 0.0)) in segments
	assert ((100.0, 202.0), (100.0, 210.0)) in segments


#============================================
def test_border_path_closes_with_half_stroke_offset() -> None:
	"""
	Border is 5 points clockwise from bottom-left with an offset close.
	"""
	origin = geometry.Placement(10.0, 20.0)
	points = geometry.border_path(origin, 100.0, 200.0, 3.0, 8.0)
	assert points == [
		(13.0, 23.0),
		(13.0, 217.0),
		(107.0, 217.0),
		(107.0, 23.0),
		(9.0, 23.0),
	]


#============================================
def test_image_rect_ignores_padding_without_border() -> None:
	"""
	With the border off the image fills the whole card.
	"""
	card_config = config.default_card_config()
	origin = geometry.Placement(5.0, 6.0)
	padded = geometry.image_rect(origin, card_config)
	padding = card_config.border_padding
	assert padded == pytest.approx((
		5.0 + padding,
		6.0 + padding,
		5.0 + card_config.card_width - padding,
		6.0 + card_config.card_height - padding,
	))

	no_border = dataclasses.replace(card_config, draw_border=False)
	assert geometry.image_rect(origin, no_border) == pytest.approx((
		5.0,
		6.0,
		5.0 + card_config.card_width,
		6.0 + card_config.card_height,
	))
