"""
Layout writer: places repeated card images on page grids.
"""

# Standard Library
import typing

# local repo modules
import proxy_card_sheets as pcs
import proxy_card_sheets.canvas
import proxy_card_sheets.config
import proxy_card_sheets.errors
import proxy_card_sheets.geometry


Canvas = pcs.canvas.Canvas
PageConfig = pcs.config.PageConfig
CardConfig = pcs.config.CardConfig
LayoutResult = pcs.config.LayoutResult
ImageRequest = pcs.config.ImageRequest
EncodeError = pcs.errors.EncodeError
SequencingMisuse = pcs.errors.SequencingMisuse
Placement = pcs.geometry.Placement
SlotCursor = pcs.geometry.SlotCursor

STATE_IDLE = "IDLE"
STATE_PAGE_OPEN = "PAGE_OPEN"
STATE_FINALIZED = "FINALIZED"


class CardSheetWriter:
	"""
	Write card images onto a grid of pages.

	Each repetition of an image takes the next slot. Slots fill rows left
	to right, rows top to bottom, and a full grid starts a new page. The
	writer is single-owner: one instance per output document.

	Use it as a context manager so the document is always released:

		with CardSheetWriter(canvas, sink, page_config, card_config) as writer:
			writer.write_image("ali.jpg", data, 4)
	"""

	def __init__(
		self,
		canvas: Canvas,
		sink: typing.BinaryIO,
		page_config: PageConfig,
		card_config: CardConfig,
	) -> None:
		pcs.config.validate_page_config(page_config)
		pcs.config.validate_card_config(card_config)
		# margins raise on a grid that does not fit the page
		pcs.geometry.page_start_origin(page_config, card_config)

		self.page_config = page_config
		self.card_config = card_config
		self._canvas = canvas
		self._sink = sink
		self._state = STATE_IDLE
		self._cursor = SlotCursor()
		self._current: Placement | None = None
		self._image_refs: dict[str, typing.Any] = {}
		self._pages_opened = 0
		self._result: LayoutResult | None = None

	@property
	def state(self) -> str:
		return self._state

	@property
	def cursor(self) -> SlotCursor:
		return self._cursor

	@property
	def pages_opened(self) -> int:
		return self._pages_opened

	@property
	def current_origin(self) -> Placement | None:
		return self._current

	def __enter__(self) -> "CardSheetWriter":
		return self

	def __exit__(self, exc_type, exc_value, traceback) -> None:
		if self._state == STATE_FINALIZED:
			return
		if exc_type is None:
			self.finalize()
		else:
			self.abort()

	#============================================
	def write_image(self, name: str, data: bytes, repeat_count: int = 1) -> None:
		"""
		Place an image repeat_count times.

		The image is registered with the canvas once per distinct name.

		Args:
			name: Image name, the registration key.
			data: Encoded image bytes.
			repeat_count: Number of copies to place, at least 1.

		Raises:
			SequencingMisuse: If the writer was already finalized.
			ValueError: If repeat_count is below 1.
		"""
		if self._state == STATE_FINALIZED:
			raise SequencingMisuse(f"cannot write {name} after finalize")
		if repeat_count < 1:
			raise ValueError(f"repeat count for {name} must be at least 1, got {repeat_count}")

		ref = self._register(name, data)
		for _ in range(repeat_count):
			self._place(ref)

	def write_request(self, request: ImageRequest) -> None:
		self.write_image(request.name, request.data, request.repeat_count)

	def write_all(self, requests: typing.Iterable[ImageRequest]) -> None:
		for request in requests:
			self.write_request(request)

	#============================================
	def finalize(self) -> LayoutResult:
		"""
		Close the last page and encode the document to the sink.

		A document with no cards still gets one empty page.

		Returns:
			LayoutResult.

		Raises:
			SequencingMisuse: If called twice.
			EncodeError: If the sink cannot be written.
		"""
		if self._state == STATE_FINALIZED:
			raise SequencingMisuse("writer already finalized")
		if self._state == STATE_IDLE:
			self._open_page()
		self._state = STATE_FINALIZED
		self._canvas.close_page()
		try:
			self._canvas.encode_to(self._sink)
		except OSError as error:
			raise EncodeError(f"cannot write document: {error}") from error
		self._result = LayoutResult(
			images=len(self._image_refs),
			cards_placed=self._cursor.placed_count,
			pages=self._pages_opened,
			cards_per_page=self.page_config.cards_per_page,
		)
		return self._result

	def abort(self) -> None:
		"""
		Release the writer without encoding anything.
		"""
		self._state = STATE_FINALIZED

	#============================================
	def _register(self, name: str, data: bytes) -> typing.Any:
		if name not in self._image_refs:
			self._image_refs[name] = self._canvas.register_image(name, data)
		return self._image_refs[name]

	def _open_page(self) -> None:
		if self._state == STATE_PAGE_OPEN:
			self._canvas.close_page()
		self._canvas.new_page(self.page_config.page_width, self.page_config.page_height)
		self._pages_opened += 1
		self._state = STATE_PAGE_OPEN

	def _place(self, ref: typing.Any) -> None:
		card = self.card_config
		if pcs.geometry.starts_new_page(self._cursor, self.page_config):
			self._open_page()
		origin = pcs.geometry.next_origin(self._cursor, self._current, self.page_config, card)
		self._current = origin

		if card.draw_crop_marks:
			self._canvas.set_line_width(card.crop_line_thickness)
			segments = pcs.geometry.crop_mark_segments(
				origin,
				card.card_width,
				card.card_height,
				card.crop_mark_length,
				card.crop_mark_gap,
			)
			for start, end in segments:
				self._canvas.stroke_path([start, end])

		x0, y0, x1, y1 = pcs.geometry.image_rect(origin, card)
		self._canvas.draw_image_in_rect(ref, x0, y0, x1, y1)

		if card.draw_border:
			self._canvas.set_line_width(card.border_thickness)
			path = pcs.geometry.border_path(
				origin,
				card.card_width,
				card.card_height,
				card.border_inset,
				card.border_thickness,
			)
			self._canvas.stroke_path(path)

		self._cursor = self._cursor.advance()
