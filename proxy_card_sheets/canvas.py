"""
Drawing backends the layout writer talks to.
"""

# Standard Library
import io
import typing

# PIP3 modules
import PIL.Image
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import proxy_card_sheets as pcs
import proxy_card_sheets.errors


SourceReadError = pcs.errors.SourceReadError


class Canvas:
	"""
	Document backend used by the layout writer.

	A backend owns the page list and the image resource table. Pages are
	opened and closed explicitly and the whole document is encoded once.
	"""

	def register_image(self, name: str, data: bytes) -> typing.Any:
		raise NotImplementedError

	def new_page(self, width: float, height: float) -> None:
		raise NotImplementedError

	def close_page(self) -> None:
		raise NotImplementedError

	def draw_image_in_rect(self, ref: typing.Any, x0: float, y0: float, x1: float, y1: float) -> None:
		raise NotImplementedError

	def set_line_width(self, width: float) -> None:
		raise NotImplementedError

	def stroke_path(self, points: list[tuple[float, float]]) -> None:
		raise NotImplementedError

	def encode_to(self, sink: typing.BinaryIO) -> None:
		raise NotImplementedError


class ReportLabCanvas(Canvas):
	"""
	Canvas backed by ReportLab, with Pillow decoding the images.
	"""

	def __init__(self) -> None:
		self._buffer = io.BytesIO()
		self._pdf = reportlab.pdfgen.canvas.Canvas(self._buffer)

	#============================================
	def register_image(self, name: str, data: bytes) -> reportlab.lib.utils.ImageReader:
		"""
		Decode an image and wrap it for drawing.

		Args:
			name: Image name, used in error messages.
			data: Encoded image bytes.

		Returns:
			ImageReader instance.

		Raises:
			SourceReadError: If Pillow cannot decode the bytes.
		"""
		try:
			image = PIL.Image.open(io.BytesIO(data))
			image.load()
		except (OSError, ValueError, PIL.Image.DecompressionBombError) as error:
			raise SourceReadError(f"cannot decode image {name}: {error}") from error
		return reportlab.lib.utils.ImageReader(image)

	def new_page(self, width: float, height: float) -> None:
		self._pdf.setPageSize((width, height))
		self._pdf.setStrokeColorRGB(0.0, 0.0, 0.0)

	def close_page(self) -> None:
		# showPage ends the page even when nothing was drawn on it
		self._pdf.showPage()

	def draw_image_in_rect(
		self,
		ref: reportlab.lib.utils.ImageReader,
		x0: float,
		y0: float,
		x1: float,
		y1: float,
	) -> None:
		self._pdf.drawImage(
			ref,
			x0,
			y0,
			width=x1 - x0,
			height=y1 - y0,
			mask=None,
			preserveAspectRatio=False,
			anchor="sw",
		)

	def set_line_width(self, width: float) -> None:
		self._pdf.setLineWidth(width)

	#============================================
	def stroke_path(self, points: list[tuple[float, float]]) -> None:
		"""
		Stroke an open polyline.

		Args:
			points: Path points, at least two.
		"""
		if len(points) < 2:
			return
		path = self._pdf.beginPath()
		path.moveTo(points[0][0], points[0][1])
		for point in points[1:]:
			path.lineTo(point[0], point[1])
		self._pdf.drawPath(path, stroke=1, fill=0)

	#============================================
	def encode_to(self, sink: typing.BinaryIO) -> None:
		"""
		Serialize the document and write it to the sink.

		The caller closes the last page first.

		Args:
			sink: Writable binary stream.
		"""
		self._pdf.save()
		sink.write(self._buffer.getvalue())
