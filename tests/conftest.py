"""
Pytest configuration for local imports and shared fixtures.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

# local repo modules
import proxy_card_sheets.canvas


class RecordingCanvas(proxy_card_sheets.canvas.Canvas):
	"""
	Canvas that records every call instead of drawing.
	"""

	def __init__(self) -> None:
		self.calls: list[tuple] = []
		self.registered: list[str] = []

	def register_image(self, name: str, data: bytes) -> str:
		self.registered.append(name)
		self.calls.append(("register_image", name))
		return f"ref:{name}"

	def new_page(self, width: float, height: float) -> None:
		self.calls.append(("new_page", width, height))

	def close_page(self) -> None:
		self.calls.append(("close_page",))

	def draw_image_in_rect(self, ref, x0: float, y0: float, x1: float, y1: float) -> None:
		self.calls.append(("draw_image_in_rect", ref, x0, y0, x1, y1))

	def set_line_width(self, width: float) -> None:
		self.calls.append(("set_line_width", width))

	def stroke_path(self, points: list[tuple[float, float]]) -> None:
		self.calls.append(("stroke_path", list(points)))

	def encode_to(self, sink) -> None:
		self.calls.append(("encode_to",))
		sink.write(b"%PDF-recorded")

	def names(self) -> list[str]:
		return [call[0] for call in self.calls]

	def image_rects(self) -> list[tuple]:
		return [call[1:] for call in self.calls if call[0] == "draw_image_in_rect"]


#============================================
@pytest.fixture
def recording_canvas() -> RecordingCanvas:
	"""
	Provide a fresh recording canvas.
	"""
	return RecordingCanvas()
