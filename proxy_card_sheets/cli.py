"""
CLI entry points for laying out card images as printable PDF sheets.
"""

# Standard Library
import argparse
import json
import pathlib
import time

# local repo modules
import proxy_card_sheets as pcs
import proxy_card_sheets.canvas
import proxy_card_sheets.config
import proxy_card_sheets.errors
import proxy_card_sheets.geometry
import proxy_card_sheets.sequencer
import proxy_card_sheets.sources


PageConfig = pcs.config.PageConfig
CardConfig = pcs.config.CardConfig
LayoutResult = pcs.config.LayoutResult
EncodeError = pcs.errors.EncodeError
CardSheetWriter = pcs.sequencer.CardSheetWriter

PAGE_SIZES = pcs.config.PAGE_SIZES
DEFAULT_PAGE_SIZE = pcs.config.DEFAULT_PAGE_SIZE
COLUMNS = pcs.config.COLUMNS
ROWS = pcs.config.ROWS
DEFAULT_SPACING_CM = pcs.config.DEFAULT_SPACING_CM
DEFAULT_INPUT_DIR = pcs.config.DEFAULT_INPUT_DIR
DEFAULT_OUTPUT_FILE = pcs.config.DEFAULT_OUTPUT_FILE
PROGRESS_BAR_WIDTH = pcs.config.PROGRESS_BAR_WIDTH


#============================================
def build_page_config(args: argparse.Namespace) -> PageConfig:
	"""
	Build page config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		PageConfig.
	"""
	page_width, page_height = PAGE_SIZES[args.page_size]
	return PageConfig(
		page_width=page_width,
		page_height=page_height,
		columns=args.columns,
		rows=args.rows,
		spacing=pcs.config.cm_to_points(args.spacing_cm),
	)


#============================================
def build_card_config(args: argparse.Namespace) -> CardConfig:
	"""
	Build card config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		CardConfig.
	"""
	defaults = pcs.config.default_card_config()
	return CardConfig(
		card_width=defaults.card_width,
		card_height=defaults.card_height,
		border_thickness=defaults.border_thickness,
		border_inset=defaults.border_inset,
		border_padding=defaults.border_padding,
		crop_mark_length=defaults.crop_mark_length,
		crop_mark_gap=defaults.crop_mark_gap,
		crop_line_thickness=defaults.crop_line_thickness,
		draw_border=args.draw_border,
		draw_crop_marks=args.draw_crop_marks,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Lay out JPEG card images on printable PDF pages.")

	io_group = parser.add_argument_group("Input/Output")
	io_group.add_argument("-i", "--in", dest="input_dir", default=DEFAULT_INPUT_DIR, help="The input directory.")
	io_group.add_argument("-o", "--out", dest="output_path", default=DEFAULT_OUTPUT_FILE, help="The output PDF file.")
	io_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Optional layout manifest JSON path.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-b", "--border", dest="draw_border", action="store_true", help="Draw a black border on each card.")
	behavior_group.add_argument("-B", "--no-border", dest="draw_border", action="store_false", help="Disable card borders.")
	behavior_group.add_argument("-k", "--crop-marks", dest="draw_crop_marks", action="store_true", help="Draw corner crop marks.")
	behavior_group.add_argument("-K", "--no-crop-marks", dest="draw_crop_marks", action="store_false", help="Disable crop marks.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-c", "--columns", dest="columns", type=int, default=COLUMNS, help="Cards per row.")
	layout_group.add_argument("-r", "--rows", dest="rows", type=int, default=ROWS, help="Rows per page.")
	layout_group.add_argument("-s", "--spacing-cm", dest="spacing_cm", type=float, default=DEFAULT_SPACING_CM, help="Gap between cards in cm.")
	layout_group.add_argument(
		"-p",
		"--page-size",
		dest="page_size",
		choices=sorted(PAGE_SIZES),
		default=DEFAULT_PAGE_SIZE,
		help="Page size.",
	)

	parser.set_defaults(
		draw_border=True,
		draw_crop_marks=True,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"\r{prefix} [{bar}] {current}/{total} ({percent}%)", end="", flush=True)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	inputs: list[pathlib.Path],
	counts_by_file: dict[str, int],
	result: LayoutResult,
	page_config: PageConfig,
	card_config: CardConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		inputs: Input image files.
		counts_by_file: Repeat count by file name.
		result: Layout result.
		page_config: Page configuration.
		card_config: Card configuration.
	"""
	start = pcs.geometry.page_start_origin(page_config, card_config)
	data = {
		"inputs": [str(path) for path in inputs],
		"repeat_counts": counts_by_file,
		"cards_per_page": result.cards_per_page,
		"cards_placed": result.cards_placed,
		"images": result.images,
		"pages": result.pages,
		"layout": {
			"page_width": page_config.page_width,
			"page_height": page_config.page_height,
			"columns": page_config.columns,
			"rows": page_config.rows,
			"spacing": page_config.spacing,
			"margin_left": start.x,
			"margin_bottom": pcs.geometry.margin_bottom(
				page_config.page_height,
				page_config.rows,
				card_config.card_height,
				page_config.spacing,
			),
			"card_width": card_config.card_width,
			"card_height": card_config.card_height,
			"draw_border": card_config.draw_border,
			"draw_crop_marks": card_config.draw_crop_marks,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)


#============================================
def write_cards(
	paths: list[pathlib.Path],
	output_path: pathlib.Path,
	page_config: PageConfig,
	card_config: CardConfig,
) -> LayoutResult:
	"""
	Lay out image files into a PDF written to output_path.

	The partial output file is removed when any step fails.

	Args:
		paths: Image paths in placement order.
		output_path: Output PDF path.
		page_config: Page configuration.
		card_config: Card configuration.

	Returns:
		LayoutResult.
	"""
	try:
		handle = output_path.open("wb")
	except OSError as error:
		raise EncodeError(f"cannot create {output_path}: {error}") from error

	try:
		with handle:
			canvas = pcs.canvas.ReportLabCanvas()
			with CardSheetWriter(canvas, handle, page_config, card_config) as writer:
				for index, path in enumerate(paths, start=1):
					request = pcs.sources.load_image_request(path)
					writer.write_request(request)
					print_progress("Placing images", index, len(paths))
				print()
				result = writer.finalize()
	except BaseException:
		output_path.unlink(missing_ok=True)
		raise
	return result


#============================================
def run_pipeline(args: argparse.Namespace) -> LayoutResult | None:
	"""
	Run the full pipeline from an image directory to a PDF.

	Args:
		args: Parsed argparse namespace.

	Returns:
		LayoutResult, or None when there were no images.
	"""
	print(f"read files in directory: {args.input_dir}")
	print(f"writing output to: {args.output_path}")
	print(f"Grid: {args.columns}x{args.rows} on {args.page_size}")
	print(f"Draw border: {args.draw_border}")
	print(f"Draw crop marks: {args.draw_crop_marks}")

	# configs are validated before any file is touched
	page_config = build_page_config(args)
	card_config = build_card_config(args)
	pcs.config.validate_page_config(page_config)
	pcs.config.validate_card_config(card_config)
	pcs.geometry.page_start_origin(page_config, card_config)

	paths = pcs.sources.gather_image_paths(args.input_dir)
	if not paths:
		print(f"there is no jpg in {args.input_dir} so no pdf has been generated")
		return None
	print(f"Images found: {len(paths)}")

	start_time = time.perf_counter()
	output_path = pathlib.Path(args.output_path)
	result = write_cards(paths, output_path, page_config, card_config)
	total_time = time.perf_counter() - start_time

	print(f"Pages written: {result.pages}")
	print(f"Cards placed: {result.cards_placed}")

	if args.manifest_path:
		counts_by_file = {
			path.name: pcs.sources.repeat_count_from_name(path.name) for path in paths
		}
		write_manifest(
			pathlib.Path(args.manifest_path),
			paths,
			counts_by_file,
			result,
			page_config,
			card_config,
		)
		print(f"Manifest written: {args.manifest_path}")

	print(f"Timing: total={total_time:.2f}s")
	return result


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	run_pipeline(args)
