"""
Input image discovery and loading.
"""

# Standard Library
import pathlib

# local repo modules
import proxy_card_sheets as pcs
import proxy_card_sheets.config
import proxy_card_sheets.errors


ImageRequest = pcs.config.ImageRequest
SourceReadError = pcs.errors.SourceReadError

IMAGE_EXTENSIONS = (".jpg", ".jpeg")


#============================================
def repeat_count_from_name(name: str) -> int:
	"""
	Read the copy count from the first character of a file name.

	Args:
		name: File name like "4_island.jpg".

	Returns:
		Leading digit, or 1 when the name does not start with 1-9.
	"""
	if not name or name[0] not in "0123456789":
		return 1
	count = int(name[0])
	if count < 1:
		return 1
	return count


#============================================
def gather_image_paths(directory: str | pathlib.Path) -> list[pathlib.Path]:
	"""
	List JPEG files directly inside a directory.

	Args:
		directory: Input directory.

	Returns:
		Paths sorted by file name.

	Raises:
		SourceReadError: If the directory cannot be listed.
	"""
	root = pathlib.Path(directory).expanduser()
	try:
		entries = list(root.iterdir())
	except OSError as error:
		raise SourceReadError(f"cannot read directory {root}: {error}") from error
	paths = [
		path for path in entries
		if path.is_file() and path.name.endswith(IMAGE_EXTENSIONS)
	]
	return sorted(paths, key=lambda path: path.name)


#============================================
def load_image_request(path: pathlib.Path) -> ImageRequest:
	"""
	Read one image file into a request.

	Args:
		path: Image path.

	Returns:
		ImageRequest with the repeat count taken from the file name.

	Raises:
		SourceReadError: If the file cannot be read.
	"""
	try:
		data = path.read_bytes()
	except OSError as error:
		raise SourceReadError(f"cannot read image {path}: {error}") from error
	return ImageRequest(
		name=path.name,
		data=data,
		repeat_count=repeat_count_from_name(path.name),
	)


#============================================
def load_image_requests(paths: list[pathlib.Path]) -> list[ImageRequest]:
	return [load_image_request(path) for path in paths]
