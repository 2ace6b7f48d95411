"""
Grid placement and pagination on the label sheet.

Coordinates are in inches, measured from the top-left corner of the page.
"""

# Standard Library
import dataclasses
import typing

# local repo modules
import label_sheet_printer as lsp
import label_sheet_printer.config


LabelGeometry = lsp.config.LabelGeometry

T = typing.TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Placement:
	index: int
	page: int
	slot: int
	row: int
	col: int
	x: float
	y: float


#============================================
def compute_placement(index: int, geometry: LabelGeometry) -> Placement:
	"""
	Place a label on the sheet grid.

	Labels fill each row left to right, then move down one row.

	Args:
		index: Zero-based label index within the filtered records.
		geometry: Sheet geometry.

	Returns:
		Placement with page, row, column and top-left cell corner.
	"""
	if index < 0:
		raise ValueError(f"Label index must be non-negative: {index}")
	capacity = geometry.capacity
	page = index // capacity
	slot = index % capacity
	col = slot % geometry.columns
	row = slot // geometry.columns
	x = geometry.margin_left + col * (geometry.col_width + geometry.horizontal_gap)
	y = geometry.margin_top + row * geometry.row_height
	return Placement(index=index, page=page, slot=slot, row=row, col=col, x=x, y=y)


#============================================
def compute_anchor(
	placement: Placement,
	text_align: str,
	geometry: LabelGeometry,
) -> tuple[float, float]:
	"""
	Compute the text anchor point inside a label cell.

	Args:
		placement: Cell placement.
		text_align: One of left, center or right.
		geometry: Sheet geometry.

	Returns:
		Tuple of (x, y) in inches. y is the top of the first line.
	"""
	align = lsp.config.validate_text_align(text_align)
	if align == "center":
		anchor_x = placement.x + geometry.col_width / 2.0
	elif align == "right":
		anchor_x = placement.x + geometry.col_width - geometry.padding
	else:
		anchor_x = placement.x + geometry.padding
	anchor_y = placement.y + geometry.padding
	return (anchor_x, anchor_y)


#============================================
def compute_cell_box(
	geometry: LabelGeometry,
	row: int,
	col: int,
) -> tuple[float, float, float, float]:
	"""
	Compute the rectangle of a label slot.

	Args:
		geometry: Sheet geometry.
		row: Row index.
		col: Column index.

	Returns:
		Tuple of (x0, y0, x1, y1) in inches, top-left origin.
	"""
	x0 = geometry.margin_left + col * (geometry.col_width + geometry.horizontal_gap)
	y0 = geometry.margin_top + row * geometry.row_height
	return (x0, y0, x0 + geometry.col_width, y0 + geometry.row_height)


#============================================
def paginate(items: typing.Sequence[T], capacity: int) -> list[list[T]]:
	"""
	Split items into consecutive pages of at most capacity entries.

	Args:
		items: Filtered records in output order.
		capacity: Labels per page.

	Returns:
		List of pages. No empty trailing page is produced.
	"""
	if capacity <= 0:
		raise ValueError(f"Page capacity must be positive: {capacity}")
	return [list(items[start:start + capacity]) for start in range(0, len(items), capacity)]


#============================================
def count_pages(total_labels: int, capacity: int) -> int:
	"""
	Number of pages needed for a label count.
	"""
	if total_labels <= 0:
		return 0
	return (total_labels + capacity - 1) // capacity
