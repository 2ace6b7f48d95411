"""
On-screen preview of label sheets.

The preview uses the same pages and placements as the PDF. It differs
only in presentation: lines that resolve to blank are dropped and text is
centered vertically inside each cell.
"""

# Standard Library
import dataclasses
import pathlib

# PIP3 modules
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont

# local repo modules
import label_sheet_printer as lsp
import label_sheet_printer.config
import label_sheet_printer.layout
import label_sheet_printer.records
import label_sheet_printer.template


Record = lsp.records.Record
LabelGeometry = lsp.config.LabelGeometry
Placement = lsp.layout.Placement

PREVIEW_DPI = lsp.config.PREVIEW_DPI
PREVIEW_LINE_HEIGHT_FACTOR = lsp.config.PREVIEW_LINE_HEIGHT_FACTOR
POINTS_PER_INCH = lsp.config.POINTS_PER_INCH


@dataclasses.dataclass
class PreviewCell:
	placement: Placement
	lines: list[str]


#============================================
def build_preview_pages(
	records: list[Record],
	template: str,
	geometry: LabelGeometry = lsp.config.DEFAULT_GEOMETRY,
) -> list[list[PreviewCell]]:
	"""
	Group preview cells into pages.

	Args:
		records: Filtered records in output order.
		template: Template text.
		geometry: Sheet geometry.

	Returns:
		List of pages, each a list of PreviewCell.
	"""
	pages = []
	index = 0
	for page_records in lsp.layout.paginate(records, geometry.capacity):
		cells = []
		for record in page_records:
			placement = lsp.layout.compute_placement(index, geometry)
			lines = lsp.template.preview_lines(template, record)
			cells.append(PreviewCell(placement=placement, lines=lines))
			index += 1
		pages.append(cells)
	return pages


#============================================
def format_preview_text(pages: list[list[PreviewCell]]) -> str:
	"""
	Format preview pages as plain text for a terminal.
	"""
	blocks = []
	for page_index, cells in enumerate(pages):
		blocks.append(f"PAGE {page_index + 1}")
		for cell in cells:
			header = f"  [row {cell.placement.row + 1}, col {cell.placement.col + 1}]"
			blocks.append(header)
			for line in cell.lines:
				blocks.append(f"    {line}")
	return "\n".join(blocks)


#============================================
def render_preview_page(
	cells: list[PreviewCell],
	geometry: LabelGeometry = lsp.config.DEFAULT_GEOMETRY,
	font_size: float = lsp.config.DEFAULT_FONT_SIZE,
	text_align: str = lsp.config.DEFAULT_TEXT_ALIGN,
	dpi: int = PREVIEW_DPI,
) -> PIL.Image.Image:
	"""
	Draw one preview page as an image.

	Text is centered vertically inside the padded cell. Text taller than
	the cell starts at the top padding and is clipped at the bottom.

	Args:
		cells: Cells on the page.
		geometry: Sheet geometry.
		font_size: Font size in points.
		text_align: left, center or right.
		dpi: Output resolution.

	Returns:
		RGB image of the whole page.
	"""
	align = lsp.config.validate_text_align(text_align)

	def to_px(value: float) -> int:
		return int(round(value * dpi))

	image = PIL.Image.new("RGB", (to_px(geometry.page_width), to_px(geometry.page_height)), "white")
	draw = PIL.ImageDraw.Draw(image)
	font_px = font_size * dpi / POINTS_PER_INCH
	font = PIL.ImageFont.load_default(size=font_px)
	line_height = font_px * PREVIEW_LINE_HEIGHT_FACTOR

	for row in range(geometry.rows):
		for col in range(geometry.columns):
			x0, y0, x1, y1 = lsp.layout.compute_cell_box(geometry, row, col)
			draw.rectangle((to_px(x0), to_px(y0), to_px(x1), to_px(y1)), outline=(226, 232, 240))

	for cell in cells:
		x0, y0, x1, y1 = lsp.layout.compute_cell_box(geometry, cell.placement.row, cell.placement.col)
		inner_left = to_px(x0 + geometry.padding)
		inner_top = to_px(y0 + geometry.padding)
		inner_width = to_px(x1 - geometry.padding) - inner_left
		inner_height = to_px(y1 - geometry.padding) - inner_top
		# one layer per padded cell, pasting it clips overflow
		layer = PIL.Image.new("RGB", (inner_width, inner_height), "white")
		layer_draw = PIL.ImageDraw.Draw(layer)
		text_height = line_height * len(cell.lines)
		top = max(0.0, (inner_height - text_height) / 2.0)
		for index, line in enumerate(cell.lines):
			width = layer_draw.textlength(line, font=font)
			if align == "center":
				text_x = (inner_width - width) / 2.0
			elif align == "right":
				text_x = inner_width - width
			else:
				text_x = 0.0
			layer_draw.text((text_x, top + index * line_height), line, fill=(15, 23, 42), font=font)
		image.paste(layer, (inner_left, inner_top))
	return image


#============================================
def write_preview_images(
	pages: list[list[PreviewCell]],
	output_dir: pathlib.Path,
	geometry: LabelGeometry = lsp.config.DEFAULT_GEOMETRY,
	font_size: float = lsp.config.DEFAULT_FONT_SIZE,
	text_align: str = lsp.config.DEFAULT_TEXT_ALIGN,
	dpi: int = PREVIEW_DPI,
) -> list[pathlib.Path]:
	"""
	Write one PNG per preview page.

	Args:
		pages: Preview pages.
		output_dir: Directory for the images, created if missing.

	Returns:
		Written image paths in page order.
	"""
	output_dir = pathlib.Path(output_dir)
	output_dir.mkdir(parents=True, exist_ok=True)
	paths = []
	for page_index, cells in enumerate(pages):
		image = render_preview_page(cells, geometry, font_size, text_align, dpi)
		path = output_dir / f"preview_page_{page_index + 1:03d}.png"
		image.save(path)
		paths.append(path)
	return paths
