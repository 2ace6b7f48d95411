"""
PDF rendering of label sheets.
"""

# Standard Library
import json
import pathlib

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfgen.canvas

# local repo modules
import label_sheet_printer as lsp
import label_sheet_printer.config
import label_sheet_printer.layout
import label_sheet_printer.records
import label_sheet_printer.template


Record = lsp.records.Record
LabelGeometry = lsp.config.LabelGeometry
RenderSettings = lsp.config.RenderSettings
RenderResult = lsp.config.RenderResult

POINTS_PER_INCH = lsp.config.POINTS_PER_INCH
DEFAULT_GEOMETRY = lsp.config.DEFAULT_GEOMETRY
DEFAULT_FONT_REGULAR = lsp.config.DEFAULT_FONT_REGULAR
PROGRESS_BAR_WIDTH = lsp.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = lsp.config.PROGRESS_UPDATE_EVERY
inches_to_points = lsp.config.inches_to_points


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
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


class PdfLabelSink:
	"""
	Paints text blocks onto a multi-page PDF.

	Callers work in inches with a top-left origin; the sink converts to
	ReportLab points with a bottom-left origin.
	"""

	def __init__(
		self,
		output_path: pathlib.Path,
		geometry: LabelGeometry,
		font_name: str = DEFAULT_FONT_REGULAR,
		font_size: float = lsp.config.DEFAULT_FONT_SIZE,
	) -> None:
		self.output_path = pathlib.Path(output_path)
		self.geometry = geometry
		self.font_name = font_name
		self.font_size = font_size
		self.page_width = inches_to_points(geometry.page_width)
		self.page_height = inches_to_points(geometry.page_height)
		self.canvas = reportlab.pdfgen.canvas.Canvas(
			str(self.output_path),
			pagesize=(self.page_width, self.page_height),
		)
		self.page_count = 1
		self._apply_font()

	def _apply_font(self) -> None:
		# showPage resets the graphics state
		self.canvas.setFont(self.font_name, self.font_size)
		self.canvas.setFillColorRGB(0.0, 0.0, 0.0)

	def new_page(self) -> None:
		self.canvas.showPage()
		self.page_count += 1
		self._apply_font()

	def draw_text_block(
		self,
		lines: list[str],
		x: float,
		y: float,
		text_align: str = "left",
		baseline: str = "top",
		line_height_factor: float = lsp.config.LINE_HEIGHT_FACTOR,
	) -> None:
		"""
		Draw lines of text anchored at (x, y).

		Args:
			lines: Text lines, blank lines included.
			x: Anchor x in inches.
			y: Anchor y in inches, from the top of the page.
			text_align: left, center or right about x.
			baseline: "top" puts the top of the first line at y,
				"alphabetic" puts its baseline at y.
			line_height_factor: Line spacing as a multiple of font size.
		"""
		align = lsp.config.validate_text_align(text_align)
		anchor_x = inches_to_points(x)
		first_baseline = self.page_height - inches_to_points(y)
		if baseline == "top":
			ascent = reportlab.pdfbase.pdfmetrics.getAscent(self.font_name, self.font_size)
			first_baseline -= ascent
		elif baseline != "alphabetic":
			raise ValueError(f"Unknown baseline mode: {baseline}")
		leading = self.font_size * line_height_factor

		for index, line in enumerate(lines):
			text_y = first_baseline - index * leading
			if not line:
				continue
			if align == "center":
				self.canvas.drawCentredString(anchor_x, text_y, line)
			elif align == "right":
				self.canvas.drawRightString(anchor_x, text_y, line)
			else:
				self.canvas.drawString(anchor_x, text_y, line)

	def save(self) -> None:
		self.canvas.save()


#============================================
def _draw_cell_grid(pdf: reportlab.pdfgen.canvas.Canvas, geometry: LabelGeometry) -> None:
	page_height = inches_to_points(geometry.page_height)
	for row in range(geometry.rows):
		for col in range(geometry.columns):
			x0, y0, x1, y1 = lsp.layout.compute_cell_box(geometry, row, col)
			pdf.rect(
				inches_to_points(x0),
				page_height - inches_to_points(y1),
				inches_to_points(x1 - x0),
				inches_to_points(y1 - y0),
				stroke=1,
				fill=0,
			)


#============================================
def draw_calibration_page(pdf: reportlab.pdfgen.canvas.Canvas, geometry: LabelGeometry) -> None:
	"""
	Draw calibration boxes and a 1 inch ruler mark.

	Args:
		pdf: ReportLab canvas.
		geometry: Sheet geometry.
	"""
	page_height = inches_to_points(geometry.page_height)
	pdf.setLineWidth(0.3)
	pdf.setStrokeColorRGB(0.6, 0.6, 0.6)
	_draw_cell_grid(pdf, geometry)

	ruler_x = inches_to_points(geometry.margin_left)
	ruler_y = page_height - inches_to_points(geometry.margin_top) + 10.0
	pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
	pdf.setLineWidth(0.6)
	pdf.line(ruler_x, ruler_y, ruler_x + POINTS_PER_INCH, ruler_y)
	pdf.setFont(DEFAULT_FONT_REGULAR, 8)
	pdf.drawString(ruler_x, ruler_y + 4.0, "1 in")


#============================================
def draw_label_outlines(pdf: reportlab.pdfgen.canvas.Canvas, geometry: LabelGeometry) -> None:
	"""
	Draw dashed label outlines on the current page.

	Args:
		pdf: ReportLab canvas.
		geometry: Sheet geometry.
	"""
	pdf.saveState()
	pdf.setLineWidth(0.3)
	pdf.setStrokeColorRGB(0.7, 0.7, 0.7)
	pdf.setDash(2, 2)
	_draw_cell_grid(pdf, geometry)
	pdf.restoreState()


#============================================
def render_labels_to_pdf(
	records: list[Record],
	output_path: pathlib.Path,
	settings: RenderSettings,
	geometry: LabelGeometry = DEFAULT_GEOMETRY,
	verbose: bool = False,
) -> RenderResult:
	"""
	Render filtered records onto label sheets.

	A new page starts every geometry.capacity records.

	Args:
		records: Filtered records in output order.
		output_path: Output PDF path.
		settings: Template and appearance settings.
		geometry: Sheet geometry.
		verbose: Print progress.

	Returns:
		RenderResult.
	"""
	if not records:
		raise ValueError("No labels to render")
	text_align = lsp.config.validate_text_align(settings.text_align)
	lsp.config.validate_font_size(settings.font_size)

	sink = PdfLabelSink(output_path, geometry, settings.font_name, settings.font_size)
	calibration_pages = 0
	if settings.calibration:
		draw_calibration_page(sink.canvas, geometry)
		sink.new_page()
		calibration_pages = 1

	pages = lsp.layout.paginate(records, geometry.capacity)
	total = len(records)
	index = 0
	for page_index, page_records in enumerate(pages):
		if page_index > 0:
			sink.new_page()
		if settings.draw_outlines:
			draw_label_outlines(sink.canvas, geometry)
		for record in page_records:
			placement = lsp.layout.compute_placement(index, geometry)
			anchor_x, anchor_y = lsp.layout.compute_anchor(placement, text_align, geometry)
			lines = lsp.template.document_lines(settings.template, record)
			sink.draw_text_block(
				lines,
				anchor_x,
				anchor_y,
				text_align,
				"top",
				settings.line_height_factor,
			)
			index += 1
			if verbose and (index % PROGRESS_UPDATE_EVERY == 0 or index == total):
				print_progress("Rendering labels", index, total)
	if verbose:
		print()
	sink.save()

	return RenderResult(
		total_labels=total,
		pages=len(pages) + calibration_pages,
		labels_per_page=geometry.capacity,
		output_path=str(output_path),
	)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	input_path: str,
	field_names: list[str],
	record_count: int,
	filter_column: str,
	filter_values: list[str],
	result: RenderResult,
	settings: RenderSettings,
	geometry: LabelGeometry = DEFAULT_GEOMETRY,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		input_path: Source data path.
		field_names: Header fields in source order.
		record_count: Records before filtering.
		filter_column: Filter column, empty when unfiltered.
		filter_values: Accepted filter values.
		result: Render result.
		settings: Render settings.
		geometry: Sheet geometry.
	"""
	data = {
		"input": input_path,
		"output": result.output_path,
		"fields": field_names,
		"records": record_count,
		"filter": {
			"column": filter_column,
			"values": sorted(filter_values),
		},
		"labels_per_page": result.labels_per_page,
		"total_labels": result.total_labels,
		"pages": result.pages,
		"template": settings.template,
		"layout": {
			"page_width": geometry.page_width,
			"page_height": geometry.page_height,
			"margin_top": geometry.margin_top,
			"margin_left": geometry.margin_left,
			"col_width": geometry.col_width,
			"row_height": geometry.row_height,
			"horizontal_gap": geometry.horizontal_gap,
			"padding": geometry.padding,
			"columns": geometry.columns,
			"rows": geometry.rows,
			"draw_outlines": settings.draw_outlines,
			"calibration": settings.calibration,
		},
		"font": {
			"name": settings.font_name,
			"size": settings.font_size,
			"align": settings.text_align,
			"line_height_factor": settings.line_height_factor,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
