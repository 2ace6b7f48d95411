"""
CLI entry points for CSV/TSV to Avery 5160 conversion.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# local repo modules
import label_sheet_printer as lsp
import label_sheet_printer.config
import label_sheet_printer.filtering
import label_sheet_printer.generator
import label_sheet_printer.pipeline
import label_sheet_printer.preview
import label_sheet_printer.records
import label_sheet_printer.render
import label_sheet_printer.template


RenderSettings = lsp.config.RenderSettings
DEFAULT_GEOMETRY = lsp.config.DEFAULT_GEOMETRY
DEFAULT_FONT_SIZE = lsp.config.DEFAULT_FONT_SIZE
DEFAULT_TEXT_ALIGN = lsp.config.DEFAULT_TEXT_ALIGN
TEXT_ALIGNMENTS = lsp.config.TEXT_ALIGNMENTS


#============================================
def font_size_arg(value: str) -> float:
	"""
	argparse type for the font size option.
	"""
	try:
		return lsp.config.validate_font_size(float(value))
	except ValueError as error:
		raise argparse.ArgumentTypeError(str(error)) from error


#============================================
def read_input_text(path: str) -> str:
	"""
	Read raw data text from a file, or stdin for "-".

	Args:
		path: Input path.

	Returns:
		Raw text.
	"""
	if path == "-":
		return sys.stdin.read()
	return pathlib.Path(path).read_text(encoding="utf-8-sig")


#============================================
def resolve_template(args: argparse.Namespace) -> str:
	"""
	Pick the template from CLI args.

	Precedence: --template-file, --template, --preset. An empty result
	means the template is guessed from the headers.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Template text.
	"""
	if args.template_file:
		return pathlib.Path(args.template_file).read_text(encoding="utf-8").rstrip("\n")
	if args.template:
		# allow "\n" escapes on the command line
		return args.template.replace("\\n", "\n")
	if args.preset:
		return lsp.template.get_preset(args.preset)
	return ""


#============================================
def build_settings(args: argparse.Namespace, template: str) -> RenderSettings:
	"""
	Build render settings from CLI args.

	Args:
		args: Parsed argparse namespace.
		template: Resolved template text.

	Returns:
		RenderSettings.
	"""
	return RenderSettings(
		template=template,
		font_size=args.font_size,
		text_align=args.text_align,
		draw_outlines=args.draw_outlines,
		calibration=args.calibration,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Convert CSV or TSV records to Avery 5160 PDF label sheets.")
	parser.add_argument("input", help="CSV or TSV file, or - for stdin. First row holds the headers.")

	template_group = parser.add_argument_group("Template")
	template_group.add_argument("-t", "--template", dest="template", default=None, help="Template text, e.g. '<Name>\\n<City>'.")
	template_group.add_argument("-T", "--template-file", dest="template_file", default=None, help="Read the template from a file.")
	preset_names = [name for name, _ in lsp.template.PRESETS]
	template_group.add_argument("-r", "--preset", dest="preset", choices=preset_names, default=None, help="Use a preset template.")

	appearance_group = parser.add_argument_group("Appearance")
	appearance_group.add_argument("-s", "--font-size", dest="font_size", type=font_size_arg, default=DEFAULT_FONT_SIZE, help="Font size, 8-16 in 0.5 steps.")
	appearance_group.add_argument("-a", "--align", dest="text_align", choices=TEXT_ALIGNMENTS, default=DEFAULT_TEXT_ALIGN, help="Horizontal text alignment.")

	filter_group = parser.add_argument_group("Filter")
	filter_group.add_argument("-f", "--filter-column", dest="filter_column", default="", help="Column to filter on.")
	filter_group.add_argument(
		"-k",
		"--filter-value",
		dest="filter_values",
		action="append",
		default=None,
		help="Accepted value for the filter column, repeatable. Default: all values.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-i", "--preview-dir", dest="preview_dir", default=None, help="Write PNG previews of each page here.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-d", "--draw-outlines", dest="draw_outlines", action="store_true", help="Draw label outlines.")
	behavior_group.add_argument("-D", "--no-draw-outlines", dest="draw_outlines", action="store_false", help="Disable label outlines.")
	behavior_group.add_argument("-c", "--calibration", dest="calibration", action="store_true", help="Add a calibration page.")
	behavior_group.add_argument("-C", "--no-calibration", dest="calibration", action="store_false", help="Disable calibration page.")
	behavior_group.add_argument("-p", "--print-preview", dest="print_preview", action="store_true", help="Print a text preview of each page.")
	behavior_group.add_argument("-l", "--list-fields", dest="list_fields", action="store_true", help="List header fields and filter values, then exit.")
	behavior_group.add_argument("-b", "--progress", dest="progress", action="store_true", help="Show a progress bar while rendering.")
	behavior_group.add_argument("-B", "--no-progress", dest="progress", action="store_false", help="Hide the progress bar.")

	parser.set_defaults(
		draw_outlines=False,
		calibration=False,
		print_preview=False,
		list_fields=False,
		progress=True,
	)

	args = parser.parse_args(argv)
	if not args.list_fields and not args.output_path and not args.print_preview and not args.preview_dir:
		parser.error("one of --output, --print-preview, --preview-dir or --list-fields is required")
	if args.filter_values and not args.filter_column:
		parser.error("--filter-value requires --filter-column")
	return args


#============================================
def build_filter_selection(
	args: argparse.Namespace,
	records: list,
) -> lsp.filtering.FilterSelection:
	"""
	Build the filter selection, defaulting to all values of the column.
	"""
	selection = lsp.filtering.FilterSelection()
	if not args.filter_column:
		return selection
	selection.select_column(records, args.filter_column)
	if args.filter_values is not None:
		known = set(selection.accepted)
		for value in args.filter_values:
			if value not in known:
				print(f"Warning: '{value}' does not occur in column '{args.filter_column}'")
		selection.accepted = set(args.filter_values)
	return selection


#============================================
def run_pipeline(args: argparse.Namespace) -> int:
	"""
	Run the full pipeline from raw text to PDF.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Process exit code.
	"""
	print("CSV to Avery 5160 pipeline")
	print(f"Input: {args.input}")
	start_time = time.perf_counter()

	raw_text = read_input_text(args.input)
	template = resolve_template(args)
	field_names, records = lsp.records.parse_raw_input(raw_text)
	print(f"Fields: {', '.join(field_names) if field_names else '(none)'}")
	print(f"Records parsed: {len(records)}")

	if args.list_fields:
		for name in field_names:
			values = lsp.filtering.distinct_values(records, name)
			print(f"  {name}: {len(values)} distinct values")
		return 0

	if args.filter_column and args.filter_column not in field_names:
		print(f"Filter column not found: {args.filter_column}")
		return 2

	state = lsp.pipeline.PipelineState(
		raw_text=raw_text,
		template=template,
		filter_selection=build_filter_selection(args, records),
		geometry=DEFAULT_GEOMETRY,
	)
	result = lsp.pipeline.run_pipeline(state)
	if args.filter_column:
		print(f"Showing {len(result.filtered)} of {len(result.records)}")
	print(f"Template: {result.template!r}")
	print(f"Pages: {len(result.pages)}")

	if not result.filtered:
		print("No labels to render. Check the data source or the filter.")
		return 1

	settings = build_settings(args, result.template)

	if args.print_preview or args.preview_dir:
		pages = lsp.preview.build_preview_pages(result.filtered, result.template, DEFAULT_GEOMETRY)
		if args.print_preview:
			print(lsp.preview.format_preview_text(pages))
		if args.preview_dir:
			paths = lsp.preview.write_preview_images(
				pages,
				pathlib.Path(args.preview_dir),
				DEFAULT_GEOMETRY,
				settings.font_size,
				settings.text_align,
			)
			print(f"Preview images written: {len(paths)}")

	if not args.output_path:
		return 0

	output_path = pathlib.Path(args.output_path)
	print(f"Output PDF: {output_path}")
	generator = lsp.generator.LabelGenerator(DEFAULT_GEOMETRY, verbose=args.progress)
	render_start = time.perf_counter()
	future = generator.submit(result.filtered, output_path, settings)
	print("Generating...")
	render_result = future.result()
	generator.shutdown()
	render_end = time.perf_counter()
	if render_result is None:
		return 1
	print(f"Pages written: {render_result.pages}")
	print(f"Labels printed: {render_result.total_labels}")

	if args.manifest_path:
		lsp.render.write_manifest(
			pathlib.Path(args.manifest_path),
			args.input,
			result.field_names,
			len(result.records),
			state.filter_selection.column,
			sorted(state.filter_selection.accepted),
			render_result,
			settings,
			DEFAULT_GEOMETRY,
		)
		print(f"Manifest written: {args.manifest_path}")

	total_time = time.perf_counter() - start_time
	print(
		"Timing: render={:.2f}s total={:.2f}s".format(
			render_end - render_start,
			total_time,
		)
	)
	return 0


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	exit_code = run_pipeline(args)
	if exit_code:
		raise SystemExit(exit_code)
