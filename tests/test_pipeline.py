import label_sheet_printer.filtering as filtering
import label_sheet_printer.pipeline as pipeline
import label_sheet_printer.records as records


#============================================
def build_rows(count: int) -> str:
	"""
	Build CSV text with count data rows.
	"""
	lines = ["Name,Group"]
	for index in range(count):
		group = "even" if index % 2 == 0 else "odd"
		lines.append(f"Person {index},{group}")
	return "\n".join(lines) + "\n"


#============================================
def test_rerun_is_identical() -> None:
	"""
	Two runs on unchanged input give identical records and placements.
	"""
	state = pipeline.PipelineState(raw_text=build_rows(45), template="<Name>")
	first = pipeline.run_pipeline(state)
	second = pipeline.run_pipeline(state)
	assert [dict(record) for record in first.filtered] == [dict(record) for record in second.filtered]
	assert first.placements == second.placements
	assert [len(page) for page in first.pages] == [30, 15]


#============================================
def test_selected_column_shows_all_by_default() -> None:
	"""
	Picking a filter column alone does not hide any record.
	"""
	raw_text = build_rows(7)
	_fields, parsed = records.parse_raw_input(raw_text)
	selection = filtering.FilterSelection()
	selection.select_column(parsed, "Group")
	result = pipeline.run_pipeline(pipeline.PipelineState(raw_text=raw_text, filter_selection=selection))
	assert len(result.filtered) == len(result.records) == 7


#============================================
def test_filter_feeds_pagination() -> None:
	"""
	Pages and placements come from the filtered records.
	"""
	raw_text = build_rows(70)
	_fields, parsed = records.parse_raw_input(raw_text)
	selection = filtering.FilterSelection()
	selection.select_column(parsed, "Group")
	selection.toggle("odd")
	result = pipeline.run_pipeline(pipeline.PipelineState(raw_text=raw_text, filter_selection=selection))
	assert len(result.filtered) == 35
	assert [len(page) for page in result.pages] == [30, 5]
	assert result.placements[-1].page == 1
	assert result.placements[-1].slot == 4
	assert result.pages[1][0]["Name"] == "Person 60"


#============================================
def test_empty_template_is_guessed() -> None:
	"""
	Without a template one is built from the headers.
	"""
	result = pipeline.run_pipeline(pipeline.PipelineState(raw_text=records.SAMPLE_CSV))
	assert result.template == "<Name>\n<Address>\n<City>, <State> <ZIP>"


#============================================
def test_insufficient_data_is_empty() -> None:
	"""
	A header alone gives an empty result, not an error.
	"""
	result = pipeline.run_pipeline(pipeline.PipelineState(raw_text="Name,City\n"))
	assert result.field_names == []
	assert result.filtered == []
	assert result.pages == []
	assert result.template == ""


#============================================
def test_match_preview() -> None:
	"""
	The match preview shows three records and counts the rest.
	"""
	result = pipeline.run_pipeline(pipeline.PipelineState(raw_text=records.SAMPLE_CSV))
	shown, remaining = result.match_preview()
	assert [record["Name"] for record in shown] == ["John Doe", "Jane Smith", "Bob Johnson"]
	assert remaining == 2
