import json
import pathlib

import pypdf
import pytest
import reportlab.pdfbase.pdfmetrics

import label_sheet_printer.config as config
import label_sheet_printer.records as records
import label_sheet_printer.render as render


#============================================
def build_records(count: int) -> list:
	"""
	Build count records with unique names.
	"""
	text = "Name,City\n" + "".join(f"Person{index:03d},Town{index:03d}\n" for index in range(count))
	_fields, built = records.parse_raw_input(text)
	return built


#============================================
def test_page_break_every_thirty_labels(tmp_path: pathlib.Path) -> None:
	"""
	31 labels produce two pages; the last one holds a single label.
	"""
	output_path = tmp_path / "labels.pdf"
	settings = config.RenderSettings(template="<Name>\n<City>")
	result = render.render_labels_to_pdf(build_records(31), output_path, settings)
	assert result.pages == 2
	assert result.total_labels == 31
	reader = pypdf.PdfReader(str(output_path))
	assert len(reader.pages) == 2
	first_text = reader.pages[0].extract_text()
	second_text = reader.pages[1].extract_text()
	assert "Person000" in first_text
	assert "Person029" in first_text
	assert "Person030" not in first_text
	assert "Person030" in second_text
	assert "Town030" in second_text


#============================================
def test_full_page_has_no_trailing_page(tmp_path: pathlib.Path) -> None:
	"""
	Exactly one page of labels gives one PDF page.
	"""
	output_path = tmp_path / "labels.pdf"
	settings = config.RenderSettings(template="<Name>")
	result = render.render_labels_to_pdf(build_records(30), output_path, settings)
	assert result.pages == 1
	assert len(pypdf.PdfReader(str(output_path)).pages) == 1


#============================================
def test_page_size_is_letter(tmp_path: pathlib.Path) -> None:
	"""
	Pages are 8.5 x 11 inches.
	"""
	output_path = tmp_path / "labels.pdf"
	render.render_labels_to_pdf(build_records(1), output_path, config.RenderSettings(template="<Name>"))
	box = pypdf.PdfReader(str(output_path)).pages[0].mediabox
	assert abs(float(box.width) - 612.0) < 0.01
	assert abs(float(box.height) - 792.0) < 0.01


#============================================
def test_calibration_and_outlines(tmp_path: pathlib.Path) -> None:
	"""
	The calibration page comes first and is counted.
	"""
	output_path = tmp_path / "labels.pdf"
	settings = config.RenderSettings(
		template="<Name>",
		draw_outlines=True,
		calibration=True,
		text_align="center",
		font_size=9.5,
	)
	result = render.render_labels_to_pdf(build_records(3), output_path, settings)
	assert result.pages == 2
	reader = pypdf.PdfReader(str(output_path))
	assert len(reader.pages) == 2
	assert "1 in" in reader.pages[0].extract_text()
	assert "Person002" in reader.pages[1].extract_text()


#============================================
def test_every_line_reaches_the_sink(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
	"""
	Blank resolved lines are still sent, anchored at the cell padding.
	"""
	calls = []
	original = render.PdfLabelSink.draw_text_block

	def recording_draw(self, lines, x, y, text_align="left", baseline="top", line_height_factor=1.15):
		calls.append((list(lines), x, y, text_align, baseline, line_height_factor))
		return original(self, lines, x, y, text_align, baseline, line_height_factor)

	monkeypatch.setattr(render.PdfLabelSink, "draw_text_block", recording_draw)
	_fields, built = records.parse_raw_input("Name,Suite,City\nAnn,,Oslo\nBob,2B,Rome\n")
	settings = config.RenderSettings(template="<Name>\n<Suite>\n<City>", text_align="right")
	render.render_labels_to_pdf(built, tmp_path / "labels.pdf", settings)
	assert calls[0][0] == ["Ann", "", "Oslo"]
	assert calls[1][0] == ["Bob", "2B", "Rome"]
	first_x, first_y = calls[0][1], calls[0][2]
	assert abs(first_x - (0.21975 + 2.625 - 0.125)) < 1e-9
	assert abs(first_y - 0.625) < 1e-9
	assert calls[0][3:] == ("right", "top", config.LINE_HEIGHT_FACTOR)


#============================================
def test_empty_input_and_bad_settings_raise(tmp_path: pathlib.Path) -> None:
	"""
	Nothing to render and invalid settings are errors.
	"""
	with pytest.raises(ValueError):
		render.render_labels_to_pdf([], tmp_path / "a.pdf", config.RenderSettings(template="<Name>"))
	with pytest.raises(ValueError):
		render.render_labels_to_pdf(build_records(1), tmp_path / "b.pdf", config.RenderSettings(template="x", font_size=20))
	with pytest.raises(ValueError):
		render.render_labels_to_pdf(build_records(1), tmp_path / "c.pdf", config.RenderSettings(template="x", text_align="top"))


#============================================
def test_write_manifest(tmp_path: pathlib.Path) -> None:
	"""
	The manifest records totals and layout.
	"""
	settings = config.RenderSettings(template="<Name>")
	result = render.render_labels_to_pdf(build_records(2), tmp_path / "labels.pdf", settings)
	manifest_path = tmp_path / "labels.json"
	render.write_manifest(manifest_path, "in.csv", ["Name", "City"], 2, "", [], result, settings)
	data = json.loads(manifest_path.read_text(encoding="utf-8"))
	assert data["total_labels"] == 2
	assert data["pages"] == 1
	assert data["labels_per_page"] == 30
	assert data["layout"]["columns"] == 3
	assert data["fields"] == ["Name", "City"]


#============================================
def test_sink_baseline_modes(tmp_path: pathlib.Path) -> None:
	"""
	Top baseline drops the first line by the font ascent; alphabetic does not.
	"""
	sink = render.PdfLabelSink(tmp_path / "sink.pdf", config.DEFAULT_GEOMETRY, font_size=10.0)
	calls = []
	sink.canvas.drawString = lambda x, y, text: calls.append((x, y, text))
	sink.draw_text_block(["A", "", "B"], 1.0, 1.0, "left", "alphabetic", 1.2)
	sink.draw_text_block(["C"], 1.0, 1.0, "left", "top", 1.2)
	ascent = reportlab.pdfbase.pdfmetrics.getAscent("Helvetica", 10.0)
	assert calls[0] == (72.0, 720.0, "A")
	assert calls[1][2] == "B"
	assert abs(calls[1][1] - (720.0 - 2 * 12.0)) < 1e-9
	assert abs(calls[2][1] - (720.0 - ascent)) < 1e-9
	assert ascent > 0
	with pytest.raises(ValueError):
		sink.draw_text_block(["D"], 1.0, 1.0, "left", "middle")


#============================================
def test_verbose_prints_progress(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture) -> None:
	"""
	Verbose rendering shows the progress bar.
	"""
	settings = config.RenderSettings(template="<Name>")
	render.render_labels_to_pdf(build_records(12), tmp_path / "labels.pdf", settings, verbose=True)
	captured = capsys.readouterr()
	assert "Rendering labels [" in captured.out
	assert "10/12" in captured.out
	assert "12/12 (100%)" in captured.out
