"""
Full recompute from raw text to paginated, placed labels.

The host calls run_pipeline after every change to the raw text, the
filter or the template. Nothing is cached between calls.
"""

# Standard Library
import dataclasses

# local repo modules
import label_sheet_printer as lsp
import label_sheet_printer.config
import label_sheet_printer.filtering
import label_sheet_printer.layout
import label_sheet_printer.records
import label_sheet_printer.template


Record = lsp.records.Record
LabelGeometry = lsp.config.LabelGeometry
FilterSelection = lsp.filtering.FilterSelection
Placement = lsp.layout.Placement


@dataclasses.dataclass
class PipelineState:
	raw_text: str
	template: str = ""
	filter_selection: FilterSelection = dataclasses.field(default_factory=FilterSelection)
	geometry: LabelGeometry = lsp.config.DEFAULT_GEOMETRY


@dataclasses.dataclass
class PipelineResult:
	field_names: list[str]
	records: list[Record]
	filtered: list[Record]
	template: str
	pages: list[list[Record]]
	placements: list[Placement]

	def match_preview(self, limit: int = 3) -> tuple[list[Record], int]:
		"""
		First few filtered records and how many were left out.
		"""
		shown = self.filtered[:limit]
		return (shown, len(self.filtered) - len(shown))


#============================================
def run_pipeline(state: PipelineState) -> PipelineResult:
	"""
	Parse, build, filter, paginate and place labels.

	An empty template is replaced with one guessed from the headers.

	Args:
		state: Current host state.

	Returns:
		PipelineResult.
	"""
	field_names, records = lsp.records.parse_raw_input(state.raw_text)
	template = state.template
	if not template and field_names:
		template = lsp.template.build_default_template(field_names)

	filtered = state.filter_selection.apply(records)
	capacity = state.geometry.capacity
	pages = lsp.layout.paginate(filtered, capacity)
	placements = [
		lsp.layout.compute_placement(index, state.geometry)
		for index in range(len(filtered))
	]
	return PipelineResult(
		field_names=field_names,
		records=records,
		filtered=filtered,
		template=template,
		pages=pages,
		placements=placements,
	)
