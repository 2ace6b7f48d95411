"""
Record filtering by the values of one column.
"""

# Standard Library
import dataclasses

# local repo modules
import label_sheet_printer as lsp
import label_sheet_printer.records


Record = lsp.records.Record


#============================================
def distinct_values(records: list[Record], field_name: str) -> list[str]:
	"""
	Collect the distinct non-empty values of a field.

	Args:
		records: Records to scan.
		field_name: Field to read.

	Returns:
		Sorted list of unique values.
	"""
	if not field_name or not records:
		return []
	values = set()
	for record in records:
		value = record.get(field_name)
		if value is None or value.strip() == "":
			continue
		values.add(value)
	return sorted(values)


#============================================
def apply_filter(
	records: list[Record],
	field_name: str | None,
	accepted: set[str] | frozenset[str],
) -> list[Record]:
	"""
	Keep records whose field value is non-empty and accepted.

	Args:
		records: Records in source order.
		field_name: Filter column, or empty/None for no filtering.
		accepted: Accepted raw values.

	Returns:
		Ordered subsequence of records.
	"""
	if not field_name:
		return list(records)
	kept = []
	for record in records:
		value = record.get(field_name)
		if not value or value.strip() == "":
			continue
		if value in accepted:
			kept.append(record)
	return kept


@dataclasses.dataclass
class FilterSelection:
	"""
	Chosen filter column and the set of values currently shown.
	"""
	column: str = ""
	accepted: set[str] = dataclasses.field(default_factory=set)

	def select_column(self, records: list[Record], column: str) -> None:
		# changing column always resets to show-all
		self.column = column
		if column:
			self.accepted = set(distinct_values(records, column))
		else:
			self.accepted = set()

	def clear(self) -> None:
		self.column = ""
		self.accepted = set()

	def toggle(self, value: str) -> None:
		if value in self.accepted:
			self.accepted.discard(value)
		else:
			self.accepted.add(value)

	def select_all(self, records: list[Record]) -> None:
		self.accepted = set(distinct_values(records, self.column))

	def deselect_all(self) -> None:
		self.accepted = set()

	def apply(self, records: list[Record]) -> list[Record]:
		return apply_filter(records, self.column, self.accepted)
