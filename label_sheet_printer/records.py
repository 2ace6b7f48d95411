"""
Build field names and label records from parsed rows.
"""

# Standard Library
import types
import typing

# local repo modules
import label_sheet_printer as lsp
import label_sheet_printer.tabular


Record = typing.Mapping[str, str]

SAMPLE_CSV = """Name,Address,City,State,ZIP,Country
"John Doe",123 Maple St,Springfield,IL,62704,USA
"Jane Smith",456 Oak Ave,Metropolis,NY,10012,USA
"Bob Johnson",789 Pine Rd,Gotham,NJ,07001,USA
"Alice Williams",321 Elm St,Smallville,KS,66002,USA
"Charlie Brown",654 Cedar Ln,Peanuts,CA,90210,USA
"""


#============================================
def make_record(values: dict[str, str]) -> Record:
	"""
	Freeze a field mapping into a read-only record.
	"""
	return types.MappingProxyType(dict(values))


#============================================
def build_records(rows: list[list[str]]) -> tuple[list[str], list[Record]]:
	"""
	Turn parsed rows into field names and records.

	Row 0 is the header. Short rows are padded with empty strings, extra
	cells are dropped. With duplicate header names the later column wins.

	Args:
		rows: Parsed rows.

	Returns:
		Tuple of (field_names, records). Both are empty when there is no
		data row yet.
	"""
	if len(rows) < 2:
		return ([], [])

	field_names = [cell.strip() for cell in rows[0]]
	records: list[Record] = []
	for values in rows[1:]:
		record: dict[str, str] = {}
		for index, name in enumerate(field_names):
			value = values[index] if index < len(values) else ""
			record[name] = value.strip()
		records.append(make_record(record))
	return (field_names, records)


#============================================
def parse_raw_input(text: str) -> tuple[list[str], list[Record]]:
	"""
	Parse pasted text straight into field names and records.

	Args:
		text: Raw CSV or TSV text.

	Returns:
		Tuple of (field_names, records).
	"""
	if not text.strip():
		return ([], [])
	rows = lsp.tabular.parse_raw_text(text)
	return build_records(rows)
