"""
Label template resolution.

A template is plain text split into lines on newlines. Each line may hold
field references written as <FieldName>, matched verbatim against record
keys. References to unknown fields are left in the text unchanged.
"""

# Standard Library
import re

# local repo modules
import label_sheet_printer as lsp
import label_sheet_printer.records


Record = lsp.records.Record

FIELD_PATTERN = re.compile(r"<([^<>]+)>")

PRESETS = (
	("USA", "<Name>\n<Address>\n<City>, <State> <ZIP>"),
	("Europe", "<Name>\n<Address>\n<ZIP> <City>, <State>\n<Country>"),
	("Canada", "<Name>\n<Address>\n<City> <State>\n<ZIP>\n<Country>"),
)


#============================================
def resolve_line(line: str, record: Record) -> str:
	"""
	Substitute field references in one template line.

	Args:
		line: Template line.
		record: Record providing values.

	Returns:
		Resolved line.
	"""
	def replace(match: re.Match) -> str:
		key = match.group(1)
		if key in record:
			return record[key]
		return match.group(0)

	return FIELD_PATTERN.sub(replace, line)


#============================================
def render_template(template: str, record: Record) -> list[str]:
	"""
	Resolve every template line for a record.

	Empty template lines are kept as empty strings.

	Args:
		template: Template text.
		record: Record providing values.

	Returns:
		One resolved string per template line.
	"""
	return [resolve_line(line, record) for line in template.split("\n")]


#============================================
def preview_lines(template: str, record: Record) -> list[str]:
	"""
	Resolved lines for on-screen display.

	A line that had content in the template but resolves to blank is
	dropped, so missing values do not leave gaps in the preview.
	"""
	lines = []
	for line in template.split("\n"):
		content = resolve_line(line, record)
		if line and not content.strip():
			continue
		lines.append(content)
	return lines


#============================================
def document_lines(template: str, record: Record) -> list[str]:
	"""
	Resolved lines for the printed document.

	Every line is kept, including blank ones, so line spacing matches
	across all labels on a page.
	"""
	return render_template(template, record)


#============================================
def find_field(field_names: list[str], *terms: str) -> str | None:
	"""
	Return the first field whose lowercase name contains any term.

	Terms are tried in order, so earlier terms take priority.
	"""
	for term in terms:
		for name in field_names:
			if term in name.lower():
				return name
	return None


#============================================
def build_default_template(field_names: list[str]) -> str:
	"""
	Guess a mailing address template from column headers.

	Args:
		field_names: Header names in source order.

	Returns:
		Template text, or an empty string when there are no fields.
	"""
	if not field_names:
		return ""
	name = find_field(field_names, "name") or field_names[0]
	address = find_field(field_names, "address", "street")
	city = find_field(field_names, "city")
	state = find_field(field_names, "state")
	zip_code = find_field(field_names, "zip", "postal", "code")

	template = f"<{name}>"
	if address:
		template += f"\n<{address}>"
	if city or state or zip_code:
		template += "\n"
		if city:
			template += f"<{city}>"
		if city and state:
			template += ", "
		if state:
			template += f"<{state}> "
		if zip_code:
			template += f"<{zip_code}>"
	elif len(field_names) > 1 and field_names[1] not in (name, address):
		template += f"\n<{field_names[1]}>"
	return template


#============================================
def insert_field(template: str, field_name: str) -> str:
	"""
	Append a field reference to the end of a template.
	"""
	return template + f"<{field_name}>"


#============================================
def get_preset(name: str) -> str:
	"""
	Look up a preset template by name, ignoring case.

	Args:
		name: Preset name such as "USA".

	Returns:
		Template text.
	"""
	for preset_name, template in PRESETS:
		if preset_name.lower() == name.strip().lower():
			return template
	known = ", ".join(preset_name for preset_name, _ in PRESETS)
	raise ValueError(f"Unknown template preset: {name} (known: {known})")
