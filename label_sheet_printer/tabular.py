"""
Parsing of pasted CSV and TSV text into rows of cells.
"""


#============================================
def normalize_line_endings(text: str) -> str:
	"""
	Convert CRLF and lone CR line endings to LF.

	Args:
		text: Raw text.

	Returns:
		Text using only LF line endings.
	"""
	return text.replace("\r\n", "\n").replace("\r", "\n")


#============================================
def parse_csv(text: str) -> list[list[str]]:
	"""
	Parse CSV text with quoted fields.

	Quoted fields may hold commas, newlines and doubled quotes. A trailing
	newline does not produce an empty final row.

	Args:
		text: Raw CSV text.

	Returns:
		List of rows, each a list of cells. Rows may be ragged.
	"""
	rows: list[list[str]] = []
	current_row: list[str] = []
	current_value: list[str] = []
	in_quotes = False

	clean_text = normalize_line_endings(text)
	length = len(clean_text)
	index = 0
	while index < length:
		char = clean_text[index]
		if in_quotes:
			if char == '"' and index + 1 < length and clean_text[index + 1] == '"':
				current_value.append('"')
				index += 1
			elif char == '"':
				in_quotes = False
			else:
				current_value.append(char)
		elif char == '"':
			in_quotes = True
		elif char == ",":
			current_row.append("".join(current_value))
			current_value = []
		elif char == "\n":
			current_row.append("".join(current_value))
			rows.append(current_row)
			current_row = []
			current_value = []
		else:
			current_value.append(char)
		index += 1

	if current_value or current_row:
		current_row.append("".join(current_value))
		rows.append(current_row)
	return rows


#============================================
def parse_tsv(text: str) -> list[list[str]]:
	"""
	Split tab separated text, as pasted from a spreadsheet.

	No quote handling is done. Blank lines are skipped.

	Args:
		text: Raw TSV text.

	Returns:
		List of rows.
	"""
	rows = []
	for line in text.split("\n"):
		if not line.strip():
			continue
		rows.append(line.split("\t"))
	return rows


#============================================
def is_tab_delimited(text: str) -> bool:
	"""
	Decide whether text is TSV by looking at its first line.
	"""
	first_line = text.split("\n", 1)[0]
	return "\t" in first_line


#============================================
def parse_raw_text(text: str) -> list[list[str]]:
	"""
	Parse pasted text as TSV or CSV, chosen from the first line.

	Args:
		text: Raw pasted text.

	Returns:
		List of rows.
	"""
	if is_tab_delimited(text):
		return parse_tsv(text)
	return parse_csv(text)
