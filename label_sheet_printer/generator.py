"""
Single-flight PDF generation with a busy flag.
"""

# Standard Library
import concurrent.futures
import dataclasses
import pathlib
import threading
import typing

# local repo modules
import label_sheet_printer as lsp
import label_sheet_printer.config
import label_sheet_printer.records
import label_sheet_printer.render


Record = lsp.records.Record
LabelGeometry = lsp.config.LabelGeometry
RenderSettings = lsp.config.RenderSettings
RenderResult = lsp.config.RenderResult


#============================================
def print_failure(message: str) -> None:
	print(message)


class LabelGenerator:
	"""
	Runs PDF generation at most once at a time.

	generate() runs on the calling thread; submit() hands the same work to
	a background worker so the caller can show a working state first.
	Failures are reported once through notify and never leave the busy
	flag set.
	"""

	def __init__(
		self,
		geometry: LabelGeometry = lsp.config.DEFAULT_GEOMETRY,
		notify: typing.Callable[[str], None] = print_failure,
		render_func: typing.Callable[..., RenderResult] | None = None,
		verbose: bool = False,
	) -> None:
		self.geometry = geometry
		self.verbose = verbose
		self.notify = notify
		self.render_func = render_func or lsp.render.render_labels_to_pdf
		self._lock = threading.Lock()
		self._busy = False
		self._executor: concurrent.futures.ThreadPoolExecutor | None = None

	@property
	def is_busy(self) -> bool:
		return self._busy

	def _claim(self) -> bool:
		with self._lock:
			if self._busy:
				return False
			self._busy = True
			return True

	def _run(
		self,
		records: list[Record],
		output_path: pathlib.Path,
		settings: RenderSettings,
	) -> RenderResult | None:
		try:
			return self.render_func(records, output_path, settings, self.geometry, verbose=self.verbose)
		except Exception as error:
			self.notify(f"Failed to generate PDF: {error}")
			return None
		finally:
			with self._lock:
				self._busy = False

	def generate(
		self,
		records: list[Record],
		output_path: pathlib.Path,
		settings: RenderSettings,
	) -> RenderResult | None:
		"""
		Render synchronously.

		Returns:
			RenderResult, or None when busy or when rendering failed.
		"""
		if not self._claim():
			return None
		return self._run(records, output_path, settings)

	def submit(
		self,
		records: list[Record],
		output_path: pathlib.Path,
		settings: RenderSettings,
	) -> concurrent.futures.Future | None:
		"""
		Render on the background worker.

		Returns:
			Future resolving to the generate() result, or None when a
			generation is already running.
		"""
		if not self._claim():
			return None
		if self._executor is None:
			self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
		try:
			# inputs are copied at submit time
			return self._executor.submit(
				self._run,
				list(records),
				output_path,
				dataclasses.replace(settings),
			)
		except Exception:
			with self._lock:
				self._busy = False
			raise

	def shutdown(self) -> None:
		if self._executor is not None:
			self._executor.shutdown(wait=True)
			self._executor = None

