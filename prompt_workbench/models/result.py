# File: prompt_workbench/models/result.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization.

from typing import Any, NamedTuple

VALIDATION, NOT_FOUND, IMPORT, STORAGE = "validation", "not_found", "import", "storage"

# Operation Result
# ------------------------------
class OpResult(NamedTuple):
	ok: bool
	reason: str = ""
	value: Any = None
	kind: str = ""

	def __bool__(self): return self.ok

def success(value=None): return OpResult(True, "", value, "")

def failure(reason, kind=VALIDATION, logger=None):
	if logger is not None: logger.warning("Rejected (%s): %s", kind, reason)
	return OpResult(False, reason, None, kind)
