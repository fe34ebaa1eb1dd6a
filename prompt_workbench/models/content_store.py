# File: prompt_workbench/models/content_store.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization

from prompt_workbench.config import get_logger
from prompt_workbench.models.result import NOT_FOUND, VALIDATION, failure, success
from prompt_workbench.models.tree_ops import FILE, is_file
from prompt_workbench.utils.text_utils import unify_line_endings

logger = get_logger(__name__)

# Content Store
# ------------------------------
class ContentStore:
	def __init__(self, registry):
		self.registry = registry

	def get_content(self, node_id):
		project = self.registry.current_project
		return project["fileContents"].get(node_id, "") if project is not None else ""

	def set_content(self, node_id, text):
		project = self.registry.current_project
		if project is None or not is_file(project["nodes"], node_id): return failure(f"File '{node_id}' not found.", NOT_FOUND, logger)
		if not isinstance(text, str): return failure("File content must be a string.", VALIDATION, logger)
		self.registry.replace_current_project({**project, "fileContents": {**project["fileContents"], node_id: unify_line_endings(text)}})
		return success(node_id)

	def get_char_counts(self):
		project = self.registry.current_project
		if project is None: return {}
		return {nid: len(project["fileContents"].get(nid, "")) for nid, n in project["nodes"].items() if n["type"] == FILE}
