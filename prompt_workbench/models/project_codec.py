# File: prompt_workbench/models/project_codec.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization.

# Imports
# ------------------------------
import json
from prompt_workbench import config
from prompt_workbench.config import get_logger
from prompt_workbench.models.tree_ops import NODE_TYPES, find_tree_problems, generate_id, is_file, validate_name
from prompt_workbench.utils.migration_utils import is_flat_project, upgrade_flat_project
from prompt_workbench.utils.text_utils import slugify

logger = get_logger(__name__)

class ProjectImportError(ValueError):
	pass

# Construction
# ------------------------------
def new_project(name, project_id=None):
	return {"id": project_id or generate_id(), "name": name, "nodes": {}, "fileContents": {}, "instructions": ""}

# Export
# ------------------------------
def export_document(project): return json.dumps(project, indent=2, ensure_ascii=False)

def export_filename(name): return f"{slugify(name)}{config.EXPORT_SUFFIX}"

# Validation & Normalization
# ------------------------------
def _normalize_nodes(raw_nodes):
	if not isinstance(raw_nodes, dict): raise ProjectImportError("'nodes' must be an object keyed by node id.")
	nodes = {}
	for key, raw in raw_nodes.items():
		if not isinstance(raw, dict): raise ProjectImportError(f"Node '{key}' is not an object.")
		if raw.get("id", key) != key: raise ProjectImportError(f"Node key '{key}' does not match its id '{raw.get('id')}'.")
		name_error = validate_name(raw.get("name"))
		if name_error: raise ProjectImportError(f"Node '{key}': {name_error}")
		if raw.get("type") not in NODE_TYPES: raise ProjectImportError(f"Node '{key}' has invalid type {raw.get('type')!r}.")
		parent_id = raw.get("parentId")
		if parent_id is not None and not isinstance(parent_id, str): raise ProjectImportError(f"Node '{key}' has an invalid parentId.")
		nodes[key] = {"id": key, "name": raw["name"].strip(), "type": raw["type"], "parentId": parent_id}
	problems = find_tree_problems(nodes)
	if problems: raise ProjectImportError(problems[0])
	return nodes

def _normalize_contents(raw_contents, nodes):
	if not isinstance(raw_contents, dict): raise ProjectImportError("'fileContents' must be an object.")
	contents = {}
	for key, text in raw_contents.items():
		if not isinstance(text, str): raise ProjectImportError(f"Content for '{key}' is not a string.")
		if not is_file(nodes, key):
			logger.warning("Dropping content entry '%s' with no matching file node.", key)
			continue
		contents[key] = text
	return contents

def normalize_project(data):
	if not isinstance(data, dict): raise ProjectImportError("Project document must be a JSON object.")
	name = data.get("name")
	if not isinstance(name, str) or not name.strip(): raise ProjectImportError("Project document requires a non-empty 'name'.")
	if is_flat_project(data):
		try: data = upgrade_flat_project(data)
		except ValueError as e: raise ProjectImportError(str(e)) from e
	nodes = _normalize_nodes(data.get("nodes") or {})
	contents = _normalize_contents(data.get("fileContents") or {}, nodes)
	instructions = data.get("instructions") or ""
	if not isinstance(instructions, str): raise ProjectImportError("'instructions' must be a string.")
	project_id = data.get("id") if isinstance(data.get("id"), str) and data.get("id") else None
	return {"id": project_id, "name": name, "nodes": nodes, "fileContents": contents, "instructions": instructions}

def rehydrate(project):
	id_map = {old_id: generate_id() for old_id in project["nodes"]}
	nodes = {id_map[old_id]: {"id": id_map[old_id], "name": n["name"], "type": n["type"], "parentId": id_map.get(n["parentId"]) if n["parentId"] is not None else None} for old_id, n in project["nodes"].items()}
	contents = {id_map[old_id]: text for old_id, text in project["fileContents"].items()}
	return {"id": generate_id(), "name": project["name"], "nodes": nodes, "fileContents": contents, "instructions": project["instructions"]}

# Import
# ------------------------------
def parse_document(text):
	if isinstance(text, (bytes, bytearray)):
		try: text = bytes(text).decode('utf-8-sig')
		except UnicodeDecodeError as e: raise ProjectImportError(f"Project document is not UTF-8 text: {e}") from e
	if not isinstance(text, str): raise ProjectImportError("Project document must be text.")
	try: data = json.loads(text)
	except json.JSONDecodeError as e: raise ProjectImportError(f"Project document is not valid JSON: {e}") from e
	return normalize_project(data)

def import_document(text): return rehydrate(parse_document(text))

def normalize_stored_project(data):
	try: project = normalize_project(data)
	except ProjectImportError as e:
		logger.warning("Skipping invalid stored project: %s", e)
		return None
	if project["id"] is None: project["id"] = generate_id()
	return project
