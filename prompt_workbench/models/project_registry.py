# File: prompt_workbench/models/project_registry.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization

# Imports
# ------------------------------
import os, copy, json, threading
from prompt_workbench import config
from prompt_workbench.config import get_logger
from prompt_workbench.models.project_codec import ProjectImportError, export_document, export_filename, import_document, new_project, normalize_stored_project
from prompt_workbench.models.prompt_generator import generate_prompt
from prompt_workbench.models.result import IMPORT, NOT_FOUND, STORAGE, VALIDATION, failure, success
from prompt_workbench.models.storage import JsonFileStorage
from prompt_workbench.utils.file_io import safe_read_file, write_text_file

logger = get_logger(__name__)

# Project Registry
# ------------------------------
class ProjectRegistry:
	# Initialization & State
	# ------------------------------
	def __init__(self, storage=None, default_project_name=None):
		self.storage = storage if storage is not None else JsonFileStorage(config.STORAGE_DIR)
		self.default_project_name = default_project_name or config.DEFAULT_PROJECT_NAME
		self.projects = []
		self.current_project_id = None
		self.selected_node_id = None
		self.projects_lock = threading.RLock()
		self.last_save_ok = True
		self.storage_unreadable = False
		self.load()

	@property
	def current_project(self):
		with self.projects_lock: return next((p for p in self.projects if p["id"] == self.current_project_id), None)

	# Data Persistence
	# ------------------------------
	def _read_record(self, key):
		try: text = self.storage.get_item(key)
		except Exception as e:
			logger.error("Failed to read stored record %s, saving is disabled until a reload succeeds: %s", key, e, exc_info=True)
			self.storage_unreadable = True
			return None
		if text is None: return None
		try: return json.loads(text)
		except (json.JSONDecodeError, TypeError) as e:
			logger.error("Stored record %s is unparsable, falling back to defaults: %s", key, e)
			return None

	def load(self):
		self.storage_unreadable = False
		raw_projects = self._read_record(config.STORAGE_KEYS["projects"])
		raw_current = self._read_record(config.STORAGE_KEYS["current_project"])
		projects, seen_ids = [], set()
		for raw in raw_projects if isinstance(raw_projects, list) else []:
			project = normalize_stored_project(raw)
			if project is None: continue
			if project["id"] in seen_ids:
				logger.warning("Skipping stored project with duplicate id %s", project["id"])
				continue
			seen_ids.add(project["id"]); projects.append(project)
		if not projects:
			projects = [new_project(self.default_project_name)]
			logger.info("No stored projects found, seeded '%s'.", self.default_project_name)
		with self.projects_lock:
			self.projects = projects
			self.current_project_id = raw_current if isinstance(raw_current, str) and raw_current in seen_ids else projects[0]["id"]
			self.selected_node_id = None

	def save(self):
		if self.storage_unreadable:
			logger.error("Stored projects could not be read, keeping changes in memory only.")
			self.last_save_ok = False
			return False
		with self.projects_lock:
			projects_text = json.dumps(self.projects, ensure_ascii=False)
			current_text = json.dumps(self.current_project_id)
		try:
			self.storage.set_item(config.STORAGE_KEYS["projects"], projects_text)
			self.storage.set_item(config.STORAGE_KEYS["current_project"], current_text)
			self.last_save_ok = True
		except Exception as e:
			logger.error("Failed to persist projects, continuing with in-memory state: %s", e, exc_info=True)
			self.last_save_ok = False
		return self.last_save_ok

	def replace_current_project(self, project):
		with self.projects_lock:
			if project.get("id") != self.current_project_id: return failure("Only the active project can be replaced.", NOT_FOUND, logger)
			self.projects = [project if p["id"] == project["id"] else p for p in self.projects]
			if self.selected_node_id is not None and self.selected_node_id not in project["nodes"]: self.selected_node_id = None
		self.save()
		return success(project["id"])

	# Project Queries
	# ------------------------------
	def exists(self, project_id):
		with self.projects_lock: return any(p["id"] == project_id for p in self.projects)

	def get_project(self, project_id):
		with self.projects_lock: return copy.deepcopy(next((p for p in self.projects if p["id"] == project_id), None))

	def list_projects(self):
		with self.projects_lock: return [{"id": p["id"], "name": p["name"], "current": p["id"] == self.current_project_id, "node_count": len(p["nodes"])} for p in self.projects]

	def find_projects_by_name(self, name):
		with self.projects_lock: return [p["id"] for p in self.projects if p["name"] == name]

	# Project Management
	# ------------------------------
	def create_project(self, name=None):
		name = name.strip() if isinstance(name, str) and name.strip() else self.default_project_name
		project = new_project(name)
		with self.projects_lock:
			self.projects = self.projects + [project]
			self.current_project_id = project["id"]; self.selected_node_id = None
		logger.info("Created project '%s' (%s).", name, project["id"])
		self.save()
		return success(project["id"])

	def rename_project(self, project_id, name):
		if not isinstance(name, str) or not name.strip(): return failure("Project name must not be blank.", VALIDATION, logger)
		with self.projects_lock:
			if not self.exists(project_id): return failure(f"Project '{project_id}' not found.", NOT_FOUND, logger)
			self.projects = [{**p, "name": name.strip()} if p["id"] == project_id else p for p in self.projects]
		self.save()
		return success(project_id)

	def delete_project(self, project_id):
		with self.projects_lock:
			if not self.exists(project_id): return failure(f"Project '{project_id}' not found.", NOT_FOUND, logger)
			if len(self.projects) <= 1: return failure("The last remaining project cannot be deleted.", VALIDATION, logger)
			self.projects = [p for p in self.projects if p["id"] != project_id]
			if self.current_project_id == project_id:
				self.current_project_id = self.projects[0]["id"] if self.projects else None
				self.selected_node_id = None
		logger.info("Deleted project %s.", project_id)
		self.save()
		return success(project_id)

	def select_project(self, project_id):
		with self.projects_lock:
			if not self.exists(project_id): return failure(f"Project '{project_id}' not found.", NOT_FOUND, logger)
			self.current_project_id = project_id; self.selected_node_id = None
		self.save()
		return success(project_id)

	def update_instructions(self, instructions):
		project = self.current_project
		if project is None: return failure("No active project.", NOT_FOUND, logger)
		if not isinstance(instructions, str): return failure("Instructions must be a string.", VALIDATION, logger)
		return self.replace_current_project({**project, "instructions": instructions})

	def clear_project(self):
		project = self.current_project
		if project is None: return failure("No active project.", NOT_FOUND, logger)
		self.selected_node_id = None
		return self.replace_current_project({**project, "nodes": {}, "fileContents": {}, "instructions": ""})

	def select_node(self, node_id):
		project = self.current_project
		if node_id is not None and (project is None or node_id not in project["nodes"]): return failure(f"Node '{node_id}' not found.", NOT_FOUND, logger)
		self.selected_node_id = node_id
		return success(node_id)

	# Prompt Generation
	# ------------------------------
	def generate_prompt(self):
		project = self.current_project
		return generate_prompt(project) if project is not None else ""

	# Export & Import
	# ------------------------------
	def export_project(self, project_id=None):
		project = self.get_project(project_id or self.current_project_id)
		if project is None: return failure(f"Project '{project_id}' not found.", NOT_FOUND, logger)
		return success(export_document(project))

	def export_project_to_file(self, project_id=None, directory=None):
		result = self.export_project(project_id)
		if not result: return result
		project = self.get_project(project_id or self.current_project_id)
		path = os.path.join(directory or config.EXPORT_DIR, export_filename(project["name"]))
		try: write_text_file(path, result.value)
		except OSError as e:
			logger.error("Failed to write export %s: %s", path, e, exc_info=True)
			return failure(f"Could not write export file: {e}", STORAGE)
		logger.success("Exported project '%s' to %s.", project["name"], path)
		return success(path)

	def import_project(self, document_text):
		try: project = import_document(document_text)
		except ProjectImportError as e: return failure(f"Import failed: {e}", IMPORT, logger)
		with self.projects_lock:
			self.projects = self.projects + [project]
			self.current_project_id = project["id"]; self.selected_node_id = None
		logger.success("Imported project '%s' as %s.", project["name"], project["id"])
		self.save()
		return success(project["id"])

	def import_project_from_file(self, path):
		text = safe_read_file(path)
		if text is None: return failure(f"Could not read import file {path}.", IMPORT, logger)
		return self.import_project(text)
