# File: prompt_workbench/models/storage.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization.

# Imports
# ------------------------------
import os, re, threading
from prompt_workbench.utils.file_io import load_json_text_safely, atomic_write_with_backup

SAFE_KEY_RE = re.compile(r'[^A-Za-z0-9_.-]+')

# Storage Port
# ------------------------------
class StoragePort:
	"""Key/value store of text records. Implementations raise StorageError when a record cannot be read or written."""
	def get_item(self, key): raise NotImplementedError
	def set_item(self, key, text): raise NotImplementedError

class MemoryStorage(StoragePort):
	def __init__(self, initial=None):
		self.items = dict(initial or {})
		self.write_count = 0
	def get_item(self, key): return self.items.get(key)
	def set_item(self, key, text): self.items[key] = text; self.write_count += 1

# JSON File Storage
# ------------------------------
class JsonFileStorage(StoragePort):
	def __init__(self, storage_dir):
		self.storage_dir = os.path.abspath(storage_dir)
		self._lock = threading.Lock()

	def path_for(self, key): return os.path.join(self.storage_dir, f"{SAFE_KEY_RE.sub('_', key)}.json")

	def get_item(self, key):
		path = self.path_for(key)
		return load_json_text_safely(path, path + ".lock")

	def set_item(self, key, text):
		path = self.path_for(key)
		with self._lock: atomic_write_with_backup(text, path, path + ".lock")

