# File: prompt_workbench/utils/file_io.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization.

import os, json, logging, time, random, shutil
from filelock import FileLock, Timeout
from pathlib import Path
from prompt_workbench import config

logger = logging.getLogger(__name__)

class StorageError(IOError):
	pass

# File I/O & Locking Utilities
# ------------------------------
def backup_corrupted_file(path):
	backup_path = f"{path}.bak.{int(time.time())}"
	try:
		shutil.copy2(path, backup_path)
		logger.critical("Data file %s is corrupted. Backed up to %s.", path, backup_path)
		return backup_path
	except OSError as e:
		logger.critical("Data file %s is corrupted AND could not be backed up: %s", path, e, exc_info=True)
		return None

def load_json_text_safely(path, lock_path):
	attempts = config.READ_LOCK_ATTEMPTS
	for attempt in range(attempts):
		try:
			with FileLock(lock_path, timeout=1):
				if not os.path.exists(path): return None
				with open(path, 'r', encoding='utf-8') as f: text = f.read()
			json.loads(text)
			return text
		except Timeout:
			logger.warning(f"Lock timeout for {path} on attempt {attempt + 1}")
			if attempt < attempts - 1: time.sleep(0.5 + random.uniform(0, 0.5))
		except (json.JSONDecodeError, UnicodeDecodeError):
			backup_corrupted_file(path)
			return None
		except OSError as e:
			raise StorageError(f"Error reading {path}: {e}") from e
	raise StorageError(f"Could not acquire lock for reading {os.path.basename(path)}. Another instance may be busy.")

def atomic_write_with_backup(text, path, lock_path):
	os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
	tmp_path = path + f".tmp.{config.INSTANCE_ID}"
	bak1_path = path + ".bak1"
	bak2_path = path + ".bak2"

	try:
		with FileLock(lock_path, timeout=config.LOCK_TIMEOUT_SECONDS):
			with open(tmp_path, 'w', encoding='utf-8', newline='\n') as f: f.write(text)

			if os.path.exists(bak1_path):
				try: os.replace(bak1_path, bak2_path)
				except OSError as e: logger.warning(f"Failed to rotate backup {bak1_path}: {e}")

			if os.path.exists(path):
				try: shutil.copy2(path, bak1_path)
				except OSError as e: logger.warning(f"Failed to create backup for {path}: {e}")

			os.replace(tmp_path, path)
			logger.debug("Saved %s successfully.", path)
		return True
	except Timeout:
		raise StorageError(f"Could not acquire lock for writing {os.path.basename(path)}. Your changes were not saved.")
	except (IOError, OSError) as e:
		raise StorageError(f"Error writing {path}: {e}") from e
	finally:
		if os.path.exists(tmp_path):
			try: os.remove(tmp_path)
			except OSError: pass

def write_text_file(path, text):
	os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
	with open(path, 'w', encoding='utf-8', newline='\n') as f: f.write(text)
	return path

def safe_read_file(path):
	try: return Path(path).read_text(encoding='utf-8-sig', errors='replace')
	except PermissionError: logger.warning("Permission denied for file %s", path); return None
	except (OSError, IOError) as e: logger.error("Failed to read file %s: %s", path, e); return None
