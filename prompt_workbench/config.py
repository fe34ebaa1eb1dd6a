# File: prompt_workbench/config.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization.

import os, configparser, random, string, logging, sys
from libs.logging_setup.setup_logging import SUCCESS_LEVEL_NUM, DailyFileHandler, make_file_handler, setup_logging
from prompt_workbench.utils.text_utils import slugify

# Constants & Configuration
# ------------------------------
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(BASE_DIR, 'config.ini')
DATA_DIR = os.path.join(BASE_DIR, "data")
STORAGE_DIR = os.path.join(DATA_DIR, "storage")
EXPORT_DIR = os.path.join(DATA_DIR, "exports")
LOG_PATH = os.path.join(DATA_DIR, "logs")
STORAGE_KEYS = {"projects": "prompt-editor-projects", "current_project": "prompt-editor-current-project"}
EXPORT_SUFFIX = "-prompt-project.json"
INSTANCE_ID = f"{os.getpid()}-{''.join(random.choices(string.ascii_lowercase + string.digits, k=6))}"
_CONSOLE_HANDLERS = []

# Configurable Limits (with defaults)
LOCK_TIMEOUT_SECONDS = 10
READ_LOCK_ATTEMPTS = 5
DEFAULT_PROJECT_NAME = "New Project"
STRUCTURE_INDENT = 4

# App Setup & Initialization
# ------------------------------
def set_data_dir(path):
	global DATA_DIR, STORAGE_DIR, EXPORT_DIR, LOG_PATH
	DATA_DIR = path if os.path.isabs(path) else os.path.join(BASE_DIR, path)
	STORAGE_DIR = os.path.join(DATA_DIR, "storage"); EXPORT_DIR = os.path.join(DATA_DIR, "exports"); LOG_PATH = os.path.join(DATA_DIR, "logs")

def load_config(config_path=None):
	config = configparser.ConfigParser()
	config_path = config_path or CONFIG_PATH
	if not os.path.exists(config_path): sys.stderr.write(f"Configuration Warning: {config_path} not found, using defaults.\n"); return False
	global LOCK_TIMEOUT_SECONDS, READ_LOCK_ATTEMPTS, DEFAULT_PROJECT_NAME, STRUCTURE_INDENT
	try:
		config.read(config_path, encoding='utf-8')
		set_data_dir(config.get('Paths', 'DATA_DIR', fallback="data").strip() or "data")
		LOCK_TIMEOUT_SECONDS = config.getint('Limits', 'LOCK_TIMEOUT_SECONDS', fallback=10)
		READ_LOCK_ATTEMPTS = max(1, config.getint('Limits', 'READ_LOCK_ATTEMPTS', fallback=5))
		DEFAULT_PROJECT_NAME = config.get('Defaults', 'DEFAULT_PROJECT_NAME', fallback="New Project").strip() or "New Project"
		STRUCTURE_INDENT = max(1, config.getint('Defaults', 'STRUCTURE_INDENT', fallback=4))
	except (configparser.Error, ValueError) as e:
		logging.warning("Could not parse config.ini, using defaults. Error: %s", e)
		return False
	return True

def ensure_data_dirs():
	for d in (STORAGE_DIR, EXPORT_DIR, LOG_PATH): os.makedirs(d, exist_ok=True)

# Logging
# ------------------------------
class InstanceLogAdapter(logging.LoggerAdapter):
	def process(self, msg, kwargs): return f"[{self.extra['instance_id']}] {msg}", kwargs
	def success(self, msg, *args, **kwargs): self.log(SUCCESS_LEVEL_NUM, msg, *args, **kwargs)

def get_logger(name): return InstanceLogAdapter(logging.getLogger(name), {'instance_id': INSTANCE_ID})

def initialize_logging(console_level=logging.WARNING):
	ensure_data_dirs()
	root = setup_logging(log_path=os.path.join(LOG_PATH, "general"), log_level=logging.INFO, console_level=console_level)
	_CONSOLE_HANDLERS[:] = [h for h in root.handlers if type(h) is logging.StreamHandler]
	return root

def set_project_file_handler(project_name):
	root = logging.getLogger()
	current = next((h for h in root.handlers if isinstance(h, DailyFileHandler)), None)
	if current is None: return
	log_dir = os.path.abspath(os.path.join(LOG_PATH, slugify(project_name, fallback="general")))
	if log_dir == current.log_dir: return
	root.addHandler(make_file_handler(log_dir, current.level))
	root.removeHandler(current); current.close()
	for ch in _CONSOLE_HANDLERS:
		if ch not in root.handlers: root.addHandler(ch)
	get_logger(__name__).info("Project log for '%s' is %s", project_name, log_dir)

load_config()
