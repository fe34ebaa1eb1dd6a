# setup_logging.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization

import logging, os, portalocker, threading, colorlog, inspect, itertools
from datetime import datetime
from logging.handlers import BaseRotatingHandler

SUCCESS_LEVEL_NUM = 25
LOG_PREFIX = 'workbench'
LOG_FORMAT = '%(asctime)s - %(func_hierarchy)s - %(levelname)s - %(message)s'
LOG_COLORS = {'DEBUG': 'white', 'INFO': 'reset', 'SUCCESS': 'green', 'WARNING': 'yellow', 'ERROR': 'red', 'CRITICAL': 'bold_red'}
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
_SKIPPED_FILES = {'setup_logging.py', '__init__.py', 'config.py'}

logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")
for _noisy in ("filelock", "portalocker"): logging.getLogger(_noisy).setLevel(logging.WARNING)

# Call Hierarchy
# ------------------------------
def build_func_hierarchy(record):
    frames = [f for f in inspect.stack()[1:] if f.function != '<module>' and os.path.abspath(f.filename).startswith(_PROJECT_ROOT) and os.path.basename(f.filename) not in _SKIPPED_FILES]
    if not frames: return f"{os.path.basename(record.pathname)}:{record.funcName}"
    grouped = itertools.groupby(reversed(frames), key=lambda f: os.path.basename(f.filename))
    return ' > '.join(f"{fn}:{'.'.join(f.function for f in group)}" for fn, group in grouped)

def _ensure_hierarchy(record):
    if not hasattr(record, 'func_hierarchy'): record.func_hierarchy = build_func_hierarchy(record)

# Filters & Formatters
# ------------------------------
class HierarchyFilter(logging.Filter):
    def filter(self, record):
        _ensure_hierarchy(record)
        return True

class HierarchicalFormatter(logging.Formatter):
    def format(self, record):
        _ensure_hierarchy(record)
        return super().format(record)

class HierarchicalColoredFormatter(colorlog.ColoredFormatter):
    def format(self, record):
        _ensure_hierarchy(record)
        return super().format(record)

# Handlers
# ------------------------------
def _today(): return datetime.now().strftime('%Y-%m-%d')

class DailyFileHandler(BaseRotatingHandler):
    def __init__(self, log_dir, log_prefix=LOG_PREFIX, encoding='utf-8', delay=True):
        self.log_dir, self.log_prefix = os.path.abspath(log_dir), log_prefix
        self.current_date_str = _today()
        super().__init__(self._path_for(self.current_date_str), 'a', encoding, delay)
        self._emit_lock = threading.RLock()

    def _path_for(self, date_str):
        month_dir = os.path.join(self.log_dir, date_str[:7])
        os.makedirs(month_dir, exist_ok=True)
        return os.path.join(month_dir, f"{self.log_prefix}.{date_str}.log")

    def shouldRollover(self, record): return _today() != self.current_date_str

    def doRollover(self):
        if self.stream: self.stream.close(); self.stream = None
        self.current_date_str = _today()
        self.baseFilename = self._path_for(self.current_date_str)

    def emit(self, record):
        with self._emit_lock:
            if self.shouldRollover(record): self.doRollover()
            if self.stream is None: self.stream = self._open()
            portalocker.lock(self.stream, portalocker.LOCK_EX)
            try: super().emit(record)
            finally: portalocker.unlock(self.stream)

def make_file_handler(log_dir, level=logging.INFO):
    handler = DailyFileHandler(log_dir)
    handler.setLevel(level)
    handler.addFilter(HierarchyFilter())
    handler.setFormatter(HierarchicalFormatter(LOG_FORMAT))
    return handler

# Setup
# ------------------------------
def setup_logging(log_path='logs', log_level=logging.INFO, console_level=None):
    root = logging.getLogger()
    for h in list(root.handlers): root.removeHandler(h); h.close()
    console_level = log_level if console_level is None else console_level
    root.setLevel(min(log_level, console_level))
    root.addHandler(make_file_handler(log_path, log_level))
    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(HierarchicalColoredFormatter('%(log_color)s' + LOG_FORMAT, log_colors=LOG_COLORS))
    root.addHandler(console)
    root.log(SUCCESS_LEVEL_NUM, "Logging initialized.")
    return root
