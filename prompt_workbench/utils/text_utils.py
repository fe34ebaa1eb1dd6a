# File: prompt_workbench/utils/text_utils.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization.

import re

BACKTICK_RUN_RE = re.compile(r'`{3,}')
NON_ALNUM_RE = re.compile(r'[^a-z0-9]+')

# Text & Path Utilities
# ------------------------------
def unify_line_endings(text): return text.replace('\r\n', '\n').replace('\r', '\n')

def split_node_path(path_str):
	path_str = path_str.strip()
	return [p.strip() for p in path_str.split('/') if p.strip()], path_str.endswith('/')

def slugify(name, fallback="project"):
	slug = NON_ALNUM_RE.sub('-', (name or "").lower()).strip('-')
	return slug or fallback

def fence_for(content):
	longest = max((len(m.group(0)) for m in BACKTICK_RUN_RE.finditer(content or "")), default=0)
	return '`' * max(3, longest + 1)
