# File: prompt_workbench/models/tree_ops.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization.

# Imports
# ------------------------------
import os, time, itertools
from prompt_workbench.utils.text_utils import split_node_path

FILE, FOLDER = "file", "folder"
NODE_TYPES = (FILE, FOLDER)
_id_counter = itertools.count()

# Identity & Validation
# ------------------------------
def generate_id():
	return f"{int(time.time() * 1000):x}{next(_id_counter):x}{os.urandom(4).hex()}"

def validate_name(name):
	if not isinstance(name, str) or not name.strip(): return "Name must be a non-empty string."
	if "/" in name: return f"Name '{name}' may not contain '/'."
	if not name.isprintable(): return f"Name {name!r} may not contain line breaks or control characters."
	return None

def is_folder(nodes, node_id): return node_id in nodes and nodes[node_id].get("type") == FOLDER
def is_file(nodes, node_id): return node_id in nodes and nodes[node_id].get("type") == FILE

def sibling_name_taken(nodes, parent_id, name, node_type, exclude_id=None):
	return any(n["parentId"] == parent_id and n["type"] == node_type and n["name"] == name and nid != exclude_id for nid, n in nodes.items())

# Traversal
# ------------------------------
def build_children_index(nodes):
	index = {}
	for nid, node in nodes.items(): index.setdefault(node.get("parentId"), []).append(nid)
	return index

def children_of(nodes, parent_id): return [nid for nid, n in nodes.items() if n.get("parentId") == parent_id]

def collect_descendants(nodes, root_id, index=None):
	if root_id not in nodes: return []
	index = index if index is not None else build_children_index(nodes)
	collected, seen, stack = [], set(), [root_id]
	while stack:
		nid = stack.pop()
		if nid in seen: continue
		seen.add(nid); collected.append(nid)
		stack.extend(reversed(index.get(nid, [])))
	return collected

def ancestor_chain(nodes, node_id):
	chain, seen = [], set()
	current = nodes.get(node_id, {}).get("parentId")
	while current is not None:
		if current in seen or current not in nodes: break
		seen.add(current); chain.append(current)
		current = nodes[current].get("parentId")
	return chain

def would_create_cycle(nodes, node_id, new_parent_id):
	current, steps = new_parent_id, 0
	while current is not None:
		if current == node_id or steps > len(nodes): return True
		current = nodes.get(current, {}).get("parentId"); steps += 1
	return False

def walk_preorder(nodes, index=None):
	index = index if index is not None else build_children_index(nodes)
	stack = [(nid, 0) for nid in reversed(index.get(None, []))]
	seen = set()
	while stack:
		nid, depth = stack.pop()
		if nid in seen: continue
		seen.add(nid)
		yield nid, depth
		stack.extend((cid, depth + 1) for cid in reversed(index.get(nid, [])))

# Paths
# ------------------------------
def node_path(nodes, node_id):
	if node_id not in nodes: return None
	parts = [nodes[a]["name"] for a in reversed(ancestor_chain(nodes, node_id))] + [nodes[node_id]["name"]]
	return "/".join(parts) + ("/" if nodes[node_id]["type"] == FOLDER else "")

def find_child(nodes, parent_id, name, node_type=None):
	matches = [nid for nid, n in nodes.items() if n["parentId"] == parent_id and n["name"] == name and (node_type is None or n["type"] == node_type)]
	if node_type is None and len(matches) > 1: matches.sort(key=lambda nid: nodes[nid]["type"] != FILE)
	return matches[0] if matches else None

def resolve_path(nodes, path):
	parts, wants_folder = split_node_path(path or "")
	if not parts: return None
	parent_id = None
	for part in parts[:-1]:
		parent_id = find_child(nodes, parent_id, part, FOLDER)
		if parent_id is None: return None
	return find_child(nodes, parent_id, parts[-1], FOLDER if wants_folder else None)

# Integrity
# ------------------------------
def find_tree_problems(nodes):
	problems, seen_names = [], set()
	for nid, node in nodes.items():
		parent_id = node.get("parentId")
		if parent_id is not None and not is_folder(nodes, parent_id): problems.append(f"Node '{nid}' has a parent that is not an existing folder.")
		elif would_create_cycle(nodes, nid, parent_id): problems.append(f"Node '{nid}' is its own ancestor.")
		key = (parent_id, node.get("type"), node.get("name"))
		if key in seen_names: problems.append(f"Duplicate {node.get('type')} name '{node.get('name')}' under the same parent.")
		seen_names.add(key)
	return problems
