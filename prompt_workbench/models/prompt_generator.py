# File: prompt_workbench/models/prompt_generator.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization

# Imports
# ------------------------------
from prompt_workbench import config
from prompt_workbench.models.tree_ops import FILE, FOLDER, build_children_index, node_path, walk_preorder
from prompt_workbench.utils.text_utils import fence_for

STRUCTURE_HEADER = "Project Structure:"
EMPTY_FOLDER_MARKER = "(empty)"
FILE_HEADER = "File: {path}"

# Prompt Generation
# ------------------------------
def generate_directory_tree(nodes, index=None, indent=None):
	index = index if index is not None else build_children_index(nodes)
	indent_str = " " * (indent or config.STRUCTURE_INDENT)
	lines = []
	for nid, depth in walk_preorder(nodes, index):
		node = nodes[nid]
		if node["type"] == FOLDER:
			lines.append(f"{indent_str * depth}- {node['name']}/")
			if not index.get(nid): lines.append(f"{indent_str * (depth + 1)}- {EMPTY_FOLDER_MARKER}")
		else: lines.append(f"{indent_str * depth}- {node['name']}")
	return "\n".join(lines)

def generate_file_blocks(nodes, contents, index=None):
	blocks = []
	for nid, _ in walk_preorder(nodes, index):
		if nodes[nid]["type"] != FILE: continue
		content = (contents.get(nid) or "").rstrip('\n')
		fence = fence_for(content)
		body = f"{fence}\n{content}\n{fence}" if content else f"{fence}\n{fence}"
		blocks.append(f"{FILE_HEADER.format(path=node_path(nodes, nid))}\n{body}")
	return blocks

def generate_prompt(project):
	nodes, contents = project.get("nodes") or {}, project.get("fileContents") or {}
	instructions = (project.get("instructions") or "").rstrip()
	sections = [instructions] if instructions.strip() else []
	if nodes:
		index = build_children_index(nodes)
		sections.append(f"{STRUCTURE_HEADER}\n{generate_directory_tree(nodes, index)}")
		sections.extend(generate_file_blocks(nodes, contents, index))
	if not sections: return ""
	return "\n\n".join(sections).rstrip('\n') + '\n'

def get_prompt_stats(prompt):
	return {"chars": len(prompt), "lines": prompt.count('\n'), "file_blocks": sum(1 for line in prompt.splitlines() if line.startswith("File: "))}
