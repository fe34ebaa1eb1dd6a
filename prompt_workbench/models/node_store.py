# File: prompt_workbench/models/node_store.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization

# Imports
# ------------------------------
from prompt_workbench.config import get_logger
from prompt_workbench.models.result import NOT_FOUND, VALIDATION, failure, success
from prompt_workbench.models import tree_ops
from prompt_workbench.models.tree_ops import FILE, FOLDER

logger = get_logger(__name__)

# Node Store
# ------------------------------
class NodeStore:
	def __init__(self, registry):
		self.registry = registry

	def _nodes(self):
		project = self.registry.current_project
		return project["nodes"] if project is not None else {}

	def _commit(self, project, nodes, contents=None):
		new_project = {**project, "nodes": nodes}
		if contents is not None: new_project["fileContents"] = contents
		return self.registry.replace_current_project(new_project)

	def _check_parent(self, nodes, parent_id):
		if parent_id is not None and not tree_ops.is_folder(nodes, parent_id): return failure(f"Parent '{parent_id}' is not an existing folder.", VALIDATION, logger)
		return None

	# Creation
	# ------------------------------
	def _add_node(self, name, parent_id, node_type):
		project = self.registry.current_project
		if project is None: return failure("No active project.", NOT_FOUND, logger)
		nodes = project["nodes"]
		name = name.strip() if isinstance(name, str) else name
		name_error = tree_ops.validate_name(name)
		if name_error: return failure(name_error, VALIDATION, logger)
		rejected = self._check_parent(nodes, parent_id)
		if rejected: return rejected
		if tree_ops.sibling_name_taken(nodes, parent_id, name, node_type): return failure(f"A {node_type} named '{name}' already exists here.", VALIDATION, logger)
		node_id = tree_ops.generate_id()
		while node_id in nodes: node_id = tree_ops.generate_id()
		new_nodes = {**nodes, node_id: {"id": node_id, "name": name, "type": node_type, "parentId": parent_id}}
		new_contents = {**project["fileContents"], node_id: ""} if node_type == FILE else None
		self._commit(project, new_nodes, new_contents)
		logger.debug("Added %s '%s' (%s).", node_type, name, node_id)
		return success(node_id)

	def add_file(self, name, parent_id=None): return self._add_node(name, parent_id, FILE)
	def add_folder(self, name, parent_id=None): return self._add_node(name, parent_id, FOLDER)

	# Mutation
	# ------------------------------
	def rename_node(self, node_id, new_name):
		project = self.registry.current_project
		nodes = self._nodes()
		if node_id not in nodes: return failure(f"Node '{node_id}' not found.", NOT_FOUND, logger)
		new_name = new_name.strip() if isinstance(new_name, str) else new_name
		name_error = tree_ops.validate_name(new_name)
		if name_error: return failure(name_error, VALIDATION, logger)
		node = nodes[node_id]
		if node["name"] == new_name: return success(node_id)
		if tree_ops.sibling_name_taken(nodes, node["parentId"], new_name, node["type"], exclude_id=node_id): return failure(f"A {node['type']} named '{new_name}' already exists here.", VALIDATION, logger)
		new_nodes = {nid: ({**n, "name": new_name} if nid == node_id else n) for nid, n in nodes.items()}
		self._commit(project, new_nodes)
		return success(node_id)

	def remove_node(self, node_id):
		project = self.registry.current_project
		nodes = self._nodes()
		if node_id not in nodes: return failure(f"Node '{node_id}' not found.", NOT_FOUND, logger)
		removed = set(tree_ops.collect_descendants(nodes, node_id))
		new_nodes = {nid: n for nid, n in nodes.items() if nid not in removed}
		new_contents = {nid: text for nid, text in project["fileContents"].items() if nid not in removed}
		if self.registry.selected_node_id in removed: self.registry.selected_node_id = None
		self._commit(project, new_nodes, new_contents)
		logger.debug("Removed %d node(s) rooted at %s.", len(removed), node_id)
		return success(sorted(removed))

	def move_node(self, node_id, new_parent_id):
		project = self.registry.current_project
		nodes = self._nodes()
		if node_id not in nodes: return failure(f"Node '{node_id}' not found.", NOT_FOUND, logger)
		rejected = self._check_parent(nodes, new_parent_id)
		if rejected: return rejected
		node = nodes[node_id]
		if node["parentId"] == new_parent_id: return success(node_id)
		if tree_ops.would_create_cycle(nodes, node_id, new_parent_id): return failure(f"Cannot move '{node['name']}' into itself or one of its descendants.", VALIDATION, logger)
		if tree_ops.sibling_name_taken(nodes, new_parent_id, node["name"], node["type"], exclude_id=node_id): return failure(f"A {node['type']} named '{node['name']}' already exists at the destination.", VALIDATION, logger)
		new_nodes = {nid: n for nid, n in nodes.items() if nid != node_id}
		new_nodes[node_id] = {**node, "parentId": new_parent_id}
		self._commit(project, new_nodes)
		return success(node_id)

	def reorder_children(self, parent_id, ordered_ids):
		project = self.registry.current_project
		nodes = self._nodes()
		if parent_id is not None and not tree_ops.is_folder(nodes, parent_id): return failure(f"Folder '{parent_id}' not found.", NOT_FOUND, logger)
		current = tree_ops.children_of(nodes, parent_id)
		ordered_ids = list(ordered_ids)
		if len(ordered_ids) != len(current) or set(ordered_ids) != set(current): return failure("Invalid reordering: child lists do not match.", VALIDATION, logger)
		new_nodes, queued = {}, iter(ordered_ids)
		for nid, n in nodes.items():
			if n["parentId"] == parent_id:
				nid = next(queued); n = nodes[nid]
			new_nodes[nid] = n
		self._commit(project, new_nodes)
		return success(ordered_ids)

	# Queries
	# ------------------------------
	def get_node(self, node_id):
		node = self._nodes().get(node_id)
		return dict(node) if node is not None else None

	def get_children(self, parent_id=None): return [dict(n) for n in self._nodes().values() if n["parentId"] == parent_id]

	def get_path(self, node_id): return tree_ops.node_path(self._nodes(), node_id)

	def resolve_path(self, path): return tree_ops.resolve_path(self._nodes(), path)

	def iter_tree(self):
		nodes = self._nodes()
		for nid, depth in tree_ops.walk_preorder(nodes): yield dict(nodes[nid]), depth
