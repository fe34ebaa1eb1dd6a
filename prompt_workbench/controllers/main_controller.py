# File: prompt_workbench/controllers/main_controller.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization

# Imports
# ------------------------------
import argparse, logging, sys
from prompt_workbench import config
from prompt_workbench.config import get_logger, initialize_logging, set_project_file_handler
from prompt_workbench.models.content_store import ContentStore
from prompt_workbench.models.node_store import NodeStore
from prompt_workbench.models.project_registry import ProjectRegistry
from prompt_workbench.models.prompt_generator import get_prompt_stats
from prompt_workbench.models.result import NOT_FOUND, STORAGE, VALIDATION, OpResult, failure
from prompt_workbench.models.tree_ops import FOLDER
from prompt_workbench.utils.file_io import safe_read_file, write_text_file
from prompt_workbench.utils.text_utils import split_node_path

logger = get_logger(__name__)

# Main Controller
# ------------------------------
class MainController:
	# Initialization & State
	# ------------------------------
	def __init__(self, registry, out=None, err=None, stdin=None):
		self.registry = registry
		self.node_store = NodeStore(registry)
		self.content_store = ContentStore(registry)
		self.out, self.err, self.stdin = out or sys.stdout, err or sys.stderr, stdin or sys.stdin

	def _print(self, text=""): print(text, file=self.out)

	def _report(self, result, message=None):
		if not result:
			print(f"Error: {result.reason}", file=self.err)
			return 1
		if message: self._print(message)
		if not self.registry.last_save_ok: print("Warning: changes could not be saved to disk.", file=self.err)
		return 0

	# Resolution Helpers
	# ------------------------------
	def _resolve_project(self, token):
		if token is None: return self.registry.current_project_id
		if self.registry.exists(token): return token
		matches = self.registry.find_projects_by_name(token)
		if len(matches) > 1: print(f"Error: project name '{token}' is ambiguous, use its id.", file=self.err)
		elif not matches: print(f"Error: project '{token}' not found.", file=self.err)
		return matches[0] if len(matches) == 1 else None

	def _resolve_node(self, path):
		node_id = self.node_store.resolve_path(path)
		if node_id is None: print(f"Error: no file or folder at '{path}'.", file=self.err)
		return node_id

	def _resolve_parent(self, path):
		parts, _ = split_node_path(path)
		if not parts: return failure("A name is required.", VALIDATION)
		if len(parts) == 1: return None, parts[-1]
		parent_id = self.node_store.resolve_path("/".join(parts[:-1]) + "/")
		if parent_id is None: return failure(f"Folder '{'/'.join(parts[:-1])}' does not exist.", NOT_FOUND)
		return parent_id, parts[-1]

	def _read_text_arg(self, args):
		if getattr(args, "text", None) is not None: return args.text
		if getattr(args, "source", None): return safe_read_file(args.source)
		return self.stdin.read()

	# Project Commands
	# ------------------------------
	def cmd_projects(self, args):
		for p in self.registry.list_projects(): self._print(f"{'*' if p['current'] else ' '} {p['id']}  {p['name']}  ({p['node_count']} nodes)")
		return 0

	def cmd_new(self, args):
		result = self.registry.create_project(args.name)
		return self._report(result, f"Created project {result.value}" if result else None)

	def cmd_use(self, args):
		project_id = self._resolve_project(args.project)
		if project_id is None: return 1
		return self._report(self.registry.select_project(project_id), f"Switched to {self.registry.get_project(project_id)['name']}")

	def cmd_rename_project(self, args):
		project_id = self._resolve_project(args.project)
		if project_id is None: return 1
		return self._report(self.registry.rename_project(project_id, args.name), f"Renamed project to {args.name.strip()}")

	def cmd_delete_project(self, args):
		project_id = self._resolve_project(args.project)
		if project_id is None: return 1
		return self._report(self.registry.delete_project(project_id), f"Deleted project {project_id}")

	def cmd_clear(self, args): return self._report(self.registry.clear_project(), "Cleared project")

	# Tree Commands
	# ------------------------------
	def cmd_tree(self, args):
		project = self.registry.current_project
		self._print(f"{project['name']}/")
		sizes = self.content_store.get_char_counts()
		for node, depth in self.node_store.iter_tree():
			label = f"{node['name']}/" if node["type"] == FOLDER else f"{node['name']}  [{sizes.get(node['id'], 0)} chars]"
			self._print(f"{'    ' * (depth + 1)}{label}{'  ' + node['id'] if args.ids else ''}")
		return 0

	def cmd_add(self, args):
		resolved = self._resolve_parent(args.path)
		if isinstance(resolved, OpResult): return self._report(resolved)
		parent_id, name = resolved
		add = self.node_store.add_folder if args.kind == FOLDER else self.node_store.add_file
		return self._report(add(name, parent_id), f"Added {args.kind} {args.path}")

	def cmd_rename(self, args):
		node_id = self._resolve_node(args.path)
		if node_id is None: return 1
		return self._report(self.node_store.rename_node(node_id, args.name), f"Renamed to {args.name}")

	def cmd_rm(self, args):
		node_id = self._resolve_node(args.path)
		if node_id is None: return 1
		result = self.node_store.remove_node(node_id)
		return self._report(result, f"Removed {len(result.value)} node(s)" if result else None)

	def cmd_mv(self, args):
		node_id = self._resolve_node(args.path)
		if node_id is None: return 1
		dest_id = None
		if args.dest.strip("/ "):
			dest_id = self.node_store.resolve_path(args.dest.rstrip("/") + "/")
			if dest_id is None: return self._report(failure(f"Folder '{args.dest}' does not exist.", NOT_FOUND))
		return self._report(self.node_store.move_node(node_id, dest_id), f"Moved {args.path} to {args.dest}")

	# Content Commands
	# ------------------------------
	def cmd_write(self, args):
		node_id = self._resolve_node(args.path)
		if node_id is None: return 1
		text = self._read_text_arg(args)
		if text is None: return self._report(failure(f"Could not read {args.source}.", NOT_FOUND))
		return self._report(self.content_store.set_content(node_id, text), f"Wrote {len(text)} chars to {args.path}")

	def cmd_cat(self, args):
		node_id = self._resolve_node(args.path)
		if node_id is None: return 1
		self.out.write(self.content_store.get_content(node_id))
		return 0

	def cmd_instructions(self, args):
		if args.text is None and not args.source:
			self._print(self.registry.current_project["instructions"])
			return 0
		text = self._read_text_arg(args)
		if text is None: return self._report(failure(f"Could not read {args.source}.", NOT_FOUND))
		return self._report(self.registry.update_instructions(text), "Updated instructions")

	# Prompt, Export & Import
	# ------------------------------
	def cmd_prompt(self, args):
		prompt = self.registry.generate_prompt()
		if args.out:
			try: write_text_file(args.out, prompt)
			except OSError as e:
				logger.error("Failed to write prompt to %s: %s", args.out, e, exc_info=True)
				return self._report(failure(f"Could not write prompt file: {e}", STORAGE))
			self._print(f"Wrote prompt to {args.out}")
		else: self.out.write(prompt)
		if args.stats:
			stats = get_prompt_stats(prompt)
			print(f"{stats['chars']} characters, {stats['lines']} lines, {stats['file_blocks']} file(s)", file=self.err)
		return 0

	def cmd_export(self, args):
		project_id = self._resolve_project(args.project)
		if project_id is None: return 1
		if args.stdout:
			result = self.registry.export_project(project_id)
			if result: self._print(result.value)
			return self._report(result)
		result = self.registry.export_project_to_file(project_id, args.dir)
		return self._report(result, f"Exported to {result.value}" if result else None)

	def cmd_import(self, args):
		result = self.registry.import_project_from_file(args.file)
		return self._report(result, f"Imported project {result.value}" if result else None)

# CLI
# ------------------------------
def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="prompt-workbench", description="Assemble virtual project trees and flatten them into AI prompts.")
	parser.add_argument("--data-dir", default=None, help="Data directory (defaults to DATA_DIR from config.ini).")
	parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging on the console.")
	sub = parser.add_subparsers(dest="cmd", required=True)

	sub.add_parser("projects", help="List projects; the current one is starred.").set_defaults(handler="cmd_projects")
	p = sub.add_parser("new", help="Create a project and make it current."); p.add_argument("name", nargs="?"); p.set_defaults(handler="cmd_new")
	p = sub.add_parser("use", help="Switch the current project."); p.add_argument("project"); p.set_defaults(handler="cmd_use")
	p = sub.add_parser("rename-project", help="Rename a project."); p.add_argument("name"); p.add_argument("--project"); p.set_defaults(handler="cmd_rename_project")
	p = sub.add_parser("delete-project", help="Delete a project (never the last one)."); p.add_argument("project"); p.set_defaults(handler="cmd_delete_project")
	sub.add_parser("clear", help="Remove all nodes, content and instructions of the current project.").set_defaults(handler="cmd_clear")

	p = sub.add_parser("tree", help="Show the current project's tree."); p.add_argument("--ids", action="store_true"); p.set_defaults(handler="cmd_tree")
	for kind in ("file", "folder"):
		p = sub.add_parser(f"add-{kind}", help=f"Add a {kind}; PATH uses / between folders."); p.add_argument("path"); p.set_defaults(handler="cmd_add", kind=kind)
	p = sub.add_parser("rename", help="Rename a node."); p.add_argument("path"); p.add_argument("name"); p.set_defaults(handler="cmd_rename")
	p = sub.add_parser("rm", help="Remove a node and everything under it."); p.add_argument("path"); p.set_defaults(handler="cmd_rm")
	p = sub.add_parser("mv", help="Move a node into a folder ('/' for the root)."); p.add_argument("path"); p.add_argument("dest"); p.set_defaults(handler="cmd_mv")

	p = sub.add_parser("write", help="Set a file's content from --text, --from or stdin."); p.add_argument("path")
	p.add_argument("--text"); p.add_argument("--from", dest="source"); p.set_defaults(handler="cmd_write")
	p = sub.add_parser("cat", help="Print a file's content."); p.add_argument("path"); p.set_defaults(handler="cmd_cat")
	p = sub.add_parser("instructions", help="Show or set the project instructions."); p.add_argument("--text"); p.add_argument("--from", dest="source"); p.set_defaults(handler="cmd_instructions")

	p = sub.add_parser("prompt", help="Generate the prompt for the current project."); p.add_argument("--out"); p.add_argument("--stats", action="store_true"); p.set_defaults(handler="cmd_prompt")
	p = sub.add_parser("export", help="Export a project to JSON."); p.add_argument("project", nargs="?"); p.add_argument("--dir"); p.add_argument("--stdout", action="store_true"); p.set_defaults(handler="cmd_export")
	p = sub.add_parser("import", help="Import a project JSON document."); p.add_argument("file"); p.set_defaults(handler="cmd_import")
	return parser

def main(argv=None, storage=None, configure_logging=True, out=None, err=None, stdin=None):
	args = build_parser().parse_args(argv)
	if args.data_dir: config.set_data_dir(args.data_dir)
	if configure_logging: initialize_logging(console_level=logging.DEBUG if args.verbose else logging.WARNING)
	registry = ProjectRegistry(storage=storage)
	if configure_logging: set_project_file_handler(registry.current_project["name"])
	controller = MainController(registry, out=out, err=err, stdin=stdin)
	logger.debug("Running command %s", args.cmd)
	return getattr(controller, args.handler)(args)
