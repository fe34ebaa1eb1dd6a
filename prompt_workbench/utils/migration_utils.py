# File: prompt_workbench/utils/migration_utils.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization.

import logging
from prompt_workbench.models.tree_ops import FILE, FOLDER, find_child, generate_id
from prompt_workbench.utils.text_utils import split_node_path

logger = logging.getLogger(__name__)

def is_flat_project(data: dict) -> bool:
    return "nodes" not in data and isinstance(data.get("files"), list)

def upgrade_flat_project(data: dict) -> dict:
    """
    Converts the older project schema (a `files` list of names plus
    `fileContents` keyed by name) into the id-keyed tree form. Path-like
    entries such as "src/main.ts" produce intermediate folders.
    """
    old_contents = data.get("fileContents") or {}
    if not isinstance(old_contents, dict):
        raise ValueError("'fileContents' must be an object.")

    nodes, file_contents = {}, {}
    for entry in data["files"]:
        if not isinstance(entry, str):
            raise ValueError(f"File entry {entry!r} is not a string.")
        parts, _ = split_node_path(entry)
        if not parts:
            logger.warning(f"Skipping empty file entry {entry!r} during upgrade.")
            continue

        parent_id = None
        for folder_name in parts[:-1]:
            existing = find_child(nodes, parent_id, folder_name, FOLDER)
            if existing is None:
                existing = generate_id()
                nodes[existing] = {"id": existing, "name": folder_name, "type": FOLDER, "parentId": parent_id}
            parent_id = existing

        if find_child(nodes, parent_id, parts[-1], FILE) is not None:
            logger.warning(f"Skipping duplicate file entry {entry!r} during upgrade.")
            continue

        content = old_contents.get(entry, "")
        if not isinstance(content, str):
            raise ValueError(f"Content for {entry!r} is not a string.")
        file_id = generate_id()
        nodes[file_id] = {"id": file_id, "name": parts[-1], "type": FILE, "parentId": parent_id}
        file_contents[file_id] = content

    logger.info(f"Upgraded flat project '{data.get('name')}' with {len(file_contents)} file(s) to tree form.")
    return {"id": data.get("id"), "name": data.get("name"), "nodes": nodes, "fileContents": file_contents, "instructions": data.get("instructions", "")}
