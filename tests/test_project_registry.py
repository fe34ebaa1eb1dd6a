from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from libs.logging_setup.setup_logging import SUCCESS_LEVEL_NUM
from prompt_workbench import config
from prompt_workbench.models.content_store import ContentStore
from prompt_workbench.models.node_store import NodeStore
from prompt_workbench.models.project_registry import ProjectRegistry
from prompt_workbench.models.result import IMPORT, NOT_FOUND, VALIDATION
from prompt_workbench.models.storage import MemoryStorage
from prompt_workbench.utils.file_io import StorageError

PROJECTS_KEY = config.STORAGE_KEYS["projects"]
CURRENT_KEY = config.STORAGE_KEYS["current_project"]


class FailingStorage(MemoryStorage):
    def set_item(self, key, text):
        raise OSError("disk full")


class UnreadableStorage(MemoryStorage):
    def __init__(self, initial=None) -> None:
        super().__init__(initial)
        self.readable = False

    def get_item(self, key):
        if not self.readable:
            raise StorageError("lock held by another instance")
        return super().get_item(key)


class TestRegistryLifecycle(unittest.TestCase):
    def test_first_load_seeds_default_project(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        projects = reg.list_projects()
        self.assertEqual(len(projects), 1)
        self.assertEqual(projects[0]["name"], config.DEFAULT_PROJECT_NAME)
        self.assertTrue(projects[0]["current"])

    def test_create_appends_and_activates(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        nodes = NodeStore(reg)
        reg.select_node(nodes.add_file("a").value)
        result = reg.create_project("Demo")
        self.assertTrue(result.ok)
        self.assertEqual(reg.current_project_id, result.value)
        self.assertEqual(reg.current_project["name"], "Demo")
        self.assertEqual(reg.current_project["nodes"], {})
        self.assertEqual(reg.current_project["instructions"], "")
        self.assertIsNone(reg.selected_node_id)
        self.assertEqual([p["name"] for p in reg.list_projects()][-1], "Demo")

    def test_rename(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        pid = reg.current_project_id
        self.assertTrue(reg.rename_project(pid, "Renamed"))
        self.assertEqual(reg.get_project(pid)["name"], "Renamed")
        blank = reg.rename_project(pid, "   ")
        self.assertFalse(blank.ok)
        self.assertEqual(blank.kind, VALIDATION)
        self.assertEqual(reg.get_project(pid)["name"], "Renamed")
        self.assertEqual(reg.rename_project("missing", "x").kind, NOT_FOUND)

    def test_delete_refuses_last_project(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        result = reg.delete_project(reg.current_project_id)
        self.assertFalse(result.ok)
        self.assertEqual(len(reg.list_projects()), 1)

    def test_delete_current_activates_first_remaining(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        first = reg.current_project_id
        second = reg.create_project("Second").value
        self.assertTrue(reg.delete_project(second))
        self.assertEqual(reg.current_project_id, first)
        self.assertFalse(reg.exists(second))

    def test_delete_other_keeps_current(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        first = reg.current_project_id
        second = reg.create_project("Second").value
        self.assertTrue(reg.delete_project(first))
        self.assertEqual(reg.current_project_id, second)

    def test_select(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        first = reg.current_project_id
        reg.create_project("Other")
        reg.select_node(NodeStore(reg).add_folder("x").value)
        self.assertTrue(reg.select_project(first))
        self.assertEqual(reg.current_project_id, first)
        self.assertIsNone(reg.selected_node_id)
        self.assertEqual(reg.select_project("missing").kind, NOT_FOUND)
        self.assertEqual(reg.current_project_id, first)

    def test_instructions_and_clear(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        nodes = NodeStore(reg)
        self.assertTrue(reg.update_instructions("Do things"))
        nodes.add_file("a")
        self.assertEqual(reg.current_project["instructions"], "Do things")
        self.assertFalse(reg.update_instructions(42).ok)
        self.assertTrue(reg.clear_project())
        project = reg.current_project
        self.assertEqual((project["nodes"], project["fileContents"], project["instructions"]), ({}, {}, ""))

    def test_select_node_requires_live_node(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        self.assertEqual(reg.select_node("missing").kind, NOT_FOUND)
        self.assertTrue(reg.select_node(None))

    def test_mutation_does_not_touch_previous_record(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        before = reg.current_project
        NodeStore(reg).add_file("a")
        self.assertEqual(before["nodes"], {})
        self.assertIsNot(before, reg.current_project)


class TestRegistryPersistence(unittest.TestCase):
    def test_state_survives_reload(self) -> None:
        storage = MemoryStorage()
        reg = ProjectRegistry(storage=storage)
        pid = reg.create_project("Kept").value
        file_id = NodeStore(reg).add_file("notes.md").value
        ContentStore(reg).set_content(file_id, "hello")
        reg.update_instructions("Summarize")

        reloaded = ProjectRegistry(storage=storage)
        self.assertEqual(reloaded.current_project_id, pid)
        self.assertEqual(reloaded.current_project["fileContents"][file_id], "hello")
        self.assertEqual(reloaded.current_project["instructions"], "Summarize")
        self.assertEqual(len(reloaded.list_projects()), 2)

    def test_persisted_layout_uses_two_keys(self) -> None:
        storage = MemoryStorage()
        reg = ProjectRegistry(storage=storage)
        reg.create_project("Two")
        self.assertIsInstance(json.loads(storage.items[PROJECTS_KEY]), list)
        self.assertEqual(json.loads(storage.items[CURRENT_KEY]), reg.current_project_id)

    def test_unparsable_records_fall_back_to_default(self) -> None:
        storage = MemoryStorage({PROJECTS_KEY: "{not json", CURRENT_KEY: "also not json"})
        reg = ProjectRegistry(storage=storage)
        self.assertEqual(len(reg.list_projects()), 1)
        self.assertEqual(reg.current_project["name"], config.DEFAULT_PROJECT_NAME)

    def test_unknown_current_id_falls_back_to_first(self) -> None:
        storage = MemoryStorage()
        reg = ProjectRegistry(storage=storage)
        first = reg.current_project_id
        reg.create_project("Second")
        storage.items[CURRENT_KEY] = json.dumps("gone")
        self.assertEqual(ProjectRegistry(storage=storage).current_project_id, first)

    def test_invalid_stored_projects_are_skipped(self) -> None:
        good = {"id": "p1", "name": "Good", "nodes": {}, "fileContents": {}, "instructions": ""}
        storage = MemoryStorage({PROJECTS_KEY: json.dumps([good, {"name": ""}, "junk", dict(good)])})
        reg = ProjectRegistry(storage=storage)
        self.assertEqual([p["id"] for p in reg.list_projects()], ["p1"])

    def test_stored_flat_project_is_upgraded(self) -> None:
        flat = {"id": "old", "name": "Legacy", "files": ["a.txt"], "fileContents": {"a.txt": "A"}, "instructions": "hi"}
        reg = ProjectRegistry(storage=MemoryStorage({PROJECTS_KEY: json.dumps([flat]), CURRENT_KEY: json.dumps("old")}))
        self.assertEqual(reg.current_project_id, "old")
        (file_id, node), = reg.current_project["nodes"].items()
        self.assertEqual(node["name"], "a.txt")
        self.assertEqual(ContentStore(reg).get_content(file_id), "A")

    def test_storage_failure_is_not_fatal(self) -> None:
        reg = ProjectRegistry(storage=FailingStorage())
        nodes = NodeStore(reg)
        result = nodes.add_file("a.txt")
        self.assertTrue(result.ok)
        self.assertFalse(reg.last_save_ok)
        self.assertIsNotNone(nodes.get_node(result.value))

    def test_unreadable_storage_is_never_overwritten(self) -> None:
        stored = json.dumps([{"id": "p1", "name": "Precious", "nodes": {}, "fileContents": {}, "instructions": ""}])
        storage = UnreadableStorage({PROJECTS_KEY: stored})
        reg = ProjectRegistry(storage=storage)
        self.assertTrue(reg.storage_unreadable)
        result = NodeStore(reg).add_folder("src")
        self.assertTrue(result.ok)
        self.assertFalse(reg.last_save_ok)
        self.assertEqual(storage.items[PROJECTS_KEY], stored)
        self.assertEqual(storage.write_count, 0)

        storage.readable = True
        reg.load()
        self.assertFalse(reg.storage_unreadable)
        self.assertEqual(reg.current_project["name"], "Precious")
        self.assertTrue(reg.create_project("Next").ok)
        self.assertTrue(reg.last_save_ok)
        self.assertGreater(storage.write_count, 0)


class TestRegistryImportExport(unittest.TestCase):
    def build_project(self, reg: ProjectRegistry) -> None:
        nodes, contents = NodeStore(reg), ContentStore(reg)
        src = nodes.add_folder("src").value
        main = nodes.add_file("main.ts", src).value
        nodes.add_folder("empty")
        contents.set_content(main, "console.log(1)")
        reg.update_instructions("Review this")

    def test_round_trip(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        self.build_project(reg)
        original = reg.get_project(reg.current_project_id)

        exported = reg.export_project(original["id"])
        self.assertTrue(exported.ok)
        imported = reg.import_project(exported.value)
        self.assertTrue(imported.ok)
        copy_ = reg.get_project(imported.value)

        self.assertNotEqual(copy_["id"], original["id"])
        self.assertEqual(reg.current_project_id, copy_["id"])
        self.assertEqual(copy_["name"], original["name"])
        self.assertEqual(copy_["instructions"], original["instructions"])
        new_nodes = NodeStore(reg)
        self.assertEqual(
            sorted(new_nodes.get_path(nid) for nid in copy_["nodes"]),
            sorted(["src/", "src/main.ts", "empty/"]),
        )
        self.assertEqual(ContentStore(reg).get_content(new_nodes.resolve_path("src/main.ts")), "console.log(1)")
        self.assertTrue(set(copy_["nodes"]).isdisjoint(original["nodes"]))

    def test_round_trip_prompt_is_identical(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        self.build_project(reg)
        before = reg.generate_prompt()
        reg.import_project(reg.export_project().value)
        self.assertEqual(reg.generate_prompt(), before)

    def test_malformed_import_leaves_registry_untouched(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        before = (reg.list_projects(), reg.current_project_id)
        for doc in ("{broken", "[]", json.dumps({"nodes": {}}), json.dumps({"name": "x", "nodes": []})):
            with self.subTest(doc=doc):
                result = reg.import_project(doc)
                self.assertFalse(result.ok)
                self.assertEqual(result.kind, IMPORT)
        self.assertEqual((reg.list_projects(), reg.current_project_id), before)

    def test_export_to_file(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        reg.create_project("My Cool Project!")
        with tempfile.TemporaryDirectory() as td:
            result = reg.export_project_to_file(directory=td)
            self.assertTrue(result.ok)
            path = Path(result.value)
            self.assertEqual(path.name, "my-cool-project-prompt-project.json")
            self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["name"], "My Cool Project!")

            with self.assertLogs("prompt_workbench.models.project_registry", level=SUCCESS_LEVEL_NUM) as logs:
                imported = reg.import_project_from_file(str(path))
            self.assertTrue(imported.ok)
            self.assertEqual(len(reg.list_projects()), 3)
            self.assertEqual([r.levelname for r in logs.records], ["SUCCESS"])

    def test_import_keeps_backslash_names(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        doc = {"name": "P", "nodes": {"n1": {"id": "n1", "name": "regex\\d.txt", "type": "file", "parentId": None}}}
        result = reg.import_project(json.dumps(doc))
        self.assertTrue(result.ok)
        self.assertIsNotNone(NodeStore(reg).resolve_path("regex\\d.txt"))

    def test_import_from_missing_file(self) -> None:
        reg = ProjectRegistry(storage=MemoryStorage())
        self.assertEqual(reg.import_project_from_file("/nonexistent/file.json").kind, IMPORT)


if __name__ == "__main__":
    unittest.main()
