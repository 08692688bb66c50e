"""
Unit tests for setup persistence and editing.

Covers the key-value snapshot store, fail-soft loading, explicit export and
import, and member edits through SetupService.
"""
import json
import os
import shutil
import tempfile
import unittest

from rallysync.models import Member, SetupData
from rallysync.services import JsonKeyValueStore, PersistenceService, SetupService, SetupError
from rallysync.utils import SETUP_STORAGE_KEY


class TestPersistenceService(unittest.TestCase):
    """Test cases for the setup snapshot store."""

    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "store", "setup.json")
        self.persistence = PersistenceService(JsonKeyValueStore(self.path))

    def tearDown(self) -> None:
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_raw(self, text: str) -> None:
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_missing_file_yields_empty_setup(self) -> None:
        self.assertEqual(self.persistence.load_setup(), SetupData())

    def test_save_and_load_round_trip(self) -> None:
        setup = SetupData(
            target_label="Sanctuary",
            members=(Member(id="m1", name="Jins", minutes="1", seconds="30"),),
        )
        self.assertTrue(self.persistence.save_setup(setup))

        with open(self.path, "r", encoding="utf-8") as f:
            stored = json.load(f)[SETUP_STORAGE_KEY]
        self.assertEqual(stored["targetLabel"], "Sanctuary")
        self.assertEqual(stored["members"][0], {"id": "m1", "name": "Jins", "m": "1", "s": "30", "marchSec": 90})

        loaded = self.persistence.load_setup()
        self.assertEqual(loaded, setup)
        self.assertEqual(loaded.members[0].march_seconds, 90)

    def test_other_keys_are_preserved(self) -> None:
        store = JsonKeyValueStore(self.path)
        store.set("other", {"keep": True})
        self.persistence.save_setup(SetupData(target_label="T"))
        self.assertEqual(store.get("other"), {"keep": True})

    def test_corrupt_json_fails_soft(self) -> None:
        self._write_raw("{not json")
        self.assertEqual(self.persistence.load_setup(), SetupData())

    def test_wrong_shapes_fail_soft(self) -> None:
        for payload in ([1, 2], {SETUP_STORAGE_KEY: "text"}, {SETUP_STORAGE_KEY: {"members": {"a": 1}}},
                        {SETUP_STORAGE_KEY: {"members": ["bad"]}}):
            self._write_raw(json.dumps(payload))
            self.assertEqual(self.persistence.load_setup(), SetupData())

    def test_save_overwrites_corrupt_file(self) -> None:
        self._write_raw("[]")
        self.assertTrue(self.persistence.save_setup(SetupData(target_label="Fresh")))
        self.assertEqual(self.persistence.load_setup().target_label, "Fresh")

    def test_legacy_march_seconds_only(self) -> None:
        self._write_raw(json.dumps({SETUP_STORAGE_KEY: {
            "targetLabel": "Keep",
            "members": [{"id": "x", "name": "Old", "marchSec": 125}],
        }}))
        member = self.persistence.load_setup().members[0]
        self.assertEqual((member.minutes, member.seconds), ("2", "5"))
        self.assertEqual(member.march_seconds, 125)

    def test_export_and_import(self) -> None:
        export_path = os.path.join(self.temp_dir, "exports", "castle.json")
        setup = SetupData(target_label="Castle", members=(Member(id="a", name="A", minutes="0", seconds="45"),))

        PersistenceService.export_setup_to_file(setup, export_path)
        self.assertEqual(PersistenceService.import_setup_from_file(export_path), setup)

    def test_import_missing_file_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            PersistenceService.import_setup_from_file(os.path.join(self.temp_dir, "nope.json"))


class TestSetupService(unittest.TestCase):
    """Test cases for SetupService edits."""

    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "setup.json")
        self.service = SetupService(PersistenceService(JsonKeyValueStore(self.path)))

    def tearDown(self) -> None:
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _reloaded(self) -> SetupData:
        return SetupService(PersistenceService(JsonKeyValueStore(self.path))).setup

    def test_starts_empty(self) -> None:
        self.assertEqual(self.service.setup, SetupData())
        self.assertFalse(self.service.setup.is_complete)

    def test_every_edit_is_persisted(self) -> None:
        self.service.set_target_label("Sanctuary")
        member = self.service.add_member("Jins")
        self.service.update_member(member.id, "m", "2")
        self.service.update_member(member.id, "s", "15")

        reloaded = self._reloaded()
        self.assertEqual(reloaded.target_label, "Sanctuary")
        self.assertEqual(reloaded.members[0].name, "Jins")
        self.assertEqual(reloaded.members[0].march_seconds, 135)
        self.assertTrue(reloaded.is_complete)

    def test_edits_replace_snapshot(self) -> None:
        member = self.service.add_member("A", "1", "0")
        before = self.service.setup
        self.service.update_member(member.id, "name", "B")

        self.assertIsNot(before, self.service.setup)
        self.assertEqual(before.members[0].name, "A")
        self.assertEqual(self.service.setup.members[0].name, "B")

    def test_invalid_input_normalises_to_zero(self) -> None:
        member = self.service.add_member("A")
        updated = self.service.update_member(member.id, "m", "abc")
        self.assertEqual(updated.march_seconds, 0)

    def test_remove_member(self) -> None:
        first = self.service.add_member("A")
        second = self.service.add_member("B")
        self.service.remove_member(first.id)
        self.assertEqual([m.id for m in self._reloaded().members], [second.id])

    def test_unknown_member_or_field(self) -> None:
        member = self.service.add_member("A")
        with self.assertRaises(SetupError):
            self.service.update_member("missing", "name", "x")
        with self.assertRaises(SetupError):
            self.service.update_member(member.id, "colour", "x")
        with self.assertRaises(SetupError):
            self.service.remove_member("missing")

    def test_preset_lookup_by_name(self) -> None:
        self.service.add_member("A", "1", "5")
        self.service.add_member("A", "9", "9")
        setup = self.service.setup
        self.assertEqual(setup.preset_seconds("A"), 65)
        self.assertEqual(setup.preset_seconds("Nobody"), 0)
        self.assertEqual(setup.leader_names, ("A", "A"))


if __name__ == "__main__":
    unittest.main()
