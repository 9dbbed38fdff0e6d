import tempfile
import unittest
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel

from launcher_core.errors import CorruptError, NotFoundError
from launcher_core.storage import DirectoryStorePoint, Load, Save, Storage, StorePoint


class _Settings(Storage, BaseModel):
    FILE_PATH: ClassVar[tuple[str, ...]] = ("nested", "settings.json")

    name: str
    volume: int = 5


class _Note(Save, Load, BaseModel):
    number: str
    body: str

    def suffix(self) -> Path:
        return Path("notes") / f"{self.number}.json"


class StorePointTests(unittest.TestCase):
    def test_directory_store_point_satisfies_protocol(self) -> None:
        store = DirectoryStorePoint("/tmp/launcher")
        self.assertIsInstance(store, StorePoint)
        self.assertEqual(store.root(), Path("/tmp/launcher"))
        self.assertEqual(store.child("a", "b").root(), Path("/tmp/launcher/a/b"))


class FixedPathPersistenceTests(unittest.TestCase):
    def test_save_then_load_round_trips(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = DirectoryStorePoint(tmp)
            settings = _Settings(name="launcher", volume=3)

            settings.save(store)

            self.assertTrue((Path(tmp) / "nested" / "settings.json").is_file())
            self.assertEqual(_Settings.load(store), settings)

    def test_save_overwrites_and_leaves_no_temp_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = DirectoryStorePoint(tmp)
            _Settings(name="first").save(store)
            _Settings(name="second").save(store)

            self.assertEqual(_Settings.load(store).name, "second")
            self.assertEqual([p.name for p in (Path(tmp) / "nested").iterdir()], ["settings.json"])

    def test_load_missing_file_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(NotFoundError):
                _Settings.load(DirectoryStorePoint(tmp))

    def test_load_undecodable_file_raises_corrupt(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "settings.json"
            path.parent.mkdir(parents=True)
            path.write_text('{"name": ', encoding="utf-8")

            with self.assertRaises(CorruptError):
                _Settings.load(DirectoryStorePoint(tmp))

    def test_load_wrong_shape_raises_corrupt(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "settings.json"
            path.parent.mkdir(parents=True)
            path.write_text('{"volume": 1}', encoding="utf-8")

            with self.assertRaises(CorruptError):
                _Settings.load(DirectoryStorePoint(tmp))


class DynamicPathPersistenceTests(unittest.TestCase):
    def test_instances_coexist_under_one_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = DirectoryStorePoint(tmp)
            first = _Note(number="1", body="hello")
            second = _Note(number="2", body="world")

            first.save(store)
            second.save(store)

            self.assertEqual(_Note.load(store, "notes/1.json"), first)
            self.assertEqual(_Note.load(store, Path("notes") / "2.json"), second)

    def test_load_unknown_suffix_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(NotFoundError):
                _Note.load(DirectoryStorePoint(tmp), "notes/404.json")


if __name__ == "__main__":
    unittest.main()
