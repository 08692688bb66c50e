"""
Persistence service for the RallySync rally timing planner.

This module keeps the setup snapshot (target label and members) in a small
JSON key-value file, and handles explicit export/import of setups to files.
"""
import json
import os
from typing import Any, Optional

from loguru import logger

from ..models import SetupData
from ..utils import SETUP_STORAGE_KEY, DEFAULT_SETUP_FILE


class JsonKeyValueStore:
    """
    Key-value store backed by a single JSON object on disk.

    A missing file behaves as an empty store. Every ``set`` rewrites the file.
    """

    def __init__(self, file_path: str = DEFAULT_SETUP_FILE):
        self.file_path = file_path

    def _read_all(self) -> dict:
        if not os.path.exists(self.file_path):
            return {}
        with open(self.file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.file_path} does not contain a JSON object")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Read a value.

        Raises:
            json.JSONDecodeError: If the store file is not valid JSON
            ValueError: If the store file is not a JSON object
        """
        return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Write a value, keeping the other keys.

        Raises:
            OSError: If the file cannot be written
        """
        try:
            data = self._read_all()
        except ValueError:
            # corrupt file: start over rather than refuse to save
            data = {}
        data[key] = value

        directory = os.path.dirname(self.file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)


class PersistenceService:
    """
    Service for persisting the setup snapshot.

    Loading never fails: absent or malformed data yields an empty setup.
    Saving is best-effort: write errors are logged and otherwise ignored.
    """

    def __init__(self, store: Optional[JsonKeyValueStore] = None, key: str = SETUP_STORAGE_KEY):
        self.store = store or JsonKeyValueStore()
        self.key = key

    def load_setup(self) -> SetupData:
        """
        Load the stored setup snapshot.

        Returns:
            Stored SetupData, or an empty SetupData if nothing usable is stored
        """
        try:
            raw = self.store.get(self.key)
            if raw is None:
                return SetupData()
            return SetupData.from_json(raw)
        except (ValueError, TypeError, OSError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Ignoring unreadable setup snapshot", key=self.key, error=str(e))
            return SetupData()

    def save_setup(self, setup: SetupData) -> bool:
        """
        Store the setup snapshot.

        Returns:
            True if the snapshot was written
        """
        try:
            self.store.set(self.key, setup.to_json())
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save setup snapshot", key=self.key, error=str(e))
            return False
        logger.debug("Setup snapshot saved", key=self.key, members=len(setup.members))
        return True

    @staticmethod
    def export_setup_to_file(setup: SetupData, file_path: str) -> None:
        """
        Save a setup to a standalone JSON file.

        Args:
            setup: The setup to save
            file_path: Path where to save the file

        Raises:
            IOError: If file cannot be written
            OSError: If path is invalid
        """
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(setup.to_json(), f, indent=2, ensure_ascii=False)

    @staticmethod
    def import_setup_from_file(file_path: str) -> SetupData:
        """
        Load a setup from a standalone JSON file.

        Args:
            file_path: Path to the JSON file to load

        Returns:
            SetupData loaded from file

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file contains invalid JSON
            ValueError: If JSON structure is invalid
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Setup file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return SetupData.from_json(data)
