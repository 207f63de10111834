"""
Credential persistence keyed by caller identifier
"""
import json
import logging
import os
import threading
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class CredentialStore:
    """Capability interface: get / put / delete a credential pair per caller"""

    def get(self, caller_id) -> Optional[Dict]:
        raise NotImplementedError

    def put(self, caller_id, credentials: Dict):
        raise NotImplementedError

    def delete(self, caller_id):
        raise NotImplementedError

    def __contains__(self, caller_id) -> bool:
        return self.get(caller_id) is not None


class MemoryCredentialStore(CredentialStore):
    """Credential store kept only in process memory"""

    def __init__(self, initial: Dict[str, Dict] = None):
        self._tokens: Dict[str, Dict] = dict(initial or {})
        self._lock = threading.RLock()

    def get(self, caller_id) -> Optional[Dict]:
        with self._lock:
            return self._tokens.get(str(caller_id))

    def put(self, caller_id, credentials: Dict):
        with self._lock:
            self._tokens[str(caller_id)] = credentials
            self._persist()

    def delete(self, caller_id):
        with self._lock:
            if self._tokens.pop(str(caller_id), None) is not None:
                self._persist()

    def snapshot(self) -> Dict[str, Dict]:
        with self._lock:
            return dict(self._tokens)

    def _persist(self):
        pass


class JsonFileCredentialStore(MemoryCredentialStore):
    """
    Credential store mirrored to a JSON file

    The whole mapping is rewritten on every mutation; concurrent writers in
    other processes are not coordinated, the last write wins.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(self._load())

    def _load(self) -> Dict[str, Dict]:
        if not os.path.exists(self.path):
            return {}

        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        logger.info(f"Loaded credentials for {len(data)} callers from {self.path}")
        return data

    def _persist(self):
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self._tokens, f, indent=2)
