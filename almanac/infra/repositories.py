"""
Repositories des profils utilisateur.

Deux implémentations interchangeables: en mémoire (dev/tests) et Redis. Les profils sont
stockés sous leur forme sérialisée (alias camelCase) et revalidés à la lecture.
"""

import json
import threading

import redis

from almanac.domain.entities import UserProfile


class InMemoryProfileRepo:
    """
    Dépôt de profils en mémoire (utilisé pour dev/tests).

    Stocke les profils dans un dict local, non persistant.
    """

    def __init__(self):
        self._db: dict[str, UserProfile] = {}
        self._lock = threading.Lock()

    def save(self, profile_id: str, profile: UserProfile) -> UserProfile:
        """Enregistre/écrase un profil et le renvoie."""
        with self._lock:
            self._db[profile_id] = profile
        return profile

    def get(self, profile_id: str) -> UserProfile | None:
        return self._db.get(profile_id)

    def delete(self, profile_id: str) -> bool:
        """Supprime le profil; False s'il était absent."""
        with self._lock:
            return self._db.pop(profile_id, None) is not None


class RedisProfileRepo:
    """Dépôt de profils adossé à Redis (clé: `profile:{id}`)."""

    def __init__(self, url: str):
        """Crée un client Redis à partir de l'URL fournie."""
        self.client = redis.Redis.from_url(url, decode_responses=True)

    @staticmethod
    def _key(profile_id: str) -> str:
        return f"profile:{profile_id}"

    def save(self, profile_id: str, profile: UserProfile) -> UserProfile:
        """Sérialise en JSON et stocke le profil sous `profile:{id}`."""
        self.client.set(self._key(profile_id), json.dumps(profile.model_dump(mode="json", by_alias=True)))
        return profile

    def get(self, profile_id: str) -> UserProfile | None:
        raw = self.client.get(self._key(profile_id))
        return UserProfile.model_validate(json.loads(raw)) if raw else None

    def delete(self, profile_id: str) -> bool:
        return bool(self.client.delete(self._key(profile_id)))
